"""Cross-check the finder against a straightforward combinations search."""

from __future__ import annotations

import itertools
import random

import pytest

from fish import FishFinder
from puzzle import CandidateGrid, Cell


def _random_grid(seed: int, density: float, size: int = 9) -> CandidateGrid:
    rng = random.Random(seed)
    cells = [
        Cell(r, c, frozenset(d for d in range(1, size + 1) if rng.random() < density))
        for r in range(size)
        for c in range(size)
    ]
    return CandidateGrid(size, cells)


def _reference(grid: CandidateGrid, k: int):
    for digit in range(1, grid.size + 1):
        for transposed in (False, True):
            houses = grid.columns() if transposed else grid.rows()
            own = (lambda cell: cell.column) if transposed else (lambda cell: cell.row)
            cross = (lambda cell: cell.row) if transposed else (lambda cell: cell.column)
            base = []
            for house in houses:
                cells = [cell for cell in house.cells if cell.has_candidate(digit)]
                if 2 <= len(cells) <= k:
                    base.append(cells)
            for combo in itertools.combinations(base, k):
                selected = [cell for cells in combo for cell in cells]
                base_positions = {own(cell) for cell in selected}
                covers = {cross(cell) for cell in selected}
                if len(covers) != k:
                    continue
                removals = {
                    (cell.row, cell.column)
                    for cell in grid.cells
                    if cell.has_candidate(digit)
                    and own(cell) not in base_positions
                    and cross(cell) in covers
                }
                if removals:
                    axis = "columns" if transposed else "rows"
                    return digit, axis, removals, [(c.row, c.column) for c in selected]
    return None


CASES = [(seed, density) for seed in range(40) for density in (0.2, 0.3)]


@pytest.mark.parametrize("fish_size", [2, 3, 4])
def test_matches_reference_search(fish_size):
    finder = FishFinder(fish_size)
    found = 0
    for seed, density in CASES:
        grid = _random_grid(seed, density)
        expected = _reference(grid, fish_size)
        step = finder.find_next_step(grid)
        if expected is None:
            assert step is None, (seed, density)
            continue
        found += 1
        digit, axis, removals, supporting = expected
        assert step is not None, (seed, density)
        assert step.digit == digit
        assert step.axis == axis
        assert {(c.row, c.column) for c in step.removals} == removals
        assert [(c.row, c.column) for c in step.supporting_cells] == supporting
    if fish_size == 2:
        assert found > 0


@pytest.mark.parametrize("fish_size", [2, 3])
def test_found_steps_satisfy_fish_properties(fish_size):
    finder = FishFinder(fish_size)
    for seed, density in CASES:
        grid = _random_grid(seed, density)
        step = finder.find_next_step(grid)
        if step is None:
            continue
        transposed = step.axis == "columns"
        own = (lambda cell: cell.column) if transposed else (lambda cell: cell.row)
        cross = (lambda cell: cell.row) if transposed else (lambda cell: cell.column)

        assert {cross(cell) for cell in step.supporting_cells} == set(step.cover_houses)
        assert len(step.cover_houses) == fish_size
        assert len(step.base_houses) == fish_size
        assert step.removals
        for cell in step.removals:
            assert own(cell) not in step.base_houses
            assert cross(cell) in step.cover_houses
            assert grid.cell_at(cell.row, cell.column).has_candidate(step.digit)


def _assert_matches_reference(grid: CandidateGrid, fish_size: int) -> bool:
    expected = _reference(grid, fish_size)
    step = FishFinder(fish_size).find_next_step(grid)
    if expected is None:
        assert step is None
        return False
    digit, axis, removals, supporting = expected
    assert step is not None
    assert (step.digit, step.axis) == (digit, axis)
    assert {(c.row, c.column) for c in step.removals} == removals
    assert [(c.row, c.column) for c in step.supporting_cells] == supporting
    return True


@pytest.mark.parametrize("fish_size", [2, 3, 4])
def test_small_grids_match_reference_search(fish_size):
    for seed in range(60):
        _assert_matches_reference(_random_grid(seed, 0.5, size=4), fish_size)


@pytest.mark.parametrize("fish_size", [2, 5])
def test_large_grids_match_reference_search(fish_size):
    for seed in range(6):
        _assert_matches_reference(_random_grid(seed, 0.15, size=16), fish_size)


def test_squirmbag_on_a_large_grid():
    columns = (1, 3, 5, 7, 9)
    cells = {(row, columns[row]) for row in range(5)}
    cells |= {(row, columns[(row + 1) % 5]) for row in range(5)}
    cells.add((10, 5))
    grid = CandidateGrid(
        16,
        [
            Cell(r, c, frozenset({12}) if (r, c) in cells else frozenset())
            for r in range(16)
            for c in range(16)
        ],
    )

    for smaller in (2, 3, 4):
        assert FishFinder(smaller).find_next_step(grid) is None
    assert _assert_matches_reference(grid, 5)

    step = FishFinder(5).find_next_step(grid)
    assert step.technique == "squirmbag"
    assert step.base_houses == (0, 1, 2, 3, 4)
    assert step.cover_houses == columns
    assert step.removal_triples() == ((10, 5, 12),)
    assert step.big_hint.startswith("Large fish on C:")
