from __future__ import annotations

import logging

import pytest

from fish import COLUMNS, ROWS, FishFinder, FishSizeError, SearchState, fish_name
from fish.houses import filter_candidate_houses
from puzzle import from_candidate_csv


def _positions(cells) -> set:
    return {(cell.row, cell.column) for cell in cells}


def test_xwing_removes_candidate_outside_base_rows(xwing_grid):
    step = FishFinder(2).find_next_step(xwing_grid)

    assert step is not None
    assert step.digit == 7
    assert step.technique == "X-wing"
    assert step.axis == "rows"
    assert step.base_houses == (2, 5)
    assert step.cover_houses == (3, 8)
    assert _positions(step.removals) == {(0, 3)}
    assert [(c.row, c.column) for c in step.supporting_cells] == [(2, 3), (2, 8), (5, 3), (5, 8)]


def test_single_candidate_victim_is_kept_through_csv(xwing_grid):
    reloaded = from_candidate_csv(xwing_grid.to_candidate_csv())

    step = FishFinder(2).find_next_step(reloaded)

    assert step is not None
    assert step.removal_triples() == ((0, 3, 7),)


def test_fish_without_eliminations_is_discarded(closed_xwing_grid):
    assert FishFinder(2).find_next_step(closed_xwing_grid) is None


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_grid_without_candidates_has_no_fish(make_grid, size):
    assert FishFinder(size).find_next_step(make_grid(9)) is None


def test_too_few_houses_for_swordfish(xwing_grid):
    # Only rows 2 and 5 (and columns 3 and 8) qualify for digit 7.
    finder = FishFinder(3)
    assert finder.find_next_step(xwing_grid) is None

    for axis in (ROWS, COLUMNS):
        state = SearchState(xwing_grid.size)
        assert finder.search_axis(xwing_grid, 7, axis, state) is None
        assert state.combinations == 0
        assert state.pruned == 0


def test_single_candidate_houses_are_filtered(xwing_grid):
    rows = filter_candidate_houses(xwing_grid, 7, ROWS, 2)
    assert [house.position for house in rows] == [2, 5]
    assert all(len(house.cells) == 2 for house in rows)

    # Column 3 holds 7 three times: too many for an X-wing, fine for a swordfish.
    assert [h.position for h in filter_candidate_houses(xwing_grid, 7, COLUMNS, 2)] == [8]
    assert [h.position for h in filter_candidate_houses(xwing_grid, 7, COLUMNS, 3)] == [3, 8]


def test_lowest_digit_wins_even_on_columns(make_grid):
    grid = make_grid(
        9,
        (7, [(2, 3), (2, 8), (5, 3), (5, 8), (0, 3)]),
        (3, [(0, 1), (6, 1), (0, 4), (6, 4), (0, 7)]),
    )

    step = FishFinder(2).find_next_step(grid)

    assert step is not None
    assert step.digit == 3
    assert step.axis == "columns"
    assert step.base_houses == (1, 4)
    assert step.cover_houses == (0, 6)
    assert _positions(step.removals) == {(0, 7)}
    assert [(c.row, c.column) for c in step.supporting_cells] == [(0, 1), (6, 1), (0, 4), (6, 4)]
    assert "columns 2 and 5" in step.big_hint
    assert "rows 1 and 7" in step.big_hint


def test_rows_are_searched_before_columns(make_grid):
    grid = make_grid(
        9,
        (7, [(1, 0), (1, 2), (4, 0), (4, 2), (7, 0)]),
        (7, [(3, 5), (3, 6), (8, 5), (8, 6), (3, 8)]),
    )
    finder = FishFinder(2)

    step = finder.find_next_step(grid)
    assert step is not None
    assert step.axis == "rows"
    assert _positions(step.removals) == {(7, 0)}

    column_step = finder.search_axis(grid, 7, COLUMNS)
    assert column_step is not None
    assert column_step.base_houses == (5, 6)
    assert column_step.cover_houses == (3, 8)
    assert _positions(column_step.removals) == {(3, 8)}


def test_swordfish(swordfish_grid):
    step = FishFinder(3).find_next_step(swordfish_grid)

    assert step is not None
    assert step.technique == "swordfish"
    assert step.digit == 5
    assert step.base_houses == (0, 4, 8)
    assert step.cover_houses == (1, 4, 7)
    assert _positions(step.removals) == {(2, 1)}
    assert len(step.supporting_cells) == 6


def test_swordfish_is_not_an_xwing(swordfish_grid):
    assert FishFinder(2).find_next_step(swordfish_grid) is None


def test_supporting_cells_span_exactly_k_cover_houses(swordfish_grid):
    step = FishFinder(3).find_next_step(swordfish_grid)
    assert {cell.column for cell in step.supporting_cells} == set(step.cover_houses)
    assert {cell.row for cell in step.supporting_cells} == set(step.base_houses)


def test_state_is_restored_after_success(xwing_grid):
    state = SearchState(xwing_grid.size)
    step = FishFinder(2).search_axis(xwing_grid, 7, ROWS, state)

    assert step is not None
    assert state.combinations == 1
    assert state.is_clean()


def test_state_is_restored_after_failure(closed_xwing_grid):
    finder = FishFinder(2)
    state = SearchState(closed_xwing_grid.size)
    for axis in (ROWS, COLUMNS):
        assert finder.search_axis(closed_xwing_grid, 7, axis, state) is None
        assert state.is_clean()
    assert state.combinations == 2


def test_repeated_calls_return_the_same_step(xwing_grid):
    finder = FishFinder(2)
    assert finder.find_next_step(xwing_grid) == finder.find_next_step(xwing_grid)


@pytest.mark.parametrize("size", [-1, 0, 1])
def test_fish_size_below_two_is_rejected(size):
    with pytest.raises(FishSizeError):
        FishFinder(size)


def test_grid_smaller_than_fish_is_rejected(make_grid):
    finder = FishFinder(3)
    with pytest.raises(ValueError, match="invalid fish size"):
        finder.find_next_step(make_grid(2))


def test_fish_names():
    assert [fish_name(size) for size in range(2, 7)] == [
        "X-wing",
        "swordfish",
        "jellyfish",
        "squirmbag",
        "squirmbag",
    ]


def test_menu_and_not_applicable_texts():
    assert FishFinder(2).menu_item_name() == "X-wing"
    assert FishFinder(4).menu_item_name() == "Jellyfish"
    assert FishFinder(6).menu_item_name() == "Squirmbag"
    assert "swordfish" in FishFinder(3).not_applicable_message()


def test_hints_describe_the_pattern(xwing_grid):
    step = FishFinder(2).find_next_step(xwing_grid)

    assert step.small_hint == "Look for an X-wing."
    assert "rows 3 and 6" in step.big_hint
    assert "columns 4 and 9" in step.big_hint
    assert "r1c4" in step.big_hint


def test_step_payload(xwing_grid):
    payload = FishFinder(2).find_next_step(xwing_grid).to_payload()

    assert payload["digit"] == 7
    assert payload["removals"] == [[0, 3]]
    assert payload["supporting_cells"] == [[2, 3], [2, 8], [5, 3], [5, 8]]
    assert payload["technique"] == "X-wing"


def test_debug_log_counts_only_the_current_search(closed_xwing_grid, caplog):
    finder = FishFinder(2)
    state = SearchState(closed_xwing_grid.size)

    with caplog.at_level(logging.DEBUG, logger="fish.finder"):
        for axis in (ROWS, COLUMNS):
            finder.search_axis(closed_xwing_grid, 7, axis, state)

    messages = [r.getMessage() for r in caplog.records if "combination" in r.getMessage()]
    assert len(messages) == 2
    assert all("no fish in 1 combination(s), 0 branch(es) pruned" in m for m in messages)
    assert state.combinations == 2
