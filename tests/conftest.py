from __future__ import annotations

from typing import Dict, Iterable, Set, Tuple

import pytest

from puzzle import CandidateGrid, Cell

Position = Tuple[int, int]


def build_grid(size: int, *layers: Tuple[int, Iterable[Position]]) -> CandidateGrid:
    """Build a grid from ``(digit, positions)`` layers; other cells stay empty."""

    candidates: Dict[Position, Set[int]] = {}
    for digit, positions in layers:
        for position in positions:
            candidates.setdefault(position, set()).add(digit)
    cells = [
        Cell(r, c, frozenset(candidates.get((r, c), ())))
        for r in range(size)
        for c in range(size)
    ]
    return CandidateGrid(size, cells)


@pytest.fixture
def make_grid():
    return build_grid


XWING_CELLS = ((2, 3), (2, 8), (5, 3), (5, 8))


@pytest.fixture
def xwing_grid() -> CandidateGrid:
    """Digit 7 confined to columns 3 and 8 in rows 2 and 5, plus a victim at (0, 3)."""

    return build_grid(9, (7, XWING_CELLS + ((0, 3),)))


@pytest.fixture
def closed_xwing_grid() -> CandidateGrid:
    """Same X-wing with nothing left to eliminate."""

    return build_grid(9, (7, XWING_CELLS))


@pytest.fixture
def swordfish_grid() -> CandidateGrid:
    """Digit 5 in rows 0, 4 and 8 spread over columns 1, 4 and 7, victim at (2, 1)."""

    return build_grid(9, (5, [(0, 1), (0, 4), (4, 4), (4, 7), (8, 1), (8, 7), (2, 1)]))
