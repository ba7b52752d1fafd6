"""Candidate-house filter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .axis import Axis, CellLike, GridLike


@dataclass(frozen=True)
class CandidateHouse:
    """A house on the search axis with the cells holding the digit."""

    position: int
    cells: Tuple[CellLike, ...]


def filter_candidate_houses(
    grid: GridLike, digit: int, axis: Axis, fish_size: int
) -> Tuple[CandidateHouse, ...]:
    """Return the houses of ``axis`` holding ``digit`` between 2 and ``fish_size`` times.

    Houses with a single occurrence belong to simpler techniques and houses
    with more than ``fish_size`` occurrences cannot be covered by
    ``fish_size`` cross houses, so neither takes part in the search.
    """

    retained: List[CandidateHouse] = []
    for house in axis.houses(grid):
        cells = tuple(cell for cell in house.cells if cell.has_candidate(digit))
        if 2 <= len(cells) <= fish_size:
            retained.append(CandidateHouse(position=axis.position(cells[0]), cells=cells))
    return tuple(retained)


__all__ = ["CandidateHouse", "filter_candidate_houses"]
