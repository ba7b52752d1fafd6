"""Elimination and proof building for a completed house combination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Set, Tuple

from .axis import Axis, CellLike, GridLike
from .search import SearchState


@dataclass(frozen=True)
class FishStep:
    """A fish found on one digit, with the candidates it removes.

    ``supporting_cells`` are the candidate cells of the base houses in the
    order they were selected; together with ``base_houses`` and
    ``cover_houses`` (0-based indices on ``axis`` and on the cross axis) they
    make up the proof of the pattern.
    """

    digit: int
    removals: FrozenSet[CellLike]
    supporting_cells: Tuple[CellLike, ...]
    fish_size: int
    axis: str
    base_houses: Tuple[int, ...]
    cover_houses: Tuple[int, ...]
    technique: str = ""
    small_hint: str = ""
    big_hint: str = ""

    def removal_triples(self) -> Tuple[Tuple[int, int, int], ...]:
        """Return ``(row, column, digit)`` for every removal in grid order."""

        return tuple(
            sorted((cell.row, cell.column, self.digit) for cell in self.removals)
        )

    def to_payload(self) -> dict:
        return {
            "technique": self.technique,
            "fish_size": self.fish_size,
            "digit": self.digit,
            "axis": self.axis,
            "base_houses": list(self.base_houses),
            "cover_houses": list(self.cover_houses),
            "removals": [[row, column] for row, column, _ in self.removal_triples()],
            "supporting_cells": [[cell.row, cell.column] for cell in self.supporting_cells],
            "small_hint": self.small_hint,
            "big_hint": self.big_hint,
        }


def collect_removals(
    grid: GridLike, digit: int, axis: Axis, state: SearchState, covers: List[int]
) -> Set[CellLike]:
    removals: Set[CellLike] = set()
    for position, used in enumerate(state.base_usage):
        if used:
            continue
        for cross_position in covers:
            cell = axis.cell_at(grid, position, cross_position)
            if cell.has_candidate(digit):
                removals.add(cell)
    return removals


def build_step(
    grid: GridLike,
    digit: int,
    axis: Axis,
    state: SearchState,
    fish_size: int,
    technique: str = "",
) -> Optional[FishStep]:
    """Turn the selected combination into a :class:`FishStep`.

    Returns ``None`` unless the selected houses cover exactly ``fish_size``
    cross houses and at least one candidate can be removed.
    """

    covers = [position for position, used in enumerate(state.cover_usage) if used]
    if len(covers) != fish_size:
        return None

    removals = collect_removals(grid, digit, axis, state, covers)
    if not removals:
        return None

    return FishStep(
        digit=digit,
        removals=frozenset(removals),
        supporting_cells=tuple(state.supporting_cells),
        fish_size=fish_size,
        axis=axis.name,
        base_houses=tuple(position for position, used in enumerate(state.base_usage) if used),
        cover_houses=tuple(covers),
        technique=technique,
    )


__all__ = ["FishStep", "build_step", "collect_removals"]
