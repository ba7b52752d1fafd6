"""Combination search over candidate houses."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

from .axis import Axis, CellLike
from .houses import CandidateHouse

T = TypeVar("T")


class SearchState:
    """Working state shared by one digit/axis search.

    ``base_usage`` counts selected cells per house on the search axis,
    ``cover_usage`` per house on the cross axis.  ``supporting_cells`` holds
    every candidate cell of the selected houses in selection order.  All three
    are restored by :meth:`selected` when a house is released, so a state is
    clean again once a search returns.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.base_usage: List[int] = [0] * size
        self.cover_usage: List[int] = [0] * size
        self.supporting_cells: List[CellLike] = []
        self.combinations = 0
        self.pruned = 0

    @contextmanager
    def selected(self, house: CandidateHouse, axis: Axis) -> Iterator[None]:
        mark = len(self.supporting_cells)
        self.supporting_cells.extend(house.cells)
        for cell in house.cells:
            self.base_usage[axis.position(cell)] += 1
            self.cover_usage[axis.cross_position(cell)] += 1
        try:
            yield
        finally:
            for cell in house.cells:
                self.base_usage[axis.position(cell)] -= 1
                self.cover_usage[axis.cross_position(cell)] -= 1
            del self.supporting_cells[mark:]

    def covers_used(self) -> int:
        return sum(1 for used in self.cover_usage if used)

    def is_clean(self) -> bool:
        return (
            not self.supporting_cells
            and not any(self.base_usage)
            and not any(self.cover_usage)
        )


def search_combinations(
    houses: Sequence[CandidateHouse],
    fish_size: int,
    axis: Axis,
    state: SearchState,
    complete: Callable[[SearchState], Optional[T]],
) -> Optional[T]:
    """Select ``fish_size`` houses in increasing index order.

    ``complete`` is called with the state once a full combination has been
    selected; the first non-``None`` value it returns ends the search.
    Branches that already use more than ``fish_size`` cross houses are cut,
    since adding houses never frees a cross house.
    """

    if fish_size < 1 or len(houses) < fish_size:
        return None

    def descend(depth: int, start: int) -> Optional[T]:
        last = len(houses) - (fish_size - depth)
        for index in range(start, last + 1):
            with state.selected(houses[index], axis):
                if state.covers_used() > fish_size:
                    state.pruned += 1
                    continue
                if depth == fish_size - 1:
                    state.combinations += 1
                    found = complete(state)
                else:
                    found = descend(depth + 1, index + 1)
            if found is not None:
                return found
        return None

    return descend(0, 0)


__all__ = ["SearchState", "search_combinations"]
