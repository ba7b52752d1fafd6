"""Fish finder: X-wing, swordfish, jellyfish and larger basic fish."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional

from puzzle.grid import symbol_for

from .axis import SEARCH_ORDER, Axis, GridLike
from .errors import FishSizeError
from .houses import filter_candidate_houses
from .messages import MessageCatalog, describe_houses
from .search import SearchState, search_combinations
from .step import FishStep, build_step

_LOGGER = logging.getLogger(__name__)

FISH_NAMES: Dict[int, str] = {2: "X-wing", 3: "swordfish", 4: "jellyfish"}
LARGE_FISH_NAME = "squirmbag"


def fish_name(fish_size: int) -> str:
    """Return the internal name of the fish of ``fish_size`` houses."""

    return FISH_NAMES.get(fish_size, LARGE_FISH_NAME)


class FishFinder:
    """Looks for a basic fish of a fixed size.

    Digits are scanned in ascending order; for each digit the rows are tried
    before the columns, and the first fish that removes at least one
    candidate is returned.  The finder keeps no state between calls, so one
    instance may be reused freely but must not be shared by concurrent
    searches over a grid that is being edited.
    """

    def __init__(self, fish_size: int, *, catalog: MessageCatalog | None = None) -> None:
        if isinstance(fish_size, bool) or not isinstance(fish_size, int) or fish_size < 2:
            raise FishSizeError(fish_size)
        self.fish_size = fish_size
        self.internal_name = fish_name(fish_size)
        self.catalog = catalog or MessageCatalog()

    def __repr__(self) -> str:
        return f"FishFinder(fish_size={self.fish_size})"

    def find_next_step(self, grid: GridLike) -> Optional[FishStep]:
        """Return the first fish in scan order, or ``None``."""

        if grid.size < self.fish_size:
            raise FishSizeError(self.fish_size, grid.size)

        for digit in range(1, grid.size + 1):
            for axis in SEARCH_ORDER:
                step = self.search_axis(grid, digit, axis)
                if step is not None:
                    _LOGGER.info(
                        "%s on %d (%s %s) removes %d candidate(s)",
                        self.internal_name,
                        digit,
                        axis.name,
                        ",".join(str(p + 1) for p in step.base_houses),
                        len(step.removals),
                    )
                    return self._describe(step, axis)
        return None

    def search_axis(
        self,
        grid: GridLike,
        digit: int,
        axis: Axis,
        state: SearchState | None = None,
    ) -> Optional[FishStep]:
        """Search one digit on one axis.

        ``state`` may be supplied to inspect the working state afterwards; it
        is clean again when this method returns.
        """

        houses = filter_candidate_houses(grid, digit, axis, self.fish_size)
        if len(houses) < self.fish_size:
            _LOGGER.debug(
                "digit %d: %d candidate %s(s), %d needed",
                digit,
                len(houses),
                axis.house_name,
                self.fish_size,
            )
            return None

        if state is None:
            state = SearchState(grid.size)
        combinations, pruned = state.combinations, state.pruned
        step = search_combinations(
            houses,
            self.fish_size,
            axis,
            state,
            lambda current: build_step(
                grid, digit, axis, current, self.fish_size, self.internal_name
            ),
        )
        if step is None:
            _LOGGER.debug(
                "digit %d on %s: no fish in %d combination(s), %d branch(es) pruned",
                digit,
                axis.name,
                state.combinations - combinations,
                state.pruned - pruned,
            )
        return step

    def _describe(self, step: FishStep, axis: Axis) -> FishStep:
        params = {
            "symbol": symbol_for(step.digit),
            "base": describe_houses(axis.house_name, step.base_houses),
            "cover": describe_houses(axis.cross_name, step.cover_houses),
            "removals": ", ".join(
                f"r{row + 1}c{column + 1}" for row, column, _ in step.removal_triples()
            ),
        }
        return replace(
            step,
            small_hint=self._message("small_hint"),
            big_hint=self._message("big_hint", **params),
        )

    def _message(self, entry: str, **params: object) -> str:
        return self.catalog.get(f"fish.{self.internal_name}.{entry}", **params)

    def menu_item_name(self) -> str:
        """Return the label of the menu entry that runs this finder."""

        return self._message("menu_item")

    def not_applicable_message(self) -> str:
        """Return the text shown when the puzzle holds no such fish."""

        return self._message("not_applicable")


__all__ = ["FISH_NAMES", "FishFinder", "LARGE_FISH_NAME", "fish_name"]
