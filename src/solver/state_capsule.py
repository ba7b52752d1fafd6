"""State capsule carried through the solver pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Sequence

from puzzle.grid import CandidateGrid


@dataclass(frozen=True)
class StateCapsule:
    """Immutable snapshot of the solver state.

    ``grid`` holds the placed values and the remaining candidates.
    ``history`` keeps an ordered record of the steps applied so far, one
    mapping per step as produced by :class:`~solver.step_runner.StepRunner`.
    """

    grid: CandidateGrid
    history: Sequence[Mapping[str, Any]] = ()

    def evolve(
        self,
        *,
        grid: CandidateGrid | None = None,
        history: Iterable[Mapping[str, Any]] | None = None,
    ) -> "StateCapsule":
        """Create a new capsule with updated components.

        ``history`` is normalised to a tuple to preserve immutability.
        """

        return replace(
            self,
            grid=self.grid if grid is None else grid,
            history=tuple(self.history if history is None else history),
        )


__all__ = ["StateCapsule"]
