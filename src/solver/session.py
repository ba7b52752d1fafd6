"""Repeatedly apply fish steps until the grid stops changing."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from puzzle.grid import CandidateGrid

from .digest import grid_digest
from .state_capsule import StateCapsule
from .step_runner import StepRunner
from .techniques import fish_step_name
from .trace import SolveTrace, SolveTraceEntry

_LOGGER = logging.getLogger(__name__)

StepListener = Callable[[SolveTraceEntry, Mapping[str, Any]], None]


@dataclass(frozen=True)
class SolveOutcome:
    """Final state and trace of :func:`solve_with_fish`."""

    state: StateCapsule
    trace: SolveTrace

    @property
    def grid(self) -> CandidateGrid:
        return self.state.grid


def _usable_sizes(sizes: Iterable[int], grid_size: int) -> Tuple[int, ...]:
    usable = tuple(sorted({int(size) for size in sizes if 2 <= int(size) <= grid_size}))
    skipped = sorted({int(size) for size in sizes} - set(usable))
    if skipped:
        _LOGGER.debug("fish sizes %s do not apply to a %dx%d grid", skipped, grid_size, grid_size)
    return usable


def solve_with_fish(
    grid: CandidateGrid,
    sizes: Iterable[int] = (2, 3, 4),
    *,
    runner: StepRunner | None = None,
    max_steps: int | None = None,
    on_step: Optional[StepListener] = None,
) -> SolveOutcome:
    """Apply the first fish found, smallest size first, until none applies.

    After every applied step the scan restarts from the smallest size.
    ``on_step`` is called with each trace entry and the step metrics.
    """

    runner = runner or StepRunner()
    names = [fish_step_name(size) for size in _usable_sizes(sizes, grid.size)]
    state = StateCapsule(grid=grid)
    trace = SolveTrace()

    while max_steps is None or len(trace.entries) < max_steps:
        for name in names:
            before = grid_digest(state.grid)
            started = time.perf_counter_ns()
            result = runner.run_step(state, "HEURISTICS", params={"name": name})
            if not result.applied:
                continue
            elapsed_us = (time.perf_counter_ns() - started) // 1000
            state = result.state
            entry = SolveTraceEntry(
                step=len(trace.entries) + 1,
                technique_id=name,
                digit=int(result.metrics["digit"]),
                deltas=result.deltas,
                candidates_removed=int(result.metrics["removed"]),
                state_hash_before=before,
                state_hash_after=grid_digest(state.grid),
                time_us=elapsed_us,
                note=result.metrics.get("hint") or None,
            )
            trace.append(entry)
            if on_step is not None:
                on_step(entry, result.metrics)
            break
        else:
            break

    _LOGGER.info("fish solve finished after %d step(s)", len(trace.entries))
    return SolveOutcome(state=state, trace=trace)


__all__ = ["SolveOutcome", "StepListener", "solve_with_fish"]
