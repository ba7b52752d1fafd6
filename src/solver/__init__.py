"""Step pipeline that applies fish eliminations to a candidate grid."""

from __future__ import annotations

from .delta import (
    Delta,
    DeltaLike,
    DeltaOp,
    DeltaValidationError,
    canonicalise_deltas,
    eliminations,
    ensure_delta,
)
from .digest import canonical_dump, grid_digest
from .eventlog import EventLog
from .state_capsule import StateCapsule
from .step_runner import (
    TRACE_LEVELS,
    StepHandler,
    StepResult,
    StepRunner,
    StepTraceEntry,
    StepTraceRecorder,
    merge_deltas,
    register_step,
    registered_steps,
)
from .trace import SolveTrace, SolveTraceEntry, TraceValidationError

# Trigger step registration on import.
from .techniques import FISH_STEPS, fish_step_name, step_fish
from .session import SolveOutcome, solve_with_fish

__all__ = [
    "Delta",
    "DeltaLike",
    "DeltaOp",
    "DeltaValidationError",
    "EventLog",
    "FISH_STEPS",
    "SolveOutcome",
    "SolveTrace",
    "SolveTraceEntry",
    "StateCapsule",
    "StepHandler",
    "StepResult",
    "StepRunner",
    "StepTraceEntry",
    "StepTraceRecorder",
    "TRACE_LEVELS",
    "TraceValidationError",
    "canonical_dump",
    "canonicalise_deltas",
    "eliminations",
    "ensure_delta",
    "fish_step_name",
    "grid_digest",
    "merge_deltas",
    "register_step",
    "registered_steps",
    "solve_with_fish",
    "step_fish",
]
