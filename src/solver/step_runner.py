"""Execution scaffold for solver steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, MutableMapping, Optional, Tuple

from .delta import Delta, DeltaLike, canonicalise_deltas
from .state_capsule import StateCapsule

StepHandler = Callable[[StateCapsule, Mapping[str, Any] | None], Tuple[Iterable[DeltaLike], Mapping[str, Any]]]


@dataclass(frozen=True)
class StepTraceEntry:
    """Single record emitted for a solver step."""

    step_kind: str
    step_name: str
    meta: Mapping[str, Any]


@dataclass(frozen=True)
class StepResult:
    """Container with the outcome of a step execution."""

    state: StateCapsule
    deltas: Tuple[Delta, ...]
    metrics: Mapping[str, Any]

    @property
    def applied(self) -> bool:
        return bool(self.deltas)


@dataclass
class StepTraceRecorder:
    """In-memory trace accumulator respecting ``trace_level`` semantics.

    ``"none"`` records nothing, ``"steps"`` records only steps that produced
    deltas, ``"all"`` records every attempt including skipped ones.
    """

    trace_level: str = "none"
    entries: List[StepTraceEntry] = field(default_factory=list)

    def record(self, entry: StepTraceEntry) -> None:
        if self.trace_level == "none":
            return
        if self.trace_level == "steps" and not entry.meta.get("removed"):
            return
        self.entries.append(entry)

    def snapshot(self) -> Tuple[StepTraceEntry, ...]:
        return tuple(self.entries)

    def reset(self) -> None:
        self.entries.clear()


TRACE_LEVELS = ("none", "steps", "all")

_STEP_REGISTRY: Dict[str, Dict[str, StepHandler]] = {
    "HEURISTICS": {},
}


def register_step(step_kind: str, name: str, handler: StepHandler) -> None:
    """Register a step handler for the runner.

    Registration happens at import time of the modules defining the handlers,
    which keeps this module free of import cycles.
    """

    if step_kind not in _STEP_REGISTRY:
        raise ValueError(f"Unsupported step kind: {step_kind!r}")
    _STEP_REGISTRY[step_kind][name] = handler


def registered_steps(step_kind: str) -> Tuple[str, ...]:
    """Return the names registered under ``step_kind`` in registration order."""

    return tuple(_STEP_REGISTRY.get(step_kind, {}))


def merge_deltas(state: StateCapsule, deltas: Iterable[DeltaLike]) -> Tuple[StateCapsule, Tuple[Delta, ...]]:
    """Apply elimination deltas and return the new capsule.

    Parameters
    ----------
    state:
        Capsule describing the solver state before the step.  It is left
        untouched; a new capsule with a new grid is returned.
    deltas:
        Delta records or plain mappings with ``op``, ``row``, ``column`` and
        ``digit`` keys.  They are validated against the grid size and
        normalised to canonical order.

    Returns
    -------
    Tuple[StateCapsule, Tuple[Delta, ...]]
        The updated capsule and the canonical deltas.
    """

    canonical = canonicalise_deltas(deltas)
    size = state.grid.size
    for delta in canonical:
        delta.check_size(size)
    if not canonical:
        return state, canonical
    grid = state.grid.without_candidates((d.row, d.column, d.digit) for d in canonical)
    return state.evolve(grid=grid), canonical


class StepRunner:
    """Coordinator that executes solver steps sequentially."""

    def __init__(
        self,
        *,
        trace_level: str = "none",
        trace_recorder: Optional[StepTraceRecorder] = None,
    ) -> None:
        if trace_level not in TRACE_LEVELS:
            raise ValueError(f"Unsupported trace level: {trace_level!r}")
        self.trace_recorder = trace_recorder or StepTraceRecorder(trace_level=trace_level)

    def run_step(
        self,
        state: StateCapsule,
        step_kind: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> StepResult:
        """Execute a single solver step and return the resulting state.

        Parameters
        ----------
        state:
            Current immutable capsule representing the solver state.
        step_kind:
            Registry section, currently only ``"HEURISTICS"``.
        params:
            Configuration passed to the handler.  ``name`` selects the
            registered step.
        """

        params = params or {}
        step_name = str(params.get("name", "undefined"))
        handler = _STEP_REGISTRY.get(step_kind, {}).get(step_name)
        if handler is None:
            return self._skip(state, step_kind, step_name, reason="unregistered")

        raw_deltas, metrics = handler(state, params)
        before = state.grid.candidate_count()
        new_state, deltas = merge_deltas(state, raw_deltas)
        removed = before - new_state.grid.candidate_count()
        metrics_dict: Dict[str, Any] = dict(metrics) if metrics is not None else {}
        metrics_dict["removed"] = removed
        if deltas:
            record = {"step_kind": step_kind, "step_name": step_name, **metrics_dict}
            new_state = new_state.evolve(history=(*new_state.history, record))
        result = StepResult(state=new_state, deltas=deltas, metrics=metrics_dict)
        self._record(step_kind, step_name, {"status": "ok", **result.metrics})
        return result

    # Internal helpers -------------------------------------------------

    def _skip(
        self,
        state: StateCapsule,
        step_kind: str,
        step_name: str,
        *,
        reason: str,
    ) -> StepResult:
        metrics: MutableMapping[str, Any] = {"status": "skipped", "reason": reason}
        self._record(step_kind, step_name, metrics)
        return StepResult(state=state, deltas=tuple(), metrics=metrics)

    def _record(self, step_kind: str, step_name: str, meta: Mapping[str, Any]) -> None:
        entry = StepTraceEntry(step_kind=step_kind, step_name=step_name, meta=dict(meta))
        self.trace_recorder.record(entry)


__all__ = [
    "StepHandler",
    "StepResult",
    "StepRunner",
    "StepTraceEntry",
    "StepTraceRecorder",
    "TRACE_LEVELS",
    "merge_deltas",
    "register_step",
    "registered_steps",
]
