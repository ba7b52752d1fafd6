"""Fish steps registered with the step runner."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Iterable, Mapping, Tuple

from fish import FishFinder

from .delta import Delta, eliminations
from .state_capsule import StateCapsule
from .step_runner import register_step, registered_steps

Metrics = Mapping[str, Any]

FISH_STEPS: Dict[str, int] = {
    "fish.x_wing": 2,
    "fish.swordfish": 3,
    "fish.jellyfish": 4,
    "fish.squirmbag": 5,
}


@lru_cache(maxsize=None)
def _finder(fish_size: int) -> FishFinder:
    return FishFinder(fish_size)


def step_fish(state: StateCapsule, params: Mapping[str, Any] | None = None) -> Tuple[Iterable[Delta], Metrics]:
    """Find the next fish of ``params["size"]`` and describe its eliminations."""

    params = params or {}
    finder = _finder(int(params["size"]))
    step = finder.find_next_step(state.grid)
    if step is None:
        return (), {"found": False, "technique": finder.internal_name}
    metrics = {
        "found": True,
        "technique": finder.internal_name,
        "digit": step.digit,
        "axis": step.axis,
        "base_houses": list(step.base_houses),
        "cover_houses": list(step.cover_houses),
        "hint": step.big_hint,
    }
    return eliminations(step.removal_triples()), metrics


def _bind(fish_size: int):
    def handler(state: StateCapsule, params: Mapping[str, Any] | None = None) -> Tuple[Iterable[Delta], Metrics]:
        return step_fish(state, {**(params or {}), "size": fish_size})

    return handler


def fish_step_name(fish_size: int) -> str:
    """Return the registered step name for ``fish_size``, registering it if needed."""

    for name, size in FISH_STEPS.items():
        if size == fish_size:
            return name
    name = f"fish.size{fish_size}"
    if name not in registered_steps("HEURISTICS"):
        _finder(fish_size)
        register_step("HEURISTICS", name, _bind(fish_size))
    return name


for _name, _size in FISH_STEPS.items():
    register_step("HEURISTICS", _name, _bind(_size))


__all__ = ["FISH_STEPS", "fish_step_name", "step_fish"]
