"""Candidate elimination deltas produced by solver steps.

Steps never touch the grid themselves; they describe the candidates to remove
as :class:`Delta` records, and the runner merges them into a new state.
Deltas are always handled in canonical order (row, column, digit) so that
traces and digests are reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Mapping, Tuple


class DeltaValidationError(ValueError):
    """Raised when a delta does not fit the grid it is applied to."""


class DeltaOp(str, Enum):
    """Supported delta kinds."""

    ELIM = "ELIM"

    @classmethod
    def from_value(cls, value: str) -> "DeltaOp":
        try:
            return cls(value)
        except ValueError as exc:
            raise DeltaValidationError(f"Unsupported delta op: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class Delta:
    """Removal of ``digit`` from the candidates of cell (``row``, ``column``)."""

    op: DeltaOp
    row: int
    column: int
    digit: int

    def __post_init__(self) -> None:
        if not isinstance(self.op, DeltaOp):
            object.__setattr__(self, "op", DeltaOp.from_value(str(self.op)))
        if self.row < 0 or self.column < 0:
            raise DeltaValidationError(f"cell ({self.row}, {self.column}) has a negative index")
        if self.digit < 1:
            raise DeltaValidationError(f"digit must be >= 1, got {self.digit!r}")

    def check_size(self, size: int) -> None:
        """Raise :class:`DeltaValidationError` unless the delta fits a ``size`` grid."""

        if self.row >= size or self.column >= size:
            raise DeltaValidationError(
                f"cell ({self.row}, {self.column}) is outside a {size}x{size} grid"
            )
        if self.digit > size:
            raise DeltaValidationError(f"digit must be in [1, {size}], got {self.digit!r}")

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.row, self.column, self.digit)

    def to_payload(self) -> dict:
        return {"op": self.op.value, "row": self.row, "column": self.column, "digit": self.digit}


DeltaLike = Delta | Mapping[str, object]


def ensure_delta(candidate: DeltaLike) -> Delta:
    """Normalise an arbitrary delta descriptor to :class:`Delta`."""

    if isinstance(candidate, Delta):
        return candidate
    if isinstance(candidate, Mapping):
        try:
            op = candidate["op"]
            row = candidate["row"]
            column = candidate["column"]
            digit = candidate["digit"]
        except KeyError as exc:
            raise DeltaValidationError("delta mapping is missing required keys") from exc
        return Delta(DeltaOp.from_value(str(op)), int(row), int(column), int(digit))
    raise TypeError(f"Unsupported delta descriptor: {type(candidate)!r}")


def _iter_canonical(deltas: Iterable[DeltaLike]) -> Iterator[Delta]:
    for item in deltas:
        yield ensure_delta(item)


def canonicalise_deltas(deltas: Iterable[DeltaLike]) -> Tuple[Delta, ...]:
    """Return deduplicated deltas in canonical order."""

    return tuple(sorted(set(_iter_canonical(deltas)), key=Delta.sort_key))


def eliminations(triples: Iterable[Tuple[int, int, int]]) -> Tuple[Delta, ...]:
    """Build canonical ELIM deltas from ``(row, column, digit)`` triples."""

    return canonicalise_deltas(Delta(DeltaOp.ELIM, r, c, d) for r, c, d in triples)


__all__ = [
    "Delta",
    "DeltaLike",
    "DeltaOp",
    "DeltaValidationError",
    "canonicalise_deltas",
    "eliminations",
    "ensure_delta",
]
