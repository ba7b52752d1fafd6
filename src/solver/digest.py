"""Canonical JSON and digests for solver states.

Grids are hashed through a canonical JSON form: dictionary keys sorted, no
insignificant whitespace, UTF-8 output, integers only.  Two grids with the
same values and candidates therefore always share a digest, which is what the
solve trace records before and after every step.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from puzzle.grid import CandidateGrid

__all__ = ["canonical_dump", "grid_digest"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        raise TypeError("floats are not part of canonical solver payloads")
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted(_canonicalize(item) for item in obj)
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj, key=str)}
    raise TypeError(f"Unsupported type for canonicalisation: {type(obj)!r}")


def canonical_dump(obj: Any) -> bytes:
    """Return canonical UTF-8 JSON bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def grid_digest(grid: CandidateGrid) -> str:
    """Return ``sha256-<hex>`` of the canonical grid payload."""

    digest = hashlib.sha256(canonical_dump(grid.to_payload())).hexdigest()
    return f"sha256-{digest}"
