"""Candidate grid model shared by the fish engine and the solver pipeline."""

from __future__ import annotations

from .grid import (
    MAX_SIZE,
    SYMBOLS,
    CandidateGrid,
    Cell,
    GridFormatError,
    House,
    from_candidate_csv,
    from_givens,
    from_rows,
    symbol_for,
)
from .loader import load_grid, parse_document, parse_text

__all__ = [
    "CandidateGrid",
    "Cell",
    "GridFormatError",
    "House",
    "MAX_SIZE",
    "SYMBOLS",
    "from_candidate_csv",
    "from_givens",
    "from_rows",
    "load_grid",
    "parse_document",
    "parse_text",
    "symbol_for",
]
