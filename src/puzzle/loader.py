"""Loading grid documents from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema

from .grid import MAX_SIZE, CandidateGrid, GridFormatError, from_candidate_csv, from_givens

GRID_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "sudoku-fish:grid-document@1",
    "type": "object",
    "required": ["format", "grid"],
    "properties": {
        "size": {"type": "integer", "minimum": 1, "maximum": MAX_SIZE},
        "format": {"enum": ["csv", "givens"]},
        "grid": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}

_VALIDATOR = jsonschema.Draft202012Validator(GRID_DOCUMENT_SCHEMA)


def _error_path(error: jsonschema.ValidationError) -> str:
    parts = [str(part) for part in error.absolute_path]
    return "/" + "/".join(parts) if parts else "/"


def parse_document(document: Any) -> CandidateGrid:
    """Validate a decoded JSON grid document and build the grid."""

    errors = sorted(_VALIDATOR.iter_errors(document), key=lambda err: [str(part) for part in err.absolute_path])
    if errors:
        first = errors[0]
        raise GridFormatError(f"{_error_path(first)}: {first.message}")

    if document["format"] == "csv":
        grid = from_candidate_csv(document["grid"])
    else:
        grid = from_givens(document["grid"])

    declared = document.get("size")
    if declared is not None and declared != grid.size:
        raise GridFormatError(f"/size: document declares {declared}, grid is {grid.size}")
    return grid


def parse_text(text: str) -> CandidateGrid:
    """Parse a plain text grid, either candidate CSV or a givens string."""

    if "," in text:
        return from_candidate_csv(text)
    return from_givens(text)


def load_grid(path: str | Path) -> CandidateGrid:
    """Read a grid from ``path`` (``.json`` documents or plain text)."""

    path = Path(path)
    text = path.read_text("utf-8")
    if path.suffix.lower() == ".json":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise GridFormatError(f"{path}: invalid JSON ({exc.msg})") from exc
        return parse_document(document)
    return parse_text(text)


__all__ = ["GRID_DOCUMENT_SCHEMA", "load_grid", "parse_document", "parse_text"]
