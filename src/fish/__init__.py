"""Basic fish detection (X-wing, swordfish, jellyfish, squirmbag)."""

from __future__ import annotations

from .axis import COLUMNS, ROWS, SEARCH_ORDER, Axis, GridLike
from .errors import FishSizeError
from .finder import FISH_NAMES, LARGE_FISH_NAME, FishFinder, fish_name
from .houses import CandidateHouse, filter_candidate_houses
from .messages import MessageCatalog
from .search import SearchState, search_combinations
from .step import FishStep, build_step

__all__ = [
    "Axis",
    "COLUMNS",
    "CandidateHouse",
    "FISH_NAMES",
    "FishFinder",
    "FishSizeError",
    "FishStep",
    "GridLike",
    "LARGE_FISH_NAME",
    "MessageCatalog",
    "ROWS",
    "SEARCH_ORDER",
    "SearchState",
    "build_step",
    "filter_candidate_houses",
    "fish_name",
    "search_combinations",
]
