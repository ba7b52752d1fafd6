"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


_CONFIG_FILENAME = "config.toml"

_DEFAULT_SIZES: Tuple[int, ...] = (2, 3, 4)
_DEFAULT_TRACE_LEVEL = "none"
_TRACE_LEVELS = ("none", "steps", "all")


def _config_path() -> Path:
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache the project configuration as a dictionary."""
    path = _config_path()
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError as exc:
        raise RuntimeError(
            f"Configuration file '{_CONFIG_FILENAME}' was not found next to the project root"
        ) from exc


def get_section(path: str, default: Any = None) -> Any:
    """Retrieve a nested configuration value using dotted notation."""

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            if default is not None:
                return default
            raise KeyError(f"Configuration path '{path}' not found")
    return data


@dataclass(frozen=True)
class FishSettings:
    """Resolved settings for the fish tools (TOML, then environment)."""

    sizes: Tuple[int, ...]
    trace_level: str
    log_dir: Path | None
    log_max_bytes: int | None


def _parse_sizes(value: Any) -> Tuple[int, ...] | None:
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        return None
    try:
        sizes = tuple(int(part) for part in parts)
    except (TypeError, ValueError):
        return None
    if not sizes or any(size < 2 for size in sizes):
        return None
    return sizes


def _parse_trace_level(value: Any) -> str | None:
    if isinstance(value, str) and value.strip().lower() in _TRACE_LEVELS:
        return value.strip().lower()
    return None


def fish_settings(env: Mapping[str, str] | None = None) -> FishSettings:
    """Return the fish settings with ``FISH_*`` environment overrides applied.

    Invalid values are reported with :func:`warnings.warn` and ignored. When
    ``config.toml`` is missing the built-in defaults are used.
    """

    if env is None:
        env = os.environ

    try:
        config = get_config()
    except RuntimeError:
        # Installed without config.toml: built-in defaults apply.
        config = {}

    sizes = _parse_sizes(config.get("fish", {}).get("sizes")) or _DEFAULT_SIZES
    trace_level = _parse_trace_level(config.get("trace", {}).get("level")) or _DEFAULT_TRACE_LEVEL
    log_dir_value = config.get("log", {}).get("dir")
    max_bytes = config.get("log", {}).get("max_bytes")

    raw_sizes = env.get("FISH_SIZES")
    if raw_sizes is not None:
        parsed = _parse_sizes(raw_sizes)
        if parsed is None:
            warnings.warn(f"Ignoring invalid FISH_SIZES={raw_sizes!r}", RuntimeWarning, stacklevel=2)
        else:
            sizes = parsed

    raw_level = env.get("FISH_TRACE_LEVEL")
    if raw_level is not None:
        level = _parse_trace_level(raw_level)
        if level is None:
            warnings.warn(f"Ignoring invalid FISH_TRACE_LEVEL={raw_level!r}", RuntimeWarning, stacklevel=2)
        else:
            trace_level = level

    raw_dir = env.get("FISH_LOG_DIR")
    if raw_dir:
        log_dir_value = raw_dir

    return FishSettings(
        sizes=sizes,
        trace_level=trace_level,
        log_dir=Path(log_dir_value) if log_dir_value else None,
        log_max_bytes=int(max_bytes) if max_bytes else None,
    )


__all__ = ["FishSettings", "fish_settings", "get_config", "get_section"]
