"""Message catalog for menu labels and hints."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Sequence

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]

_DEFAULT_CATALOG = Path(__file__).resolve().with_name("messages.toml")


@lru_cache(maxsize=8)
def _load_catalog(path: str) -> Dict[str, Any]:
    with open(path, "rb") as handle:
        return tomllib.load(handle)


def reload() -> None:
    """Clear cached catalogs."""

    _load_catalog.cache_clear()


def describe_houses(kind: str, positions: Sequence[int]) -> str:
    """Return e.g. ``"rows 3 and 6"`` for 0-based ``positions``."""

    labels = [str(position + 1) for position in positions]
    if len(labels) == 1:
        return f"{kind} {labels[0]}"
    return f"{kind}s {', '.join(labels[:-1])} and {labels[-1]}"


class MessageCatalog:
    """Dotted-key lookup over a TOML catalog of ``str.format`` templates."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else _DEFAULT_CATALOG

    def get(self, key: str, **params: Any) -> str:
        data: Any = _load_catalog(str(self.path))
        for part in key.split("."):
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                raise KeyError(f"Message '{key}' not found in {self.path.name}")
        if not isinstance(data, str):
            raise KeyError(f"Message '{key}' is not a text entry")
        return data.format(**params) if params else data


__all__ = ["MessageCatalog", "describe_houses", "reload"]
