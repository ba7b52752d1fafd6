"""Error types raised by the fish engine."""

from __future__ import annotations


class FishSizeError(ValueError):
    """Raised when a fish size cannot be searched on the given grid."""

    def __init__(self, fish_size: int, grid_size: int | None = None) -> None:
        self.fish_size = fish_size
        self.grid_size = grid_size
        if grid_size is None:
            message = f"invalid fish size {fish_size!r}: must be at least 2"
        else:
            message = (
                f"invalid fish size {fish_size!r}: a {grid_size}x{grid_size} grid "
                f"has fewer than {fish_size} houses per axis"
            )
        super().__init__(message)


__all__ = ["FishSizeError"]
