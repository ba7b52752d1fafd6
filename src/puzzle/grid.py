"""Immutable candidate grid used by the fish search and the solver pipeline.

The grid is a square of ``size × size`` cells.  Every unsolved cell carries a
set of candidate digits from ``1..size``; solved cells carry a ``value`` and no
candidates.  Grids are never mutated in place: removing candidates returns a
new :class:`CandidateGrid`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Sequence, Tuple

SYMBOLS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
MAX_SIZE = len(SYMBOLS) - 1
_EMPTY = {".", "0"}
_CANDIDATE_MARK = "+"


class GridFormatError(ValueError):
    """Raised when a grid description cannot be turned into a grid."""


def symbol_for(digit: int) -> str:
    """Return the character used to display ``digit``."""

    if not 1 <= digit <= MAX_SIZE:
        raise GridFormatError(f"digit must be in [1, {MAX_SIZE}], got {digit!r}")
    return SYMBOLS[digit]


def digit_for(symbol: str, size: int) -> int:
    digit = SYMBOLS.find(symbol.upper())
    if not 1 <= digit <= size:
        raise GridFormatError(f"symbol {symbol!r} is not a digit of a {size}x{size} grid")
    return digit


@dataclass(frozen=True)
class Cell:
    """Single grid position with its remaining candidates."""

    row: int
    column: int
    candidates: FrozenSet[int] = frozenset()
    value: int | None = None

    def has_candidate(self, digit: int) -> bool:
        return digit in self.candidates

    @property
    def label(self) -> str:
        return f"r{self.row + 1}c{self.column + 1}"

    def without(self, digits: Iterable[int]) -> "Cell":
        remaining = self.candidates.difference(digits)
        if remaining == self.candidates:
            return self
        return Cell(self.row, self.column, frozenset(remaining), self.value)


@dataclass(frozen=True)
class House:
    """Ordered run of cells forming one row or one column."""

    kind: str
    index: int
    cells: Tuple[Cell, ...]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)


class CandidateGrid:
    """Square grid of :class:`Cell` objects stored row-major."""

    def __init__(self, size: int, cells: Sequence[Cell]) -> None:
        if not 1 <= size <= MAX_SIZE:
            raise GridFormatError(f"grid size must be in [1, {MAX_SIZE}], got {size!r}")
        if len(cells) != size * size:
            raise GridFormatError(f"expected {size * size} cells, got {len(cells)}")
        for index, cell in enumerate(cells):
            if (cell.row, cell.column) != divmod(index, size):
                raise GridFormatError(f"cell {cell.label} stored at index {index}")
            if any(not 1 <= digit <= size for digit in cell.candidates):
                raise GridFormatError(f"cell {cell.label} has candidates outside 1..{size}")
        self._size = size
        self._cells: Tuple[Cell, ...] = tuple(cells)

    @property
    def size(self) -> int:
        return self._size

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return self._cells

    def cell_at(self, row: int, column: int) -> Cell:
        if not (0 <= row < self._size and 0 <= column < self._size):
            raise IndexError(f"cell ({row}, {column}) is outside a {self._size}x{self._size} grid")
        return self._cells[row * self._size + column]

    def rows(self) -> Tuple[House, ...]:
        n = self._size
        return tuple(House("row", r, self._cells[r * n:(r + 1) * n]) for r in range(n))

    def columns(self) -> Tuple[House, ...]:
        n = self._size
        return tuple(House("column", c, self._cells[c::n]) for c in range(n))

    def without_candidates(self, removals: Iterable[Tuple[int, int, int]]) -> "CandidateGrid":
        """Return a copy of the grid with ``(row, column, digit)`` candidates removed."""

        pending: Dict[int, set[int]] = {}
        for row, column, digit in removals:
            self.cell_at(row, column)
            pending.setdefault(row * self._size + column, set()).add(digit)
        if not pending:
            return self
        cells = list(self._cells)
        for index, digits in pending.items():
            cells[index] = cells[index].without(digits)
        return CandidateGrid(self._size, cells)

    def candidate_count(self) -> int:
        return sum(len(cell.candidates) for cell in self._cells)

    def to_candidate_csv(self) -> str:
        """Serialise the grid as one comma separated token per cell."""

        tokens = []
        for cell in self._cells:
            if cell.value is not None:
                tokens.append(symbol_for(cell.value))
            else:
                token = "".join(symbol_for(d) for d in sorted(cell.candidates))
                if len(cell.candidates) == 1:
                    token = _CANDIDATE_MARK + token
                tokens.append(token)
        return ",".join(tokens)

    def to_payload(self) -> dict:
        return {
            "size": self._size,
            "values": [cell.value for cell in self._cells],
            "candidates": [sorted(cell.candidates) for cell in self._cells],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateGrid):
            return NotImplemented
        return self._size == other._size and self._cells == other._cells

    def __hash__(self) -> int:
        return hash((self._size, self._cells))

    def __repr__(self) -> str:
        return f"CandidateGrid(size={self._size}, candidates={self.candidate_count()})"


def from_rows(rows: Sequence[Sequence[Iterable[int]]]) -> CandidateGrid:
    """Build a grid from explicit candidate sets, one sequence per row."""

    size = len(rows)
    cells: List[Cell] = []
    for r, row in enumerate(rows):
        if len(row) != size:
            raise GridFormatError(f"row {r + 1} has {len(row)} cells, expected {size}")
        for c, candidates in enumerate(row):
            cells.append(Cell(r, c, frozenset(int(d) for d in candidates)))
    return CandidateGrid(size, cells)


def _size_from_count(count: int) -> int:
    size = math.isqrt(count)
    if size * size != count or size == 0:
        raise GridFormatError(f"{count} cells do not form a square grid")
    return size


def from_candidate_csv(text: str) -> CandidateGrid:
    """Parse comma separated candidate tokens.

    A token holding a single symbol is a placed value, while a token marked
    with a leading ``+`` always lists candidates (``+7`` is an unsolved cell
    whose only candidate is 7). An empty token is a cell without candidates
    (a broken grid, kept as-is so that callers can still inspect it).
    """

    tokens = [token.strip() for token in text.strip().split(",")]
    size = _size_from_count(len(tokens))
    cells: List[Cell] = []
    for index, token in enumerate(tokens):
        row, column = divmod(index, size)
        marked = token.startswith(_CANDIDATE_MARK)
        if marked:
            token = token[len(_CANDIDATE_MARK):]
        digits = [digit_for(symbol, size) for symbol in token]
        if len(digits) == 1 and not marked:
            cells.append(Cell(row, column, frozenset(), digits[0]))
        else:
            cells.append(Cell(row, column, frozenset(digits)))
    return CandidateGrid(size, cells)


def _box_shape(size: int) -> Tuple[int, int] | None:
    root = math.isqrt(size)
    if root * root == size:
        return root, root
    return None


def from_givens(text: str) -> CandidateGrid:
    """Parse ``size²`` characters of givens and derive the basic candidates."""

    symbols = [ch for ch in text if not ch.isspace()]
    size = _size_from_count(len(symbols))
    values: List[int | None] = [
        None if ch in _EMPTY else digit_for(ch, size) for ch in symbols
    ]
    box = _box_shape(size)
    cells: List[Cell] = []
    for index, value in enumerate(values):
        row, column = divmod(index, size)
        if value is not None:
            cells.append(Cell(row, column, frozenset(), value))
            continue
        seen = {values[row * size + c] for c in range(size)}
        seen.update(values[r * size + column] for r in range(size))
        if box is not None:
            top = row - row % box[0]
            left = column - column % box[1]
            seen.update(
                values[r * size + c]
                for r in range(top, top + box[0])
                for c in range(left, left + box[1])
            )
        candidates = frozenset(d for d in range(1, size + 1) if d not in seen)
        cells.append(Cell(row, column, candidates))
    return CandidateGrid(size, cells)


__all__ = [
    "Cell",
    "CandidateGrid",
    "GridFormatError",
    "House",
    "MAX_SIZE",
    "SYMBOLS",
    "digit_for",
    "from_candidate_csv",
    "from_givens",
    "from_rows",
    "symbol_for",
]
