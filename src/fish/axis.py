"""Grid protocol and the row/column axis abstraction used by the search.

The fish search is written once against an :class:`Axis`.  ``ROWS`` selects
base houses among the rows and covers with columns; ``COLUMNS`` is the
transposed view.  The grid itself only needs to satisfy :class:`GridLike`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


class CellLike(Protocol):
    @property
    def row(self) -> int: ...

    @property
    def column(self) -> int: ...

    def has_candidate(self, digit: int) -> bool: ...


class HouseLike(Protocol):
    @property
    def cells(self) -> Sequence[CellLike]: ...


class GridLike(Protocol):
    @property
    def size(self) -> int: ...

    def rows(self) -> Sequence[HouseLike]: ...

    def columns(self) -> Sequence[HouseLike]: ...

    def cell_at(self, row: int, column: int) -> CellLike: ...


@dataclass(frozen=True)
class Axis:
    """Primary/cross axis pair.

    ``position`` is the index of a cell's house on this axis, ``cross_position``
    its index on the orthogonal axis.
    """

    name: str
    house_name: str
    cross_name: str
    transposed: bool

    def houses(self, grid: GridLike) -> Sequence[HouseLike]:
        return grid.columns() if self.transposed else grid.rows()

    def position(self, cell: CellLike) -> int:
        return cell.column if self.transposed else cell.row

    def cross_position(self, cell: CellLike) -> int:
        return cell.row if self.transposed else cell.column

    def cell_at(self, grid: GridLike, position: int, cross_position: int) -> CellLike:
        if self.transposed:
            return grid.cell_at(cross_position, position)
        return grid.cell_at(position, cross_position)


ROWS = Axis(name="rows", house_name="row", cross_name="column", transposed=False)
COLUMNS = Axis(name="columns", house_name="column", cross_name="row", transposed=True)

# Scan order for one digit: rows first, then columns.
SEARCH_ORDER = (ROWS, COLUMNS)


__all__ = ["Axis", "COLUMNS", "CellLike", "GridLike", "HouseLike", "ROWS", "SEARCH_ORDER"]
