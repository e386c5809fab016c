"""Floor coordinates.

``Row``/``Column`` and ``FloorSize`` are the bounded types used at API
boundaries. ``Point`` itself is a plain ``(row, column)`` named tuple so the
generation hot loops can hash, compare and unpack it cheaply; use
``Point.checked`` when a point comes from outside the generator.
"""

from __future__ import annotations

import math
from typing import Iterator, NamedTuple

from .bounded_int import BoundedInt

MIN_FLOOR_SIZE = 10
MAX_FLOOR_SIZE = 200


class FloorSize(BoundedInt):
    LOW = MIN_FLOOR_SIZE
    HIGH = MAX_FLOOR_SIZE


class Row(BoundedInt):
    LOW = 0
    HIGH = MAX_FLOOR_SIZE


class Column(BoundedInt):
    LOW = 0
    HIGH = MAX_FLOOR_SIZE


class Point(NamedTuple):
    row: int
    column: int

    @classmethod
    def checked(cls, row: "int | Row", column: "int | Column") -> "Point":
        """Build a point, raising TooLow/TooHigh for out of range coordinates."""
        return cls(Row.coerce(row).as_unbounded(), Column.coerce(column).as_unbounded())

    def saturating_add_row(self, n: int) -> "Point":
        return Point(Row.clamped(self.row + n).as_unbounded(), self.column)

    def saturating_sub_row(self, n: int) -> "Point":
        return Point(Row.clamped(self.row - n).as_unbounded(), self.column)

    def saturating_add_column(self, n: int) -> "Point":
        return Point(self.row, Column.clamped(self.column + n).as_unbounded())

    def saturating_sub_column(self, n: int) -> "Point":
        return Point(self.row, Column.clamped(self.column - n).as_unbounded())


def distance(a: Point, b: Point) -> float:
    return math.sqrt((a.row - b.row) ** 2 + (a.column - b.column) ** 2)


def iter_points(width: int, height: int) -> Iterator[Point]:
    """All points of a ``width`` x ``height`` floor, column by column."""
    for column in range(width):
        for row in range(height):
            yield Point(row, column)


__all__ = [
    "MIN_FLOOR_SIZE",
    "MAX_FLOOR_SIZE",
    "FloorSize",
    "Row",
    "Column",
    "Point",
    "distance",
    "iter_points",
]
