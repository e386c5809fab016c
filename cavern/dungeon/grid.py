"""Row-major 2D grid over a flat list.

For a grid with width 4 and height 3 the storage is::

    [a, b, c, d, e, f, g, h, i, j, k, l]

which reads as::

         0  1  2  3
      0 [a, b, c, d]
      1 [e, f, g, h]
      2 [i, j, k, l]

so ``Point(row=1, column=2)`` lives at ``1 * 4 + 2 == 6`` (``g``).
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, List, TypeVar

from .point import Point, iter_points

T = TypeVar("T")


class Grid(Generic[T]):
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, cells: Iterable[T]):
        self.width = int(width)
        self.height = int(height)
        self.cells: List[T] = list(cells)
        if len(self.cells) != self.width * self.height:
            raise ValueError(f"expected {self.width * self.height} cells, got {len(self.cells)}")

    @classmethod
    def filled(cls, width: int, height: int, value: T) -> "Grid[T]":
        return cls(width, height, [value] * (int(width) * int(height)))

    def index(self, point: Point) -> int:
        return point[0] * self.width + point[1]

    def point_at(self, index: int) -> Point:
        row, column = divmod(index, self.width)
        return Point(row, column)

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point[0] < self.height and 0 <= point[1] < self.width

    def at(self, point: Point) -> T:
        return self.cells[point[0] * self.width + point[1]]

    def set(self, point: Point, value: T) -> None:
        self.cells[point[0] * self.width + point[1]] = value

    def iter_points(self) -> Iterator[Point]:
        return iter_points(self.width, self.height)

    def rows(self) -> Iterator[List[T]]:
        w = self.width
        for start in range(0, len(self.cells), w):
            yield self.cells[start : start + w]

    def copy(self) -> "Grid[T]":
        return Grid(self.width, self.height, self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[T]:
        return iter(self.cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"


__all__ = ["Grid"]
