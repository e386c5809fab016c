"""Neighbourhood helpers shared by the builder stages.

The 1-tile frame around a floor counts as out of bounds: it is always wall
and never appears as a legal neighbour.
"""

from __future__ import annotations

from typing import List

from .point import Point


def is_out_of_bounds(point: Point, width: int, height: int) -> bool:
    row, column = point
    return row <= 0 or column <= 0 or row >= height - 1 or column >= width - 1


def legal_neighbors(point: Point, width: int, height: int) -> List[Point]:
    """4-connected neighbours, in down/right/up/left order.

    ```txt
    o x o
    x p x
    o x o
    ```
    """
    row, column = point
    out = []
    for r, c in ((row + 1, column), (row, column + 1), (row - 1, column), (row, column - 1)):
        if 0 < r < height - 1 and 0 < c < width - 1:
            out.append(Point(r, c))
    return out


def legal_neighbors_with_diagonals(point: Point, width: int, height: int) -> List[Point]:
    row, column = point
    out = []
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            r, c = row + dr, column + dc
            if 0 < r < height - 1 and 0 < c < width - 1:
                out.append(Point(r, c))
    return out


def all_neighbors_with_diagonals(point: Point) -> List[Point]:
    """The full 8-neighbourhood, including frame and off-grid points."""
    row, column = point
    return [Point(row + dr, column + dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if dr or dc]


def legal_neighbors_down_and_right(point: Point, width: int, height: int) -> List[Point]:
    row, column = point
    out = []
    for r, c in ((row + 1, column), (row, column + 1)):
        if 0 < r < height - 1 and 0 < c < width - 1:
            out.append(Point(r, c))
    return out


__all__ = [
    "is_out_of_bounds",
    "legal_neighbors",
    "legal_neighbors_with_diagonals",
    "all_neighbors_with_diagonals",
    "legal_neighbors_down_and_right",
]
