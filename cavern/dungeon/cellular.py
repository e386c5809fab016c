"""Cellular-automata rules used to smooth a random fill into caves.

Passes update the grid in place while scanning column by column, so a
tile's decision already sees the new value of every tile scanned before it.
"""

from __future__ import annotations

from typing import Callable, List

import numpy as np

from .geometry import is_out_of_bounds
from .grid import Grid
from .point import MAX_FLOOR_SIZE, Point
from .tiles import EMPTY, SOLID_KINDS, WALL, Tile, TileKind

_SMOOTHABLE = (TileKind.EMPTY, TileKind.WALL)


def is_wall(tiles: Grid[Tile], row: int, column: int) -> bool:
    """Frame and off-grid positions count as wall."""
    if row <= 0 or column <= 0 or row >= tiles.height - 1 or column >= tiles.width - 1:
        return True
    return tiles.cells[row * tiles.width + column].kind in SOLID_KINDS


def get_adjacent_walls(tiles: Grid[Tile], point: Point, distance_rows: int, distance_columns: int) -> int:
    """Count walls in the rectangle around ``point``, excluding ``point`` itself.

    The rectangle is clipped to the coordinate range ``0..MAX_FLOOR_SIZE``.
    """
    row, column = point
    start_r = max(0, row - distance_rows)
    end_r = min(MAX_FLOOR_SIZE, row + distance_rows)
    start_c = max(0, column - distance_columns)
    end_c = min(MAX_FLOOR_SIZE, column + distance_columns)

    count = 0
    for c in range(start_c, end_c + 1):
        for r in range(start_r, end_r + 1):
            if r == row and c == column:
                continue
            if is_wall(tiles, r, c):
                count += 1
    return count


def place_wall_logic(tiles: Grid[Tile], point: Point, create_new_walls: bool) -> Tile:
    tile = tiles.at(point)
    if tile.kind not in _SMOOTHABLE:
        return tile
    if is_out_of_bounds(point, tiles.width, tiles.height):
        return WALL

    walls_1_away = get_adjacent_walls(tiles, point, 1, 1)
    if tile.kind in SOLID_KINDS:
        if walls_1_away >= 4:
            return WALL
        if create_new_walls and get_adjacent_walls(tiles, point, 2, 2) < 2:
            return WALL
        if walls_1_away < 2:
            return EMPTY
    elif walls_1_away >= 5:
        return WALL
    return EMPTY


class WallCounts:
    """Wall counts around every tile, kept current while a pass rewrites tiles.

    ``near[i]`` covers the 3x3 block around flat index ``i`` and ``wide[i]``
    the 5x5 block, both including the tile itself and clipped the same way
    as :func:`get_adjacent_walls`.
    """

    def __init__(self, tiles: Grid[Tile], wide: bool):
        w, h = tiles.width, tiles.height
        self.width = w
        self.height = h
        solid = np.fromiter(
            (t.kind in SOLID_KINDS for t in tiles.cells), dtype=np.int32, count=w * h
        ).reshape(h, w)
        # Two tiles of padding per side: negative coordinates are clipped away,
        # positions past the far edge count as wall.
        padded = np.ones((h + 4, w + 4), dtype=np.int32)
        padded[:2, :] = 0
        padded[:, :2] = 0
        padded[2 : h + 2, 2 : w + 2] = solid
        padded[2, 2 : w + 2] = 1
        padded[h + 1, 2 : w + 2] = 1
        padded[2 : h + 2, 2] = 1
        padded[2 : h + 2, w + 1] = 1
        self.near = self._window(padded, 1)
        self.wide = self._window(padded, 2) if wide else None

    def _window(self, padded, radius: int) -> List[int]:
        w, h = self.width, self.height
        total = np.zeros((h, w), dtype=np.int32)
        for dr in range(-radius, radius + 1):
            for dc in range(-radius, radius + 1):
                total += padded[2 + dr : 2 + dr + h, 2 + dc : 2 + dc + w]
        return total.ravel().tolist()

    def _shift(self, counts: List[int], row: int, column: int, radius: int, delta: int) -> None:
        w = self.width
        for r in range(max(0, row - radius), min(self.height, row + radius + 1)):
            base = r * w
            for c in range(max(0, column - radius), min(w, column + radius + 1)):
                counts[base + c] += delta

    def flip(self, row: int, column: int, delta: int) -> None:
        self._shift(self.near, row, column, 1, delta)
        if self.wide is not None:
            self._shift(self.wide, row, column, 2, delta)


def smoothen_pass(tiles: Grid[Tile], create_new_walls: bool) -> int:
    """Run one in-place pass and return how many tiles changed.

    Applies :func:`place_wall_logic` to every tile in column-major order,
    reading wall counts from a :class:`WallCounts` that follows each change.
    """
    w, h = tiles.width, tiles.height
    cells = tiles.cells
    counts = WallCounts(tiles, wide=create_new_walls)
    near, wide = counts.near, counts.wide
    changed = 0
    for c in range(w):
        for r in range(h):
            i = r * w + c
            kind = cells[i].kind
            if kind not in _SMOOTHABLE:
                continue
            if r == 0 or c == 0 or r == h - 1 or c == w - 1:
                if kind != TileKind.WALL:
                    cells[i] = WALL
                    changed += 1
                continue
            solid = kind == TileKind.WALL
            walls = near[i] - solid
            if solid:
                becomes_wall = walls >= 4 or (create_new_walls and wide[i] - 1 < 2)
            else:
                becomes_wall = walls >= 5
            if becomes_wall != solid:
                cells[i] = WALL if becomes_wall else EMPTY
                counts.flip(r, c, 1 if becomes_wall else -1)
                changed += 1
    return changed


def smoothen(
    tiles: Grid[Tile],
    repeat: int,
    create_new_walls: Callable[[int], bool],
    on_pass: Callable[[int, int], None] | None = None,
) -> int:
    """Run ``repeat`` passes; ``on_pass(r, changed)`` is called after each one."""
    total = 0
    for r in range(repeat):
        changed = smoothen_pass(tiles, create_new_walls(r))
        total += changed
        if on_pass is not None:
            on_pass(r, changed)
    return total


__all__ = ["is_wall", "get_adjacent_walls", "place_wall_logic", "WallCounts", "smoothen_pass", "smoothen"]
