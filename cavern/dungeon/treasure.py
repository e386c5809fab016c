from __future__ import annotations

import random
from typing import Callable, List

from .geometry import all_neighbors_with_diagonals, is_out_of_bounds
from .grid import Grid
from .point import Point
from .tiles import TREASURE_CHEST, Tile, TileKind


def _open_all_around(tiles: Grid[Tile], point: Point) -> bool:
    for n in all_neighbors_with_diagonals(point):
        if is_out_of_bounds(n, tiles.width, tiles.height):
            return False
        if tiles.at(n).kind != TileKind.EMPTY:
            return False
    return True


def place_treasure_chests(
    tiles: Grid[Tile],
    rng: random.Random,
    minimum: int,
    maximum: int,
    on_place: Callable[[], None] | None = None,
) -> List[Point]:
    """Drop between ``minimum`` and ``maximum`` chests in open areas.

    A chest only goes where all 8 surrounding tiles are Empty, checked against
    the chests already placed, so chests never touch each other or a wall.
    Fewer chests are placed when the floor has no more room.
    """
    target = rng.randint(minimum, maximum)
    candidates = [p for p in tiles.iter_points() if tiles.at(p).kind == TileKind.EMPTY]
    rng.shuffle(candidates)

    placed: List[Point] = []
    for point in candidates:
        if len(placed) >= target:
            break
        if _open_all_around(tiles, point):
            if on_place is not None:
                on_place()
            tiles.set(point, TREASURE_CHEST)
            placed.append(point)
    return placed


__all__ = ["place_treasure_chests"]
