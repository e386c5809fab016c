"""Random fill and the entrance-to-exit carve.

The carve guarantees one walkable route before smoothing starts; smoothing
never touches the Entrance and Exit tiles because only Empty and Wall tiles
are smoothable.
"""

from __future__ import annotations

import random
from typing import Callable, List, Tuple

from .errors import GenerationFailed, NoPathFound
from .geometry import is_out_of_bounds, legal_neighbors_down_and_right
from .grid import Grid
from .noise_map import build_noise_map
from .pathfinding import grid_dijkstra
from .point import Point, distance
from .tiles import EMPTY, ENTRANCE, EXIT, WALL, Tile

# Resample cap for finding an exit far enough from the entrance
MAX_ENDPOINT_SAMPLES = 10_000


def random_fill(width: int, height: int, rng: random.Random, wall_chance: int) -> Tuple[Grid[Tile], Grid[int]]:
    """Return ``(tiles, noise_map)`` for a fresh floor.

    The billow is seeded from ``rng`` before any tile roll so the noise field
    and the wall pattern both follow from the same seed.
    """
    noise_map = build_noise_map(width, height, rng)
    tiles: Grid[Tile] = Grid.filled(width, height, EMPTY)

    for point in tiles.iter_points():
        if is_out_of_bounds(point, width, height):
            tiles.set(point, WALL)
            continue
        tiles.set(point, WALL if rng.randint(0, 100) <= wall_chance else EMPTY)
    return tiles, noise_map


def _random_interior_point(rng: random.Random, width: int, height: int) -> Point:
    return Point(rng.randint(1, height - 2), rng.randint(1, width - 2))


def pick_endpoints(rng: random.Random, width: int, height: int) -> Tuple[Point, Point]:
    """Pick an entrance and an exit between half and all of the larger dimension apart."""
    larger = max(width, height)
    start = _random_interior_point(rng, width, height)
    for _ in range(MAX_ENDPOINT_SAMPLES):
        end = _random_interior_point(rng, width, height)
        dist = distance(start, end)
        if larger / 2 < dist < larger:
            return start, end
    raise GenerationFailed(f"could not place an exit for entrance {tuple(start)} on a {width}x{height} floor")


def trace_original_path(
    tiles: Grid[Tile],
    noise_map: Grid[int],
    rng: random.Random,
    on_step: Callable[[], None] | None = None,
) -> Tuple[Point, Point, List[Point]]:
    """Carve a noise-weighted route from a new Entrance to a new Exit.

    Returns ``(start, end, path)``. Every path tile and its down/right interior
    neighbours become Empty, except around the endpoints themselves.
    """
    width, height = tiles.width, tiles.height
    start, end = pick_endpoints(rng, width, height)

    end_index = end[0] * width + end[1]
    found = grid_dijkstra(width, height, start, lambda i: i == end_index, costs=noise_map.cells)
    if found is None:
        raise NoPathFound(start, end)
    path, _ = found

    tiles.set(start, ENTRANCE)
    tiles.set(end, EXIT)
    for point in path:
        if point == start or point == end:
            continue
        if tiles.at(point).is_solid:
            tiles.set(point, EMPTY)
        for neigh in legal_neighbors_down_and_right(point, width, height):
            if tiles.at(neigh).is_solid:
                tiles.set(neigh, EMPTY)
        if on_step is not None:
            on_step()

    assert tiles.at(start) == ENTRANCE
    assert tiles.at(end) == EXIT
    return start, end, path


__all__ = ["random_fill", "pick_endpoints", "trace_original_path", "MAX_ENDPOINT_SAMPLES"]
