"""Corridor tracing between connected borders, and drawing the result."""

from __future__ import annotations

from typing import Callable, Iterable, List, Sequence

from .border import Border
from .borders import RegionMap
from .connection import ConnectionPath, Length1, Length2
from .errors import NoPathFound
from .geometry import legal_neighbors
from .grid import Grid
from .pathfinding import grid_dijkstra
from .point import Point
from .tiles import Tile, TileKind

# draw(is_first, is_last, point) -> tile
TileSelector = Callable[[bool, bool, Point], Tile]

_SECRET_KINDS = (TileKind.SECRET_DOOR, TileKind.SECRET_PASSAGE)
_PROTECTED_KINDS = (TileKind.ENTRANCE, TileKind.EXIT)


def trace_connection_paths(
    tiles: Grid[Tile],
    noise_map: Grid[int],
    connections: Iterable,
    borders: Sequence[Border],
    region_map: RegionMap,
    wide: bool,
    use_noise_map: bool,
) -> List[ConnectionPath]:
    """Find a corridor for every connection.

    A search may stop early on a secret tile that belongs to a different cave
    than the one it started from, reusing a passage drawn by an earlier round.
    """
    width, height = tiles.width, tiles.height
    border_indices = set()
    for border in borders:
        border_indices.update(p[0] * width + p[1] for p in border.points)
    costs = noise_map.cells if use_noise_map else None
    cells = tiles.cells

    paths: List[ConnectionPath] = []
    for conn in connections:
        start, start_id = conn.from_
        target, target_id = conn.to
        target_index = target[0] * width + target[1]

        def is_goal(i: int, target_index=target_index, start_id=start_id) -> bool:
            if i == target_index:
                return True
            if cells[i].kind in _SECRET_KINDS:
                region = region_map.get(Point(*divmod(i, width)))
                return region is not None and region != start_id
            return False

        found = grid_dijkstra(
            width,
            height,
            start,
            is_goal,
            costs=costs,
            blocked=border_indices - {target_index},
        )
        if found is None:
            raise NoPathFound(start, target)
        points, _ = found

        extra = frozenset()
        if wide and len(points) > 2:
            extra = frozenset(n for p in points for n in legal_neighbors(p, width, height))
        paths.append(ConnectionPath.from_points(start_id, target_id, points, extra))
    return paths


def draw_paths(
    tiles: Grid[Tile],
    paths: Iterable[ConnectionPath],
    selector: TileSelector,
    on_point: Callable[[], None] | None = None,
) -> int:
    """Write every path onto ``tiles``; Entrance and Exit tiles are never overwritten.

    Returns the number of tiles written.
    """
    written = 0

    def put(point: Point, is_first: bool, is_last: bool) -> None:
        nonlocal written
        if tiles.at(point).kind in _PROTECTED_KINDS:
            return
        tiles.set(point, selector(is_first, is_last, point))
        written += 1

    for conn_path in paths:
        path = conn_path.path
        if isinstance(path, Length1):
            put(path.point, True, True)
        elif isinstance(path, Length2):
            put(path.start, True, False)
            put(path.end, False, True)
        else:
            assert path.start not in path.points
            assert path.end not in path.points
            put(path.start, True, False)
            put(path.end, False, True)
            for point in sorted(path.points):
                put(point, False, False)
                if on_point is not None:
                    on_point()
    return written


__all__ = ["TileSelector", "trace_connection_paths", "draw_paths"]
