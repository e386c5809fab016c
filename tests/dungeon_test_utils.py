from collections import deque

from cavern.dungeon.grid import Grid
from cavern.dungeon.point import Point
from cavern.dungeon.tiles import Tile, TileKind

WALKABLE = {
    TileKind.EMPTY,
    TileKind.ENTRANCE,
    TileKind.EXIT,
    TileKind.SECRET_DOOR,
    TileKind.SECRET_PASSAGE,
}  # secret doors and passages are walkable once found


def grid_from_ascii(text):
    """Build a Grid[Tile] from rows of tile chars ('#' wall, '.' empty, 'E' entrance, ...)."""
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    width = len(rows[0])
    assert all(len(r) == width for r in rows), "ragged layout"
    return Grid(width, len(rows), [Tile.from_char(ch) for row in rows for ch in row])


def floor_to_ascii(floor):
    """Single-char rendering of a Floor or Grid (handy in assertion messages)."""
    tiles = floor.data if hasattr(floor, "data") else floor.cells
    lines = []
    for start in range(0, len(tiles), floor.width):
        lines.append("".join(t.char for t in tiles[start : start + floor.width]))
    return "\n".join(lines)


def bfs_reachable(floor, start):
    """Return the set of walkable points reachable from start (4-connected)."""
    if start is None:
        return set()
    if floor.at(start).kind not in WALKABLE:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        r, c = q.popleft()
        for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nr, nc = r + dr, c + dc
            if 0 <= nr < floor.height and 0 <= nc < floor.width and (nr, nc) not in vis:
                if floor.at(Point(nr, nc)).kind in WALKABLE:
                    vis.add((nr, nc))
                    q.append(Point(nr, nc))
    return vis


def walkable_points(floor):
    return {p for p, t in floor.iter_points_and_tiles() if t.kind in WALKABLE}
