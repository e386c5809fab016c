"""Cave (region) discovery.

A cave is a 4-connected set of walkable interior tiles; its border is the
set of solid tiles touching it. Frame tiles are never part of either, so a
cave that only touches the frame has an empty border and is dropped.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Dict, List, Set, Tuple

from .border import Border, BorderId
from .geometry import legal_neighbors
from .grid import Grid
from .point import Point
from .tiles import SOLID_KINDS, Tile

RegionMap = Dict[Point, BorderId]


def extract_borders(tiles: Grid[Tile], rng: random.Random) -> Tuple[List[Border], RegionMap]:
    """Return the shuffled borders and a map of walkable point -> owning BorderId."""
    width, height = tiles.width, tiles.height
    cells = tiles.cells
    visited = [False] * len(cells)

    found: List[Tuple[Set[Point], Set[Point]]] = []
    for point in tiles.iter_points():
        idx = point[0] * width + point[1]
        if visited[idx]:
            continue
        visited[idx] = True
        if cells[idx].kind in SOLID_KINDS:
            continue

        region: Set[Point] = {point}
        border: Set[Point] = set()
        queue = deque(legal_neighbors(point, width, height))
        while queue:
            current = queue.popleft()
            cidx = current[0] * width + current[1]
            if cells[cidx].kind in SOLID_KINDS:
                border.add(current)
                continue
            if visited[cidx]:
                continue
            visited[cidx] = True
            region.add(current)
            queue.extend(legal_neighbors(current, width, height))

        if border:
            found.append((region, border))

    borders: List[Border] = []
    region_map: RegionMap = {}
    for n, (region, border) in enumerate(found):
        border_id = BorderId(n)
        borders.append(Border(border_id, frozenset(border)))
        for p in region:
            region_map[p] = border_id
    rng.shuffle(borders)
    return borders, region_map


__all__ = ["RegionMap", "extract_borders"]
