"""Dijkstra search over the interior of a floor grid.

Nodes are flat row-major indices; only tiles off the 1-tile frame are
visited, and neighbours are expanded down, right, up, left.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, Container, Dict, List, Optional, Sequence, Tuple

from .point import Point


def grid_dijkstra(
    width: int,
    height: int,
    start: Point,
    is_goal: Callable[[int], bool],
    costs: Optional[Sequence[int]] = None,
    blocked: Container[int] = (),
) -> Optional[Tuple[List[Point], int]]:
    """Return ``(path, cost)`` of the cheapest route to the first goal index, or None.

    Entering index ``i`` costs ``costs[i]`` (1 when ``costs`` is None).
    Indices in ``blocked`` are never entered. ``path`` includes both
    ``start`` and the goal. Ties are broken by insertion order so results are
    reproducible.
    """
    w = width
    max_row, max_col = height - 2, width - 2
    start_i = start[0] * w + start[1]
    counter = itertools.count()
    heap: List[Tuple[int, int, int]] = [(0, next(counter), start_i)]
    dist: Dict[int, int] = {start_i: 0}
    prev: Dict[int, int] = {start_i: -1}

    while heap:
        d, _, i = heapq.heappop(heap)
        if d != dist[i]:
            continue
        if is_goal(i):
            path: List[Point] = []
            cursor = i
            while cursor != -1:
                path.append(Point(*divmod(cursor, w)))
                cursor = prev[cursor]
            path.reverse()
            return path, d
        row, col = divmod(i, w)
        neighbours = []
        if row < max_row:
            neighbours.append(i + w)
        if col < max_col:
            neighbours.append(i + 1)
        if row > 1:
            neighbours.append(i - w)
        if col > 1:
            neighbours.append(i - 1)
        for n in neighbours:
            if n in blocked:
                continue
            nd = d + (costs[n] if costs is not None else 1)
            if nd < dist.get(n, nd + 1):
                dist[n] = nd
                prev[n] = i
                heapq.heappush(heap, (nd, next(counter), n))
    return None


__all__ = ["grid_dijkstra"]
