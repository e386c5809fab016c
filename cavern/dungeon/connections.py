"""Connection synthesis between caves.

Each iteration links the current border to the closest border point outside
its connected component, so every new edge merges two components. The
resulting border graph is pruned to its minimum spanning tree before the
connections are traced.
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

import networkx as nx
import numpy as np

from .border import Border, BorderId
from .connection import BuildConnectionIterations, Connection, Finite, FullyConnect, Until
from .point import Point

# Upper bound on pairwise distance cells evaluated per numpy chunk
_CHUNK_CELLS = 2_000_000


def closest_pair(a: np.ndarray, b: np.ndarray) -> Tuple[float, int, int]:
    """Return ``(distance, index_in_a, index_in_b)`` of the closest pair of rows."""
    best_d2, best_i, best_j = math.inf, -1, -1
    step = max(1, _CHUNK_CELLS // max(len(b), 1))
    for start in range(0, len(a), step):
        chunk = a[start : start + step]
        diff = chunk[:, None, :] - b[None, :, :]
        d2 = np.einsum("ijk,ijk->ij", diff, diff)
        flat = int(np.argmin(d2))
        i, j = divmod(flat, d2.shape[1])
        if d2[i, j] < best_d2:
            best_d2, best_i, best_j = float(d2[i, j]), start + i, j
    return math.sqrt(best_d2), best_i, best_j


def strongly_connected_components(graph: nx.Graph) -> List[set]:
    return list(nx.kosaraju_strongly_connected_components(graph.to_directed()))


def _is_done(policy: BuildConnectionIterations, iterations: int, components: int) -> bool:
    if components <= 1:
        return True
    if isinstance(policy, FullyConnect):
        return False
    if isinstance(policy, Finite):
        return iterations >= policy.count
    if isinstance(policy, Until):
        return components <= policy.components
    raise TypeError(f"unknown connection policy: {policy!r}")


class _PairFinder:
    """Lazily computed closest point pairs between borders."""

    def __init__(self, borders: Sequence[Border]):
        self._points: Dict[BorderId, List[Point]] = {b.id: sorted(b.points) for b in borders}
        self._arrays = {
            bid: np.array(points, dtype=np.int64).reshape(-1, 2) for bid, points in self._points.items()
        }
        self._cache: Dict[Tuple[BorderId, BorderId], Tuple[float, Point, Point]] = {}

    def closest(self, a: BorderId, b: BorderId) -> Tuple[float, Point, Point]:
        if (a, b) in self._cache:
            return self._cache[(a, b)]
        if (b, a) in self._cache:
            dist, pb, pa = self._cache[(b, a)]
            return dist, pa, pb
        dist, i, j = closest_pair(self._arrays[a], self._arrays[b])
        result = (dist, self._points[a][i], self._points[b][j])
        self._cache[(a, b)] = result
        return result


def build_connections(
    borders: Sequence[Border], policy: BuildConnectionIterations
) -> Tuple[List[Connection], int]:
    """Connect borders according to ``policy``.

    Returns ``(connections, pruned)`` where ``pruned`` counts the connections
    dropped because their edge is not in the minimum spanning tree.
    """
    if len(borders) <= 1:
        return [], 0

    graph = nx.Graph()
    graph.add_nodes_from(b.id for b in borders)
    pairs = _PairFinder(borders)
    built: Dict[Tuple[BorderId, BorderId], Connection] = {}

    iterations = 0
    components = len(borders)
    while not _is_done(policy, iterations, components):
        current = borders[iterations % len(borders)]
        component = nx.node_connected_component(graph, current.id)

        best = None
        for other in borders:
            if other.id in component:
                continue
            dist, here, there = pairs.closest(current.id, other.id)
            if best is None or dist < best.distance:
                best = Connection(dist, (here, current.id), (there, other.id))
        iterations += 1

        if best is not None:
            graph.add_edge(best.from_[1], best.to[1], weight=best.distance)
            built[best.edge] = best
        components = len(strongly_connected_components(graph))

    tree = nx.minimum_spanning_tree(graph, weight="weight")
    kept = [c for edge, c in built.items() if tree.has_edge(*edge)]
    return kept, len(built) - len(kept)


__all__ = ["build_connections", "closest_pair", "strongly_connected_components"]
