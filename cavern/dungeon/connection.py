"""Connection records passed between the connection and corridor stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterator, Tuple, Union

from .border import BorderId
from .point import Point


@dataclass(frozen=True)
class Connection:
    distance: float
    from_: Tuple[Point, BorderId]
    to: Tuple[Point, BorderId]

    @property
    def edge(self) -> Tuple[BorderId, BorderId]:
        a, b = self.from_[1], self.to[1]
        return (a, b) if a <= b else (b, a)


# --- connection policies ----------------------------------------------------


@dataclass(frozen=True)
class FullyConnect:
    """Iterate until a single connected component remains."""


@dataclass(frozen=True)
class Finite:
    """Stop after ``count`` iterations (or earlier once fully connected)."""

    count: int


@dataclass(frozen=True)
class Until:
    """Stop once there are at most ``components`` connected components."""

    components: int


BuildConnectionIterations = Union[FullyConnect, Finite, Until]


# --- traced paths -------------------------------------------------------------


@dataclass(frozen=True)
class Length1:
    point: Point


@dataclass(frozen=True)
class Length2:
    start: Point
    end: Point


@dataclass(frozen=True)
class Length3Plus:
    start: Point
    end: Point
    # interior of the corridor, never containing start or end
    points: FrozenSet[Point]


ConnectionPathLength = Union[Length1, Length2, Length3Plus]


@dataclass(frozen=True)
class ConnectionPath:
    start_border_id: BorderId
    end_border_id: BorderId
    path: ConnectionPathLength

    @classmethod
    def from_points(
        cls,
        start_border_id: BorderId,
        end_border_id: BorderId,
        points: "list[Point]",
        extra: FrozenSet[Point] = frozenset(),
    ) -> "ConnectionPath":
        """Classify a traced path; ``extra`` widens 3+ length corridors."""
        if len(points) == 1:
            path: ConnectionPathLength = Length1(points[0])
        elif len(points) == 2:
            path = Length2(points[0], points[1])
        else:
            start, end = points[0], points[-1]
            interior = (set(points) | set(extra)) - {start, end}
            path = Length3Plus(start, end, frozenset(interior))
        return cls(start_border_id, end_border_id, path)

    def length(self) -> int:
        if isinstance(self.path, Length1):
            return 1
        if isinstance(self.path, Length2):
            return 2
        return len(self.path.points) + 2

    def iter_points(self) -> Iterator[Point]:
        if isinstance(self.path, Length1):
            yield self.path.point
        elif isinstance(self.path, Length2):
            yield self.path.start
            yield self.path.end
        else:
            yield self.path.start
            yield from sorted(self.path.points)
            yield self.path.end


__all__ = [
    "Connection",
    "ConnectionPath",
    "ConnectionPathLength",
    "Length1",
    "Length2",
    "Length3Plus",
    "BuildConnectionIterations",
    "FullyConnect",
    "Finite",
    "Until",
]
