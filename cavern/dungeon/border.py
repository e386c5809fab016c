from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from .point import Point


@dataclass(frozen=True, order=True)
class BorderId:
    """Opaque id of one cave's border; only equality, hashing and order are meaningful."""

    _value: int

    def __repr__(self) -> str:
        return f"BorderId({self._value})"


@dataclass(frozen=True)
class Border:
    id: BorderId
    points: FrozenSet[Point] = field(repr=False)

    def __len__(self) -> int:
        return len(self.points)


__all__ = ["Border", "BorderId"]
