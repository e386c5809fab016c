"""Finished, immutable floors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from .point import Point, iter_points
from .tiles import Tile, TileKind


@dataclass(frozen=True, order=True)
class FloorId:
    _value: int

    def __int__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)


@dataclass(frozen=True)
class Floor:
    width: int
    height: int
    data: Tuple[Tile, ...]

    def __post_init__(self):
        if len(self.data) != self.width * self.height:
            raise ValueError(f"floor data has {len(self.data)} tiles, expected {self.width * self.height}")

    def at(self, point: Point) -> Tile:
        return self.data[point[0] * self.width + point[1]]

    def iter_points_and_tiles(self) -> Iterator[Tuple[Point, Tile]]:
        for point in iter_points(self.width, self.height):
            yield point, self.at(point)

    def _find(self, kind: TileKind) -> Optional[Point]:
        for idx, tile in enumerate(self.data):
            if tile.kind == kind:
                return Point(*divmod(idx, self.width))
        return None

    @property
    def entrance(self) -> Optional[Point]:
        return self._find(TileKind.ENTRANCE)

    @property
    def exit(self) -> Optional[Point]:
        return self._find(TileKind.EXIT)

    def count(self, kind: TileKind) -> int:
        return sum(1 for tile in self.data if tile.kind == kind)

    def as_u8_buffer(self) -> bytes:
        return bytes(tile.as_u8() for tile in self.data)

    def to_ascii(self) -> str:
        lines = []
        for start in range(0, len(self.data), self.width):
            lines.append("".join(t.to_ascii() for t in self.data[start : start + self.width]))
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height, "data": [t.to_json() for t in self.data]}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Floor":
        return cls(
            width=int(payload["width"]),
            height=int(payload["height"]),
            data=tuple(Tile.from_json(t) for t in payload["data"]),
        )


__all__ = ["Floor", "FloorId"]
