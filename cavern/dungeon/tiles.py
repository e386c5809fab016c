"""Tile model for cave floors.

Wall and TreasureChest are solid; everything else can be walked on. The
``as_u8`` value doubles as the GIF palette index into ``COLOR_MAP``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Union


class TileKind(IntEnum):
    EMPTY = 0
    WALL = 1
    SECRET_DOOR = 2
    SECRET_PASSAGE = 3
    TREASURE_CHEST = 4
    ENTRANCE = 5
    EXIT = 6


# Serialized variant names, indexed by TileKind
_NAMES = ("Empty", "Wall", "SecretDoor", "SecretPassage", "TreasureChest", "Entrance", "Exit")
_GLYPHS = ("  ", "██", "SD", "<>", "TC", "EN", "EX")
_CHARS = (".", "#", "S", "+", "T", "E", "X")

SOLID_KINDS = frozenset({TileKind.WALL, TileKind.TREASURE_CHEST})

# 7 RGB triples, one per TileKind
COLOR_MAP = bytes(
    [
        0xFF, 0xFF, 0xFF,  # empty: white
        0x00, 0x00, 0x00,  # wall: black
        0xFF, 0x00, 0x00,  # secret door: red
        0x00, 0xFF, 0x00,  # secret passage: green
        0x00, 0x00, 0xFF,  # treasure chest: blue
        0xFF, 0x00, 0xFF,  # entrance: purple
        0xAA, 0x40, 0x00,  # exit: brown
    ]
)


@dataclass(frozen=True)
class Tile:
    kind: TileKind
    requires_key: bool = False
    is_open: bool = False
    contents: tuple = ()

    @classmethod
    def secret_door(cls, requires_key: bool = True, is_open: bool = False) -> "Tile":
        return cls(TileKind.SECRET_DOOR, requires_key=requires_key, is_open=is_open)

    @classmethod
    def treasure_chest(cls, contents: tuple = ()) -> "Tile":
        return cls(TileKind.TREASURE_CHEST, contents=tuple(contents))

    @property
    def is_solid(self) -> bool:
        return self.kind in SOLID_KINDS

    @property
    def is_wall(self) -> bool:
        return self.kind == TileKind.WALL

    @property
    def is_empty(self) -> bool:
        return self.kind == TileKind.EMPTY

    @property
    def is_entrance(self) -> bool:
        return self.kind == TileKind.ENTRANCE

    @property
    def is_exit(self) -> bool:
        return self.kind == TileKind.EXIT

    @property
    def is_secret(self) -> bool:
        return self.kind in (TileKind.SECRET_DOOR, TileKind.SECRET_PASSAGE)

    def as_u8(self) -> int:
        return int(self.kind)

    def to_ascii(self) -> str:
        return _GLYPHS[self.kind]

    @property
    def char(self) -> str:
        return _CHARS[self.kind]

    def to_json(self) -> Union[str, Dict[str, Any]]:
        name = _NAMES[self.kind]
        if self.kind == TileKind.SECRET_DOOR:
            return {name: {"requires_key": self.requires_key, "is_open": self.is_open}}
        if self.kind == TileKind.TREASURE_CHEST:
            return {name: {"contents": list(self.contents)}}
        return name

    @classmethod
    def from_json(cls, value: Union[str, Dict[str, Any]]) -> "Tile":
        if isinstance(value, str):
            return _BY_NAME[value]
        if not isinstance(value, dict) or len(value) != 1:
            raise ValueError(f"invalid tile: {value!r}")
        (name, payload), = value.items()
        payload = payload or {}
        if name == "SecretDoor":
            return cls.secret_door(
                requires_key=bool(payload.get("requires_key", True)),
                is_open=bool(payload.get("is_open", False)),
            )
        if name == "TreasureChest":
            return cls.treasure_chest(payload.get("contents") or ())
        raise ValueError(f"unknown tile variant: {name!r}")

    @classmethod
    def from_char(cls, ch: str) -> "Tile":
        return _BY_CHAR[ch]


EMPTY = Tile(TileKind.EMPTY)
WALL = Tile(TileKind.WALL)
SECRET_PASSAGE = Tile(TileKind.SECRET_PASSAGE)
ENTRANCE = Tile(TileKind.ENTRANCE)
EXIT = Tile(TileKind.EXIT)
SECRET_DOOR = Tile.secret_door(requires_key=True, is_open=False)
TREASURE_CHEST = Tile.treasure_chest()

_BY_NAME = {
    "Empty": EMPTY,
    "Wall": WALL,
    "SecretPassage": SECRET_PASSAGE,
    "Entrance": ENTRANCE,
    "Exit": EXIT,
}
_BY_CHAR = {
    ".": EMPTY,
    " ": EMPTY,
    "#": WALL,
    "S": SECRET_DOOR,
    "+": SECRET_PASSAGE,
    "T": TREASURE_CHEST,
    "E": ENTRANCE,
    "X": EXIT,
}

__all__ = [
    "Tile",
    "TileKind",
    "COLOR_MAP",
    "SOLID_KINDS",
    "EMPTY",
    "WALL",
    "SECRET_DOOR",
    "SECRET_PASSAGE",
    "TREASURE_CHEST",
    "ENTRANCE",
    "EXIT",
]
