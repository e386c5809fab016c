"""Public dungeon package interface.

Floors are generated by a typed builder pipeline (see ``states``); most
callers only need ``Dungeon`` or ``FloorBuilder.create``.
"""

from .bounded_int import (
    BoundedInt,
    BoundedIntError,
    BoundedIntOverflow,
    BoundedIntUnderflow,
    TooHigh,
    TooLow,
)  # noqa: F401
from .config import DungeonConfig  # noqa: F401
from .connection import BuildConnectionIterations, Finite, FullyConnect, Until  # noqa: F401
from .dungeon import Dungeon, DungeonType  # noqa: F401
from .errors import BuilderConsumed, GenerationFailed, NoPathFound  # noqa: F401
from .floor import Floor, FloorId  # noqa: F401
from .floor_builder import FloorBuilder  # noqa: F401
from .point import MAX_FLOOR_SIZE, MIN_FLOOR_SIZE, Column, FloorSize, Point, Row  # noqa: F401
from .tiles import (
    COLOR_MAP,
    EMPTY,
    ENTRANCE,
    EXIT,
    SECRET_DOOR,
    SECRET_PASSAGE,
    TREASURE_CHEST,
    WALL,
    Tile,
    TileKind,
)  # noqa: F401

__all__ = [
    "BoundedInt",
    "BoundedIntError",
    "BoundedIntOverflow",
    "BoundedIntUnderflow",
    "TooHigh",
    "TooLow",
    "DungeonConfig",
    "BuildConnectionIterations",
    "Finite",
    "FullyConnect",
    "Until",
    "Dungeon",
    "DungeonType",
    "BuilderConsumed",
    "GenerationFailed",
    "NoPathFound",
    "Floor",
    "FloorId",
    "FloorBuilder",
    "MAX_FLOOR_SIZE",
    "MIN_FLOOR_SIZE",
    "Column",
    "FloorSize",
    "Point",
    "Row",
    "COLOR_MAP",
    "EMPTY",
    "ENTRANCE",
    "EXIT",
    "SECRET_DOOR",
    "SECRET_PASSAGE",
    "TREASURE_CHEST",
    "WALL",
    "Tile",
    "TileKind",
]
