"""Multi-floor dungeon aggregate and its exports."""
from __future__ import annotations

import json
import random
import time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..logging_utils import get_logger
from .config import DungeonConfig
from .floor import Floor, FloorId
from .gif import encode_gif, pad_frame
from .metrics import merge_metrics
from .pipeline import generate_floor
from .point import FloorSize

log = get_logger("dungeon")

# Delay between floors in the dungeon overview GIF (1/100 s)
GIF_FLOOR_DELAY = 300


class DungeonType(Enum):
    CAVE = "Cave"
    # Rendered differently by clients; generated with the cave pipeline
    FOREST = "Forest"

    @classmethod
    def parse(cls, value: Union["DungeonType", str]) -> "DungeonType":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value.strip().lower() in (member.value.lower(), member.name.lower()):
                    return member
        raise ValueError(f"unknown dungeon type: {value!r}")


class Dungeon:
    """A stack of generated floors.

    ``height`` and ``width`` are validated as ``FloorSize`` (``TooLow`` /
    ``TooHigh`` on failure). Every floor draws its own RNG from the dungeon
    RNG, so the whole dungeon is reproducible from ``seed``.
    """

    def __init__(
        self,
        height,
        width,
        floor_count: int = 1,
        dungeon_type: Union[DungeonType, str] = DungeonType.CAVE,
        gif_output: bool = False,
        *,
        seed: Optional[int] = None,
        config: Optional[DungeonConfig] = None,
    ):
        self.height = FloorSize.coerce(height).as_unbounded()
        self.width = FloorSize.coerce(width).as_unbounded()
        if isinstance(floor_count, bool) or not isinstance(floor_count, int) or floor_count < 1:
            raise ValueError(f"floor_count must be a positive integer, got {floor_count!r}")
        self.dungeon_type = DungeonType.parse(dungeon_type)
        self.gif_output = bool(gif_output)
        if config is None:
            config = DungeonConfig(
                width=self.width,
                height=self.height,
                floor_count=floor_count,
                dungeon_type=self.dungeon_type.value.lower(),
                gif_output=self.gif_output,
                seed=seed,
            )
        self.config = config
        # 0 is a valid seed; None picks one
        self.seed = seed if seed is not None else random.randint(1, 1_000_000)
        self.floors: List[Floor] = []
        self.metrics: Dict[str, Any] = {}
        self._generate(floor_count)

    def _generate(self, floor_count: int) -> None:
        rng = random.Random(self.seed)
        per_floor: List[Dict[str, Any]] = []
        start = time.perf_counter()
        for n in range(floor_count):
            floor_rng = random.Random(rng.getrandbits(64))
            floor_metrics: Dict[str, Any] = {}
            floor = generate_floor(
                FloorId(n),
                self.width,
                self.height,
                rng=floor_rng,
                config=self.config,
                gif_output=self.gif_output,
                metrics=floor_metrics,
            )
            self.floors.append(floor)
            per_floor.append(floor_metrics)
        if self.config.enable_metrics:
            self.metrics = merge_metrics(per_floor)
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        log.info(
            event="dungeon_generated",
            seed=self.seed,
            floors=floor_count,
            width=self.width,
            height=self.height,
            type=self.dungeon_type.value,
        )

    @classmethod
    def from_config(cls, config: DungeonConfig) -> "Dungeon":
        return cls(
            config.height,
            config.width,
            config.floor_count,
            config.dungeon_type,
            config.gif_output,
            seed=config.seed,
            config=config,
        )

    # --- export ---------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {"dungeon_type": self.dungeon_type.value, "floors": [f.to_dict() for f in self.floors]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Dungeon":
        """Rebuild a finished dungeon from ``to_json`` output (no regeneration)."""
        payload = json.loads(text)
        floors = [Floor.from_dict(f) for f in payload["floors"]]
        if not floors:
            raise ValueError("a dungeon needs at least one floor")
        obj = cls.__new__(cls)
        obj.dungeon_type = DungeonType.parse(payload["dungeon_type"])
        obj.floors = floors
        obj.height = max(f.height for f in floors)
        obj.width = max(f.width for f in floors)
        obj.gif_output = False
        obj.seed = None
        obj.metrics = {}
        obj.config = DungeonConfig(
            width=obj.width,
            height=obj.height,
            floor_count=len(floors),
            dungeon_type=obj.dungeon_type.value.lower(),
        )
        return obj

    def to_gif(self) -> bytes:
        """One frame per floor on a canvas sized to the largest floor, looping forever."""
        canvas_w = max(f.width for f in self.floors)
        canvas_h = max(f.height for f in self.floors)
        frames = [
            (pad_frame(f.width, f.height, f.as_u8_buffer(), canvas_w, canvas_h), GIF_FLOOR_DELAY)
            for f in self.floors
        ]
        return encode_gif(canvas_w, canvas_h, frames, loop=True)

    def to_ascii(self, floor_index: Optional[int] = None) -> str:
        if floor_index is not None:
            return self.floors[floor_index].to_ascii()
        return "\n\n".join(f"Floor {n}\n{f.to_ascii()}" for n, f in enumerate(self.floors))

    def __repr__(self) -> str:
        return (
            f"<Dungeon type={self.dungeon_type.value} floors={len(self.floors)} "
            f"{self.width}x{self.height} seed={self.seed}>"
        )


__all__ = ["Dungeon", "DungeonType", "GIF_FLOOR_DELAY"]
