"""Floor builder base and the fixed generation sequence.

A builder moves through a series of states (see :mod:`cavern.dungeon.states`);
each state class only exposes the transitions that are legal from it. A
transition hands the tile and noise grids over to the next state's builder
and marks the current one as consumed, so the sequence cannot be forked or
replayed from a stale builder.
"""

from __future__ import annotations

import functools
import random
import time
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger, is_enabled
from .cellular import get_adjacent_walls, place_wall_logic
from .config import DungeonConfig
from .errors import BuilderConsumed
from .floor import FloorId
from .geometry import (
    is_out_of_bounds,
    legal_neighbors,
    legal_neighbors_down_and_right,
    legal_neighbors_with_diagonals,
)
from .gif import Frame
from .grid import Grid
from .point import FloorSize, Point
from .tiles import EMPTY, Tile

log = get_logger("dungeon.builder")


def transition(fn):
    """Consume the builder, then run and time the wrapped state transition."""

    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        self._consume(fn.__name__)
        start = time.perf_counter()
        result = fn(self, *args, **kwargs)
        elapsed = int((time.perf_counter() - start) * 1000)
        if self.metrics:
            phases = self.metrics.setdefault('phase_ms', {})
            phases[fn.__name__] = phases.get(fn.__name__, 0) + elapsed
        if is_enabled("debug"):
            log.debug(event="phase", floor=int(self.floor_id), state=self.STATE, phase=fn.__name__, ms=elapsed)
        return result

    return wrapper


class FloorBuilder:
    STATE = "FloorBuilder"

    def __init__(
        self,
        floor_id: FloorId,
        tiles: Grid[Tile],
        noise_map: Grid[int],
        rng: random.Random,
        *,
        config: DungeonConfig,
        frames: Optional[List[Frame]] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ):
        self.floor_id = floor_id
        self.width = tiles.width
        self.height = tiles.height
        self.tiles = tiles
        self.noise_map = noise_map
        self.rng = rng
        self.config = config
        self.frames = frames
        self.metrics = metrics if metrics is not None else {}
        self._consumed = False

    def __repr__(self) -> str:
        return f"<{self.STATE} floor={self.floor_id} {self.width}x{self.height} consumed={self._consumed}>"

    # --- entry points ---------------------------------------------------

    @staticmethod
    def blank(
        floor_id: FloorId,
        width,
        height,
        *,
        rng: Optional[random.Random] = None,
        gif_output: bool = False,
        config: Optional[DungeonConfig] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ):
        """Start a builder in the Blank state; sizes are validated as FloorSize."""
        from .states import Blank

        w = FloorSize.coerce(width).as_unbounded()
        h = FloorSize.coerce(height).as_unbounded()
        return Blank(
            floor_id,
            Grid.filled(w, h, EMPTY),
            Grid.filled(w, h, 0),
            rng if rng is not None else random.Random(),
            config=config or DungeonConfig(width=w, height=h),
            frames=[] if gif_output else None,
            metrics=metrics,
        )

    @classmethod
    def create(
        cls,
        floor_id: FloorId,
        width,
        height,
        *,
        rng: Optional[random.Random] = None,
        gif_output: bool = False,
        config: Optional[DungeonConfig] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ):
        """Run the full generation sequence once and return the finished Floor."""
        from .connection import Finite

        builder = cls.blank(floor_id, width, height, rng=rng, gif_output=gif_output, config=config, metrics=metrics)
        with_borders = (
            builder.random_fill()
            .trace_original_path()
            .smoothen(3, lambda r: r < 4)
            .get_cave_borders()
        )
        if builder.metrics:
            builder.metrics['borders_initial'] = len(with_borders.borders)
        return (
            with_borders.build_connections(Finite(builder.config.connection_iterations))
            .trace_connection_paths(wide=True, use_noise_map=True)
            .draw(lambda is_first, is_last, point: EMPTY)
            .smoothen(7, lambda r: False)
            .check_for_secret_passages()
            .place_treasure_chests()
            .finish()
        )

    # --- state handover -------------------------------------------------

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _consume(self, transition_name: str) -> None:
        if self._consumed:
            raise BuilderConsumed(
                f"{self.STATE} builder for floor {self.floor_id} was already consumed; cannot call {transition_name}()"
            )
        self._consumed = True

    def _into(self, state_cls, **payload):
        tiles = payload.pop("tiles", self.tiles)
        noise_map = payload.pop("noise_map", self.noise_map)
        return state_cls(
            self.floor_id,
            tiles,
            noise_map,
            self.rng,
            config=self.config,
            frames=self.frames,
            metrics=self.metrics,
            **payload,
        )

    def _bump(self, key: str, amount: int = 1) -> None:
        if self.metrics and key in self.metrics:
            self.metrics[key] += amount

    def frame_from_current_state(self, delay: int) -> None:
        if self.frames is not None:
            self.frames.append((bytes(t.as_u8() for t in self.tiles.cells), delay))

    # --- geometry -------------------------------------------------------

    def is_out_of_bounds(self, point: Point) -> bool:
        return is_out_of_bounds(point, self.width, self.height)

    def get_legal_neighbors(self, point: Point) -> List[Point]:
        return legal_neighbors(point, self.width, self.height)

    def get_legal_neighbors_with_diagonals(self, point: Point) -> List[Point]:
        return legal_neighbors_with_diagonals(point, self.width, self.height)

    def get_legal_neighbors_down_and_right(self, point: Point) -> List[Point]:
        return legal_neighbors_down_and_right(point, self.width, self.height)

    def get_adjacent_walls(self, point: Point, distance_rows: int, distance_columns: int) -> int:
        return get_adjacent_walls(self.tiles, point, distance_rows, distance_columns)

    def place_wall_logic(self, point: Point, create_new_walls: bool) -> Tile:
        return place_wall_logic(self.tiles, point, create_new_walls)


__all__ = ["FloorBuilder", "transition"]
