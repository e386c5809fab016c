"""Floor builder states.

    Blank --random_fill--> RandomFilled --trace_original_path--> Filled
    RandomFilled / Filled --smoothen--> Smoothed
    Smoothed --get_cave_borders--> HasBorders --build_connections--> HasConnections
    HasConnections --trace_connection_paths--> Drawable --draw--> Filled
    Smoothed --check_for_secret_passages--> HasSecretPassages
    HasSecretPassages --place_treasure_chests--> Filled --finish--> Floor
"""

from __future__ import annotations

import os
import random
from typing import Callable, List, Optional

from ..logging_utils import get_logger
from . import cellular, fill
from .border import Border
from .borders import RegionMap, extract_borders
from .config import DungeonConfig
from .connection import BuildConnectionIterations, Connection, ConnectionPath, FullyConnect
from .connections import build_connections
from .corridors import TileSelector, draw_paths, trace_connection_paths
from .errors import GenerationFailed
from .floor import Floor, FloorId
from .floor_builder import FloorBuilder, transition
from .gif import write_floor_gif
from .grid import Grid
from .tiles import SECRET_DOOR, SECRET_PASSAGE, Tile, TileKind
from .treasure import place_treasure_chests

log = get_logger("dungeon.builder")


def _secret_tile(is_first: bool, is_last: bool, _point) -> Tile:
    return SECRET_DOOR if is_first or is_last else SECRET_PASSAGE


class Smoothable:
    """Mixin for states that may run the cellular automata."""

    @transition
    def smoothen(self, repeat: int, create_new_walls: Callable[[int], bool]) -> "Smoothed":
        cellular.smoothen(
            self.tiles,
            repeat,
            create_new_walls,
            on_pass=lambda r, changed: self.frame_from_current_state(100),
        )
        return self._into(Smoothed)


class Blank(FloorBuilder):
    STATE = "Blank"

    @transition
    def random_fill(self) -> "RandomFilled":
        tiles, noise_map = fill.random_fill(self.width, self.height, self.rng, self.config.wall_chance)
        nxt = self._into(RandomFilled, tiles=tiles, noise_map=noise_map)
        nxt.frame_from_current_state(100)
        return nxt


class RandomFilled(Smoothable, FloorBuilder):
    STATE = "RandomFilled"

    @transition
    def trace_original_path(self) -> "Filled":
        fill.trace_original_path(
            self.tiles,
            self.noise_map,
            self.rng,
            on_step=lambda: self.frame_from_current_state(1),
        )
        self.frame_from_current_state(100)
        return self._into(Filled)


class Filled(Smoothable, FloorBuilder):
    """Rest state: the tile grid is complete and may be smoothed again or finished."""

    STATE = "Filled"

    @classmethod
    def from_grid(
        cls,
        tiles: Grid[Tile],
        *,
        floor_id: FloorId = FloorId(0),
        rng: Optional[random.Random] = None,
        noise_map: Optional[Grid[int]] = None,
        config: Optional[DungeonConfig] = None,
        gif_output: bool = False,
    ) -> "Filled":
        """Enter the rest state from a hand-built grid (the grid is copied)."""
        if noise_map is None:
            noise_map = Grid.filled(tiles.width, tiles.height, 1)
        return cls(
            floor_id,
            tiles.copy(),
            noise_map,
            rng if rng is not None else random.Random(0),
            config=config or DungeonConfig(width=tiles.width, height=tiles.height),
            frames=[] if gif_output else None,
        )

    @transition
    def finish(self) -> Floor:
        if self.frames:
            path = os.path.join(self.config.gif_dir, f"floor_{self.floor_id}.gif")
            write_floor_gif(path, self.width, self.height, self.frames)
        return Floor(self.width, self.height, tuple(self.tiles.cells))


class Smoothed(FloorBuilder):
    STATE = "Smoothed"

    def _borders_state(self) -> "HasBorders":
        borders, region_map = extract_borders(self.tiles, self.rng)
        return self._into(HasBorders, borders=borders, region_map=region_map)

    @transition
    def get_cave_borders(self) -> "HasBorders":
        return self._borders_state()

    @transition
    def check_for_secret_passages(self) -> "HasSecretPassages":
        """Join the remaining caves with secret passages until one cave is left.

        Each round must merge at least two caves; the number of rounds is
        capped at the initial number of caves.
        """
        current = self._borders_state()
        initial = len(current.borders)
        rounds = 0
        while len(current.borders) > 1:
            if rounds >= initial:
                raise GenerationFailed(f"secret passages did not join {initial} caves in {rounds} rounds")
            before = len(current.borders)
            current = (
                current.build_connections(FullyConnect())
                .trace_connection_paths(wide=False, use_noise_map=False)
                .draw(_secret_tile)
                .smoothen(0, lambda r: False)
                .get_cave_borders()
            )
            rounds += 1
            if len(current.borders) >= before:
                raise GenerationFailed(
                    f"secret passage round {rounds} left {len(current.borders)} caves (was {before})"
                )

        self._bump('secret_passage_rounds', rounds)
        if self.metrics:
            self.metrics['secret_doors'] = sum(1 for t in self.tiles.cells if t.kind == TileKind.SECRET_DOOR)
        log.debug(event="secret_passages", floor=int(self.floor_id), caves=initial, rounds=rounds)
        return current._into(HasSecretPassages)


class HasBorders(FloorBuilder):
    STATE = "HasBorders"

    def __init__(self, *args, borders: List[Border], region_map: RegionMap, **kwargs):
        super().__init__(*args, **kwargs)
        self.borders = borders
        self.region_map = region_map

    @transition
    def build_connections(self, policy: BuildConnectionIterations) -> "HasConnections":
        connections, pruned = build_connections(self.borders, policy)
        self._bump('connections_built', len(connections) + pruned)
        self._bump('connections_pruned', pruned)
        return self._into(
            HasConnections, borders=self.borders, region_map=self.region_map, connections=connections
        )


class HasConnections(FloorBuilder):
    STATE = "HasConnections"

    def __init__(self, *args, borders: List[Border], region_map: RegionMap, connections: List[Connection], **kwargs):
        super().__init__(*args, **kwargs)
        self.borders = borders
        self.region_map = region_map
        self.connections = connections

    @transition
    def trace_connection_paths(self, wide: bool, use_noise_map: bool) -> "Drawable":
        paths = trace_connection_paths(
            self.tiles,
            self.noise_map,
            self.connections,
            self.borders,
            self.region_map,
            wide=wide,
            use_noise_map=use_noise_map,
        )
        self._bump('paths_traced', len(paths))
        return self._into(Drawable, to_draw=paths)


class Drawable(FloorBuilder):
    STATE = "Drawable"

    def __init__(self, *args, to_draw: List[ConnectionPath], **kwargs):
        super().__init__(*args, **kwargs)
        self.to_draw = to_draw

    @transition
    def draw(self, selector: TileSelector) -> Filled:
        draw_paths(self.tiles, self.to_draw, selector, on_point=lambda: self.frame_from_current_state(1))
        return self._into(Filled)


class HasSecretPassages(FloorBuilder):
    STATE = "HasSecretPassages"

    @transition
    def place_treasure_chests(self) -> Filled:
        placed = place_treasure_chests(
            self.tiles,
            self.rng,
            self.config.treasure_min,
            self.config.treasure_max,
            on_place=lambda: self.frame_from_current_state(10),
        )
        self._bump('treasure_chests', len(placed))
        return self._into(Filled)


__all__ = [
    "Smoothable",
    "Blank",
    "RandomFilled",
    "Filled",
    "Smoothed",
    "HasBorders",
    "HasConnections",
    "Drawable",
    "HasSecretPassages",
]
