import os
from dataclasses import dataclass
from typing import Optional

# Percent chance (0..100 roll) of an interior tile starting as a wall
RANDOM_FILL_WALL_PERCENT_CHANCE = 52
# Border iterations for the first (noise-weighted) connection pass
INITIAL_CONNECTION_ITERATIONS = 20
TREASURE_MIN = 5
TREASURE_MAX = 10


def _flag(raw: str) -> bool:
    return raw.strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass
class DungeonConfig:
    width: int = 50
    height: int = 50
    floor_count: int = 1
    dungeon_type: str = "cave"
    gif_output: bool = False
    seed: Optional[int] = None
    max_attempts: int = 5
    wall_chance: int = RANDOM_FILL_WALL_PERCENT_CHANCE
    connection_iterations: int = INITIAL_CONNECTION_ITERATIONS
    treasure_min: int = TREASURE_MIN
    treasure_max: int = TREASURE_MAX
    gif_dir: str = "out"
    enable_metrics: bool = True

    @classmethod
    def from_env(cls, **overrides) -> "DungeonConfig":
        """Build a config from ``DUNGEON_*`` environment variables.

        Keyword overrides win over the environment, which wins over defaults.
        """
        cfg = cls()
        env_map = {
            "DUNGEON_WIDTH": ("width", int),
            "DUNGEON_HEIGHT": ("height", int),
            "DUNGEON_FLOORS": ("floor_count", int),
            "DUNGEON_TYPE": ("dungeon_type", str),
            "DUNGEON_GIF_OUTPUT": ("gif_output", _flag),
            "DUNGEON_SEED": ("seed", int),
            "DUNGEON_MAX_ATTEMPTS": ("max_attempts", int),
            "DUNGEON_GIF_DIR": ("gif_dir", str),
            "DUNGEON_ENABLE_GENERATION_METRICS": ("enable_metrics", _flag),
        }
        for env_key, (attr, parse) in env_map.items():
            raw = os.environ.get(env_key)
            if raw is not None:
                setattr(cfg, attr, parse(raw))
        for attr, value in overrides.items():
            if value is not None:
                setattr(cfg, attr, value)
        return cfg


__all__ = [
    "DungeonConfig",
    "RANDOM_FILL_WALL_PERCENT_CHANCE",
    "INITIAL_CONNECTION_ITERATIONS",
    "TREASURE_MIN",
    "TREASURE_MAX",
]
