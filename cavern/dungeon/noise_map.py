"""Billow noise field used to seed walls and weight path searches.

Values are in the u16 range. Low values mark the "valleys" path searches
prefer; anything above ``65535 / 2.5`` after shaping saturates to 65535 so
corridors strongly avoid those areas.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

import noise

from .grid import Grid

U16_MAX = 65535
_VALLEY_CUTOFF = int(U16_MAX / 2.5)
# The Perlin permutation table is 256 entries; keep the offset well inside it.
_MAX_BASE = 128


@dataclass(frozen=True)
class Billow:
    """Billow (absolute-value Perlin) fractal noise."""

    base: int
    octaves: int = 1
    frequency: float = 5.0
    lacunarity: float = 0.001
    persistence: float = 0.001

    @classmethod
    def from_rng(cls, rng: random.Random) -> "Billow":
        return cls(base=rng.randrange(_MAX_BASE))

    def get(self, x: float, y: float) -> float:
        x *= self.frequency
        y *= self.frequency
        value = 0.0
        amplitude = 1.0
        for _ in range(self.octaves):
            signal = noise.pnoise2(x, y, base=self.base)
            value += (2.0 * abs(signal) - 1.0) * amplitude
            x *= self.lacunarity
            y *= self.lacunarity
            amplitude *= self.persistence
        return value + 0.5


def shape_noise_value(raw: float) -> int:
    n = raw * 8.0 + 16.0
    n = math.ceil(n**4)
    n = min(max(n, 0), U16_MAX)
    if n <= _VALLEY_CUTOFF:
        return n // 2
    return U16_MAX


def noise_value(billow: Billow, column: int, row: int, width: int, height: int) -> int:
    return shape_noise_value(billow.get(column / width, row / height))


def build_noise_map(width: int, height: int, rng: random.Random) -> Grid[int]:
    billow = Billow.from_rng(rng)
    cells = [0] * (width * height)
    for row in range(height):
        for column in range(width):
            cells[row * width + column] = noise_value(billow, column, row, width, height)
    return Grid(width, height, cells)


__all__ = ["Billow", "U16_MAX", "build_noise_map", "noise_value", "shape_noise_value"]
