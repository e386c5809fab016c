import random
import time

import pytest

from cavern.dungeon import Dungeon, FloorId
from cavern.dungeon.pipeline import generate_floor

# Generous guards: they catch pathological slowdowns, not small regressions.


@pytest.mark.performance
@pytest.mark.parametrize("size,limit", [(50, 2.0), (100, 3.0), (200, 4.0)])
def test_floor_generation_time(size, limit):
    start = time.perf_counter()
    Dungeon(size, size, seed=424242)
    elapsed = time.perf_counter() - start
    assert elapsed < limit, f"{size}x{size} floor took {elapsed:.2f}s"


@pytest.mark.performance
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_largest_floor_smoothing_time(seed):
    metrics = {}
    generate_floor(FloorId(0), 200, 200, rng=random.Random(seed), metrics=metrics)
    assert metrics["phase_ms"]["smoothen"] < 1500, metrics["phase_ms"]
