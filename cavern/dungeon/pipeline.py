"""Single-floor generation with retries and timing.

``FloorBuilder.create`` runs the generation sequence exactly once; a run can
fail when a random layout admits no path or the secret-passage loop stalls.
This module retries such runs with a fresh RNG derived from the floor's RNG,
so a given seed still maps to one result.
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, Optional

from ..logging_utils import get_logger
from .config import DungeonConfig
from .errors import GenerationFailed
from .floor import Floor, FloorId
from .floor_builder import FloorBuilder
from .metrics import init_metrics

log = get_logger("dungeon.pipeline")


def generate_floor(
    floor_id: FloorId,
    width: int,
    height: int,
    *,
    rng: random.Random,
    config: Optional[DungeonConfig] = None,
    gif_output: bool = False,
    metrics: Optional[Dict[str, Any]] = None,
) -> Floor:
    """Generate one floor, retrying up to ``config.max_attempts`` times.

    When ``metrics`` is given (and metrics are enabled) it is filled with the
    counters of the successful attempt plus ``attempts`` and ``runtime_ms``.
    """
    config = config or DungeonConfig(width=width, height=height)
    max_attempts = max(1, int(config.max_attempts))
    start = time.perf_counter()
    last_error: Optional[GenerationFailed] = None

    for attempt in range(1, max_attempts + 1):
        attempt_rng = random.Random(rng.getrandbits(64))
        run = init_metrics() if config.enable_metrics else {}
        try:
            floor = FloorBuilder.create(
                floor_id,
                width,
                height,
                rng=attempt_rng,
                gif_output=gif_output,
                config=config,
                metrics=run,
            )
        except GenerationFailed as exc:
            last_error = exc
            log.warn(event="floor_retry", floor=int(floor_id), attempt=attempt, max_attempts=max_attempts, error=str(exc))
            continue

        elapsed = int((time.perf_counter() - start) * 1000)
        if run:
            run['attempts'] = attempt
            run['runtime_ms'] = elapsed
        if metrics is not None:
            metrics.update(run)
        log.info(
            event="floor_generated",
            floor=int(floor_id),
            width=floor.width,
            height=floor.height,
            entrance=floor.entrance,
            exit=floor.exit,
            attempts=attempt,
            runtime_ms=elapsed,
        )
        return floor

    raise GenerationFailed(f"floor {floor_id} failed: {last_error}", attempts=max_attempts) from last_error


__all__ = ["generate_floor"]
