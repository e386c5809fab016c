"""
project: Cavern
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Endpoints generate (or reuse from a small cache) a dungeon for the requested
seed and size and return it as JSON, an animated GIF or ASCII art.
"""

import os
import threading

from flask import Blueprint, Response, current_app, jsonify, request, session

from cavern.dungeon import BoundedIntError, Dungeon, DungeonConfig, DungeonType, GenerationFailed
from cavern.logging_utils import get_logger
from cavern.routes.seed_api import coerce_seed

log = get_logger("api.dungeon")

# Simple in-process cache (seed, size, floors, type) -> Dungeon. Lock guards concurrent requests.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


class BadRequest(ValueError):
    pass


def _build_config(seed, width, height, floors, dungeon_type) -> DungeonConfig:
    cfg = current_app.config
    return DungeonConfig(
        width=width,
        height=height,
        floor_count=floors,
        dungeon_type=dungeon_type.value.lower(),
        seed=seed,
        max_attempts=int(cfg.get("DUNGEON_MAX_ATTEMPTS", 5)),
        enable_metrics=bool(cfg.get("DUNGEON_ENABLE_GENERATION_METRICS", True)),
    )


def get_cached_dungeon(seed: int, width: int, height: int, floors: int = 1, dungeon_type=DungeonType.CAVE):
    key = (seed, width, height, floors, dungeon_type)
    if os.environ.get("DUNGEON_DISABLE_CACHE") == "1":
        return Dungeon.from_config(_build_config(seed, width, height, floors, dungeon_type))
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = Dungeon.from_config(_build_config(seed, width, height, floors, dungeon_type))
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def clear_dungeon_cache():
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise BadRequest(f"{name} must be an integer")


def _resolve_seed() -> int:
    raw = request.args.get("seed")
    if raw is not None and raw.strip():
        return coerce_seed(raw)
    if session.get("dungeon_seed") is not None:
        return int(session["dungeon_seed"])
    seed = coerce_seed(None)
    session["dungeon_seed"] = seed
    return seed


def _dungeon_from_request():
    """Return (seed, dungeon) for the current query string; raises BadRequest on invalid input."""
    seed = _resolve_seed()
    width = _int_arg("width", 50)
    height = _int_arg("height", 50)
    floors = _int_arg("floors", 1)
    if floors < 1:
        raise BadRequest("floors must be a positive integer")
    max_floors = int(current_app.config.get("DUNGEON_MAX_FLOORS", 10))
    if floors > max_floors:
        raise BadRequest(f"floors must be at most {max_floors}")
    try:
        dungeon_type = DungeonType.parse(request.args.get("type", "cave"))
    except ValueError as exc:
        raise BadRequest(str(exc))
    try:
        return seed, get_cached_dungeon(seed, width, height, floors, dungeon_type)
    except BoundedIntError as exc:
        raise BadRequest(f"invalid floor size: {exc}")


def _handle(fn):
    try:
        return fn()
    except BadRequest as exc:
        return jsonify({"error": str(exc)}), 400
    except GenerationFailed as exc:
        log.error(event="generation_failed", error=str(exc), attempts=exc.attempts)
        return jsonify({"error": str(exc)}), 500


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.route("/api/dungeon/generate")
def generate():
    """Response: { 'seed': <int>, 'dungeon': {dungeon_type, floors}, 'metrics': {...} }"""

    def run():
        seed, dungeon = _dungeon_from_request()
        return jsonify({"seed": seed, "dungeon": dungeon.to_dict(), "metrics": dungeon.metrics})

    return _handle(run)


@bp_dungeon.route("/api/dungeon/gif")
def gif():
    def run():
        _, dungeon = _dungeon_from_request()
        return Response(dungeon.to_gif(), mimetype="image/gif")

    return _handle(run)


@bp_dungeon.route("/api/dungeon/ascii")
def ascii_map():
    def run():
        _, dungeon = _dungeon_from_request()
        floor = _int_arg("floor", -1)
        if floor == -1:
            text = dungeon.to_ascii()
        elif 0 <= floor < len(dungeon.floors):
            text = dungeon.to_ascii(floor)
        else:
            raise BadRequest(f"floor must be between 0 and {len(dungeon.floors) - 1}")
        return Response(text, mimetype="text/plain")

    return _handle(run)


@bp_dungeon.route("/api/dungeon/gen/metrics")
def generation_metrics():
    """Return generation metrics for the requested dungeon (empty when metrics are disabled)."""

    def run():
        seed, dungeon = _dungeon_from_request()
        return jsonify({"seed": seed, "metrics": dungeon.metrics})

    return _handle(run)
