"""Structured key=value logging for the generator and its surfaces.

Records are single lines with a level and a unix timestamp followed by the
caller's fields, or one JSON object per line when ``CAVERN_LOG_JSON`` is on.

Usage:
    from cavern.logging_utils import get_logger
    log = get_logger("dungeon")
    log.info(event="floor_generated", floor=0, attempts=1)

Reserved keys: level, ts. ``None`` values are dropped. Points and other
tuples render as ``r,c``; enums render by name.
"""

from __future__ import annotations

import json
import os
import sys
import time
from enum import Enum

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")

_settings = {"threshold": LEVELS["info"], "json": False}


def configure(level: str | None = None, json_mode: bool | None = None) -> None:
    """(Re)read the threshold and output mode; explicit arguments win over env."""
    if level is None:
        level = os.getenv("CAVERN_LOG_LEVEL", "info")
    _settings["threshold"] = LEVELS.get(level.strip().lower(), LEVELS["info"])
    if json_mode is None:
        json_mode = os.getenv("CAVERN_LOG_JSON", "0").strip().lower() in _TRUTHY
    _settings["json"] = bool(json_mode)


configure()


def is_enabled(level: str) -> bool:
    return LEVELS[level] >= _settings["threshold"]


def _plain(value):
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, (tuple, list)):
        return ",".join(str(_plain(v)) for v in value)
    if isinstance(value, (bool, int, float)):
        return value
    return str(value)


def _format(level: str, **fields) -> str:
    ts = int(time.time())
    rec = {k: _plain(v) for k, v in fields.items() if v is not None}
    if _settings["json"]:
        rec["level"] = level
        rec["ts"] = ts
        return json.dumps(rec, separators=(",", ":"))
    parts = [f"level={level}", f"ts={ts}"]
    parts.extend(f"{k}={str(v).replace(' ', '_')}" for k, v in rec.items())
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "cavern"

    def _log(self, lvl: str, **fields):
        if not is_enabled(lvl):
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("cavern")
