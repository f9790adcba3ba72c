"""Structured event logging for the generators and the API.

Each event is one line on stdout (stderr for errors), either key=value
pairs or, with LEVELFORGE_LOG_JSON=1, a compact JSON object:

    from levelforge.logging_utils import get_logger
    log = get_logger("levelforge.arena").bind(seed=1234)
    log.debug(event="arena_candidate", index=2, score=3.51234, spawn=(3, 9))

    level=debug ts=1700000000 seed=1234 event=arena_candidate index=2 score=3.5123 spawn=3,9 logger=levelforge.arena

Floats are rounded to ``FLOAT_DIGITS`` places, cells (2-tuples) render as
``x,z`` and ``None`` fields are dropped. Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
ALIASES = {"warning": "warn", "err": "error"}
FLOAT_DIGITS = 4


def parse_level(name: str) -> int:
    key = (name or "").strip().lower()
    key = ALIASES.get(key, key)
    if key not in LEVELS:
        raise ValueError(f"unknown log level {name!r}")
    return LEVELS[key]


def _env_level() -> int:
    try:
        return parse_level(os.getenv("LEVELFORGE_LOG_LEVEL", "info"))
    except ValueError:
        return LEVELS["info"]


CURRENT_LEVEL = _env_level()
JSON_MODE = os.getenv("LEVELFORGE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def set_level(level: str) -> None:
    global CURRENT_LEVEL
    CURRENT_LEVEL = parse_level(level)


def _value(v):
    if isinstance(v, bool):
        return v
    if isinstance(v, float):
        return round(v, FLOAT_DIGITS)
    if isinstance(v, tuple) and len(v) == 2:
        return f"{v[0]},{v[1]}"
    return v


def _format(level: str, fields: dict) -> str:
    rec = {k: _value(v) for k, v in fields.items() if v is not None}
    ts = int(time.time())
    if JSON_MODE:
        return json.dumps({"level": level, "ts": ts, **rec}, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={ts}"]
    for k, v in rec.items():
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "levelforge"
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Return a logger that prefixes every event with ``fields``."""
        return _Logger(self.name, {**self.context, **fields})

    def enabled(self, lvl: str) -> bool:
        return LEVELS[lvl] >= CURRENT_LEVEL

    def _log(self, lvl: str, **fields):
        if not self.enabled(lvl):
            return
        merged = {**self.context, **fields}
        merged.setdefault("logger", self.name)
        print(_format(lvl, merged), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("levelforge")
