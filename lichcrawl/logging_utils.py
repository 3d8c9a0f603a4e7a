"""Minimal structured logging helper.

Emits one key=value line (or one JSON object) per event via print(), with a
timestamp and level. The generator logs from tight loops, so the threshold
check happens before any formatting.

Usage:
    from lichcrawl.logging_utils import get_logger
    log = get_logger(__name__)
    log.info(event="level_generated", stage=1, seed=42)

Environment:
    LICHCRAWL_LOG_LEVEL  debug|info|warn|error (default info)
    LICHCRAWL_LOG_JSON   1/true/yes/on for JSON lines

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("LICHCRAWL_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("LICHCRAWL_LOG_JSON", "0") in _TRUTHY


def _format(level: str, **fields) -> str:
    ts = int(time.time())
    if json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = ts
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={ts}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "lichcrawl"

    def enabled(self, lvl: str) -> bool:
        return LEVELS[lvl] >= current_level()

    def _log(self, lvl: str, **fields):
        if not self.enabled(lvl):
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


_LOGGER_CACHE: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("lichcrawl")
