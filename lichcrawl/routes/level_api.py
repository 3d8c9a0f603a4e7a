"""
project: Lichcrawl
module: level_api.py
License: MIT

Read-only level API.

GET /api/level/<level>?seed=...            generated level as JSON
GET /api/level/<level>/path?seed=&x=&z=    fresh distance/direction fields toward (x, z)
GET /api/health                            liveness probe

Seeds may be integers or arbitrary strings (hashed to 63 bits). Generated
levels are cached per process; distance fields are computed per request.
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from lichcrawl.levelgen import LevelGenConfig, LevelGenerationError, LevelStyle, generate_level_with_retries
from lichcrawl.levelgen.export import level_to_dict
from lichcrawl.levelgen.pathfinding import UNREACHED
from lichcrawl.logging_utils import get_logger

bp_level = Blueprint("level_api", __name__)
log = get_logger("lichcrawl.routes.level_api")

SEED_MAX = 2**63 - 1

# (level, style, seed, config) -> LevelResult; lock because threaded servers interleave requests
_level_cache = {}
_level_cache_lock = threading.Lock()


def coerce_seed(raw):
    """Convert a seed argument (int or str) into a non-negative 63-bit int."""
    if raw is None:
        return random.randint(1, 1_000_000)
    if isinstance(raw, int):
        return raw % SEED_MAX
    s = str(raw).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _request_config() -> LevelGenConfig:
    return LevelGenConfig.from_mapping(
        current_app.config,
        width=request.args.get("width", type=int),
        height=request.args.get("height", type=int),
    )


def _request_style():
    name = request.args.get("style")
    return LevelStyle.from_name(name) if name else None


def get_cached_level(level: int, seed: int, config: LevelGenConfig, style=None):
    key = (level, style, seed, tuple(sorted(config.to_dict().items())))
    if current_app.config.get("LEVEL_CACHE_DISABLED"):
        return generate_level_with_retries(level, seed, config, style=style)
    with _level_cache_lock:
        result = _level_cache.get(key)
    if result is not None:
        return result
    result = generate_level_with_retries(level, seed, config, style=style)
    cap = int(current_app.config.get("LEVEL_CACHE_MAX", 8))
    with _level_cache_lock:
        _level_cache[key] = result
        while len(_level_cache) > cap:
            _level_cache.pop(next(iter(_level_cache)))
    return result


def clear_level_cache() -> None:
    with _level_cache_lock:
        _level_cache.clear()


def _load_level(level: int):
    """Shared argument handling; returns (result, None) or (None, error response)."""
    if level < 1:
        return None, (jsonify({"error": "level must be >= 1"}), 400)
    try:
        config = _request_config()
        style = _request_style()
    except ValueError as e:
        return None, (jsonify({"error": str(e)}), 400)
    seed = coerce_seed(request.args.get("seed"))
    try:
        return get_cached_level(level, seed, config, style), None
    except LevelGenerationError as e:
        log.error(event="level_generation_failed", stage=level, seed=seed, reason=str(e))
        return None, (jsonify({"error": "level generation failed", "detail": str(e), "seed": seed}), 503)


@bp_level.route("/api/health")
def health():
    return jsonify({"status": "ok"})


@bp_level.route("/api/level/<int:level>")
def get_level(level: int):
    result, err = _load_level(level)
    if err:
        return err
    materials = request.args.get("materials", "0").lower() in ("1", "true", "yes")
    return jsonify(level_to_dict(result, include_materials=materials))


@bp_level.route("/api/level/<int:level>/path")
def get_path_field(level: int):
    """Distance and direction fields toward (x, z) for AI navigation.

    ``distances`` rows use null for unreachable cells; ``directions`` rows use
    one character per cell: n/e/s/w, ``*`` at the target, ``.`` unreachable.
    """
    x = request.args.get("x", type=int)
    z = request.args.get("z", type=int)
    if x is None or z is None:
        return jsonify({"error": "x and z query parameters are required"}), 400
    result, err = _load_level(level)
    if err:
        return err
    if not result.grid.contains((x, z)):
        return jsonify({"error": f"target ({x}, {z}) outside level"}), 400
    if result.grid[x, z].is_solid():
        return jsonify({"error": f"target ({x}, {z}) is solid"}), 400
    dirs, distances = result.path_to((x, z))
    dir_chars = {"none": ".", "self": "*"}
    return jsonify(
        {
            "level": result.level,
            "seed": result.seed,
            "target": [x, z],
            "distances": [[None if d == UNREACHED else d for d in row] for row in distances.rows()],
            "directions": ["".join(dir_chars.get(d.value, d.value) for d in row) for row in dirs.rows()],
        }
    )
