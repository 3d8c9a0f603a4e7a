"""
project: Lichcrawl
module: __init__.py
License: MIT

Flask application factory.

The HTTP layer is a thin read-only surface over ``lichcrawl.levelgen``:
renderer, spawner and AI clients fetch generated levels and fresh distance
fields as JSON. Configuration comes from environment variables (optionally
from a ``.env`` file) with defaults suitable for development.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so LEVELGEN_* and server settings can be supplied
# without exporting shell variables during development.
load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")


def _env_config() -> dict:
    cfg = {
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev-secret-change-me"),
        "LEVEL_CACHE_MAX": int(os.getenv("LEVEL_CACHE_MAX", "8")),
        "LEVEL_CACHE_DISABLED": os.getenv("LEVEL_CACHE_DISABLED", "0").lower() in _TRUTHY,
    }
    # Generator tuning is passed through verbatim; LevelGenConfig.from_mapping coerces types.
    cfg.update({k: v for k, v in os.environ.items() if k.startswith("LEVELGEN_")})
    return cfg


def create_app(overrides: dict | None = None) -> Flask:
    """Build a Flask app with the level API registered.

    ``overrides`` is applied last (tests use it for TESTING and LEVELGEN_* keys).
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # read-only checkouts still serve the API; only the log file is lost
        pass
    app.config.update(_env_config())
    if overrides:
        app.config.update(overrides)

    from lichcrawl.routes.level_api import bp_level

    app.register_blueprint(bp_level)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
