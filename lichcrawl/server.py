"""
project: Lichcrawl
module: server.py
License: MIT

Server bootstrap.

Builds the Flask app, configures stdlib logging (rotating file under the
instance folder plus console) and runs the development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from lichcrawl import create_app
from lichcrawl.logging_utils import get_logger

log = get_logger("lichcrawl.server")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Serve the level API until interrupted.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    """
    app = create_app()
    _configure_logging(app)
    try:
        log.info(event="server_start", host=host, port=port, debug=debug)
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app, level=logging.INFO) -> str:
    """Send stdlib logging (Flask/werkzeug) to instance/app.log and the console.

    Returns the log file path. Keeps a few rotated backups.
    """
    log_dir = app.instance_path
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(level)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    # reconfiguring must not duplicate output
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
