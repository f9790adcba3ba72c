"""
project: levelforge
module: server.py
License: MIT

Server bootstrap: logging configuration and the Flask development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from levelforge import app, logging_utils

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = "levelforge.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3
# Handlers installed here carry this attribute so reconfiguring only swaps ours.
_HANDLER_TAG = "_levelforge_handler"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Configure logging and run the Flask server until interrupted."""
    _configure_logging()
    try:
        print(f"[INFO] Starting generator server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _stdlib_level() -> int:
    """Map the structured logger's threshold onto a stdlib level."""
    return {
        logging_utils.LEVELS["debug"]: logging.DEBUG,
        logging_utils.LEVELS["info"]: logging.INFO,
        logging_utils.LEVELS["warn"]: logging.WARNING,
        logging_utils.LEVELS["error"]: logging.ERROR,
    }.get(logging_utils.CURRENT_LEVEL, logging.INFO)


def _tagged(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_TAG, True)
    return handler


def _configure_logging(level: int | None = None) -> str:
    """Send stdlib logging (Flask, werkzeug) to the console and to
    ``instance/levelforge.log``, at the level LEVELFORGE_LOG_LEVEL selects.

    Repeated calls replace the handlers a previous call installed and leave
    any other root handlers alone. Returns the log file path.
    """
    if level is None:
        level = _stdlib_level()
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, LOG_FILE)

    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)
    root.addHandler(_tagged(RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS), level))
    root.addHandler(_tagged(logging.StreamHandler(), level))
    return log_path
