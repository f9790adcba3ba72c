"""
project: levelforge
module: __init__.py
License: MIT

Flask application object and factory.

The generators under ``levelforge.generation`` are plain Python; this module
only wires them to HTTP. Configuration is sourced from environment variables
(optionally a ``.env`` file) with development defaults, and a local
``instance/`` directory holds runtime files such as the log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.1.0"

# Load .env if present so generation settings can be supplied without
# exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # read-only installs still serve requests; only file logging is lost
    pass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


app.config.update(
    GENERATION_ENABLE_METRICS=_env_flag("GENERATION_ENABLE_METRICS", "1"),
    GENERATION_DEFAULT_SEED=os.getenv("GENERATION_DEFAULT_SEED") or None,
    HOST=os.getenv("HOST", "0.0.0.0"),
    PORT=int(os.getenv("PORT", "5000")),
)

from levelforge.routes.generator_api import bp_generator  # noqa: E402

app.register_blueprint(bp_generator)


def create_app():
    """Return the Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal error", "error_id": error_id}), 500
