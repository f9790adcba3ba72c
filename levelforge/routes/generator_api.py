"""
project: levelforge
module: generator_api.py
License: MIT

Level generation API routes.

JSON in, JSON out. Each POST body is an option record (camelCase or
snake_case keys, numbers may arrive as strings) plus an optional ``seed``;
the response carries the generated level and the resolved seed so the
browser editor can replay it.
"""
from flask import Blueprint, current_app, jsonify, request

from levelforge.generation import (
    ArenaConfig,
    InvalidOptionError,
    MazeConfig,
    generate_arena,
    generate_maze,
    generate_maze_arena,
)
from levelforge.logging_utils import get_logger

bp_generator = Blueprint("generator_api", __name__)

log = get_logger("levelforge.api")


def _read_options():
    """Return the request body as a dict, or None when it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None and not request.get_data():
        return {}
    if not isinstance(data, dict):
        return None
    if data.get("seed") in (None, "") and current_app.config.get("GENERATION_DEFAULT_SEED"):
        data = dict(data, seed=current_app.config["GENERATION_DEFAULT_SEED"])
    return data


def _respond(kind, payload, stats):
    if current_app.config.get("GENERATION_ENABLE_METRICS", True):
        payload["stats"] = stats
    log.info(
        event="generate",
        kind=kind,
        seed=payload.get("seed"),
        cols=payload.get("cols"),
        rows=payload.get("rows"),
        runtime_ms=stats.get("runtime_ms"),
    )
    return jsonify(payload)


def _bad_request(message):
    return jsonify({"error": message}), 400


@bp_generator.route("/api/generate/defaults", methods=["GET"])
def defaults():
    """Default option records for every generator."""
    return jsonify({"maze": MazeConfig().to_dict(), "arena": ArenaConfig().to_dict()})


@bp_generator.route("/api/generate/maze", methods=["POST"])
def maze():
    data = _read_options()
    if data is None:
        return _bad_request("body must be a JSON object")
    try:
        config = MazeConfig.from_dict(data)
    except InvalidOptionError as e:
        return _bad_request(str(e))
    result = generate_maze(config)
    return _respond("maze", result.to_dict(), result.stats)


@bp_generator.route("/api/generate/arena", methods=["POST"])
def arena():
    data = _read_options()
    if data is None:
        return _bad_request("body must be a JSON object")
    try:
        config = ArenaConfig.from_dict(data)
    except InvalidOptionError as e:
        return _bad_request(str(e))
    result = generate_arena(config)
    return _respond("arena", result.to_dict(), result.stats)


@bp_generator.route("/api/generate/maze-arena", methods=["POST"])
def maze_arena():
    data = _read_options()
    if data is None:
        return _bad_request("body must be a JSON object")
    try:
        config = MazeConfig.from_dict(data)
    except InvalidOptionError as e:
        return _bad_request(str(e))
    result = generate_maze_arena(config)
    return _respond("maze-arena", result.to_dict(), result.stats)
