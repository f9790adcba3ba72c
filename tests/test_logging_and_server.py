import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from levelforge import app, logging_utils, server
from levelforge.server import _configure_logging


def test_key_value_lines(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    log = logging_utils.get_logger("levelforge.test")
    log.debug(event="carve done", cells=12, skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=debug ts=")
    assert "event=carve_done" in out
    assert "cells=12" in out
    assert "skipped" not in out
    assert out.endswith("logger=levelforge.test")


def test_level_filter_and_error_stream(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    log = logging_utils.get_logger("levelforge.test")
    log.debug(event="hidden")
    log.error(event="broken")
    captured = capsys.readouterr()
    assert "hidden" not in captured.out
    assert "event=broken" in captured.err


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    logging_utils.get_logger("levelforge.test").info(event="generate", seed=7)
    rec = json.loads(capsys.readouterr().out)
    assert rec["event"] == "generate" and rec["seed"] == 7
    assert rec["level"] == "info" and rec["logger"] == "levelforge.test"


def test_set_level(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    logging_utils.set_level("warn")
    assert logging_utils.CURRENT_LEVEL == logging_utils.LEVELS["warn"]


def test_bound_context_floats_and_cells(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    log = logging_utils.get_logger("levelforge.test").bind(seed=99)
    log.debug(event="arena_candidate", score=3.123456, spawn=(3, 9), ok=True)
    out = capsys.readouterr().out.strip()
    assert " seed=99 event=arena_candidate " in out
    assert "score=3.1235" in out
    assert "spawn=3,9" in out
    assert "ok=True" in out
    assert "seed" not in logging_utils.get_logger("levelforge.test").context


def test_bound_context_in_json_mode(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    logging_utils.get_logger("levelforge.test").bind(seed=5).info(event="generate", seed=6, cell=(1, 2))
    rec = json.loads(capsys.readouterr().out)
    assert rec["seed"] == 6
    assert rec["cell"] == "1,2"


def test_parse_level_aliases_and_unknown():
    assert logging_utils.parse_level("WARNING") == logging_utils.LEVELS["warn"]
    assert logging_utils.parse_level(" debug ") == logging_utils.LEVELS["debug"]
    with pytest.raises(ValueError):
        logging_utils.parse_level("verbose")


def test_get_logger_is_cached():
    assert logging_utils.get_logger("levelforge.x") is logging_utils.get_logger("levelforge.x")


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)


def _ours(root):
    return [h for h in root.handlers if getattr(h, server._HANDLER_TAG, False)]


def test_configure_logging_is_idempotent(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = restore_root_logger
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    _configure_logging()
    path = _configure_logging()
    ours = _ours(root)
    assert len(ours) == 2
    assert len([h for h in ours if isinstance(h, RotatingFileHandler)]) == 1
    assert foreign in root.handlers
    logging.getLogger("levelforge.test").warning("hello")
    for h in ours:
        h.flush()
    assert path == str(tmp_path / "levelforge.log")
    assert "hello" in (tmp_path / "levelforge.log").read_text()


def test_configure_logging_follows_structured_level(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    _configure_logging()
    root = restore_root_logger
    assert root.level == logging.WARNING
    assert all(h.level == logging.WARNING for h in _ours(root))
    _configure_logging(logging.DEBUG)
    assert root.level == logging.DEBUG
