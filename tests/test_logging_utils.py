import json
import logging

from lichcrawl import create_app
from lichcrawl.logging_utils import get_logger
from lichcrawl.server import _configure_logging


def test_get_logger_is_cached():
    assert get_logger("a.b") is get_logger("a.b")
    assert get_logger("a.b") is not get_logger("a.c")


def test_key_value_line(monkeypatch, capsys):
    monkeypatch.setenv("LICHCRAWL_LOG_LEVEL", "info")
    monkeypatch.delenv("LICHCRAWL_LOG_JSON", raising=False)
    get_logger("t").info(event="level_generated", level_no=2, reason="pool exhausted", skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=level_generated" in out
    assert "level_no=2" in out
    assert "reason=pool_exhausted" in out
    assert "logger=t" in out
    assert "skipped" not in out


def test_threshold_filters_debug(monkeypatch, capsys):
    monkeypatch.setenv("LICHCRAWL_LOG_LEVEL", "info")
    log = get_logger("t")
    log.debug(event="room_dropped")
    assert capsys.readouterr().out == ""
    monkeypatch.setenv("LICHCRAWL_LOG_LEVEL", "debug")
    log.debug(event="room_dropped")
    assert "event=room_dropped" in capsys.readouterr().out


def test_errors_go_to_stderr_as_json(monkeypatch, capsys):
    monkeypatch.setenv("LICHCRAWL_LOG_LEVEL", "warn")
    monkeypatch.setenv("LICHCRAWL_LOG_JSON", "1")
    get_logger("t").error(event="level_generation_failed", seed=9)
    captured = capsys.readouterr()
    assert captured.out == ""
    rec = json.loads(captured.err)
    assert rec["event"] == "level_generation_failed"
    assert rec["seed"] == 9
    assert rec["level"] == "error"


def test_configure_logging_is_idempotent(tmp_path, monkeypatch):
    app = create_app({"TESTING": True})
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        path = _configure_logging(app)
        _configure_logging(app)
        assert len(root.handlers) == 2
        logging.getLogger("lichcrawl.test").info("hello")
        assert (tmp_path / "app.log").exists()
        assert path == str(tmp_path / "app.log")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
