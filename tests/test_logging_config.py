"""Test logging setup, context fields and the profiler timer.

Tests for omurice.utils.logging_config and omurice.utils.profiler:
    - setup_logging is idempotent (re-running replaces handlers)
    - JSON file output carries pushed context fields
    - Human format renders "key=value" context
    - push_context / pop_context / current_context bookkeeping
    - timer() reports elapsed time to its sink

Run:
    pytest tests/test_logging_config.py -v
"""

import json
import logging

import pytest

from omurice.utils import logging_config, profiler


@pytest.fixture(autouse=True)
def clean_logging():
    """Leave root logger and context as we found them."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    saved = logging_config.current_context()
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging_config.pop_context()
    logging_config.push_context(**saved)


def test_logging_idempotency(tmp_path):
    log_path = tmp_path / "omurice.log"

    logging_config.setup_logging(
        log_level="INFO", log_file=str(log_path), json=True, to_stderr=False,
        context={"app": "omurice"},
    )
    logger = logging_config.get_logger("omurice.test")
    logger.info("hello")

    handlers = logging_config.setup_logging(
        log_level="INFO", log_file=str(log_path), json=True, to_stderr=False,
        context={"app": "omurice"},
    )
    logger.info("world")

    assert len(handlers) == 1
    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2

    rec = json.loads(lines[0])
    assert rec["msg"] == "hello"
    assert rec["lvl"] == "INFO"
    assert rec["app"] == "omurice"


def test_human_format_includes_context(tmp_path):
    log_path = tmp_path / "human.log"
    logging_config.setup_logging(log_level="DEBUG", log_file=str(log_path), to_stderr=False)
    logging_config.pop_context()
    logging_config.push_context(scene="game")

    logging_config.get_logger("omurice.test").debug("stroke committed")

    line = log_path.read_text(encoding="utf-8").strip()
    assert "scene=game" in line
    assert line.endswith("stroke committed")
    assert "DEBUG" in line


def test_level_filters_records(tmp_path):
    log_path = tmp_path / "filtered.log"
    logging_config.setup_logging(log_level="WARNING", log_file=str(log_path), to_stderr=False)
    logger = logging_config.get_logger("omurice.test")
    logger.info("dropped")
    logger.warning("kept")
    text = log_path.read_text(encoding="utf-8")
    assert "dropped" not in text
    assert "kept" in text


def test_size_rotation_handler(tmp_path):
    log_path = tmp_path / "rotating.log"
    handlers = logging_config.setup_logging(
        log_file=str(log_path), to_stderr=False,
        rotate={"mode": "size", "max_bytes": 1024, "backup_count": 1},
    )
    assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)


def test_unknown_rotation_mode(tmp_path):
    with pytest.raises(ValueError, match="rotation"):
        logging_config.setup_logging(
            log_file=str(tmp_path / "x.log"), to_stderr=False, rotate={"mode": "weekly"},
        )


def test_context_push_pop():
    logging_config.pop_context()
    logging_config.push_context(app="omurice", scene="home")
    logging_config.push_context(scene="about")
    assert logging_config.current_context() == {"app": "omurice", "scene": "about"}

    logging_config.pop_context(["scene"])
    assert logging_config.current_context() == {"app": "omurice"}

    logging_config.pop_context()
    assert logging_config.current_context() == {}


def test_formatter_rejects_unknown_mode():
    with pytest.raises(ValueError):
        logging_config.ContextFormatter("xml")


def test_profiler_timer():
    times = []
    with profiler.timer("full_redraw", sink=lambda n, t: times.append((n, t))):
        sum(range(10000))

    assert len(times) == 1
    name, elapsed = times[0]
    assert name == "full_redraw"
    assert elapsed >= 0.0


def test_profiler_timer_reports_on_error():
    times = []
    with pytest.raises(KeyError):
        with profiler.timer("boom", sink=lambda n, t: times.append(t)):
            raise KeyError("x")
    assert len(times) == 1
