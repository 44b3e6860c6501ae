"""Tests for the console logger."""

import io

import pytest
from octacore.logging import ConsoleLogger, get_logger, LOG_LEVEL_ENV


def make_logger(level, stream):
    return ConsoleLogger("Core", log_level=level, use_colors=False, show_timestamps=False, stream=stream)


def test_level_filtering():
    stream = io.StringIO()
    logger = make_logger("WARNING", stream)

    logger.debug("hidden")
    logger.info("hidden too")
    logger.warning("shown")
    logger.error("also shown")

    lines = stream.getvalue().splitlines()
    assert lines == ["[ WARNING][Core] shown", "[   ERROR][Core] also shown"]


def test_set_level():
    stream = io.StringIO()
    logger = make_logger("ERROR", stream)
    logger.set_level("debug")

    logger.debug("now visible")

    assert "now visible" in stream.getvalue()
    assert logger.is_enabled_for("DEBUG")


def test_unknown_level():
    with pytest.raises(ValueError):
        make_logger("LOUD", io.StringIO())


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    logger = ConsoleLogger("Env", stream=io.StringIO())
    assert logger.log_level == "DEBUG"


def test_no_colors_on_non_tty():
    logger = ConsoleLogger("Core", log_level="INFO", stream=io.StringIO())
    assert not logger.use_colors


def test_get_logger_shared():
    assert get_logger("shared-test") is get_logger("shared-test")
    assert get_logger("shared-test") is not get_logger("other-test")
