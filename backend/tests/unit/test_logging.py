"""Tests for logging functionality."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from dionysus.core.logging import (
    APP_LOG_FILE,
    HTTP_LOG_FILE,
    ExcInfo,
    format_exception_for_json,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    yield
    structlog.contextvars.clear_contextvars()
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)
    for name in ("httpx", "httpcore"):
        http_logger = logging.getLogger(name)
        for handler in http_logger.handlers[:]:
            handler.close()
            http_logger.removeHandler(handler)
        http_logger.propagate = True


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.strip().startswith("{")]


def test_format_exception_for_json_with_exception() -> None:
    """Test format_exception_for_json with a real exception."""
    try:
        raise ValueError("Test error message")
    except ValueError:
        exc_info: ExcInfo = sys.exc_info()  # type: ignore[assignment]

    result = format_exception_for_json(exc_info)

    assert result["exception_type"] == "ValueError"
    assert result["exception_message"] == "Test error message"
    assert result["exception_module"] == "builtins"
    assert isinstance(result["traceback_frames"], list)
    assert len(result["traceback_frames"]) > 0

    frame = result["traceback_frames"][0]
    assert isinstance(frame["filename"], str)
    assert isinstance(frame["lineno"], int)
    assert isinstance(frame["function"], str)

    assert "ValueError: Test error message" in result["traceback_text"]


def test_format_exception_for_json_with_none() -> None:
    """Test format_exception_for_json with None."""
    assert format_exception_for_json(None) == {}


def test_format_exception_for_json_with_empty_tuple() -> None:
    """Test format_exception_for_json with empty exception tuple."""
    assert format_exception_for_json((None, None, None)) == {}


def test_setup_logging_debug_mode(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that debug mode renders for the console, not JSON."""
    setup_logging(debug=True)

    structlog.get_logger("test.logger").debug("Debug message", key="value")

    output = capsys.readouterr().out
    assert "Debug message" in output
    assert _json_lines(output) == []


def test_setup_logging_production_mode(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that production mode writes JSON and drops debug events."""
    setup_logging(debug=False)

    logger = structlog.get_logger("test.logger")
    logger.debug("Hidden message")
    logger.info("Test message", key="value")

    lines = _json_lines(capsys.readouterr().out)
    events = [line["event"] for line in lines]
    assert "Test message" in events
    assert "Hidden message" not in events

    entry = next(line for line in lines if line["event"] == "Test message")
    assert entry["key"] == "value"
    assert entry["level"] == "info"
    assert "timestamp" in entry


def test_setup_logging_explicit_level(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that an explicit level name overrides the debug default."""
    setup_logging(debug=False, level="warning")

    logger = structlog.get_logger("test.logger")
    logger.info("Quiet message")
    logger.warning("Loud message")

    events = [line["event"] for line in _json_lines(capsys.readouterr().out)]
    assert "Loud message" in events
    assert "Quiet message" not in events


def test_exception_logging_in_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that exceptions are logged in structured JSON format."""
    setup_logging(debug=False)
    logger = structlog.get_logger("test.logger")

    try:
        raise ValueError("Test error")
    except ValueError:
        logger.exception("An error occurred", extra="context")

    log_data = _json_lines(capsys.readouterr().out)[-1]

    assert log_data["event"] == "An error occurred"
    assert isinstance(log_data["exception"], dict)
    assert log_data["exception"]["exception_type"] == "ValueError"
    assert log_data["exception"]["exception_message"] == "Test error"
    assert "traceback_frames" in log_data["exception"]
    assert log_data["exception_summary"] == "ValueError: Test error"


def test_logging_with_context_vars(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that logging includes values bound in the context."""
    setup_logging(debug=False)
    structlog.contextvars.bind_contextvars(source="Yelp")

    structlog.get_logger("test.logger").info("Test message")

    log_data = _json_lines(capsys.readouterr().out)[-1]
    assert log_data["source"] == "Yelp"


def test_setup_logging_to_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that file logging writes JSON to the app log, not stdout."""
    logs_dir = tmp_path / "logs"

    setup_logging(debug=False, logs_dir=logs_dir)
    structlog.get_logger("test.logger").info("File message")
    logging.getLogger("httpx").warning("HTTP warning")

    for handler in logging.getLogger().handlers:
        handler.flush()
    for handler in logging.getLogger("httpx").handlers:
        handler.flush()

    app_lines = _json_lines((logs_dir / APP_LOG_FILE).read_text())
    assert "File message" in [line["event"] for line in app_lines]
    assert "File message" not in capsys.readouterr().out

    http_lines = _json_lines((logs_dir / HTTP_LOG_FILE).read_text())
    assert http_lines[-1]["message"] == "HTTP warning"
    assert http_lines[-1]["logger"] == "httpx"
