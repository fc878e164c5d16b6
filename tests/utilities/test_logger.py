"""
Tests for structured logging setup.
"""

import json

import structlog

from utilities.logger import build_processors, get_logger, setup_logging


def test_json_renderer_selected():
    """Test json format ends with the JSON renderer."""
    processors = build_processors("json")

    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_console_renderer_selected():
    """Test console format ends with the console renderer."""
    processors = build_processors("console")

    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_setup_logging_writes_json_file(tmp_path, restore_logging):
    """Test events are written as JSON lines to the log file."""
    log_file = tmp_path / "logs" / "api.log"

    setup_logging(log_level="INFO", log_format="json", log_file=log_file)
    get_logger("tests").info("Book created", book_id=1)

    lines = log_file.read_text().strip().splitlines()
    events = [json.loads(line) for line in lines]
    assert events[0]["event"] == "Logging system initialized"
    assert events[-1]["event"] == "Book created"
    assert events[-1]["book_id"] == 1
    assert events[-1]["level"] == "info"
    assert "timestamp" in events[-1]


def test_setup_logging_filters_by_level(tmp_path, restore_logging):
    """Test events below the configured level are dropped."""
    log_file = tmp_path / "api.log"

    setup_logging(log_level="WARNING", log_format="json", log_file=log_file)
    logger = get_logger("tests")
    logger.info("quiet")
    logger.warning("loud")

    events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
    assert "quiet" not in events
    assert "loud" in events
