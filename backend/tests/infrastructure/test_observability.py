"""Structured Logging: verifies JSON formatting and access logging."""

import json
import logging

from helpdesk.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "helpdesk.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "helpdesk.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_json_formatter_surfaces_extras():
    log = json.loads(JSONFormatter().format(_record(error_code="NOT_FOUND", path="/x")))
    assert log["error_code"] == "NOT_FOUND"
    assert log["path"] == "/x"
    assert "status_code" not in log


def test_setup_logging_replaces_root_handlers():
    saved = logging.root.handlers[:], logging.root.level
    try:
        setup_logging("debug", "json")
        assert len(logging.root.handlers) == 1
        assert isinstance(logging.root.handlers[0].formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG
    finally:
        logging.root.handlers, level = saved
        logging.root.setLevel(level)
