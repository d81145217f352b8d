"""Structured Logging — tests for the JSON formatter and setup."""

import json
import logging

from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.user_service", logging.WARNING, __file__, 1,
        "update_user failed: %s", ("bad",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "app.services.user_service"
    assert log["message"] == "update_user failed: bad"
    assert "timestamp" in log


def test_json_formatter_surfaces_extra_fields():
    log = json.loads(JSONFormatter().format(
        _record(user_id="abc", error_code="404", status_code=404, unrelated="x"),
    ))
    assert log["user_id"] == "abc"
    assert log["error_code"] == "404"
    assert log["status_code"] == 404
    assert "unrelated" not in log


def test_setup_logging_does_not_stack_handlers():
    setup_logging("DEBUG", "text")
    setup_logging("INFO", "json")
    ours = [h for h in logging.root.handlers if h.get_name() == "user-registry"]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
