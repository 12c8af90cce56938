"""Structured Logging — tests for JSONFormatter and setup_logging."""

import json
import logging

from envbind.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "envbind.services.load_env", logging.ERROR, __file__, 1,
        "Failed to load env vars: %s", ("boom",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "ERROR"
    assert log["logger"] == "envbind.services.load_env"
    assert log["message"] == "Failed to load env vars: boom"
    assert "timestamp" in log


def test_json_formatter_surfaces_extras_when_present():
    log = json.loads(JSONFormatter().format(
        _record(error_code="BELOW_MINIMUM", field_name="Concurrency", env_key="CONCURRENCY"),
    ))
    assert log["error_code"] == "BELOW_MINIMUM"
    assert log["field_name"] == "Concurrency"
    assert log["env_key"] == "CONCURRENCY"
    assert "field_count" not in log


def test_setup_logging_attaches_handler_to_envbind_logger():
    handler = setup_logging("debug", "json")
    logger = logging.getLogger("envbind")
    assert handler in logger.handlers
    assert isinstance(handler.formatter, JSONFormatter)
    assert logger.level == logging.DEBUG


def test_setup_logging_text_format():
    handler = setup_logging("WARNING", "text")
    assert not isinstance(handler.formatter, JSONFormatter)
    assert logging.getLogger("envbind").level == logging.WARNING
