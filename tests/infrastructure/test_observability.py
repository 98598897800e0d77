"""Structured Logging — JSON formatter fields and idempotent setup."""

import json
import logging

from hackerclone.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "hackerclone.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "hackerclone.test"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(username="alice", post_id=3, password="secret1"),
    ))
    assert payload["username"] == "alice"
    assert payload["post_id"] == 3
    assert "password" not in payload


def test_setup_logging_does_not_stack_handlers():
    before = len(logging.root.handlers)
    level = logging.root.level
    setup_logging("DEBUG", "text")
    setup_logging("INFO", "json")
    try:
        assert len(logging.root.handlers) == before + 1
        assert logging.root.level == logging.INFO
    finally:
        for h in [h for h in logging.root.handlers if h.get_name() == "hackerclone"]:
            logging.root.removeHandler(h)
        logging.root.setLevel(level)
