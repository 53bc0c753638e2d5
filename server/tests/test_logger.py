"""
Tests for the JSON log formatter.
"""

import json
import logging

from driving_school.logger import JsonFormatter, get_logger, setup_logger


def make_record(message, **extra):
    record = logging.LogRecord("driving_school.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_json_line_with_extra_fields():
    line = JsonFormatter().format(make_record("Lesson created", record_id=3, collection="lessons"))

    payload = json.loads(line)
    assert payload["level"] == "INFO"
    assert payload["message"] == "Lesson created"
    assert payload["record_id"] == 3
    assert payload["collection"] == "lessons"
    assert "timestamp" in payload


def test_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError as exc:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, (type(exc), exc, exc.__traceback__))

    payload = json.loads(JsonFormatter().format(record))
    assert payload["error"] == "boom"
    assert "RuntimeError" in payload["traceback"]


def test_setup_does_not_duplicate_handlers():
    logger = setup_logger("driving_school.test_setup", level="debug")
    setup_logger("driving_school.test_setup", level="info")

    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_get_logger_nests_under_application():
    assert get_logger("routes").name == "driving_school.routes"
    assert get_logger("driving_school.storage").name == "driving_school.storage"
    assert get_logger().name == "driving_school"
