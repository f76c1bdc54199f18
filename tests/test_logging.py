"""
Tests for Logging Helpers
"""

import io
import json
import logging

import pytest

from utils.logging import ColoredFormatter, JSONFormatter, log_storage_call, setup_logging


@pytest.fixture
def storage_stream():
    """Capture the storage logger through a JSONFormatter."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger("storage")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield stream
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


class TestJSONFormatter:

    def test_successful_call_is_json(self, storage_stream):
        log_storage_call("search.exact", True, duration_ms=12.5)

        data = json.loads(storage_stream.getvalue().strip())

        assert data["level"] == "DEBUG"
        assert data["logger"] == "storage"
        assert data["storage"] == {
            "operation": "search.exact",
            "success": True,
            "duration_ms": 12.5,
        }

    def test_failed_call_carries_error(self, storage_stream):
        log_storage_call("seed", False, error="disk I/O error")

        data = json.loads(storage_stream.getvalue().strip())

        assert data["level"] == "ERROR"
        assert data["storage"]["success"] is False
        assert data["storage"]["error"] == "disk I/O error"
        assert "disk I/O error" in data["message"]

    def test_plain_record_has_no_storage_block(self):
        record = logging.LogRecord("verbs", logging.INFO, __file__, 1, "Seeded %d verbs", (22,), None)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Seeded 22 verbs"
        assert "storage" not in data


class TestSetupLogging:

    def test_json_output(self, restore_root_logger):
        setup_logging("WARNING", json_format=True)

        handler = restore_root_logger.handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)
        assert restore_root_logger.level == logging.WARNING

    def test_colored_output(self, restore_root_logger):
        setup_logging("debug", json_format=False)

        assert isinstance(restore_root_logger.handlers[0].formatter, ColoredFormatter)
        assert restore_root_logger.level == logging.DEBUG
