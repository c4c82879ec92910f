# tests/unit/logging/test_logger.py - v2
"""Tests for logging/logger.py - logger factory and formatters."""

from __future__ import annotations

import io
import json
import logging

from eventlocator.logging.context import clear_context, set_resolution_context, set_step_context
from eventlocator.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_resolution_context("fp123", request_id="req1")
        set_step_context("geocode")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"] == {"request_id": "req1", "fingerprint": "fp123", "step": "geocode"}

    def test_format_with_data(self):
        parsed = json.loads(JsonFormatter().format(_record(data={"tier": "notes"})))
        assert parsed["data"] == {"tier": "notes"}


class TestTextFormatter:
    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_includes_request_and_step(self):
        set_resolution_context("fp", request_id="abc123")
        set_step_context("extraction")
        output = TextFormatter().format(_record())
        assert "[abc123]" in output
        assert "(extraction)" in output


class TestGetLogger:
    def test_returns_logger(self):
        assert get_logger("test_module").name == "eventlocator.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        stream = io.StringIO()
        root = setup_logging(level="DEBUG", log_format="json", stream=stream)
        assert root is logging.getLogger("eventlocator")
        assert root.level == logging.DEBUG
        logging.getLogger("eventlocator.some.module").debug("captured")
        assert json.loads(stream.getvalue().strip())["message"] == "captured"

    def test_setup_text(self):
        root = setup_logging(level="INFO", log_format="text")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_replaces_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("eventlocator").handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        root = setup_logging(log_file=log_file, rotation="1MB", retention=2)
        assert len(root.handlers) == 2
        assert log_file.parent.exists()
        for handler in root.handlers[1:]:
            handler.close()
        root.handlers.clear()

    def test_from_settings(self, settings):
        root = setup_logging_from_settings(settings)
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
