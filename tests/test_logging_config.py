"""Tests for logging configuration."""
import json
import logging

import pytest

from imagesearch.core.logging_config import RequestIDFilter, configure_logging
from imagesearch.middleware.request_id import request_id_var


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_json_format(self, restore_root_logger, capsys):
        configure_logging(log_format="json", log_level="INFO")
        token = request_id_var.set("req-1")
        try:
            logging.getLogger("imagesearch.test").info("parsed %d images", 3)
        finally:
            request_id_var.reset(token)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["message"] == "parsed 3 images"
        assert record["level"] == "INFO"
        assert record["logger"] == "imagesearch.test"
        assert record["request_id"] == "req-1"

    def test_text_format_and_level(self, restore_root_logger, capsys):
        configure_logging(log_format="text", log_level="warning")
        log = logging.getLogger("imagesearch.test")
        log.info("hidden")
        log.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "WARNING imagesearch.test [] shown" in out


class TestRequestIDFilter:
    def test_empty_outside_request(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestIDFilter().filter(record) is True
        assert record.request_id == ""
