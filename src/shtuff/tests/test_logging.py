"""
Test suite for the logging system.
"""

import io
import json
import logging
import sys

import pytest

from ..config.models import AppConfig, ShtuffConfig
from ..utils.logging import (
    JSONFileFormatter, LoggingManager, PerformanceTimer, supports_color
)


@pytest.fixture
def root_logger():
    """Restore the root logger after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestLoggingManager:
    """Test logging setup from configuration."""

    def test_console_handler_uses_given_stream(self, root_logger):
        stream = io.StringIO()
        manager = LoggingManager()
        manager.setup_logging(ShtuffConfig(), verbose=True, stream=stream)

        manager.get_logger("shtuff.test").debug("frame drawn")

        assert root_logger.level == logging.DEBUG
        assert "frame drawn" in stream.getvalue()
        assert "shtuff.test" in stream.getvalue()

    def test_configured_level(self, root_logger):
        config = ShtuffConfig(app=AppConfig(log_level="ERROR"))
        LoggingManager().setup_logging(config, stream=io.StringIO())

        assert root_logger.level == logging.ERROR

    def test_setup_runs_once(self, root_logger):
        manager = LoggingManager()
        manager.setup_logging(ShtuffConfig(), stream=io.StringIO())
        manager.setup_logging(ShtuffConfig(), verbose=True, stream=io.StringIO())

        assert root_logger.level == logging.WARNING

    def test_json_file_handler(self, root_logger, tmp_path):
        log_file = tmp_path / "logs" / "shtuff.log"
        config = ShtuffConfig(app=AppConfig(log_file=str(log_file), log_level="INFO"))
        LoggingManager().setup_logging(config, stream=io.StringIO())

        logging.getLogger("shtuff.test").info("task finished")
        for handler in root_logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "task finished"
        assert entry["level"] == "INFO"
        assert entry["module"] == "shtuff.test"


class TestFormatters:
    """Test log record formatting."""

    def test_json_formatter_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("shtuff", logging.ERROR, __file__, 1,
                                       "failed", None, sys.exc_info())

        entry = json.loads(JSONFileFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]

    def test_supports_color_on_plain_stream(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        assert supports_color(io.StringIO()) is False

    def test_force_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert supports_color(io.StringIO()) is True


class TestPerformanceTimer:
    """Test operation timing."""

    def test_logs_elapsed_time(self, caplog):
        logger = logging.getLogger("shtuff.test.timer")
        caplog.set_level(logging.DEBUG, logger="shtuff.test.timer")

        with PerformanceTimer(logger, "task 42"):
            pass

        assert "Watching task 42" in caplog.messages
        assert caplog.messages[-1].startswith("Finished task 42 after ")

    def test_logs_failure(self, caplog):
        logger = logging.getLogger("shtuff.test.timer")
        caplog.set_level(logging.DEBUG, logger="shtuff.test.timer")

        with pytest.raises(ValueError):
            with PerformanceTimer(logger, "watch"):
                raise ValueError("bad")

        assert caplog.messages[-1].startswith("Aborted watch after ")
