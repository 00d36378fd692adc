"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from shapekit.config.logging import configure_from_config, configure_logging
from shapekit.config.models import LoggingConfig

pytestmark = pytest.mark.usefixtures("restore_logging")


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("shapekit").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("shapekit").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=False, stream=stream)
        structlog.get_logger("shapekit.test").warning("hello world", key="val")
        output = stream.getvalue()
        assert "hello world" in output
        assert "key" in output

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("shapekit.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "shapekit.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)

        logging.getLogger("shapekit.services.toolkit").debug("plain stdlib record")

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "plain stdlib record"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "shapekit.services.toolkit"

    def test_debug_suppressed_when_not_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        structlog.get_logger("shapekit.test").debug("noise")
        assert stream.getvalue() == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestConfigureFromConfig:
    def test_applies_section(self) -> None:
        stream = io.StringIO()
        configure_from_config(LoggingConfig(verbose=True, log_json=True), stream=stream)
        assert logging.getLogger("shapekit").level == logging.DEBUG
        structlog.get_logger("shapekit.test").info("from config")
        assert json.loads(stream.getvalue().strip())["event"] == "from config"
