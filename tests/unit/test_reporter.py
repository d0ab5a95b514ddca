"""Tests for reporters and logging setup."""

import json
import logging

import pytest

from diffit.core.shared.reporter import LoggingReporter, NullReporter, Reporter
from diffit.ui import ConsoleReporter, close_logging, setup_logging


class TestReporterProtocol:
    """Tests for Reporter protocol compliance."""

    @pytest.mark.parametrize("reporter_class", [NullReporter, LoggingReporter, ConsoleReporter])
    def test_satisfies_protocol(self, reporter_class) -> None:
        assert isinstance(reporter_class(), Reporter)


class TestLoggingReporter:
    """Tests for LoggingReporter."""

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        """Warnings and errors keep their level; actions are INFO."""
        reporter = LoggingReporter("diffit.test")
        with caplog.at_level(logging.INFO, logger="diffit.test"):
            reporter.action("fitting")
            reporter.warning("empty range")
            reporter.error("failed")
        levels = [r.levelno for r in caplog.records]
        assert levels == [logging.INFO, logging.WARNING, logging.ERROR]
        assert "[ACTION] fitting" in caplog.text


class TestSetupLogging:
    """Tests for the package logger configuration."""

    def test_json_log_file(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "run.json"
        logger = setup_logging(log_file)
        logging.getLogger("diffit.core.test").info("hello %s", "world")
        close_logging()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert any(r["message"] == "hello world" for r in records)
        assert not logger.handlers

    def test_text_log_file(self, tmp_path) -> None:
        log_file = tmp_path / "run.log"
        setup_logging(log_file, level=logging.DEBUG)
        logging.getLogger("diffit").debug("detail")
        close_logging()
        assert "| DEBUG | diffit | detail" in log_file.read_text()

    def test_silent_without_handlers(self) -> None:
        logger = setup_logging()
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.NullHandler)
        close_logging()
