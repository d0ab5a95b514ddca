"""Logging configuration for diffit."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from diffit.ui.console import VERSION, console

LOGGER_NAME = "diffit"


class JSONFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(
    log_file: Path | None = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure the ``diffit`` logger.

    A file handler is attached when ``log_file`` is given (JSON records for a
    ``.json`` suffix, text otherwise). A rich console handler is attached
    when ``verbose`` is set.

    Returns
    -------
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        if log_file.suffix == ".json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.info("diffit v%s - session started", VERSION)
    logger.info("Command: %s", " ".join(sys.argv))
    logger.info("Working directory: %s", Path.cwd())
    return logger


def close_logging() -> None:
    """Close and detach every handler of the ``diffit`` logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.info("diffit session completed")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


__all__ = [
    "JSONFormatter",
    "close_logging",
    "setup_logging",
]
