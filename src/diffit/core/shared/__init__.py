"""Shared foundational utilities for diffit."""

from diffit.core.shared.exceptions import (
    ConfigError,
    DataIOError,
    DiffitError,
    OptimizationError,
    StateError,
)
from diffit.core.shared.reporter import LoggingReporter, NullReporter, Reporter

__all__ = [
    "ConfigError",
    "DataIOError",
    "DiffitError",
    "LoggingReporter",
    "NullReporter",
    "OptimizationError",
    "Reporter",
    "StateError",
]
