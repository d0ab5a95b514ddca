"""Exception taxonomy for diffit.

A small hierarchy of exceptions so that callers can tell configuration
problems, file problems and caller bugs apart.
"""

from __future__ import annotations


class DiffitError(Exception):
    """Base class for all diffit-specific exceptions."""


class ConfigError(DiffitError):
    """Malformed configuration or persisted object (missing key, unknown type tag)."""


class DataIOError(DiffitError):
    """Data loading/saving errors (files, formats, permissions)."""


class OptimizationError(DiffitError):
    """Fitter misuse, such as a parameter vector of the wrong length."""


class StateError(DiffitError):
    """Operation invoked on an object in a state that forbids it (a caller bug)."""


__all__ = [
    "ConfigError",
    "DataIOError",
    "DiffitError",
    "OptimizationError",
    "StateError",
]
