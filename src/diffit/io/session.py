"""JSON persistence of fit functions and fit setups."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from diffit.core.domain.setup import FitSetup
from diffit.core.fitting.functions import Function
from diffit.core.lineshapes import function_from_json
from diffit.core.shared.exceptions import ConfigError, DataIOError


def _encode_specials(obj: Any) -> Any:
    """Replace non-finite floats, which strict JSON cannot hold, with strings."""
    if isinstance(obj, dict):
        return {k: _encode_specials(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_encode_specials(v) for v in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        return {"nan": "NaN", "inf": "Infinity", "-inf": "-Infinity"}[str(obj)]
    return obj


def _restore_specials(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _restore_specials(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_restore_specials(v) for v in obj]
    if isinstance(obj, str) and obj in ("NaN", "Infinity", "-Infinity"):
        return float(obj)
    return obj


def _write_json(data: dict[str, Any], path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(_encode_specials(data), indent=2, allow_nan=False))
    except OSError as exc:
        msg = f"Cannot write {path}: {exc}"
        raise DataIOError(msg) from exc


def _read_json(path: Path) -> Any:
    try:
        return _restore_specials(json.loads(path.read_text()))
    except OSError as exc:
        msg = f"Cannot read {path}: {exc}"
        raise DataIOError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ConfigError(msg) from exc


def save_function(function: Function, path: Path) -> None:
    """Write a function, with its parameters and type tag, as JSON.

    Infinite range bounds are stored as the strings ``"Infinity"`` and
    ``"-Infinity"`` so the file stays strict JSON.
    """
    _write_json(function.to_json(), path)


def load_function(path: Path) -> Function:
    """Rebuild a function saved by ``save_function``."""
    return function_from_json(_read_json(path))


def save_setup(setup: FitSetup, path: Path) -> None:
    """Write background ranges, degree and peaks as JSON."""
    _write_json(setup.to_json(), path)


def load_setup(path: Path) -> FitSetup:
    """Rebuild a setup saved by ``save_setup``."""
    return FitSetup.from_json(_read_json(path))
