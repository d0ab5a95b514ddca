"""Per-peak result tables in text, CSV and JSON formats."""

from __future__ import annotations

import csv
import json
import logging
import math
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from diffit.core.shared.exceptions import DataIOError

if TYPE_CHECKING:
    from pathlib import Path

    from diffit.services.fit import CurveFitResult

logger = logging.getLogger(__name__)

RESULT_STEM = "peaks"

COLUMNS = (
    "curve",
    "peak",
    "type",
    "center",
    "center_error",
    "intensity",
    "intensity_error",
    "fwhm",
    "fwhm_error",
    "raw_intensity",
    "raw_center",
    "raw_fwhm",
    "success",
    "iterations",
    "redchi",
)


def _rows(results: Iterable[CurveFitResult]) -> list[dict[str, Any]]:
    return [
        {"curve": result.curve_index, **peak.as_dict()}
        for result in results
        for peak in result.peaks
    ]


def format_float(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, float):
        return str(value)
    return f"{value:.8g}"


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _write_delimited(rows: list[dict[str, Any]], path: Path, delimiter: str) -> None:
    with path.open("w", newline="") as f:
        writer = csv.writer(f, delimiter=delimiter)
        writer.writerow(COLUMNS)
        for row in rows:
            writer.writerow([format_float(row[col]) for col in COLUMNS])


def _write_json(rows: list[dict[str, Any]], path: Path) -> None:
    data = {"columns": list(COLUMNS), "peaks": [{k: _json_safe(v) for k, v in row.items()} for row in rows]}
    with path.open("w") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def write_results(
    results: Sequence[CurveFitResult],
    directory: Path,
    formats: Iterable[str] = ("txt", "json"),
    separator: str = "\t",
) -> list[Path]:
    """Write one row per fitted peak and curve in every requested format.

    Args:
        results: Curve results from the fit service
        directory: Output directory, created if missing
        formats: Any of ``txt`` (``separator``-delimited), ``csv`` and ``json``
        separator: Column separator of the ``txt`` table

    Returns
    -------
        Paths of the files written

    Raises
    ------
        DataIOError: If a file cannot be written
    """
    rows = _rows(results)
    written: list[Path] = []
    try:
        directory.mkdir(parents=True, exist_ok=True)
        for fmt in formats:
            path = directory / f"{RESULT_STEM}.{fmt}"
            if fmt == "txt":
                _write_delimited(rows, path, separator)
            elif fmt == "csv":
                _write_delimited(rows, path, ",")
            elif fmt == "json":
                _write_json(rows, path)
            else:
                msg = f"Unknown result format: {fmt}"
                raise ValueError(msg)
            written.append(path)
    except OSError as exc:
        msg = f"Cannot write results to {directory}: {exc}"
        raise DataIOError(msg) from exc

    logger.info("Wrote %d peak row(s) to %s", len(rows), directory)
    return written
