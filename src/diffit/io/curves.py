"""Reading and writing curves as delimited text tables."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import TextIO

import numpy as np

from diffit.core.domain.curve import Curve
from diffit.core.shared.exceptions import DataIOError

logger = logging.getLogger(__name__)

HEADER_X = "Tth"
HEADER_Y = "Intensity"
PLACEHOLDER = "%d"


def _format_number(value: float) -> str:
    return f"{value:.10g}"


def read_curve(path: Path) -> Curve:
    """Read a two-column curve file, sorting the samples by x.

    Lines starting with ``#`` are comments. Files written by ``write_curve``
    are accepted too: everything up to the column header is skipped.
    Comma-separated files are recognized by a ``.csv`` suffix.

    Raises
    ------
        DataIOError: If the file cannot be read or has fewer than two columns
    """
    try:
        lines = path.read_text().splitlines()
    except OSError as exc:
        msg = f"Cannot read curve file {path}: {exc}"
        raise DataIOError(msg) from exc

    skip = 0
    for i, line in enumerate(lines):
        if line.strip().startswith(HEADER_X):
            skip = i + 1
            break

    delimiter = "," if path.suffix.lower() == ".csv" else None
    try:
        data = np.loadtxt(lines[skip:], comments="#", delimiter=delimiter, ndmin=2)
    except ValueError as exc:
        msg = f"Cannot parse curve file {path}: {exc}"
        raise DataIOError(msg) from exc

    if data.size == 0:
        return Curve()
    if data.shape[1] < 2:
        msg = f"Curve file {path} needs two columns, found {data.shape[1]}"
        raise DataIOError(msg)

    order = np.argsort(data[:, 0], kind="stable")
    curve = Curve.from_arrays(data[order, 0], data[order, 1])
    logger.debug("Read %d samples from %s", curve.count(), path)
    return curve


def write_curve(
    stream: TextIO,
    curve: Curve,
    separator: str = "\t",
    header: Mapping[str, object] | None = None,
) -> None:
    """Write ``key: value`` header lines followed by the x/y table."""
    for key, value in (header or {}).items():
        stream.write(f"{key}: {value}\n")
    stream.write(f"{HEADER_X}{separator}{HEADER_Y}\n")
    for x, y in curve:
        stream.write(f"{_format_number(x)}{separator}{_format_number(y)}\n")


def numbered_name(template: str, num: int, max_num: int) -> str:
    """Replace ``%d`` in ``template`` with ``num``, zero-padded.

    The width is the number of decimal digits of ``max_num``.

    Raises
    ------
        ValueError: If the template has no ``%d`` placeholder
    """
    if PLACEHOLDER not in template:
        msg = f"Path does not contain placeholder {PLACEHOLDER}: {template}"
        raise ValueError(msg)
    digits = int(math.log10(max_num)) + 1 if max_num > 0 else 1
    return template.replace(PLACEHOLDER, f"{num:0{digits}d}")


def numbered_template(path: Path) -> str:
    """Turn ``out.dat`` into ``out.%d.dat`` unless a placeholder is present."""
    text = str(path)
    if PLACEHOLDER in text:
        return text
    return str(path.with_name(f"{path.stem}.{PLACEHOLDER}{path.suffix}"))


def export_curves(
    curves: Sequence[Curve],
    path: Path,
    *,
    one_file: bool = True,
    separator: str = "\t",
    step: Callable[[], None] | None = None,
) -> list[Path]:
    """Export curves to one sectioned file or to numbered files.

    In one-file mode every curve is preceded by a ``Picture Nr`` line.
    Otherwise ``path`` is used as a template (see ``numbered_template``) and
    curves are numbered from 1.

    Args:
        curves: Curves to write
        path: Output file, or numbered-file template
        one_file: Write a single file instead of one file per curve
        separator: Column separator
        step: Called once per written curve

    Returns
    -------
        Paths of the files written

    Raises
    ------
        DataIOError: If a file cannot be written
    """
    written: list[Path] = []
    try:
        if one_file:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w") as stream:
                for num, curve in enumerate(curves, start=1):
                    write_curve(stream, curve, separator, {"Picture Nr": num})
                    if step is not None:
                        step()
            written.append(path)
        else:
            template = numbered_template(path)
            max_num = len(curves) + 1
            for num, curve in enumerate(curves, start=1):
                target = Path(numbered_name(template, num, max_num))
                target.parent.mkdir(parents=True, exist_ok=True)
                with target.open("w") as stream:
                    write_curve(stream, curve, separator, {"Picture Nr": num})
                written.append(target)
                if step is not None:
                    step()
    except OSError as exc:
        msg = f"Cannot write curves to {path}: {exc}"
        raise DataIOError(msg) from exc

    logger.info("Exported %d curve(s) to %d file(s)", len(curves), len(written))
    return written
