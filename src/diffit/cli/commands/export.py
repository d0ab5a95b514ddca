"""Export command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
from typing import Annotated

import typer

from diffit.core.shared.exceptions import DiffitError
from diffit.io.curves import export_curves, read_curve
from diffit.ui import create_progress, print_error, print_success


def export_command(
    curves: Annotated[
        list[pathlib.Path],
        typer.Argument(
            help="Curve files to export (two columns: x, y)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        pathlib.Path,
        typer.Option(
            "--output",
            "-o",
            help="Output file; with --numbered, a template where %d is the curve number",
            dir_okay=False,
        ),
    ],
    one_file: Annotated[
        bool,
        typer.Option(
            "--one-file/--numbered",
            help="Write all curves to one file, or each to its own numbered file",
        ),
    ] = True,
    separator: Annotated[
        str,
        typer.Option(
            "--separator",
            "-s",
            help="Column separator (default: tab)",
        ),
    ] = "\t",
) -> None:
    """Export curves as text tables.

    Examples
    --------
      All curves in one file:
        $ diffit export a.dat b.dat -o all.txt

      One file per curve (all.1.txt, all.2.txt, ...):
        $ diffit export a.dat b.dat -o all.txt --numbered
    """
    try:
        loaded = [read_curve(path) for path in curves]
        with create_progress(transient=True) as progress:
            task = progress.add_task("Exporting curves", total=len(loaded))
            written = export_curves(
                loaded,
                output,
                one_file=one_file,
                separator=separator,
                step=lambda: progress.advance(task),
            )
    except (DiffitError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Exported {len(loaded)} curve(s) to {len(written)} file(s)")
