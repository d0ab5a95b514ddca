"""Fit command implementation."""

from __future__ import annotations

import logging
import pathlib  # noqa: TC003
from typing import Annotated, cast, get_args

import typer

from diffit.core.domain.config import DiffitConfig, OutputFormat
from diffit.core.domain.setup import FitSetup
from diffit.core.shared.exceptions import DiffitError
from diffit.io.config import load_config
from diffit.io.curves import read_curve
from diffit.io.results import write_results
from diffit.io.session import save_setup
from diffit.services.fit import FitService
from diffit.ui import (
    ConsoleReporter,
    close_logging,
    create_progress,
    print_error,
    print_peak_results,
    print_success,
    print_summary,
    print_warning,
    setup_logging,
)

VALID_OUTPUT_FORMATS = get_args(OutputFormat)  # ("csv", "json", "txt")

SETUP_FILENAME = "setup.json"


def fit_command(
    curves: Annotated[
        list[pathlib.Path],
        typer.Argument(
            help="Curve files to fit (two columns: x, y)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    config: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to TOML configuration file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for results",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    degree: Annotated[
        int | None,
        typer.Option(
            "--degree",
            "-d",
            help="Background polynomial degree (overrides the config)",
            min=0,
            max=10,
        ),
    ] = None,
    formats: Annotated[
        list[str] | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format(s): txt, csv, json. Can be specified multiple times.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show log messages on the console",
        ),
    ] = False,
    log_file: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--log-file",
            help="Write a log file (JSON records for a .json suffix)",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Fit background and peaks of one or more curves.

    The background polynomial is fitted over the configured background
    ranges and subtracted; each peak is then fitted over its own range.

    Examples
    --------
    Using a configuration file:
        $ diffit fit scan_*.dat --config diffit.toml

    Background only, quadratic:
        $ diffit fit scan.dat --degree 2 --output results
    """
    if formats:
        invalid = [f for f in formats if f not in VALID_OUTPUT_FORMATS]
        if invalid:
            msg = f"Invalid format(s): {', '.join(invalid)}. Valid formats: {', '.join(VALID_OUTPUT_FORMATS)}"
            raise typer.BadParameter(msg)

    setup_logging(log_file, verbose, logging.DEBUG if verbose else logging.INFO)
    try:
        fit_config = load_config(config) if config is not None else DiffitConfig()
        if output is not None:
            fit_config.output.directory = output
        if degree is not None:
            fit_config.background.degree = degree
        if formats:
            fit_config.output.formats = cast("list[OutputFormat]", list(dict.fromkeys(formats)))

        setup = FitSetup.from_config(fit_config)
        if not setup.peaks:
            print_warning("No peaks configured; only the background will be fitted")

        loaded = [read_curve(path) for path in curves]
        service = FitService(reporter=ConsoleReporter(), config=fit_config.fitting)
        with create_progress(show_item=True) as progress:
            task = progress.add_task("Fitting curves", total=len(loaded), item="")
            results = service.fit_curves(
                loaded,
                setup,
                progress=lambda done, _total: progress.update(
                    task, completed=done, item=curves[done - 1].name
                ),
            )

        if setup.peaks:
            print_peak_results(results)

        out_dir = fit_config.output.directory
        written = write_results(
            results, out_dir, fit_config.output.formats, fit_config.output.separator
        )
        save_setup(setup, out_dir / SETUP_FILENAME)
    except (DiffitError, FileNotFoundError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    finally:
        close_logging()

    print_summary(
        {
            "Curves": len(results),
            "Peaks per curve": len(setup.peaks),
            "Background degree": setup.bg_degree,
            "Output": out_dir,
        }
    )
    print_success(f"Wrote {len(written) + 1} file(s) to [path]{out_dir}[/path]")
