"""Main Typer application for diffit.

Creates the application and registers the commands implemented in the
``commands`` subpackage.
"""

from typing import Annotated

import typer

from diffit.cli.callbacks import version_callback
from diffit.cli.commands import export_command, fit_command, init_command

app = typer.Typer(
    name="diffit",
    help="diffit - Background and peak fitting for 1D diffraction curves",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """diffit - Background and peak fitting for 1D diffraction curves.

    Fits a polynomial background and independent peak shapes to measured
    diffractograms, and exports curves as text tables.
    """


app.command(name="fit")(fit_command)
app.command(name="init")(init_command)
app.command(name="export")(export_command)
