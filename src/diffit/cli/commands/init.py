"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from diffit.io.config import generate_default_config
from diffit.ui import console, print_error, print_success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for new configuration file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("diffit.toml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
) -> None:
    """Generate a default configuration file.

    Examples
    --------
      Create default config:
        $ diffit init

      Overwrite an existing config:
        $ diffit init my_fit.toml --force
    """
    if path.exists() and not force:
        print_error(f"File already exists: [path]{path}[/path]")
        console.print("Use [bold]--force[/bold] to overwrite")
        raise typer.Exit(1)

    path.write_text(generate_default_config())
    print_success(f"Created configuration file: [path]{path}[/path]")
    console.print(f"Next: add your peaks, then run [cyan]diffit fit curve.dat --config {path}[/]")
