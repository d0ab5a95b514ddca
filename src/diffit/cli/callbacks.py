"""Typer callbacks for CLI."""

import typer

from diffit.ui.console import VERSION, console


def version_callback(value: bool | None) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"[header]diffit[/header] [dim]v{VERSION}[/dim]")
        raise typer.Exit
