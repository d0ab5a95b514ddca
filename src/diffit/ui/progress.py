"""Progress bars for batches of curves."""

from __future__ import annotations

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .console import console, icon

__all__ = [
    "create_progress",
]


def _columns(show_item: bool) -> list[ProgressColumn]:
    columns: list[ProgressColumn] = [
        SpinnerColumn(finished_text=f"[success]{icon('check')}[/success]", spinner_name="dots"),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
    ]
    if show_item:
        columns.append(TextColumn("[path]{task.fields[item]}[/path]"))
    columns += [TextColumn("[dim]•[/dim]"), TimeElapsedColumn()]
    return columns


def create_progress(transient: bool = False, show_item: bool = False) -> Progress:
    """Create a progress bar counting curves.

    Args:
        transient: Whether the progress bar should disappear when complete
        show_item: Show the ``item`` task field, e.g. the current file name;
            tasks must then be added with ``item=...``

    Returns
    -------
        Configured Progress instance
    """
    return Progress(*_columns(show_item), console=console, transient=transient)
