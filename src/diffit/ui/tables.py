"""UI tables for displaying fit results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.table import Table

from .console import console

if TYPE_CHECKING:
    from collections.abc import Sequence

    from diffit.services.fit import CurveFitResult

__all__ = [
    "create_table",
    "print_peak_results",
    "print_summary",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header

    Returns
    -------
        Configured Table instance
    """
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def _value_error(value: float, error: float) -> str:
    return f"{value:.6g} ± {error:.2g}"


def print_peak_results(results: Sequence[CurveFitResult], title: str = "Peak fits") -> None:
    """Print one row per fitted peak and curve."""
    table = create_table(title)
    table.add_column("Curve", justify="right")
    table.add_column("Peak", justify="right")
    table.add_column("Type", style="peak.type")
    table.add_column("Center", style="number", justify="right")
    table.add_column("Intensity", style="number", justify="right")
    table.add_column("FWHM", style="number", justify="right")
    table.add_column("Status", justify="center")

    for result in results:
        for peak in result.peaks:
            if peak.report.success:
                status = "[fit.ok]ok[/fit.ok]"
            else:
                status = f"[fit.failed]{peak.report.message}[/fit.failed]"
            table.add_row(
                str(result.curve_index + 1),
                str(peak.index + 1),
                peak.type,
                _value_error(peak.center, peak.center_error),
                _value_error(peak.intensity, peak.intensity_error),
                _value_error(peak.fwhm, peak.fwhm_error),
                status,
            )

    console.print(table)
