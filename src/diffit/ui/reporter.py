"""Console-based reporter implementation using Rich."""

from __future__ import annotations

from diffit.core.shared.reporter import Reporter
from diffit.ui.console import console, icon, print_error, print_success, print_warning


class ConsoleReporter:
    """Reporter writing styled status lines to the shared console.

    Example:
        >>> reporter = ConsoleReporter()
        >>> reporter.action("Fitting 3 curves...")
        >>> reporter.success("Fitted 3 curves")
    """

    def action(self, message: str) -> None:
        console.print(f"[header]{icon('info')} {message}[/header]")

    def info(self, message: str) -> None:
        console.print(f"[info]{message}[/info]")

    def warning(self, message: str) -> None:
        print_warning(message)

    def error(self, message: str) -> None:
        print_error(message)

    def success(self, message: str) -> None:
        print_success(message)


# Verify protocol compliance at import time
if not isinstance(ConsoleReporter(), Reporter):
    raise TypeError("ConsoleReporter must satisfy Reporter protocol")
