"""Terminal user interface: console, logging, tables and progress bars."""

from diffit.ui.console import console, icon, print_error, print_success, print_warning
from diffit.ui.logging import close_logging, setup_logging
from diffit.ui.progress import create_progress
from diffit.ui.reporter import ConsoleReporter
from diffit.ui.tables import create_table, print_peak_results, print_summary

__all__ = [
    "ConsoleReporter",
    "close_logging",
    "console",
    "create_progress",
    "create_table",
    "icon",
    "print_error",
    "print_peak_results",
    "print_success",
    "print_summary",
    "print_warning",
    "setup_logging",
]
