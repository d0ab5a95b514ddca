"""Console configuration and theme for diffit UI.

This module provides the central console instance and theme used throughout
the command line interface.
"""

import os
import sys

from rich.console import Console
from rich.theme import Theme

from diffit import __version__

DIFFIT_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "neutral": "dim white",
        "header": "bold cyan",
        # --- Fit tables ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "number": "green",
        "peak.type": "bold magenta",
        "fit.ok": "green",
        "fit.failed": "bold yellow",
        "path": "blue underline",
        # --- Progress ---
        "progress.description": "bold white",
        "progress.percentage": "green",
        "progress.elapsed": "dim white",
    }
)

# Single console instance for entire application
console = Console(theme=DIFFIT_THEME, record=True)

VERSION = __version__

_EMOJI_DISABLED = os.getenv("DIFFIT_NO_EMOJI", "").lower() in {"1", "true", "yes"}


def _supports_emoji() -> bool:
    if _EMOJI_DISABLED:
        return False
    enc = getattr(console, "encoding", None) or sys.getdefaultencoding()
    return enc is None or "utf" in enc.lower()


def icon(name: str) -> str:
    """Return a status icon, falling back to ASCII on limited terminals.

    Names: check, warn, error, info, bullet
    """
    use_emoji = _supports_emoji()
    mapping = {
        "check": "✓" if use_emoji else "+",
        "warn": "⚠" if use_emoji else "!",
        "error": "✗" if use_emoji else "x",
        "info": "▸" if use_emoji else ">",
        "bullet": "‣" if use_emoji else "-",
    }
    return mapping.get(name, mapping["bullet"])


def print_success(message: str) -> None:
    console.print(f"[success]{icon('check')}[/success] {message}")


def print_warning(message: str) -> None:
    console.print(f"[warning]{icon('warn')}[/warning] {message}")


def print_error(message: str) -> None:
    console.print(f"[error]{icon('error')}[/error] {message}")


__all__ = [
    "DIFFIT_THEME",
    "VERSION",
    "console",
    "icon",
    "print_error",
    "print_success",
    "print_warning",
]
