"""CLI command modules for diffit.

Each module exports one command function carrying its Typer annotations;
``diffit.cli.app`` registers them.
"""

from diffit.cli.commands.export import export_command
from diffit.cli.commands.fit import fit_command
from diffit.cli.commands.init import init_command

__all__ = [
    "export_command",
    "fit_command",
    "init_command",
]
