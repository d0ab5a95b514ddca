"""File input and output: configuration, curves, sessions and results."""

from diffit.io.config import generate_default_config, load_config, save_config
from diffit.io.curves import export_curves, numbered_name, read_curve, write_curve
from diffit.io.results import write_results
from diffit.io.session import load_function, load_setup, save_function, save_setup

__all__ = [
    "export_curves",
    "generate_default_config",
    "load_config",
    "load_function",
    "load_setup",
    "numbered_name",
    "read_curve",
    "save_config",
    "save_function",
    "save_setup",
    "write_curve",
    "write_results",
]
