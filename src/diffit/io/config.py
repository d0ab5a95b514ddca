"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from diffit.core.domain.config import DiffitConfig
from diffit.core.shared.exceptions import ConfigError


def load_config(path: Path) -> DiffitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        DiffitConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file is not valid TOML or fails validation.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
        return DiffitConfig.model_validate(data)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    except ValidationError as exc:
        msg = f"Invalid configuration in {path}:\n{exc}"
        raise ConfigError(msg) from exc


def save_config(config: DiffitConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# diffit configuration file
# Generated automatically - edit as needed

[fitting]
max_iterations = 300
ftol = 1e-10
xtol = 1e-10
lambda_init = 1e-3
lambda_factor = 10.0
lambda_max = 1e16

[background]
degree = 1  # 0..10
ranges = []  # e.g. [[10.0, 20.0], [60.0, 70.0]]

# One table per peak; type is Raw, Gaussian, Lorentzian, PseudoVoigt1 or PseudoVoigt2
# [[peaks]]
# type = "Gaussian"
# range = [35.0, 45.0]
# guessed_peak = [40.0, 1000.0]  # optional [x, y]
# guessed_fwhm = 1.5             # optional

[output]
directory = "Fits"
separator = "\\t"
formats = ["txt", "json"]
"""
