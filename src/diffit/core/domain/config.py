"""Domain configuration models for diffit."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from diffit.core.constants import (
    DEFAULT_BG_DEGREE,
    LM_FTOL,
    LM_LAMBDA_FACTOR,
    LM_LAMBDA_INIT,
    LM_LAMBDA_MAX,
    LM_MAX_ITERATIONS,
    LM_XTOL,
    MAX_BG_DEGREE,
)

PeakTypeName = Literal["Raw", "Gaussian", "Lorentzian", "PseudoVoigt1", "PseudoVoigt2"]
OutputFormat = Literal["csv", "json", "txt"]
RangePair = tuple[float, float]


def _check_pair(pair: RangePair) -> RangePair:
    lo, hi = pair
    if lo > hi:
        msg = f"Range minimum {lo} exceeds maximum {hi}"
        raise ValueError(msg)
    return pair


class FitConfig(BaseModel):
    """Settings of the Levenberg-Marquardt fitter.

    Example:
        [fitting]
        max_iterations = 300
        ftol = 1e-10
    """

    model_config = ConfigDict(extra="forbid")

    max_iterations: Annotated[int, Field(gt=0)] = Field(
        default=LM_MAX_ITERATIONS,
        description="Maximum LM iterations, rejected steps included.",
    )
    ftol: Annotated[float, Field(ge=0)] = Field(
        default=LM_FTOL,
        description="Stop when the relative chi-squared reduction falls below this.",
    )
    xtol: Annotated[float, Field(ge=0)] = Field(
        default=LM_XTOL,
        description="Stop when the relative step size falls below this.",
    )
    lambda_init: Annotated[float, Field(gt=0)] = Field(
        default=LM_LAMBDA_INIT, description="Initial damping factor."
    )
    lambda_factor: Annotated[float, Field(gt=1)] = Field(
        default=LM_LAMBDA_FACTOR,
        description="Damping multiplier on rejection, divisor on acceptance.",
    )
    lambda_max: Annotated[float, Field(gt=0)] = Field(
        default=LM_LAMBDA_MAX, description="Stop once damping exceeds this."
    )


class BackgroundConfig(BaseModel):
    """Polynomial background fitted over the listed ranges."""

    model_config = ConfigDict(extra="forbid")

    degree: Annotated[int, Field(ge=0, le=MAX_BG_DEGREE)] = Field(
        default=DEFAULT_BG_DEGREE, description="Degree of the background polynomial."
    )
    ranges: list[RangePair] = Field(
        default_factory=list,
        description="Background ranges as [min, max] pairs; empty means a zero background.",
    )

    @field_validator("ranges")
    @classmethod
    def validate_ranges(cls, v: list[RangePair]) -> list[RangePair]:
        return [_check_pair(pair) for pair in v]


class PeakConfig(BaseModel):
    """A single peak: shape, fit window, and optional seed."""

    model_config = ConfigDict(extra="forbid")

    type: PeakTypeName = Field(default="Raw", description="Peak shape tag.")
    range: RangePair = Field(description="Fit window as [min, max].")
    guessed_peak: tuple[float, float] | None = Field(
        default=None, description="Seed peak position and height as [x, y]."
    )
    guessed_fwhm: Annotated[float, Field(gt=0)] | None = Field(
        default=None, description="Seed full width at half maximum."
    )

    @field_validator("range")
    @classmethod
    def validate_range(cls, v: RangePair) -> RangePair:
        return _check_pair(v)


class OutputConfig(BaseModel):
    """Configuration for result and curve files."""

    model_config = ConfigDict(extra="forbid")

    directory: Path = Field(default=Path("Fits"), description="Output directory for results.")
    separator: str = Field(default="\t", min_length=1, description="Column separator.")
    formats: list[OutputFormat] = Field(
        default=["txt", "json"], description="Result file formats to write."
    )


class DiffitConfig(BaseModel):
    """Top-level diffit configuration.

    Example TOML configuration:
        [fitting]
        max_iterations = 300

        [background]
        degree = 1
        ranges = [[10.0, 20.0], [60.0, 70.0]]

        [[peaks]]
        type = "Gaussian"
        range = [35.0, 45.0]

        [output]
        directory = "Fits"
        formats = ["txt", "json"]
    """

    model_config = ConfigDict(extra="forbid")

    fitting: FitConfig = Field(default_factory=FitConfig)
    background: BackgroundConfig = Field(default_factory=BackgroundConfig)
    peaks: list[PeakConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @model_validator(mode="after")
    def validate_formats(self) -> "DiffitConfig":
        if len(set(self.output.formats)) != len(self.output.formats):
            msg = "Duplicate output formats"
            raise ValueError(msg)
        return self
