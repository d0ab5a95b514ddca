"""Fit configuration for one curve: background model and peak list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from diffit.core.constants import DEFAULT_BG_DEGREE
from diffit.core.domain.curve import XY
from diffit.core.domain.range import Range, Ranges
from diffit.core.lineshapes import PeakFunction, function_from_json, make_function
from diffit.core.shared.exceptions import ConfigError

if TYPE_CHECKING:
    from diffit.core.domain.config import DiffitConfig, PeakConfig


@dataclass
class PeakSetup:
    """One peak: its fit window and the shape prototype fitted there."""

    range: Range
    prototype: PeakFunction

    def __post_init__(self) -> None:
        self.prototype.set_range(self.range)

    @property
    def type_tag(self) -> str:
        return self.prototype.type_tag

    @classmethod
    def create(cls, type_tag: str, rge: Range) -> PeakSetup:
        function = make_function(type_tag)
        if not isinstance(function, PeakFunction):
            msg = f"'{type_tag}' is not a peak function type"
            raise ConfigError(msg)
        return cls(rge, function)

    @classmethod
    def from_config(cls, cfg: PeakConfig) -> PeakSetup:
        peak = cls.create(cfg.type, Range.safe_from(*cfg.range))
        if cfg.guessed_peak is not None:
            peak.prototype.set_guessed_peak(XY(*cfg.guessed_peak))
        if cfg.guessed_fwhm is not None:
            peak.prototype.set_guessed_fwhm(cfg.guessed_fwhm)
        return peak

    def to_json(self) -> dict[str, Any]:
        return {"range": self.range.to_json(), "function": self.prototype.to_json()}

    @classmethod
    def from_json(cls, obj: Any) -> PeakSetup:
        if not isinstance(obj, dict) or "range" not in obj or "function" not in obj:
            msg = f"Invalid peak object: {obj!r}"
            raise ConfigError(msg)
        function = function_from_json(obj["function"])
        if not isinstance(function, PeakFunction):
            msg = f"'{function.type_tag}' is not a peak function type"
            raise ConfigError(msg)
        return cls(Range.from_json(obj["range"]), function)


@dataclass
class FitSetup:
    """Background ranges and degree, plus the peaks to fit."""

    bg_ranges: Ranges = field(default_factory=Ranges)
    bg_degree: int = DEFAULT_BG_DEGREE
    peaks: list[PeakSetup] = field(default_factory=list)

    def add_peak(self, type_tag: str, rge: Range) -> PeakSetup:
        peak = PeakSetup.create(type_tag, rge)
        self.peaks.append(peak)
        return peak

    @classmethod
    def from_config(cls, config: DiffitConfig) -> FitSetup:
        bg = config.background
        return cls(
            bg_ranges=Ranges([Range.safe_from(lo, hi) for lo, hi in bg.ranges]),
            bg_degree=bg.degree,
            peaks=[PeakSetup.from_config(peak) for peak in config.peaks],
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "background degree": self.bg_degree,
            "background ranges": self.bg_ranges.to_json(),
            "peaks": [peak.to_json() for peak in self.peaks],
        }

    @classmethod
    def from_json(cls, obj: Any) -> FitSetup:
        if not isinstance(obj, dict):
            msg = f"Setup object must be a mapping, got {type(obj).__name__}"
            raise ConfigError(msg)
        try:
            degree = int(obj.get("background degree", DEFAULT_BG_DEGREE))
        except (TypeError, ValueError) as exc:
            msg = "Invalid 'background degree'"
            raise ConfigError(msg) from exc
        if degree < 0:
            msg = f"Background degree must be non-negative, got {degree}"
            raise ConfigError(msg)
        peaks = obj.get("peaks", [])
        if not isinstance(peaks, list):
            msg = "'peaks' must be a list"
            raise ConfigError(msg)
        return cls(
            bg_ranges=Ranges.from_json(obj.get("background ranges", [])),
            bg_degree=degree,
            peaks=[PeakSetup.from_json(peak) for peak in peaks],
        )
