"""Fit parameters with value ranges and step/error thresholds."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from diffit.core.domain.range import Range
from diffit.core.shared.exceptions import ConfigError

# JSON keys of the optional thresholds, paired with the model field they load into
_THRESHOLD_KEYS: dict[str, str] = {
    "maxDelta": "max_delta",
    "maxDeltaPercent": "max_delta_percent",
    "maxError": "max_error",
    "maxErrorPercent": "max_error_percent",
}


class Parameter(BaseModel):
    """Single fit parameter.

    The valid range is stored as ``min``/``max``; NaN bounds make the range
    invalid, in which case ``value_range()`` degenerates to the current
    value. Thresholds are NaN when unset.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    value: float = 0.0
    error: float = 0.0
    min: float = -math.inf
    max: float = math.inf
    max_delta: float = math.nan
    max_delta_percent: float = math.nan
    max_error: float = math.nan
    max_error_percent: float = math.nan

    @property
    def range(self) -> Range:
        return Range(self.min, self.max)

    def value_range(self) -> Range:
        """Allowed values: the range if valid, else the current value alone."""
        rge = self.range
        return rge if rge.is_valid() else Range.point(self.value)

    def set_value_range(self, lo: float, hi: float) -> None:
        self.min = lo
        self.max = hi

    def set_value(self, value: float, error: float = 0.0) -> None:
        self.value = value
        self.error = error

    def check_constraints(self, value: float, error: float = 0.0) -> bool:
        """Check a candidate value and error against the thresholds.

        Deltas are measured from the stored value. A percent threshold
        cannot be evaluated against a stored value of zero, so it rejects.

        Args:
            value: Candidate value
            error: Candidate standard error

        Returns
        -------
            True when every set constraint holds (boundaries included)
        """
        rge = self.range
        if rge.is_valid() and not rge.contains(value):
            return False

        current = self.value
        if not math.isnan(self.max_delta) and abs(value - current) > self.max_delta:
            return False

        if not math.isnan(self.max_delta_percent) and (
            current == 0 or abs((value - current) / current) * 100 > self.max_delta_percent
        ):
            return False

        if not math.isnan(self.max_error) and error > self.max_error:
            return False

        return math.isnan(self.max_error_percent) or (
            current != 0 and abs(error / current) * 100 <= self.max_error_percent
        )

    def to_json(self) -> dict[str, Any]:
        """Serialize; unset thresholds are omitted."""
        obj: dict[str, Any] = {"value": self.value, "range": self.range.to_json()}
        for key, field in _THRESHOLD_KEYS.items():
            threshold = getattr(self, field)
            if not math.isnan(threshold):
                obj[key] = threshold
        return obj

    @classmethod
    def from_json(cls, obj: Any) -> Parameter:
        """Load a parameter; absent thresholds load as unset."""
        if not isinstance(obj, dict) or "value" not in obj or "range" not in obj:
            msg = f"Invalid parameter object: {obj!r}"
            raise ConfigError(msg)
        rge = Range.from_json(obj["range"])
        fields = {field: obj[key] for key, field in _THRESHOLD_KEYS.items() if key in obj}
        try:
            return cls(value=obj["value"], min=rge.min, max=rge.max, **fields)
        except ValidationError as exc:
            msg = f"Invalid parameter object: {exc}"
            raise ConfigError(msg) from exc

    def __str__(self) -> str:
        return f"{self.value:g} ± {self.error:g}"
