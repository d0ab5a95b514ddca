"""Model-free peak statistics computed directly from the samples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from diffit.core.domain.curve import Curve

# FWHM of a Gaussian per unit standard deviation: 2 * sqrt(2 * ln 2)
_FWHM_PER_SIGMA = 2.0 * math.sqrt(2.0 * math.log(2.0))


@dataclass(frozen=True, slots=True)
class RawOutcome:
    """Summary of the background-subtracted samples inside one peak range.

    ``center`` is the intensity-weighted centroid and ``fwhm`` the FWHM of a
    Gaussian with the same weighted spread. Both are NaN when there are no
    samples or the summed intensity is not positive.
    """

    n_points: int
    intensity: float
    center: float
    fwhm: float

    @classmethod
    def from_curve(cls, curve: Curve) -> RawOutcome:
        if curve.is_empty():
            return cls(0, 0.0, math.nan, math.nan)

        xs, ys = curve.xs, curve.ys
        intensity = float(np.sum(ys))
        if intensity <= 0:
            return cls(curve.count(), intensity, math.nan, math.nan)

        center = float(np.sum(xs * ys) / intensity)
        variance = float(np.sum(ys * (xs - center) ** 2) / intensity)
        fwhm = _FWHM_PER_SIGMA * math.sqrt(max(variance, 0.0))
        return cls(curve.count(), intensity, center, fwhm)
