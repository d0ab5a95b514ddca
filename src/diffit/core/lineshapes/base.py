"""Base class of peak functions and the shared seed heuristic.

A peak function is fitted over its own window of a (background-subtracted)
curve. Before optimizing it needs a starting point: either the caller's
guessed peak and FWHM, or values estimated from the samples in the window.
Each shape translates those physical guesses into its own parameter basis.
"""

from __future__ import annotations

import math
from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from diffit.core.domain.curve import XY
from diffit.core.domain.range import Range
from diffit.core.fitting.functions import SimpleFunction
from diffit.core.fitting.optimizer import LevenbergMarquardtFitter
from diffit.core.fitting.results import FitReport
from diffit.core.shared.exceptions import ConfigError

if TYPE_CHECKING:
    from diffit.core.domain.curve import Curve

KEY_RANGE = "range"
KEY_GUESSED_PEAK = "guessed peak"
KEY_GUESSED_FWHM = "guessed fwhm"

# Indices shared by every parametric shape
PAR_AMPL = 0
PAR_XSHIFT = 1


def guess_peak(curve: Curve) -> tuple[XY, float]:
    """Estimate the peak and its FWHM from the samples of a non-empty curve.

    The peak is the first maximal sample. The half-maximum indices are found
    by scanning outwards until a sample drops below half the peak height, or
    the curve ends.

    Returns
    -------
        Guessed peak and guessed FWHM
    """
    peak_index = curve.max_y_index()
    peak_x, peak_y = curve.x(peak_index), curve.y(peak_index)
    half = peak_y / 2

    left = peak_index
    for i in range(peak_index - 1, -1, -1):
        left = i
        if curve.y(i) < half:
            break

    right = peak_index
    for i in range(peak_index, curve.count()):
        right = i
        if curve.y(i) < half:
            break

    return XY(peak_x, peak_y), curve.x(right) - curve.x(left)


class PeakFunction(SimpleFunction):
    """A single diffraction peak fitted over its own range."""

    def __init__(self, parameter_count: int = 0) -> None:
        super().__init__(parameter_count)
        self._range = Range()
        self._guessed_peak = XY()
        self._guessed_fwhm = math.nan

    @property
    def range(self) -> Range:
        return self._range

    def set_range(self, rge: Range) -> None:
        self._range = rge.copy()

    @property
    def guessed_peak(self) -> XY:
        return self._guessed_peak

    @property
    def guessed_fwhm(self) -> float:
        return self._guessed_fwhm

    def set_guessed_peak(self, peak: XY) -> None:
        self._guessed_peak = XY(peak.x, peak.y)

    def set_guessed_fwhm(self, fwhm: float) -> None:
        self._guessed_fwhm = fwhm

    def invalidate_guesses(self) -> None:
        self._guessed_peak.invalidate()
        self._guessed_fwhm = math.nan

    def reset(self) -> None:
        """Reset parameters, then re-apply whichever guesses are set."""
        super().reset()
        if self._guessed_peak.is_valid():
            self.set_guessed_peak(self._guessed_peak)
        if not math.isnan(self._guessed_fwhm):
            self.set_guessed_fwhm(self._guessed_fwhm)

    def prepare_fit(self, curve: Curve, rge: Range | None = None) -> Curve:
        """Adopt ``rge`` as the fit window if given, reset, and restrict the curve."""
        if rge is not None:
            self.set_range(rge)
        self.reset()
        return curve.intersect(self._range)

    def fit(
        self,
        curve: Curve,
        rge: Range | None = None,
        fitter: LevenbergMarquardtFitter | None = None,
    ) -> FitReport:
        """Fit the peak to the part of ``curve`` inside its window.

        Missing guesses are estimated from the restricted samples first. An
        empty window leaves the function in its reset state.
        """
        restricted = self.prepare_fit(curve, rge)
        if restricted.is_empty():
            return FitReport.skipped(0, self.parameter_count())

        if not self._guessed_peak.is_valid():
            peak, fwhm = guess_peak(restricted)
            self.set_guessed_peak(peak)
            self.set_guessed_fwhm(fwhm)
        elif math.isnan(self._guessed_fwhm):
            self.set_guessed_fwhm(guess_peak(restricted)[1])

        return (fitter or LevenbergMarquardtFitter()).fit(self, restricted)

    @abstractmethod
    def fitted_peak(self) -> XY:
        """Fitted peak position and height."""

    @abstractmethod
    def fitted_fwhm(self) -> float:
        """Fitted full width at half maximum, in x units."""

    @abstractmethod
    def peak_error(self) -> XY:
        """Standard errors of the fitted position and height."""

    @abstractmethod
    def fwhm_error(self) -> float:
        """Standard error of the fitted FWHM, in x units."""

    def to_json(self) -> dict[str, Any]:
        obj = super().to_json()
        obj[KEY_RANGE] = self._range.to_json()
        if self._guessed_peak.is_valid():
            obj[KEY_GUESSED_PEAK] = self._guessed_peak.to_json()
        if not math.isnan(self._guessed_fwhm):
            obj[KEY_GUESSED_FWHM] = self._guessed_fwhm
        return obj

    def load_json(self, obj: dict[str, Any]) -> None:
        super().load_json(obj)
        if KEY_RANGE not in obj:
            msg = f"Missing '{KEY_RANGE}' in {self.type_tag} object"
            raise ConfigError(msg)
        # Restore the stored guesses without writing them into the loaded parameters
        self._range = Range.from_json(obj[KEY_RANGE])
        self._guessed_peak = XY.from_json(obj[KEY_GUESSED_PEAK]) if KEY_GUESSED_PEAK in obj else XY()
        try:
            self._guessed_fwhm = float(obj.get(KEY_GUESSED_FWHM, math.nan))
        except (TypeError, ValueError) as exc:
            msg = f"Invalid '{KEY_GUESSED_FWHM}' in {self.type_tag} object"
            raise ConfigError(msg) from exc


class AmplitudePeak(PeakFunction):
    """Parametric peak whose first two parameters are amplitude and center."""

    def __init__(self, parameter_count: int, ampl: float, x_shift: float) -> None:
        super().__init__(parameter_count)
        par_ampl = self.parameter_at(PAR_AMPL)
        par_ampl.set_value_range(0.0, math.inf)
        par_ampl.set_value(ampl)
        self.parameter_at(PAR_XSHIFT).set_value(x_shift)

    def _init_bounded(self, index: int, value: float, hi: float = math.inf) -> None:
        par = self.parameter_at(index)
        par.set_value_range(0.0, hi)
        par.set_value(value)

    def set_guessed_peak(self, peak: XY) -> None:
        super().set_guessed_peak(peak)
        self.set_value(PAR_XSHIFT, peak.x)
        self.set_value(PAR_AMPL, peak.y)

    def fitted_peak(self) -> XY:
        return XY(self.parameter_at(PAR_XSHIFT).value, self.parameter_at(PAR_AMPL).value)

    def peak_error(self) -> XY:
        return XY(self.parameter_at(PAR_XSHIFT).error, self.parameter_at(PAR_AMPL).error)
