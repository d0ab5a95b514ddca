"""Lazily fitted diffractogram.

A ``Dfgram`` owns one measured curve together with the results derived from
it: the background polynomial, the background as a curve, the curve with the
background removed, and per-peak results. Each result is computed on first
read and kept until invalidated. Peak indices are assigned by the caller's
``FitSetup`` and are never compacted.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from diffit.core.caching import LazyCell, SlotArena
from diffit.core.domain.curve import Curve
from diffit.core.domain.outcome import RawOutcome
from diffit.core.fitting.functions import Polynom

if TYPE_CHECKING:
    from diffit.core.domain.setup import FitSetup, PeakSetup
    from diffit.core.fitting.optimizer import LevenbergMarquardtFitter
    from diffit.core.fitting.results import FitReport
    from diffit.core.lineshapes.base import PeakFunction

logger = logging.getLogger(__name__)


class Dfgram:
    """One curve and its cached background and peak fits."""

    def __init__(
        self,
        curve: Curve,
        setup: FitSetup,
        fitter: LevenbergMarquardtFitter | None = None,
    ) -> None:
        self.curve = curve
        self._setup = setup
        self._fitter = fitter

        self._bg_fit: LazyCell[Polynom] = LazyCell()
        self._bg_as_curve: LazyCell[Curve] = LazyCell()
        self._curve_minus_bg: LazyCell[Curve] = LazyCell()

        self._raw_outcomes: SlotArena[RawOutcome] = SlotArena()
        self._peak_fits: SlotArena[PeakFunction] = SlotArena()
        self._peaks_as_curve: SlotArena[Curve] = SlotArena()
        self._peak_reports: dict[int, FitReport] = {}

    @property
    def setup(self) -> FitSetup:
        return self._setup

    def set_setup(self, setup: FitSetup) -> None:
        """Replace the fit setup; every cached result is dropped."""
        self._setup = setup
        self.invalidate_bg()

    def _peak(self, index: int) -> PeakSetup:
        return self._setup.peaks[index]

    # Background

    def _compute_bg_fit(self) -> Polynom:
        logger.debug(
            "Fitting degree-%d background over %d ranges",
            self._setup.bg_degree,
            self._setup.bg_ranges.count(),
        )
        return Polynom.from_fit(self._setup.bg_degree, self.curve, self._setup.bg_ranges, self._fitter)

    @property
    def bg_fit(self) -> Polynom:
        return self._bg_fit.get(self._compute_bg_fit)

    @property
    def bg_as_curve(self) -> Curve:
        def compute() -> Curve:
            if self.curve.is_empty():
                return Curve()
            xs = self.curve.xs
            return Curve.from_arrays(xs, self.bg_fit.y(xs))

        return self._bg_as_curve.get(compute)

    @property
    def curve_minus_bg(self) -> Curve:
        return self._curve_minus_bg.get(lambda: self.curve.subtract(self.bg_fit))

    # Peaks

    def raw_outcome(self, index: int) -> RawOutcome:
        """Model-free statistics of peak ``index``'s range."""

        def compute() -> RawOutcome:
            return RawOutcome.from_curve(self.curve_minus_bg.intersect(self._peak(index).range))

        return self._raw_outcomes.get(index, compute)

    def peak_fit(self, index: int) -> PeakFunction:
        """A fitted copy of peak ``index``'s prototype."""

        def compute() -> PeakFunction:
            peak = self._peak(index)
            function = copy.deepcopy(peak.prototype)
            report = function.fit(self.curve_minus_bg, peak.range, self._fitter)
            self._peak_reports[index] = report
            logger.debug("Peak %d (%s): %s", index, peak.type_tag, report.message)
            return function

        return self._peak_fits.get(index, compute)

    def peak_report(self, index: int) -> FitReport:
        """Fit report of peak ``index``, fitting it first if needed."""
        self.peak_fit(index)
        return self._peak_reports[index]

    def peak_as_curve(self, index: int) -> Curve:
        """Fitted peak ``index`` sampled at the subtracted curve's x inside its range."""

        def compute() -> Curve:
            function = self.peak_fit(index)
            restricted = self.curve_minus_bg.intersect(self._peak(index).range)
            if restricted.is_empty():
                return Curve()
            xs = restricted.xs
            return Curve.from_arrays(xs, function.y(xs))

        return self._peaks_as_curve.get(index, compute)

    # Invalidation

    def invalidate_bg(self) -> None:
        """Drop the background results and, with them, every peak result."""
        self._bg_fit.invalidate()
        self._bg_as_curve.invalidate()
        self._curve_minus_bg.invalidate()
        self.invalidate_peaks()

    def invalidate_peaks(self) -> None:
        self._raw_outcomes.invalidate_all()
        self._peak_fits.invalidate_all()
        self._peaks_as_curve.invalidate_all()
        self._peak_reports.clear()

    def invalidate_peak_at(self, index: int) -> None:
        self._raw_outcomes.invalidate(index)
        self._peak_fits.invalidate(index)
        self._peaks_as_curve.invalidate(index)
        self._peak_reports.pop(index, None)

    def computations(self) -> dict[str, int]:
        """How many times each background result has been computed."""
        return {
            "bg_fit": self._bg_fit.computations,
            "bg_as_curve": self._bg_as_curve.computations,
            "curve_minus_bg": self._curve_minus_bg.computations,
        }

    def peak_computations(self, index: int) -> dict[str, int]:
        """How many times each result of peak ``index`` has been computed."""
        return {
            "raw_outcome": self._raw_outcomes.computations(index),
            "peak_fit": self._peak_fits.computations(index),
            "peak_as_curve": self._peaks_as_curve.computations(index),
        }
