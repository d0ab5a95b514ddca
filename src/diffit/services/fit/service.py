"""High-level fitting service facade.

This service provides the primary API for batch fitting. The CLI imports
only from this module; the core classes stay an implementation detail.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from diffit.core.domain.dfgram import Dfgram
from diffit.core.fitting.optimizer import LevenbergMarquardtFitter
from diffit.core.shared.reporter import NullReporter, Reporter

if TYPE_CHECKING:
    import threading

    from diffit.core.domain.config import FitConfig
    from diffit.core.domain.curve import Curve
    from diffit.core.domain.outcome import RawOutcome
    from diffit.core.domain.setup import FitSetup
    from diffit.core.fitting.results import FitReport

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class PeakResult:
    """Fitted values of one peak on one curve.

    Attributes
    ----------
        index: Peak index in the fit setup
        type: Peak shape tag
        center, center_error: Fitted position and its standard error
        intensity, intensity_error: Fitted height (summed counts for Raw)
        fwhm, fwhm_error: Fitted full width at half maximum
        raw: Model-free statistics of the same range
        report: Optimizer report
    """

    index: int
    type: str
    center: float
    center_error: float
    intensity: float
    intensity_error: float
    fwhm: float
    fwhm_error: float
    raw: RawOutcome
    report: FitReport

    def as_dict(self) -> dict[str, Any]:
        return {
            "peak": self.index,
            "type": self.type,
            "center": self.center,
            "center_error": self.center_error,
            "intensity": self.intensity,
            "intensity_error": self.intensity_error,
            "fwhm": self.fwhm,
            "fwhm_error": self.fwhm_error,
            "raw_intensity": self.raw.intensity,
            "raw_center": self.raw.center,
            "raw_fwhm": self.raw.fwhm,
            "success": self.report.success,
            "iterations": self.report.iterations,
            "redchi": self.report.redchi,
        }


@dataclass(frozen=True)
class CurveFitResult:
    """All peak results of one curve, with the Dfgram that produced them."""

    curve_index: int
    dfgram: Dfgram
    peaks: tuple[PeakResult, ...]


class FitService:
    """Service fitting a batch of curves with one setup.

    Curves are processed one after another; each gets its own ``Dfgram``.
    Cancellation is honoured between curves only.

    Example:
        service = FitService()
        results = service.fit_curves(curves, FitSetup.from_config(config))
        for result in results:
            print(result.peaks[0].center)
    """

    def __init__(self, reporter: Reporter | None = None, config: FitConfig | None = None) -> None:
        """Initialize the fit service.

        Args:
            reporter: Reporter for status messages (default: silent)
            config: Fitter settings (default: built-in defaults)
        """
        self._reporter = reporter or NullReporter()
        self._fitter = LevenbergMarquardtFitter(config)

    def fit_curve(self, curve: Curve, setup: FitSetup, curve_index: int = 0) -> CurveFitResult:
        """Fit the background and every peak of a single curve."""
        dfgram = Dfgram(curve, setup, self._fitter)
        peaks = tuple(self._peak_result(dfgram, i) for i in range(len(setup.peaks)))
        return CurveFitResult(curve_index=curve_index, dfgram=dfgram, peaks=peaks)

    @staticmethod
    def _peak_result(dfgram: Dfgram, index: int) -> PeakResult:
        function = dfgram.peak_fit(index)
        peak, peak_err = function.fitted_peak(), function.peak_error()
        return PeakResult(
            index=index,
            type=function.type_tag,
            center=peak.x,
            center_error=peak_err.x,
            intensity=peak.y,
            intensity_error=peak_err.y,
            fwhm=function.fitted_fwhm(),
            fwhm_error=function.fwhm_error(),
            raw=dfgram.raw_outcome(index),
            report=dfgram.peak_report(index),
        )

    def fit_curves(
        self,
        curves: Sequence[Curve],
        setup: FitSetup,
        *,
        progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> list[CurveFitResult]:
        """Fit every curve in order.

        Args:
            curves: Curves to fit
            setup: Background and peak setup shared by all curves
            progress: Called with ``(done, total)`` after each curve
            cancel: Checked before each curve; when set, the batch stops

        Returns
        -------
            Results of the curves fitted before completion or cancellation
        """
        total = len(curves)
        self._reporter.action(f"Fitting {total} curve(s) with {len(setup.peaks)} peak(s)")
        results: list[CurveFitResult] = []
        for i, curve in enumerate(curves):
            if cancel is not None and cancel.is_set():
                self._reporter.warning(f"Fitting cancelled after {i} of {total} curve(s)")
                break
            logger.info("Fitting curve %d/%d (%d points)", i + 1, total, curve.count())
            results.append(self.fit_curve(curve, setup, i))
            if progress is not None:
                progress(i + 1, total)
        else:
            self._reporter.success(f"Fitted {total} curve(s)")
        return results

    def submit(
        self,
        curves: Sequence[Curve],
        setup: FitSetup,
        *,
        progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> Future[list[CurveFitResult]]:
        """Run ``fit_curves`` on a single background worker.

        Returns
        -------
            Future resolving to the list of curve results
        """
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="diffit-fit")
        try:
            return executor.submit(
                self.fit_curves, curves, setup, progress=progress, cancel=cancel
            )
        finally:
            executor.shutdown(wait=False)
