"""Non-parametric peak that reports the measured samples as they are."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import numpy as np

from diffit.core.caching import LazyCell
from diffit.core.domain.curve import XY, Curve
from diffit.core.fitting.results import FitReport
from diffit.core.lineshapes.base import PeakFunction
from diffit.core.lineshapes.registry import register_function

if TYPE_CHECKING:
    from diffit.core.domain.range import Range
    from diffit.core.fitting.optimizer import LevenbergMarquardtFitter
    from diffit.core.shared.typing import ParValues, XValue


@register_function("Raw", peak=True)
class Raw(PeakFunction):
    """Step function over the samples of the fit window.

    ``fit`` stores the samples inside the window; ``y`` returns the sample
    whose bin contains ``x``, with the window split into equal bins.
    """

    def __init__(self) -> None:
        super().__init__(0)
        self._fitted_curve = Curve()
        self._fitted_ys = np.empty(0, dtype=np.float64)
        self._x_count = 0
        self._dx = 0.0
        self._sum_y: LazyCell[float] = LazyCell()

    def _prepare_y(self) -> None:
        if self.range.is_empty() or self._fitted_curve.is_empty():
            self._x_count = 0
            self._dx = 0.0
        else:
            self._x_count = self._fitted_curve.count()
            self._dx = self.range.width() / self._x_count
        self._fitted_ys = self._fitted_curve.ys
        self._sum_y.invalidate()

    def set_range(self, rge: Range) -> None:
        super().set_range(rge)
        self._prepare_y()

    def fit(
        self,
        curve: Curve,
        rge: Range | None = None,
        fitter: LevenbergMarquardtFitter | None = None,
    ) -> FitReport:
        """Store the samples inside the window; nothing is optimized."""
        self._fitted_curve = self.prepare_fit(curve, rge)
        self._prepare_y()
        return FitReport(
            success=True,
            iterations=0,
            chisqr=0.0,
            n_points=self._x_count,
            n_params=0,
            message="Raw samples stored",
        )

    @property
    def fitted_curve(self) -> Curve:
        return self._fitted_curve

    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue:
        rge = self.range
        if isinstance(x, np.ndarray):
            if not self._x_count:
                return np.zeros_like(x, dtype=np.float64)
            inside = (x >= rge.min) & (x <= rge.max)
            index = np.clip(np.floor((x - rge.min) / self._dx), 0, self._x_count - 1)
            index = np.nan_to_num(index).astype(np.intp)
            return np.where(inside, self._fitted_ys[index], 0.0)

        if not self._x_count or not rge.contains(x):
            return 0.0
        i = min(max(math.floor((x - rge.min) / self._dx), 0), self._x_count - 1)
        return float(self._fitted_ys[i])

    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue:
        self._check_index(index)
        return 0.0

    def fitted_peak(self) -> XY:
        """Window center and the summed intensity of the stored samples."""
        return XY(self.range.center(), self._sum_y.get(self._fitted_curve.sum_y))

    def fitted_fwhm(self) -> float:
        return self.range.width()

    def peak_error(self) -> XY:
        return XY(0.0, 0.0)

    def fwhm_error(self) -> float:
        return 0.0

    def load_json(self, obj: dict[str, Any]) -> None:
        super().load_json(obj)
        self._prepare_y()
