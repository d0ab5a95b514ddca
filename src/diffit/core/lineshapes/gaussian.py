"""Gaussian peak: A * exp(-0.5 * ((x - x0) / sigma)**2)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from diffit.core.constants import FWHM_TO_SIGMA
from diffit.core.lineshapes.base import PAR_AMPL, PAR_XSHIFT, AmplitudePeak
from diffit.core.lineshapes.registry import register_function

if TYPE_CHECKING:
    from diffit.core.shared.typing import ParValues, XValue

PAR_SIGMA = 2


@register_function("Gaussian", peak=True)
class Gaussian(AmplitudePeak):
    """Gaussian lineshape parameterized by amplitude, center and sigma."""

    def __init__(self, ampl: float = 1.0, x_shift: float = 0.0, sigma: float = 1.0) -> None:
        super().__init__(3, ampl, x_shift)
        self._init_bounded(PAR_SIGMA, sigma)

    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue:
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        sigma = self.par_value(PAR_SIGMA, par_values)
        arg = (x - x_shift) / sigma
        return ampl * np.exp(-0.5 * arg * arg)

    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue:
        self._check_index(index)
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        sigma = self.par_value(PAR_SIGMA, par_values)
        dx = x - x_shift
        arg = dx / sigma
        exa = np.exp(-0.5 * arg * arg)
        if index == PAR_AMPL:
            return exa
        if index == PAR_XSHIFT:
            return ampl * exa * dx / (sigma * sigma)
        return ampl * exa * dx * dx / (sigma * sigma * sigma)

    def set_guessed_fwhm(self, fwhm: float) -> None:
        super().set_guessed_fwhm(fwhm)
        self.set_value(PAR_SIGMA, fwhm * FWHM_TO_SIGMA)

    def fitted_fwhm(self) -> float:
        return self.parameter_at(PAR_SIGMA).value / FWHM_TO_SIGMA

    def fwhm_error(self) -> float:
        return self.parameter_at(PAR_SIGMA).error / FWHM_TO_SIGMA
