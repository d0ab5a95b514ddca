"""Pseudo-Voigt peaks: linear mixtures of a Gaussian and a Lorentzian.

``PseudoVoigt1`` shares one half width between both components;
``PseudoVoigt2`` gives each component its own width. In both, eta is the
Lorentzian fraction and the Gaussian component is written in its HWHM form
``exp(-ln2 * u**2)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from diffit.core.constants import FWHM_TO_HWHM, FWHM_TO_SIGMA
from diffit.core.lineshapes.base import PAR_AMPL, PAR_XSHIFT, AmplitudePeak
from diffit.core.lineshapes.registry import register_function

if TYPE_CHECKING:
    from diffit.core.shared.typing import ParValues, XValue

_LN2 = np.log(2.0)

PAR_SIGMAGAMMA = 2
PAR_ETA_1 = 3

PAR_SIGMA = 2
PAR_GAMMA = 3
PAR_ETA_2 = 4


@register_function("PseudoVoigt1", peak=True)
class PseudoVoigt1(AmplitudePeak):
    """Pseudo-Voigt with a common half width for both components."""

    def __init__(
        self,
        ampl: float = 1.0,
        x_shift: float = 0.0,
        sigma_gamma: float = 1.0,
        eta: float = 0.1,
    ) -> None:
        super().__init__(4, ampl, x_shift)
        self._init_bounded(PAR_SIGMAGAMMA, sigma_gamma)
        self._init_bounded(PAR_ETA_1, eta, 1.0)

    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue:
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        width = self.par_value(PAR_SIGMAGAMMA, par_values)
        eta = self.par_value(PAR_ETA_1, par_values)
        arg2 = ((x - x_shift) / width) ** 2
        gaussian = ampl * np.exp(-arg2 * _LN2)
        lorentz = ampl / (1 + arg2)
        return (1 - eta) * gaussian + eta * lorentz

    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue:
        self._check_index(index)
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        width = self.par_value(PAR_SIGMAGAMMA, par_values)
        eta = self.par_value(PAR_ETA_1, par_values)
        dx = x - x_shift
        arg2 = (dx / width) ** 2
        gauss = np.exp(-arg2 * _LN2)
        lor = 1 + arg2
        if index == PAR_AMPL:
            return eta / lor + (1 - eta) * gauss
        if index == PAR_XSHIFT:
            return (
                eta * 2 * ampl * dx / (lor * lor * width * width)
                + (1 - eta) * 2 * ampl * dx * _LN2 * gauss / (width * width)
            )
        if index == PAR_SIGMAGAMMA:
            width3 = width * width * width
            return (
                eta * 2 * ampl * dx * dx / (lor * lor * width3)
                + (1 - eta) * 2 * ampl * dx * dx * _LN2 * gauss / width3
            )
        return ampl / lor - ampl * gauss

    def set_guessed_fwhm(self, fwhm: float) -> None:
        super().set_guessed_fwhm(fwhm)
        self.set_value(PAR_SIGMAGAMMA, fwhm * FWHM_TO_HWHM)

    def fitted_fwhm(self) -> float:
        return self.parameter_at(PAR_SIGMAGAMMA).value / FWHM_TO_HWHM

    def fwhm_error(self) -> float:
        return self.parameter_at(PAR_SIGMAGAMMA).error / FWHM_TO_HWHM


@register_function("PseudoVoigt2", peak=True)
class PseudoVoigt2(AmplitudePeak):
    """Pseudo-Voigt with independent Gaussian and Lorentzian widths."""

    def __init__(
        self,
        ampl: float = 1.0,
        x_shift: float = 0.0,
        sigma: float = 1.0,
        gamma: float = 1.0,
        eta: float = 0.1,
    ) -> None:
        super().__init__(5, ampl, x_shift)
        self._init_bounded(PAR_SIGMA, sigma)
        self._init_bounded(PAR_GAMMA, gamma)
        self._init_bounded(PAR_ETA_2, eta, 1.0)

    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue:
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        sigma = self.par_value(PAR_SIGMA, par_values)
        gamma = self.par_value(PAR_GAMMA, par_values)
        eta = self.par_value(PAR_ETA_2, par_values)
        dx = x - x_shift
        gaussian = ampl * np.exp(-((dx / sigma) ** 2) * _LN2)
        lorentz = ampl / (1 + (dx / gamma) ** 2)
        return (1 - eta) * gaussian + eta * lorentz

    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue:
        self._check_index(index)
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        sigma = self.par_value(PAR_SIGMA, par_values)
        gamma = self.par_value(PAR_GAMMA, par_values)
        eta = self.par_value(PAR_ETA_2, par_values)
        dx = x - x_shift
        gauss = np.exp(-((dx / sigma) ** 2) * _LN2)
        lor = 1 + (dx / gamma) ** 2
        if index == PAR_AMPL:
            return eta / lor + (1 - eta) * gauss
        if index == PAR_XSHIFT:
            return (
                eta * 2 * ampl * dx / (lor * lor * gamma * gamma)
                + (1 - eta) * 2 * ampl * dx * _LN2 * gauss / (sigma * sigma)
            )
        if index == PAR_SIGMA:
            return (1 - eta) * 2 * ampl * dx * dx * _LN2 * gauss / (sigma * sigma * sigma)
        if index == PAR_GAMMA:
            return eta * 2 * ampl * dx * dx / (lor * lor * gamma * gamma * gamma)
        return ampl / lor - ampl * gauss

    def set_guessed_fwhm(self, fwhm: float) -> None:
        super().set_guessed_fwhm(fwhm)
        self.set_value(PAR_SIGMA, fwhm * FWHM_TO_SIGMA)
        self.set_value(PAR_GAMMA, fwhm * FWHM_TO_HWHM)

    def fitted_fwhm(self) -> float:
        """Eta-weighted mean of the two component widths."""
        eta = self.parameter_at(PAR_ETA_2).value
        sigma = self.parameter_at(PAR_SIGMA).value
        gamma = self.parameter_at(PAR_GAMMA).value
        return (1 - eta) * sigma / FWHM_TO_SIGMA + eta * gamma / FWHM_TO_HWHM

    def fwhm_error(self) -> float:
        eta = self.parameter_at(PAR_ETA_2).value
        sigma_err = self.parameter_at(PAR_SIGMA).error
        gamma_err = self.parameter_at(PAR_GAMMA).error
        return (1 - eta) * sigma_err / FWHM_TO_SIGMA + eta * gamma_err / FWHM_TO_HWHM
