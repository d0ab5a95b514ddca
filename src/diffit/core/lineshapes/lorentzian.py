"""Cauchy-Lorentz peak: A / (1 + ((x - x0) / gamma)**2)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from diffit.core.constants import FWHM_TO_HWHM
from diffit.core.lineshapes.base import PAR_AMPL, PAR_XSHIFT, AmplitudePeak
from diffit.core.lineshapes.registry import register_function

if TYPE_CHECKING:
    from diffit.core.shared.typing import ParValues, XValue

PAR_GAMMA = 2


@register_function("Lorentzian", peak=True)
class CauchyLorentz(AmplitudePeak):
    """Lorentzian lineshape; gamma is the half width at half maximum."""

    def __init__(self, ampl: float = 1.0, x_shift: float = 0.0, gamma: float = 1.0) -> None:
        super().__init__(3, ampl, x_shift)
        self._init_bounded(PAR_GAMMA, gamma)

    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue:
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        gamma = self.par_value(PAR_GAMMA, par_values)
        arg = (x - x_shift) / gamma
        return ampl / (1 + arg * arg)

    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue:
        self._check_index(index)
        ampl = self.par_value(PAR_AMPL, par_values)
        x_shift = self.par_value(PAR_XSHIFT, par_values)
        gamma = self.par_value(PAR_GAMMA, par_values)
        dx = x - x_shift
        arg2 = (dx / gamma) ** 2
        denom = (1 + arg2) * (1 + arg2)
        if index == PAR_AMPL:
            return 1 / (1 + arg2)
        if index == PAR_XSHIFT:
            return 2 * ampl * dx / (denom * gamma * gamma)
        return 2 * ampl * dx * dx / (denom * gamma * gamma * gamma)

    def set_guessed_fwhm(self, fwhm: float) -> None:
        super().set_guessed_fwhm(fwhm)
        self.set_value(PAR_GAMMA, fwhm * FWHM_TO_HWHM)

    def fitted_fwhm(self) -> float:
        return self.parameter_at(PAR_GAMMA).value / FWHM_TO_HWHM

    def fwhm_error(self) -> float:
        return self.parameter_at(PAR_GAMMA).error / FWHM_TO_HWHM
