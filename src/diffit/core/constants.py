"""Core constants for diffit fitting.

Defaults for the Levenberg-Marquardt fitter and the conversion factors
between the physical peak width (FWHM) and each shape's internal width.
They can be overridden through the ``[fitting]`` table of a config file.
"""

# =============================================================================
# Levenberg-Marquardt Defaults
# =============================================================================

LM_MAX_ITERATIONS = 300
"""Maximum number of LM iterations, rejected steps included."""

LM_FTOL = 1e-10
"""Relative chi-squared decrease below which an accepted step ends the fit."""

LM_XTOL = 1e-10
"""Relative step size below which an accepted step ends the fit."""

LM_LAMBDA_INIT = 1e-3
"""Initial damping factor."""

LM_LAMBDA_FACTOR = 10.0
"""Damping is multiplied by this on rejection and divided by it on acceptance."""

LM_LAMBDA_MAX = 1e16
"""Damping above which no further progress is possible and the fit stops."""

# =============================================================================
# Peak Width Conversions
# =============================================================================

FWHM_TO_SIGMA = 0.424661
"""Gaussian standard deviation per unit FWHM: 1/4 * sqrt(2)/sqrt(ln 2)."""

FWHM_TO_HWHM = 0.5
"""Lorentzian half width per unit FWHM."""

# =============================================================================
# Background
# =============================================================================

DEFAULT_BG_DEGREE = 1
MAX_BG_DEGREE = 10
