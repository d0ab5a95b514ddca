"""Pytest fixtures for diffit tests."""

import numpy as np
import pytest

from diffit.core.domain.curve import Curve
from diffit.core.domain.range import Range, Ranges
from diffit.core.domain.setup import FitSetup


def gaussian_curve(xs, ampl, center, fwhm, background=(0.0,)):
    """Curve of a Gaussian peak on a polynomial background."""
    sigma = fwhm * 0.424661
    ys = ampl * np.exp(-0.5 * ((xs - center) / sigma) ** 2)
    for i, coef in enumerate(background):
        ys = ys + coef * xs**i
    return Curve.from_arrays(xs, ys)


@pytest.fixture
def linear_curve():
    """Noise-free samples of y = 3x + 2 on [0, 10]."""
    xs = np.linspace(0.0, 10.0, 21)
    return Curve.from_arrays(xs, 3.0 * xs + 2.0)


@pytest.fixture
def gaussian_peak_curve():
    """Gaussian peak at x=5, height 10, FWHM 2, no background."""
    xs = np.linspace(0.0, 10.0, 201)
    return gaussian_curve(xs, 10.0, 5.0, 2.0)


@pytest.fixture
def diffractogram():
    """Two Gaussian peaks on a linear background.

    Peaks at 30 (height 100, FWHM 1.5) and 60 (height 50, FWHM 2.0);
    background 5 + 0.1 x.
    """
    xs = np.linspace(10.0, 80.0, 1401)
    sigma1, sigma2 = 1.5 * 0.424661, 2.0 * 0.424661
    ys = (
        5.0
        + 0.1 * xs
        + 100.0 * np.exp(-0.5 * ((xs - 30.0) / sigma1) ** 2)
        + 50.0 * np.exp(-0.5 * ((xs - 60.0) / sigma2) ** 2)
    )
    return Curve.from_arrays(xs, ys)


@pytest.fixture
def diffractogram_setup():
    """Setup matching the ``diffractogram`` fixture."""
    setup = FitSetup(
        bg_ranges=Ranges([Range(10.0, 20.0), Range(40.0, 50.0), Range(70.0, 80.0)]),
        bg_degree=1,
    )
    setup.add_peak("Gaussian", Range(25.0, 35.0))
    setup.add_peak("Gaussian", Range(54.0, 66.0))
    return setup
