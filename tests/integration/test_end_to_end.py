"""End-to-end fitting of synthetic diffraction series."""

import json

import numpy as np
import pytest

from diffit.core.domain.curve import Curve
from diffit.core.domain.range import Range, Ranges
from diffit.core.domain.setup import FitSetup
from diffit.io.curves import read_curve
from diffit.io.results import write_results
from diffit.io.session import load_setup, save_setup
from diffit.services.fit import FitService

XS = np.linspace(20.0, 100.0, 1601)


def lorentzian(xs, ampl, center, fwhm):
    return ampl / (1 + ((xs - center) / (fwhm / 2)) ** 2)


def pseudo_voigt(xs, ampl, center, fwhm, eta):
    arg2 = ((xs - center) / (fwhm / 2)) ** 2
    return ampl * ((1 - eta) * np.exp(-arg2 * np.log(2.0)) + eta / (1 + arg2))


def scan(shift):
    """Quadratic background, a Lorentzian and a pseudo-Voigt, shifted in x."""
    ys = (
        20.0
        - 0.1 * XS
        + 0.001 * XS**2
        + lorentzian(XS, 80.0, 45.0 + shift, 1.2)
        + pseudo_voigt(XS, 40.0, 75.0 + shift, 1.6, 0.3)
    )
    return Curve.from_arrays(XS, ys)


@pytest.fixture
def series():
    return [scan(shift) for shift in (0.0, 0.2, 0.4)]


@pytest.fixture
def series_setup():
    setup = FitSetup(
        bg_ranges=Ranges([Range(20.0, 30.0), Range(58.0, 62.0), Range(90.0, 100.0)]),
        bg_degree=2,
    )
    setup.add_peak("Lorentzian", Range(40.0, 50.0))
    setup.add_peak("PseudoVoigt1", Range(70.0, 81.0))
    setup.add_peak("Raw", Range(40.0, 50.0))
    return setup


class TestSeries:
    """Fitting a series of shifted scans."""

    def test_peaks_follow_shift(self, series, series_setup):
        results = FitService().fit_curves(series, series_setup)
        for shift, result in zip((0.0, 0.2, 0.4), results, strict=True):
            lor, pv, raw = result.peaks
            assert lor.center == pytest.approx(45.0 + shift, abs=1e-2)
            assert lor.fwhm == pytest.approx(1.2, rel=3e-2)
            assert pv.center == pytest.approx(75.0 + shift, abs=1e-2)
            assert pv.intensity == pytest.approx(40.0, rel=2e-2)
            assert raw.type == "Raw"
            assert raw.center == pytest.approx(45.0)
            assert raw.fwhm == pytest.approx(10.0)

    def test_background_recovered(self, series, series_setup):
        """Lorentzian tails leak into the background ranges a little."""
        result = FitService().fit_curve(series[0], series_setup)
        np.testing.assert_allclose(
            result.dfgram.bg_fit.values(), [20.0, -0.1, 0.001], rtol=5e-2, atol=5e-2
        )

    def test_setup_file_reproduces_fit(self, series, series_setup, tmp_path):
        path = tmp_path / "setup.json"
        save_setup(series_setup, path)
        service = FitService()
        first = service.fit_curve(series[1], series_setup)
        second = service.fit_curve(series[1], load_setup(path))
        for a, b in zip(first.peaks, second.peaks, strict=True):
            assert a.center == pytest.approx(b.center)
            assert a.fwhm == pytest.approx(b.fwhm)


class TestFiles:
    """Curves from disk to result tables."""

    def test_round_trip_through_files(self, series, series_setup, tmp_path):
        paths = []
        for i, curve in enumerate(series):
            path = tmp_path / f"scan_{i}.dat"
            np.savetxt(path, np.column_stack([curve.xs, curve.ys]), header="Tth Intensity")
            paths.append(path)

        curves = [read_curve(path) for path in paths]
        results = FitService().fit_curves(curves, series_setup)
        (json_path,) = write_results(results, tmp_path / "Fits", ["json"])

        data = json.loads(json_path.read_text())
        assert len(data["peaks"]) == 9
        centers = [p["center"] for p in data["peaks"] if p["type"] == "Lorentzian"]
        np.testing.assert_allclose(centers, [45.0, 45.2, 45.4], atol=1e-2)
