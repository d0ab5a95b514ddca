"""Test lazily fitted diffractograms."""

import numpy as np
import pytest

from diffit.core.domain.dfgram import Dfgram
from diffit.core.domain.range import Range, Ranges
from diffit.core.domain.setup import FitSetup


class TestBackground:
    """Tests for the background results."""

    def test_bg_fit(self, diffractogram, diffractogram_setup):
        """The background ranges avoid both peaks."""
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        np.testing.assert_allclose(dfgram.bg_fit.values(), [5.0, 0.1], atol=1e-6)

    def test_bg_as_curve(self, diffractogram, diffractogram_setup):
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        bg = dfgram.bg_as_curve
        assert bg.count() == diffractogram.count()
        assert bg.y(0) == pytest.approx(5.0 + 0.1 * 10.0, abs=1e-6)

    def test_curve_minus_bg(self, diffractogram, diffractogram_setup):
        """Far from the peaks the subtracted curve is flat zero."""
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        flat = dfgram.curve_minus_bg.intersect(Range(40.0, 50.0))
        np.testing.assert_allclose(flat.ys, 0.0, atol=1e-6)

    def test_no_ranges_means_zero_background(self, diffractogram):
        dfgram = Dfgram(diffractogram, FitSetup())
        np.testing.assert_array_equal(dfgram.bg_fit.values(), [0.0, 0.0])
        np.testing.assert_allclose(dfgram.curve_minus_bg.ys, diffractogram.ys)


class TestPeaks:
    """Tests for the per-peak results."""

    def test_peak_fits(self, diffractogram, diffractogram_setup):
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        first, second = dfgram.peak_fit(0), dfgram.peak_fit(1)
        assert first.fitted_peak().x == pytest.approx(30.0, abs=1e-4)
        assert first.fitted_peak().y == pytest.approx(100.0, rel=1e-4)
        assert first.fitted_fwhm() == pytest.approx(1.5, rel=1e-4)
        assert second.fitted_peak().x == pytest.approx(60.0, abs=1e-4)
        assert second.fitted_fwhm() == pytest.approx(2.0, rel=1e-4)
        assert dfgram.peak_report(0).success

    def test_prototype_untouched(self, diffractogram, diffractogram_setup):
        """Fits work on a copy of the setup's prototype."""
        prototype = diffractogram_setup.peaks[0].prototype
        before = prototype.values().copy()
        Dfgram(diffractogram, diffractogram_setup).peak_fit(0)
        np.testing.assert_array_equal(prototype.values(), before)

    def test_raw_outcome(self, diffractogram, diffractogram_setup):
        outcome = Dfgram(diffractogram, diffractogram_setup).raw_outcome(0)
        assert outcome.n_points > 190
        assert outcome.center == pytest.approx(30.0, abs=1e-3)
        assert outcome.fwhm == pytest.approx(1.5, rel=1e-3)

    def test_peak_as_curve(self, diffractogram, diffractogram_setup):
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        peak_curve = dfgram.peak_as_curve(1)
        window = dfgram.curve_minus_bg.intersect(Range(54.0, 66.0))
        assert peak_curve.count() == window.count()
        np.testing.assert_allclose(peak_curve.ys, window.ys, atol=1e-4)

    def test_unknown_peak_index(self, diffractogram, diffractogram_setup):
        with pytest.raises(IndexError):
            Dfgram(diffractogram, diffractogram_setup).peak_fit(5)


class TestInvalidation:
    """Each result is computed once until invalidated."""

    def test_results_cached(self, diffractogram, diffractogram_setup):
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        for _ in range(3):
            dfgram.bg_fit  # noqa: B018
            dfgram.curve_minus_bg  # noqa: B018
            dfgram.peak_fit(0)
            dfgram.peak_as_curve(0)
        assert dfgram.computations() == {"bg_fit": 1, "bg_as_curve": 0, "curve_minus_bg": 1}
        assert dfgram.peak_computations(0) == {"raw_outcome": 0, "peak_fit": 1, "peak_as_curve": 1}

    def test_invalidate_one_peak(self, diffractogram, diffractogram_setup):
        """Other peaks and the background are kept."""
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        dfgram.peak_fit(0)
        dfgram.peak_fit(1)
        dfgram.invalidate_peak_at(0)
        dfgram.peak_fit(0)
        dfgram.peak_fit(1)
        assert dfgram.peak_computations(0)["peak_fit"] == 2
        assert dfgram.peak_computations(1)["peak_fit"] == 1
        assert dfgram.computations()["bg_fit"] == 1

    def test_invalidate_peaks(self, diffractogram, diffractogram_setup):
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        dfgram.raw_outcome(1)
        dfgram.invalidate_peaks()
        dfgram.raw_outcome(1)
        assert dfgram.peak_computations(1)["raw_outcome"] == 2
        assert dfgram.computations()["curve_minus_bg"] == 1

    def test_invalidate_bg_cascades(self, diffractogram, diffractogram_setup):
        """Dropping the background drops every peak result."""
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        dfgram.bg_as_curve  # noqa: B018
        dfgram.peak_fit(0)
        dfgram.raw_outcome(1)
        dfgram.invalidate_bg()
        dfgram.bg_as_curve  # noqa: B018
        dfgram.peak_fit(0)
        dfgram.raw_outcome(1)
        assert dfgram.computations()["bg_fit"] == 2
        assert dfgram.computations()["bg_as_curve"] == 2
        assert dfgram.peak_computations(1)["raw_outcome"] == 2
        assert dfgram.computations()["curve_minus_bg"] == 2
        assert dfgram.peak_computations(0)["peak_fit"] == 2

    def test_set_setup(self, diffractogram, diffractogram_setup):
        dfgram = Dfgram(diffractogram, diffractogram_setup)
        dfgram.bg_fit  # noqa: B018
        new_setup = FitSetup(bg_ranges=Ranges([Range(40.0, 50.0)]), bg_degree=0)
        dfgram.set_setup(new_setup)
        assert dfgram.setup is new_setup
        assert dfgram.bg_fit.degree == 0
        assert dfgram.computations()["bg_fit"] == 2
