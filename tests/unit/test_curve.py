"""Test curves and points."""

import math

import numpy as np
import pytest

from diffit.core.domain.curve import XY, Curve
from diffit.core.domain.range import Range, Ranges
from diffit.core.fitting.functions import Polynom


def make_curve(xs, ys):
    return Curve.from_arrays(xs, ys)


class TestXY:
    """Tests for points."""

    def test_default_invalid(self):
        assert not XY().is_valid()

    def test_valid(self):
        assert XY(1.0, 2.0).is_valid()

    def test_half_nan_invalid(self):
        assert not XY(1.0, math.nan).is_valid()

    def test_json_round_trip(self):
        assert XY.from_json(XY(1.5, -2.0).to_json()) == XY(1.5, -2.0)


class TestCurveBasics:
    """Tests for appending and ranges."""

    def test_empty_curve(self):
        """A new curve has no samples and invalid ranges."""
        c = Curve()
        assert c.is_empty()
        assert len(c) == 0
        assert not c.rge_x.is_valid()
        assert not c.rge_y.is_valid()

    def test_append_tracks_ranges(self):
        """Ranges grow with each appended sample."""
        c = Curve()
        c.append(1.2, 3.14)
        assert c.rge_x == Range(1.2, 1.2)
        assert c.rge_y == Range(3.14, 3.14)
        c.append(2.4, 0.0)
        assert c.rge_x == Range(1.2, 2.4)
        assert c.rge_y == Range(0.0, 3.14)
        assert c.is_ordered()

    def test_clear(self):
        c = make_curve([1.0, 2.0], [3.0, 4.0])
        c.clear()
        assert c.is_empty()
        assert not c.rge_x.is_valid()

    def test_unordered_detected(self):
        assert not make_curve([2.0, 1.0], [0.0, 0.0]).is_ordered()

    def test_arrays(self):
        c = make_curve([1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        np.testing.assert_array_equal(c.xs, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(c.ys, [4.0, 5.0, 6.0])
        assert c.x(1) == 2.0
        assert c.y(2) == 6.0

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="Length mismatch"):
            Curve.from_arrays([1.0, 2.0], [1.0])


class TestCurveOperations:
    """Tests for derived curves."""

    def setup_method(self):
        self.curve = make_curve(np.arange(10.0), np.arange(10.0) * 2)

    def test_intersect_range_inclusive(self):
        """Both bounds of the range are inclusive."""
        sub = self.curve.intersect(Range(2.0, 5.0))
        np.testing.assert_array_equal(sub.xs, [2.0, 3.0, 4.0, 5.0])

    def test_intersect_empty_range(self):
        """An empty range selects nothing."""
        assert self.curve.intersect(Range.point(3.0)).is_empty()
        assert self.curve.intersect(Range()).is_empty()

    def test_intersect_ranges(self):
        """Samples from several ranges are collected in order."""
        sub = self.curve.intersect(Ranges([Range(1.0, 2.0), Range(7.0, 8.5)]))
        np.testing.assert_array_equal(sub.xs, [1.0, 2.0, 7.0, 8.0])

    def test_subtract_function(self):
        """Subtracting y = 2x leaves zeros."""
        poly = Polynom(1)
        poly.set_value(1, 2.0)
        diff = self.curve.subtract(poly)
        np.testing.assert_allclose(diff.ys, 0.0)
        np.testing.assert_array_equal(diff.xs, self.curve.xs)

    def test_add_uses_longer_x(self):
        """The shorter curve is added to the first points of the longer one."""
        short = make_curve([100.0, 101.0], [1.0, 1.0])
        total = short.add(self.curve)
        assert total.count() == 10
        np.testing.assert_array_equal(total.xs, self.curve.xs)
        assert total.y(0) == 1.0
        assert total.y(1) == 3.0
        assert total.y(2) == 4.0

    def test_mul(self):
        np.testing.assert_array_equal(self.curve.mul(0.5).ys, np.arange(10.0))

    def test_smooth3(self):
        """Three-point average, two samples shorter."""
        smooth = make_curve([0.0, 1.0, 2.0, 3.0], [0.0, 3.0, 6.0, 0.0]).smooth3()
        np.testing.assert_array_equal(smooth.xs, [1.0, 2.0])
        np.testing.assert_allclose(smooth.ys, [3.0, 3.0])

    def test_smooth3_short_curve(self):
        assert make_curve([0.0, 1.0], [1.0, 1.0]).smooth3().is_empty()

    def test_max_y_index_first_maximum(self):
        """Ties resolve to the first maximal sample."""
        c = make_curve([0.0, 1.0, 2.0, 3.0], [1.0, 5.0, 5.0, 2.0])
        assert c.max_y_index() == 1
        assert Curve().max_y_index() == 0

    def test_sum_y(self):
        assert self.curve.sum_y() == 90.0
