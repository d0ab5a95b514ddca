"""Test the function hierarchy: sums and polynomials."""

import numpy as np
import pytest

from diffit.core.domain.curve import Curve
from diffit.core.domain.range import Range
from diffit.core.fitting.functions import Polynom, SumFunctions
from diffit.core.lineshapes import Gaussian, function_from_json
from diffit.core.shared.exceptions import ConfigError, StateError


def make_poly(*coefficients):
    poly = Polynom(len(coefficients) - 1)
    for i, value in enumerate(coefficients):
        poly.set_value(i, value)
    return poly


class TestPolynom:
    """Tests for the polynomial background."""

    def test_degree(self):
        poly = Polynom(3)
        assert poly.degree == 3
        assert poly.parameter_count() == 4
        poly.set_degree(1)
        assert poly.parameter_count() == 2

    def test_y_scalar_and_array(self):
        """1 + 2x + 3x^2."""
        poly = make_poly(1.0, 2.0, 3.0)
        assert poly.y(2.0) == pytest.approx(17.0)
        np.testing.assert_allclose(poly.y(np.array([0.0, 1.0])), [1.0, 6.0])

    def test_constant_broadcasts(self):
        poly = make_poly(4.0)
        np.testing.assert_array_equal(poly.y(np.zeros(3)), [4.0, 4.0, 4.0])

    def test_dy_is_power(self):
        poly = make_poly(1.0, 2.0, 3.0)
        assert poly.dy(3.0, 0) == 1.0
        assert poly.dy(3.0, 2) == 9.0

    def test_override_vector(self):
        """An override vector replaces the stored coefficients."""
        poly = make_poly(1.0, 1.0)
        assert poly.y(2.0, np.array([0.0, 5.0])) == pytest.approx(10.0)

    def test_index_out_of_range(self):
        with pytest.raises(IndexError):
            Polynom(1).dy(0.0, 2)
        with pytest.raises(IndexError):
            Polynom(1).parameter_at(-1)

    def test_avg_y_over_range(self):
        """Mean of 2x over [0, 4] is 4."""
        assert make_poly(0.0, 2.0).avg_y(Range(0.0, 4.0)) == pytest.approx(4.0)

    def test_avg_y_zero_width(self):
        """A point range averages to the value at that point."""
        poly = make_poly(1.0, 2.0, 3.0)
        assert poly.avg_y(Range.point(2.0)) == pytest.approx(poly.y(2.0))

    def test_avg_y_invalid_range(self):
        with pytest.raises(ValueError, match="invalid range"):
            make_poly(1.0).avg_y(Range())

    def test_reset_zeroes(self):
        poly = make_poly(1.0, 2.0)
        poly.reset()
        np.testing.assert_array_equal(poly.values(), [0.0, 0.0])

    def test_fit_without_ranges_stays_zero(self, linear_curve):
        """No background ranges means nothing to fit."""
        poly = Polynom.from_fit(1, linear_curve, [])
        np.testing.assert_array_equal(poly.values(), [0.0, 0.0])

    def test_json_round_trip(self):
        poly = make_poly(1.0, -2.0)
        restored = function_from_json(poly.to_json())
        assert isinstance(restored, Polynom)
        np.testing.assert_array_equal(restored.values(), [1.0, -2.0])


class TestSumFunctions:
    """Tests for aggregate functions."""

    def setup_method(self):
        self.total = SumFunctions()
        self.total.add_function(make_poly(1.0, 2.0))
        self.total.add_function(Gaussian(ampl=3.0, x_shift=0.0, sigma=1.0))

    def test_parameter_count(self):
        assert self.total.parameter_count() == 5
        assert len(self.total.functions) == 2

    def test_parameter_at_maps_to_owner(self):
        """Aggregate index 2 is the Gaussian's amplitude."""
        assert self.total.parameter_at(2).value == 3.0
        assert self.total.parameter_at(1).value == 2.0

    def test_y_is_sum(self):
        assert self.total.y(0.0) == pytest.approx(1.0 + 3.0)

    def test_y_with_override(self):
        """Each sub-function reads its own window of the vector."""
        values = np.array([0.0, 0.0, 2.0, 0.0, 1.0])
        assert self.total.y(0.0, values) == pytest.approx(2.0)

    def test_dy_delegates(self):
        """Derivatives use the owner's local index."""
        gauss = self.total.functions[1]
        assert self.total.dy(0.5, 2) == pytest.approx(gauss.dy(0.5, 0))
        assert self.total.dy(0.5, 1) == pytest.approx(0.5)

    def test_empty_sum(self):
        total = SumFunctions()
        assert total.parameter_count() == 0
        assert total.y(1.0) == 0.0

    def test_json_round_trip(self):
        restored = function_from_json(self.total.to_json())
        assert isinstance(restored, SumFunctions)
        assert restored.parameter_count() == 5
        assert restored.y(0.7) == pytest.approx(self.total.y(0.7))

    def test_load_into_non_empty(self):
        with pytest.raises(StateError):
            self.total.load_json(self.total.to_json())

    def test_missing_sub_function(self):
        obj = self.total.to_json()
        del obj["f2"]
        with pytest.raises(ConfigError, match="f2"):
            function_from_json(obj)

    def test_missing_count(self):
        with pytest.raises(ConfigError):
            function_from_json({"type": "sum"})


class TestRegistryLookup:
    """Tests for rebuilding functions by tag."""

    def test_unknown_type(self):
        with pytest.raises(ConfigError, match="Unknown function type"):
            function_from_json({"type": "Spline"})

    def test_missing_type(self):
        with pytest.raises(ConfigError):
            function_from_json({"parameters": []})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            function_from_json([1, 2])

    def test_fit_restricted_to_ranges(self):
        """Samples outside the background ranges are ignored."""
        xs = np.linspace(0.0, 10.0, 11)
        ys = np.where(xs > 5.0, 100.0, 2.0)
        poly = Polynom.from_fit(0, Curve.from_arrays(xs, ys), [Range(0.0, 4.0)])
        assert poly.parameter_at(0).value == pytest.approx(2.0)
