"""Fit function hierarchy: parametric functions, their sum, and the polynomial.

Every function exposes the same evaluation contract used by the fitter:
``y(x, par_values)`` and the analytic partial derivative
``dy(x, index, par_values)``. ``x`` may be a scalar or a numpy array.
``par_values`` is an optional flat override vector; when omitted the
stored parameter values are used.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

from diffit.core.domain.range import Range, Ranges
from diffit.core.fitting.optimizer import LevenbergMarquardtFitter
from diffit.core.fitting.parameters import Parameter
from diffit.core.shared.exceptions import ConfigError, StateError

if TYPE_CHECKING:
    from diffit.core.domain.curve import Curve
    from diffit.core.fitting.results import FitReport
    from diffit.core.shared.typing import ParValues, XValue

KEY_TYPE = "type"
KEY_PARAMETERS = "parameters"
KEY_FUNCTION_COUNT = "function count"


def _pow_n(x: XValue, n: int) -> XValue:
    """``x**n`` for a non-negative integer ``n`` by repeated multiplication."""
    val: Any = np.ones_like(x, dtype=np.float64) if isinstance(x, np.ndarray) else 1.0
    for _ in range(n):
        val = val * x
    return val


class Function(ABC):
    """A function of one variable with an ordered list of fit parameters."""

    type_tag: ClassVar[str] = ""

    @abstractmethod
    def parameter_count(self) -> int:
        """Size of the optimization vector for this function."""

    @abstractmethod
    def parameter_at(self, index: int) -> Parameter: ...

    @abstractmethod
    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue: ...

    @abstractmethod
    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue: ...

    @abstractmethod
    def reset(self) -> None:
        """Return every parameter to its reset state."""

    def parameters(self) -> list[Parameter]:
        return [self.parameter_at(i) for i in range(self.parameter_count())]

    def values(self) -> np.ndarray:
        """Current parameter values as a flat vector."""
        return np.array([p.value for p in self.parameters()], dtype=np.float64)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.parameter_count():
            msg = (
                f"Parameter index {index} out of range for {type(self).__name__} "
                f"with {self.parameter_count()} parameters"
            )
            raise IndexError(msg)

    def to_json(self) -> dict[str, Any]:
        return {KEY_TYPE: self.type_tag}

    def load_json(self, obj: dict[str, Any]) -> None:  # noqa: B027
        """Restore state from a persisted object; the base has none."""

    @classmethod
    def from_json(cls, obj: dict[str, Any]) -> Function:
        function = cls()
        function.load_json(obj)
        return function


class SimpleFunction(Function):
    """Function owning a flat list of parameters."""

    def __init__(self, parameter_count: int = 0) -> None:
        self._parameters: list[Parameter] = []
        self.set_parameter_count(parameter_count)

    def set_parameter_count(self, count: int) -> None:
        self._parameters = [Parameter() for _ in range(count)]

    def parameter_count(self) -> int:
        return len(self._parameters)

    def parameter_at(self, index: int) -> Parameter:
        self._check_index(index)
        return self._parameters[index]

    def par_value(self, index: int, par_values: ParValues | None = None) -> float:
        """Parameter value from the override vector, else the stored one."""
        if par_values is not None:
            return float(par_values[index])
        return self._parameters[index].value

    def set_value(self, index: int, value: float) -> None:
        self.parameter_at(index).set_value(value, 0.0)

    def reset(self) -> None:
        for par in self._parameters:
            par.set_value(par.value_range().bound(0.0), 0.0)

    def to_json(self) -> dict[str, Any]:
        obj = super().to_json()
        obj[KEY_PARAMETERS] = [par.to_json() for par in self._parameters]
        return obj

    def load_json(self, obj: dict[str, Any]) -> None:
        super().load_json(obj)
        params = obj.get(KEY_PARAMETERS)
        if not isinstance(params, list):
            msg = f"'{KEY_PARAMETERS}' must be a list in {self.type_tag or 'function'} object"
            raise ConfigError(msg)
        self._parameters = [Parameter.from_json(p) for p in params]

    def __repr__(self) -> str:
        pars = ", ".join(str(p) for p in self._parameters)
        return f"{type(self).__name__}({pars})"


class SumFunctions(Function):
    """Sum of sub-functions sharing one concatenated parameter vector.

    Sub-function ``k`` owns the contiguous window of aggregate indices that
    starts where sub-function ``k - 1`` ends. Windows never move.
    """

    type_tag: ClassVar[str] = "sum"

    def __init__(self) -> None:
        self._functions: list[Function] = []
        self._owner: list[int] = []
        self._first_index: list[int] = []

    @property
    def functions(self) -> tuple[Function, ...]:
        return tuple(self._functions)

    def add_function(self, function: Function) -> None:
        """Append ``function``; its parameters join the aggregate vector."""
        first = self.parameter_count()
        owner = len(self._functions)
        self._functions.append(function)
        for _ in range(function.parameter_count()):
            self._owner.append(owner)
            self._first_index.append(first)

    def parameter_count(self) -> int:
        return len(self._owner)

    def parameter_at(self, index: int) -> Parameter:
        self._check_index(index)
        first = self._first_index[index]
        return self._functions[self._owner[index]].parameter_at(index - first)

    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue:
        total: Any = np.zeros_like(x, dtype=np.float64) if isinstance(x, np.ndarray) else 0.0
        offset = 0
        for function in self._functions:
            count = function.parameter_count()
            window = None if par_values is None else par_values[offset : offset + count]
            total = total + function.y(x, window)
            offset += count
        return total

    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue:
        self._check_index(index)
        function = self._functions[self._owner[index]]
        first = self._first_index[index]
        window = None
        if par_values is not None:
            window = par_values[first : first + function.parameter_count()]
        return function.dy(x, index - first, window)

    def reset(self) -> None:
        for function in self._functions:
            function.reset()

    def to_json(self) -> dict[str, Any]:
        obj = super().to_json()
        obj[KEY_FUNCTION_COUNT] = len(self._functions)
        for i, function in enumerate(self._functions, start=1):
            obj[f"f{i}"] = function.to_json()
        return obj

    def load_json(self, obj: dict[str, Any]) -> None:
        """Load sub-functions in order.

        Raises
        ------
            StateError: If this aggregate already holds sub-functions
            ConfigError: If the object is malformed
        """
        from diffit.core.lineshapes.registry import function_from_json

        if self._functions:
            msg = "Cannot load into a non-empty sum of functions"
            raise StateError(msg)
        super().load_json(obj)

        try:
            count = int(obj[KEY_FUNCTION_COUNT])
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Missing or invalid '{KEY_FUNCTION_COUNT}' in sum object"
            raise ConfigError(msg) from exc

        for i in range(1, count + 1):
            key = f"f{i}"
            if key not in obj:
                msg = f"Missing sub-function '{key}' in sum object"
                raise ConfigError(msg)
            self.add_function(function_from_json(obj[key]))

    def __repr__(self) -> str:
        return f"SumFunctions({', '.join(repr(f) for f in self._functions)})"


class Polynom(SimpleFunction):
    """Polynomial background: coefficient ``i`` multiplies ``x**i``."""

    type_tag: ClassVar[str] = "polynom"

    def __init__(self, degree: int = 0) -> None:
        super().__init__(degree + 1)

    @property
    def degree(self) -> int:
        return self.parameter_count() - 1

    def set_degree(self, degree: int) -> None:
        self.set_parameter_count(degree + 1)

    def y(self, x: XValue, par_values: ParValues | None = None) -> XValue:
        val: Any = 0.0
        x_pow: Any = 1.0
        for i in range(self.parameter_count()):
            val = val + self.par_value(i, par_values) * x_pow
            x_pow = x_pow * x
        if isinstance(x, np.ndarray) and not isinstance(val, np.ndarray):
            return np.full_like(x, val, dtype=np.float64)
        return val

    def dy(self, x: XValue, index: int, par_values: ParValues | None = None) -> XValue:
        self._check_index(index)
        return _pow_n(x, index)

    def avg_y(self, rge: Range, par_values: ParValues | None = None) -> float:
        """Mean value of the polynomial over ``rge``.

        Integrates term by term; a zero-width range yields ``y(rge.min)``.

        Raises
        ------
            ValueError: If the range is invalid
        """
        if not rge.is_valid():
            msg = "Cannot average a polynomial over an invalid range"
            raise ValueError(msg)

        width = rge.width()
        if width <= 0:
            return float(self.y(rge.min, par_values))

        min_y = max_y = 0.0
        min_pow = max_pow = 1.0
        for i in range(self.parameter_count()):
            fac = self.par_value(i, par_values) / (i + 1)
            min_pow *= rge.min
            max_pow *= rge.max
            min_y += fac * min_pow
            max_y += fac * max_pow
        return (max_y - min_y) / width

    def fit(
        self,
        curve: Curve,
        ranges: Ranges | Sequence[Range],
        fitter: LevenbergMarquardtFitter | None = None,
    ) -> FitReport:
        """Fit the coefficients to the samples of ``curve`` inside ``ranges``."""
        if not isinstance(ranges, Ranges):
            ranges = Ranges(ranges)
        return (fitter or LevenbergMarquardtFitter()).fit(self, curve.intersect(ranges))

    @classmethod
    def from_fit(
        cls,
        degree: int,
        curve: Curve,
        ranges: Ranges | Sequence[Range],
        fitter: LevenbergMarquardtFitter | None = None,
    ) -> Polynom:
        poly = cls(degree)
        poly.fit(curve, ranges, fitter)
        return poly
