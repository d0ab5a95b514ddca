"""Measured 1D curves: points and ordered sample sequences."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from diffit.core.domain.range import Range, Ranges
from diffit.core.shared.exceptions import ConfigError

if TYPE_CHECKING:
    from diffit.core.fitting.functions import Function
    from diffit.core.shared.typing import FloatArray


@dataclass(slots=True)
class XY:
    """A point; invalid while either coordinate is NaN."""

    x: float = math.nan
    y: float = math.nan

    def is_valid(self) -> bool:
        return not (math.isnan(self.x) or math.isnan(self.y))

    def invalidate(self) -> None:
        self.x = math.nan
        self.y = math.nan

    def to_json(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_json(cls, obj: Any) -> XY:
        try:
            return cls(float(obj["x"]), float(obj["y"]))
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Invalid point object: {obj!r}"
            raise ConfigError(msg) from exc


class Curve:
    """Ordered samples ``(x, y)`` with incrementally tracked x and y ranges.

    Samples are expected in non-decreasing x order. Callers sort before
    appending; the range-restriction methods rely on it.
    """

    def __init__(self) -> None:
        self._xs: list[float] = []
        self._ys: list[float] = []
        self.rge_x = Range()
        self.rge_y = Range()

    @classmethod
    def from_arrays(cls, xs: Iterable[float], ys: Iterable[float]) -> Curve:
        """Build a curve from paired x and y sequences.

        Args:
            xs: Sample positions, non-decreasing
            ys: Sample values, same length as ``xs``

        Returns
        -------
            New curve holding the samples in the given order
        """
        xs_list = [float(x) for x in xs]
        ys_list = [float(y) for y in ys]
        if len(xs_list) != len(ys_list):
            msg = f"Length mismatch: {len(xs_list)} x values, {len(ys_list)} y values"
            raise ValueError(msg)
        curve = cls()
        for x, y in zip(xs_list, ys_list, strict=True):
            curve.append(x, y)
        return curve

    def clear(self) -> None:
        self._xs.clear()
        self._ys.clear()
        self.rge_x.invalidate()
        self.rge_y.invalidate()

    def is_empty(self) -> bool:
        return not self._xs

    def count(self) -> int:
        return len(self._xs)

    def __len__(self) -> int:
        return len(self._xs)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return zip(self._xs, self._ys, strict=True)

    def is_ordered(self) -> bool:
        return all(a <= b for a, b in zip(self._xs, self._xs[1:]))

    def append(self, x: float, y: float) -> None:
        self._xs.append(x)
        self._ys.append(y)
        self.rge_x.extend_by(x)
        self.rge_y.extend_by(y)

    def x(self, i: int) -> float:
        return self._xs[i]

    def y(self, i: int) -> float:
        return self._ys[i]

    @property
    def xs(self) -> FloatArray:
        return np.asarray(self._xs, dtype=np.float64)

    @property
    def ys(self) -> FloatArray:
        return np.asarray(self._ys, dtype=np.float64)

    def intersect(self, ranges: Range | Ranges) -> Curve:
        """Return the samples whose x lies in ``ranges`` (bounds inclusive).

        A single empty range selects nothing. Samples and ranges are both
        ordered, so one forward pass over the samples suffices.
        """
        if isinstance(ranges, Range):
            if ranges.is_empty():
                return Curve()
            ranges = Ranges([ranges])

        res = Curve()
        xi, cnt = 0, self.count()
        for rge in ranges:
            while xi < cnt and self._xs[xi] < rge.min:
                xi += 1
            while xi < cnt and self._xs[xi] <= rge.max:
                res.append(self._xs[xi], self._ys[xi])
                xi += 1
        return res

    def subtract(self, function: Function) -> Curve:
        """Return a copy with ``function`` evaluated at each x subtracted."""
        if self.is_empty():
            return Curve()
        xs = self.xs
        return Curve.from_arrays(xs, self.ys - np.asarray(function.y(xs)))

    def mul(self, factor: float) -> Curve:
        return Curve.from_arrays(self._xs, [y * factor for y in self._ys])

    def add(self, other: Curve) -> Curve:
        """Add two curves point by point.

        The result takes the x values of the longer curve; its trailing
        samples beyond the shorter curve are copied unchanged.
        """
        shorter, longer = (self, other) if self.count() <= other.count() else (other, self)
        res = Curve()
        for i in range(longer.count()):
            y = longer.y(i)
            if i < shorter.count():
                y += shorter.y(i)
            res.append(longer.x(i), y)
        return res

    def smooth3(self) -> Curve:
        """3-point moving average; the result is two samples shorter."""
        res = Curve()
        ys = self._ys
        for i in range(self.count() - 2):
            res.append(self._xs[i + 1], (ys[i] + ys[i + 1] + ys[i + 2]) / 3.0)
        return res

    def max_y_index(self) -> int:
        """Index of the first maximal y; 0 for an empty curve."""
        if self.is_empty():
            return 0
        index, y_max = 0, self._ys[0]
        for i, y in enumerate(self._ys):
            if y > y_max:
                index, y_max = i, y
        return index

    def sum_y(self) -> float:
        return math.fsum(self._ys)

    def __repr__(self) -> str:
        return f"Curve(count={self.count()}, x={self.rge_x}, y={self.rge_y})"
