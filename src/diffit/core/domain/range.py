"""Closed real intervals and ordered sets of them.

A ``Range`` with NaN bounds is *invalid*: it stands for "no data yet" and is
distinct from a valid single-point range. ``Ranges`` keeps its members
sorted and non-overlapping, which lets ``Curve.intersect`` walk samples and
ranges in a single pass.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from diffit.core.shared.exceptions import ConfigError


@dataclass(slots=True)
class Range:
    """Interval ``[min, max]``; invalid while either bound is NaN."""

    min: float = math.nan
    max: float = math.nan

    @classmethod
    def infinite(cls) -> Range:
        return cls(-math.inf, math.inf)

    @classmethod
    def point(cls, value: float) -> Range:
        return cls(value, value)

    @classmethod
    def safe_from(cls, lo: float, hi: float) -> Range:
        """Build a range, swapping the bounds if given in reverse order."""
        rge = cls()
        rge.safe_set(lo, hi)
        return rge

    def set(self, lo: float, hi: float) -> None:
        self.min = lo
        self.max = hi

    def safe_set(self, lo: float, hi: float) -> None:
        if lo > hi:
            lo, hi = hi, lo
        self.set(lo, hi)

    def invalidate(self) -> None:
        self.set(math.nan, math.nan)

    def is_valid(self) -> bool:
        return not (math.isnan(self.min) or math.isnan(self.max))

    def is_empty(self) -> bool:
        """True for an invalid range or one with no interior."""
        return not self.is_valid() or self.min >= self.max

    def width(self) -> float:
        return self.max - self.min if self.is_valid() else math.nan

    def center(self) -> float:
        return (self.min + self.max) / 2 if self.is_valid() else math.nan

    def contains(self, other: float | Range) -> bool:
        """Check whether a value, or a whole range, lies inside this range."""
        if isinstance(other, Range):
            return self.min <= other.min and other.max <= self.max
        return self.min <= other <= self.max

    def intersects(self, other: Range) -> bool:
        return self.min <= other.max and other.min <= self.max

    def intersect(self, other: Range) -> Range:
        """Return the overlap, or an invalid range when there is none."""
        if not (self.is_valid() and other.is_valid()) or not self.intersects(other):
            return Range()
        return Range(max(self.min, other.min), min(self.max, other.max))

    def extend_by(self, value: float) -> None:
        """Grow to include ``value``; an invalid range becomes a point range."""
        if not self.is_valid():
            self.set(value, value)
            return
        self.min = min(self.min, value)
        self.max = max(self.max, value)

    def extend(self, other: Range) -> None:
        if not other.is_valid():
            return
        self.extend_by(other.min)
        self.extend_by(other.max)

    def bound(self, value: float) -> float:
        """Clamp ``value`` into the range."""
        return min(max(value, self.min), self.max)

    def copy(self) -> Range:
        return Range(self.min, self.max)

    def to_json(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_json(cls, obj: Any) -> Range:
        try:
            return cls(float(obj["min"]), float(obj["max"]))
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Invalid range object: {obj!r}"
            raise ConfigError(msg) from exc

    def __str__(self) -> str:
        return f"[{self.min:g}, {self.max:g}]"


class Ranges:
    """Sorted collection of non-overlapping ranges."""

    def __init__(self, ranges: Sequence[Range] = ()) -> None:
        self._ranges: list[Range] = []
        for rge in ranges:
            self.add(rge)

    def add(self, rge: Range) -> bool:
        """Add a range, merging every member it overlaps.

        Returns
        -------
            False if the range was already covered by a single member
        """
        if not rge.is_valid():
            return False
        for member in self._ranges:
            if member.contains(rge):
                return False

        merged = rge.copy()
        kept: list[Range] = []
        for member in self._ranges:
            if member.intersects(merged):
                merged.extend(member)
            else:
                kept.append(member)
        kept.append(merged)
        kept.sort(key=lambda r: r.min)
        self._ranges = kept
        return True

    def remove(self, rge: Range) -> bool:
        """Cut ``rge`` out of the collection, splitting members as needed.

        Returns
        -------
            True if any member changed
        """
        changed = False
        kept: list[Range] = []
        for member in self._ranges:
            if not member.intersects(rge):
                kept.append(member)
                continue
            changed = True
            if member.min < rge.min:
                kept.append(Range(member.min, rge.min))
            if rge.max < member.max:
                kept.append(Range(rge.max, member.max))
        self._ranges = kept
        return changed

    def clear(self) -> None:
        self._ranges.clear()

    def is_empty(self) -> bool:
        return not self._ranges

    def count(self) -> int:
        return len(self._ranges)

    def at(self, i: int) -> Range:
        return self._ranges[i]

    def __len__(self) -> int:
        return len(self._ranges)

    def __getitem__(self, i: int) -> Range:
        return self._ranges[i]

    def __iter__(self) -> Iterator[Range]:
        return iter(self._ranges)

    def __repr__(self) -> str:
        return f"Ranges({', '.join(str(r) for r in self._ranges)})"

    def to_json(self) -> list[dict[str, float]]:
        return [rge.to_json() for rge in self._ranges]

    @classmethod
    def from_json(cls, arr: Any) -> Ranges:
        if not isinstance(arr, list):
            msg = f"Expected a list of ranges, got {type(arr).__name__}"
            raise ConfigError(msg)
        return cls([Range.from_json(obj) for obj in arr])
