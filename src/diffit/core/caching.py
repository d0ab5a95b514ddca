"""Caching primitives for diffit.

``LazyCell`` memoizes a single computed value; ``SlotArena`` holds one
optional value per stable index. Both count computations so callers and
tests can see exactly when work was redone after an invalidation.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class LazyCell(Generic[T]):
    """A value computed on first read and kept until invalidated."""

    __slots__ = ("_computations", "_has_value", "_value")

    def __init__(self) -> None:
        self._value: T | None = None
        self._has_value = False
        self._computations = 0

    def get(self, compute: Callable[[], T]) -> T:
        """Return the cached value, computing it first if needed.

        Args:
            compute: Zero-argument callable producing the value

        Returns
        -------
            The cached value
        """
        if not self._has_value:
            self._value = compute()
            self._has_value = True
            self._computations += 1
        return self._value  # type: ignore[return-value]

    def invalidate(self) -> None:
        self._value = None
        self._has_value = False

    @property
    def is_cached(self) -> bool:
        return self._has_value

    @property
    def computations(self) -> int:
        """Number of times the value has been computed."""
        return self._computations


class SlotArena(Generic[T]):
    """Growable array of lazily computed values keyed by a stable index.

    Indices are never compacted: invalidating slot 3 leaves slots 4 and up
    where they are. Reading past the end grows the arena.
    """

    def __init__(self) -> None:
        self._cells: list[LazyCell[T]] = []

    def _cell(self, index: int) -> LazyCell[T]:
        if index < 0:
            msg = f"Slot index must be non-negative, got {index}"
            raise IndexError(msg)
        while len(self._cells) <= index:
            self._cells.append(LazyCell())
        return self._cells[index]

    def get(self, index: int, compute: Callable[[], T]) -> T:
        return self._cell(index).get(compute)

    def is_cached(self, index: int) -> bool:
        return 0 <= index < len(self._cells) and self._cells[index].is_cached

    def invalidate(self, index: int) -> None:
        if 0 <= index < len(self._cells):
            self._cells[index].invalidate()

    def invalidate_all(self) -> None:
        for cell in self._cells:
            cell.invalidate()

    def computations(self, index: int) -> int:
        """Number of times slot ``index`` has been computed."""
        if 0 <= index < len(self._cells):
            return self._cells[index].computations
        return 0

    def __len__(self) -> int:
        return len(self._cells)
