"""
Three-way comparators.

A comparator is any callable ``(a, b) -> int`` returning a negative number,
zero, or a positive number when ``a`` sorts before, together with, or after
``b``. Comparators may treat unequal objects as equal (for instance when they
compare a single projected field); nothing in this package assumes that
``compare(a, b) == 0`` implies ``a == b``.

Public API (stable):
    natural_order(a, b) -> int
    nulls_first(comparator) -> Comparator
    DEFAULT_COMPARATOR
    reverse_order(comparator) -> Comparator
    comparing(key, comparator=natural_order) -> Comparator
    index_comparator(values, comparator) -> Comparator[int]
    require_comparator(comparator, name="comparator") -> Comparator
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar

T = TypeVar("T")
K = TypeVar("K")

Comparator = Callable[[Any, Any], int]

__all__ = [
    "Comparator",
    "natural_order",
    "nulls_first",
    "DEFAULT_COMPARATOR",
    "reverse_order",
    "comparing",
    "index_comparator",
    "require_comparator",
]


def require_comparator(comparator: Any, name: str = "comparator") -> Comparator:
    """Return `comparator` unchanged, or raise TypeError if it is unusable."""
    if comparator is None:
        raise TypeError(f"{name} must not be None")
    if not callable(comparator):
        raise TypeError(f"{name} must be callable; got {type(comparator).__name__}")
    return comparator


def natural_order(a: Any, b: Any) -> int:
    """Compare two values by their own ``<`` / ``>`` operators."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def nulls_first(comparator: Comparator) -> Comparator:
    """Wrap `comparator` so that ``None`` sorts before every other value."""
    require_comparator(comparator)

    def compare(a: Any, b: Any) -> int:
        if a is None:
            return 0 if b is None else -1
        if b is None:
            return 1
        return comparator(a, b)

    compare.__name__ = f"nulls_first({getattr(comparator, '__name__', 'comparator')})"
    return compare


DEFAULT_COMPARATOR: Comparator = nulls_first(natural_order)


def reverse_order(comparator: Comparator = natural_order) -> Comparator:
    require_comparator(comparator)

    def compare(a: Any, b: Any) -> int:
        return comparator(b, a)

    return compare


def comparing(key: Callable[[T], K], comparator: Comparator = natural_order) -> Comparator:
    """
    Build a comparator that orders values by ``key(value)``.

    Two values with equal keys compare as 0 even when the values themselves
    differ; this is how a sorted index over a projection is usually built.
    """
    if key is None:
        raise TypeError("key must not be None")
    require_comparator(comparator)

    def compare(a: T, b: T) -> int:
        return comparator(key(a), key(b))

    return compare


def index_comparator(values: Sequence[T], comparator: Comparator) -> Callable[[int, int], int]:
    """
    Lift an element comparator to a comparator over positions in `values`.

    The sort engine orders an index array, never the elements themselves, so
    callers pass it ``index_comparator(data, cmp)``.
    """
    if values is None:
        raise TypeError("values must not be None")
    require_comparator(comparator)

    def compare(i: int, j: int) -> int:
        return comparator(values[i], values[j])

    return compare
