"""
Binary search over sequences ordered by a three-way comparator.

The stdlib ``bisect`` module only understands ``<`` (or a key function), so
these helpers take a comparator directly. All of them search the half-open
range ``a[lo:hi]`` which must already be sorted by `comparator`.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from ..comparators import Comparator, require_comparator

__all__ = ["binary_search", "binary_closest_search", "upper_bound"]


def binary_search(
    a: Sequence[Any], key: Any, comparator: Comparator, lo: int = 0, hi: Optional[int] = None
) -> int:
    """
    Return the index of some element comparator-equal to `key`.

    If there is none, return ``-(insertion_point) - 1`` so that the result is
    ``>= 0`` if and only if a match was found. When several elements compare
    equal to `key` there is no guarantee which one is returned.
    """
    require_comparator(comparator)
    low, high = _check_range(a, lo, hi)
    high -= 1
    while low <= high:
        mid = (low + high) >> 1
        cmp = comparator(a[mid], key)
        if cmp < 0:
            low = mid + 1
        elif cmp > 0:
            high = mid - 1
        else:
            return mid
    return -(low + 1)


def binary_closest_search(
    a: Sequence[Any], key: Any, comparator: Comparator, lo: int = 0, hi: Optional[int] = None
) -> int:
    """
    Return the index of a comparator-equal element, or the insertion point.

    Unlike `binary_search` the result is always in ``[lo, hi]``.
    """
    require_comparator(comparator)
    low, high = _check_range(a, lo, hi)
    while low < high:
        mid = (low + high) >> 1
        cmp = comparator(key, a[mid])
        if cmp < 0:
            high = mid
        elif cmp > 0:
            low = mid + 1
        else:
            return mid
    return low


def upper_bound(
    a: Sequence[Any], key: Any, comparator: Comparator, lo: int = 0, hi: Optional[int] = None
) -> int:
    """Return the first index in ``a[lo:hi]`` whose element sorts after `key`."""
    require_comparator(comparator)
    low, high = _check_range(a, lo, hi)
    while low < high:
        mid = (low + high) >> 1
        if comparator(key, a[mid]) < 0:
            high = mid
        else:
            low = mid + 1
    return low


def _check_range(a: Sequence[Any], lo: int, hi: Optional[int]) -> Tuple[int, int]:
    if a is None:
        raise TypeError("sequence must not be None")
    n = len(a)
    if hi is None:
        hi = n
    if not 0 <= lo <= hi <= n:
        raise ValueError(f"invalid search range [{lo}, {hi}) for length {n}")
    return lo, hi
