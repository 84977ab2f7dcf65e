"""
Property helpers for validating permutation sorts and ordered sets.

These functions provide lightweight checks used in tests and, optionally,
by the benchmark runner for sanity validation.

Public API (stable):
    is_nondecreasing(xs, comparator=natural_order) -> bool
    first_nondecreasing_violation_index(xs, comparator=natural_order) -> int | None
    is_index_permutation(index, n) -> bool
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    is_stable(records, comparator) -> bool
    assert_no_mutation(before, after) -> None

Notes
-----
- Stability cannot be read off the values alone when equal keys are
  indistinguishable. `is_stable` therefore takes records tagged with their
  original position, as produced by `permsort.datasets.make_records`.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Hashable, Sequence, Tuple

from ..comparators import Comparator, natural_order

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_index_permutation",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
    "assert_no_mutation",
]


def is_nondecreasing(xs: Sequence[Any], comparator: Comparator = natural_order) -> bool:
    """Return True iff ``comparator(xs[i], xs[i+1]) <= 0`` for all i."""
    return first_nondecreasing_violation_index(xs, comparator) is None


def first_nondecreasing_violation_index(
    xs: Sequence[Any], comparator: Comparator = natural_order
) -> int | None:
    """
    Return the first index i where xs[i] sorts after xs[i+1], or None.

    Useful for precise error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if comparator(xs[i], xs[i + 1]) > 0:
            return i
    return None


def is_index_permutation(index: Sequence[int], n: int) -> bool:
    """Return True iff `index` holds every integer of ``range(n)`` exactly once."""
    if len(index) != n:
        return False
    seen = bytearray(n)
    for i in index:
        if not 0 <= i < n or seen[i]:
            return False
        seen[i] = 1
    return True


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """Return True iff `a` and `b` contain exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Return a dict of value -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical multiplicities.
    """
    ca = Counter(a)
    cb = Counter(b)
    diff: Dict[Hashable, int] = {}
    for k in set(ca) | set(cb):
        d = ca.get(k, 0) - cb.get(k, 0)
        if d != 0:
            diff[k] = d
    return diff


def is_stable(records: Sequence[Tuple[Any, int]], comparator: Comparator = natural_order) -> bool:
    """
    Return True iff comparator-equal keys appear in increasing tag order.

    `records` are ``(key, original_position)`` pairs after sorting by key.
    """
    for i in range(len(records) - 1):
        (k1, t1), (k2, t2) = records[i], records[i + 1]
        if comparator(k1, k2) == 0 and t1 > t2:
            return False
    return True


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert that two sequences are element-wise equal.

    Raises AssertionError naming the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x!r}, after={y!r}")
