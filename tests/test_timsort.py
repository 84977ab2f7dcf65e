"""
Tests for the stable run-detecting merge sort.

What we check:
- Output matches the oracle (Python's stable `sorted`) exactly
- Stability on records with many equal keys
- Run detection helpers and range handling
"""

from __future__ import annotations

from typing import List, Tuple

import pytest
from hypothesis import given, settings, strategies as st

from permsort.comparators import comparing, natural_order, reverse_order
from permsort.permute import timsort
from permsort.validate import is_stable


def _by_key(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return natural_order(a[0], b[0])


# ------------------------- unit tests (deterministic) ------------------------- #


@pytest.mark.parametrize(
    "a",
    [
        [],
        [5],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [1, 3, 2, 3, 1, 2],
        list(range(100)),
        list(range(100))[::-1],
        [0, -1, 5, -10, 3, 3, 2] * 20,
    ],
)
def test_unit_cases(a: List[int]) -> None:
    expected = sorted(a)
    timsort.sort(a, natural_order)
    assert a == expected


def test_sorts_subrange_only() -> None:
    a = [9, 8, 5, 4, 3, 0]
    timsort.sort(a, natural_order, 1, 5)
    assert a == [9, 3, 4, 5, 8, 0]


def test_reverse_comparator() -> None:
    a = list(range(50))
    timsort.sort(a, reverse_order(natural_order))
    assert a == list(range(49, -1, -1))


def test_descending_run_with_ties_stays_stable() -> None:
    # Equal keys inside a descending stretch must not be reversed
    records = [(3, 0), (2, 1), (2, 2), (1, 3), (1, 4), (0, 5)] * 10
    records = [(k, i) for i, (k, _) in enumerate(records)]
    timsort.sort(records, _by_key)
    assert [k for k, _ in records] == sorted(k for k, _ in records)
    assert is_stable(records)


@pytest.mark.parametrize("bad", [(-1, 2), (2, 1), (0, 10)])
def test_invalid_range(bad: Tuple[int, int]) -> None:
    with pytest.raises(ValueError):
        timsort.sort([3, 2, 1], natural_order, *bad)


def test_none_comparator_rejected() -> None:
    with pytest.raises(TypeError):
        timsort.sort([2, 1], None)  # type: ignore[arg-type]


def test_count_run() -> None:
    assert timsort.count_run([1, 2, 2, 3, 0], 0, 5, natural_order) == (4, False)
    assert timsort.count_run([5, 4, 3, 3], 0, 4, natural_order) == (3, True)
    assert timsort.count_run([5], 0, 1, natural_order) == (1, False)
    with pytest.raises(ValueError):
        timsort.count_run([1], 1, 1, natural_order)


def test_binary_insertion_sort_keeps_prefix() -> None:
    a = [1, 4, 7, 3, 9, 0]
    timsort.binary_insertion_sort(a, 0, 6, 3, natural_order)
    assert a == [0, 1, 3, 4, 7, 9]


@pytest.mark.parametrize("n, expected", [(0, 0), (31, 31), (32, 16), (64, 16), (65, 17), (1000, 32)])
def test_min_run_length(n: int, expected: int) -> None:
    assert timsort.min_run_length(n) == expected


def test_presorted_input_uses_linear_comparisons() -> None:
    calls = 0

    def counting(a: int, b: int) -> int:
        nonlocal calls
        calls += 1
        return natural_order(a, b)

    a = list(range(5000))
    timsort.sort(a, counting)
    assert a == list(range(5000))
    assert calls == 4999


# ------------------------- property-based tests (randomized) ------------------------- #


@settings(deadline=None, max_examples=100)
@given(st.lists(st.integers(min_value=-10_000, max_value=10_000), max_size=600))
def test_property_matches_oracle(a: List[int]) -> None:
    expected = sorted(a)
    timsort.sort(a, natural_order)
    assert a == expected


@settings(deadline=None, max_examples=100)
@given(st.lists(st.integers(min_value=0, max_value=5), max_size=500))
def test_property_stable_on_many_duplicates(keys: List[int]) -> None:
    records = [(k, i) for i, k in enumerate(keys)]
    expected = sorted(records, key=lambda r: r[0])
    timsort.sort(records, comparing(lambda r: r[0]))
    assert records == expected
