"""
Stable run-detecting merge sort driven by a three-way comparator.

This is the ordering step of the permutation engine: it sorts an index array
in place using a comparator over indices (see
`permsort.comparators.index_comparator`). It works on any mutable
random-access sequence, touching elements only through ``a[i]`` and
``a[i] = v``.

The algorithm follows the shape of CPython's listsort:
- Scan for natural runs. Ascending runs are non-decreasing; descending runs
  are strictly decreasing so they can be reversed without breaking
  stability.
- Runs shorter than `min_run_length(n)` are extended by binary insertion.
- Runs are pushed on a stack and merged while the stack invariants hold:
      |Z| > |Y| + |X|   and   |Y| > |X|
  for the top three runs X (top), Y, Z.
- A merge that finds its two runs already in order is skipped, so pre-sorted
  input costs n - 1 comparisons.

Ties always take the element from the left run, which makes the sort stable.

Public API (stable):
    sort(a, compare, lo=0, hi=None) -> None
    count_run(a, lo, hi, compare) -> tuple[int, bool]
    binary_insertion_sort(a, lo, hi, start, compare) -> None
    min_run_length(n) -> int
"""

from __future__ import annotations

from typing import Any, Callable, List, MutableSequence, Optional, Tuple

from ..comparators import require_comparator

Compare = Callable[[Any, Any], int]

MIN_MERGE = 32

__all__ = ["MIN_MERGE", "sort", "count_run", "binary_insertion_sort", "min_run_length"]


def sort(a: MutableSequence[Any], compare: Compare, lo: int = 0, hi: Optional[int] = None) -> None:
    """
    Stably sort ``a[lo:hi]`` in place according to `compare`.

    Parameters
    ----------
    a : mutable sequence
        Storage to sort. Typically an index array of ints.
    compare : callable
        Three-way comparator over elements of `a`.
    lo, hi : int
        Half-open range to sort; `hi` defaults to ``len(a)``.

    Raises
    ------
    TypeError
        If `compare` is None or not callable.
    ValueError
        If the range is invalid.
    """
    require_comparator(compare, "compare")
    lo, hi = _check_range(a, lo, hi)

    remaining = hi - lo
    if remaining < 2:
        return

    if remaining < MIN_MERGE:
        run_len = _make_ascending_run(a, lo, hi, compare)
        binary_insertion_sort(a, lo, hi, lo + run_len, compare)
        return

    min_run = min_run_length(remaining)
    runs: List[List[int]] = []  # [base, length]
    while remaining > 0:
        run_len = _make_ascending_run(a, lo, hi, compare)

        # Extend short runs to min(min_run, remaining)
        if run_len < min_run:
            forced = min(min_run, remaining)
            binary_insertion_sort(a, lo, lo + forced, lo + run_len, compare)
            run_len = forced

        runs.append([lo, run_len])
        _merge_collapse(a, runs, compare)

        lo += run_len
        remaining -= run_len

    _merge_force_collapse(a, runs, compare)
    assert len(runs) == 1 and runs[0][1] == hi - runs[0][0]


def min_run_length(n: int) -> int:
    """
    Return the minimum run length for an input of size `n`.

    For n < MIN_MERGE this is n itself; otherwise a value k in
    [MIN_MERGE/2, MIN_MERGE] such that n / k is close to, and no larger than,
    a power of two.
    """
    if n < 0:
        raise ValueError("n must be nonnegative")
    r = 0
    while n >= MIN_MERGE:
        r |= n & 1
        n >>= 1
    return n + r


def count_run(a: MutableSequence[Any], lo: int, hi: int, compare: Compare) -> Tuple[int, bool]:
    """
    Return ``(length, descending)`` for the run starting at `lo` in ``a[lo:hi]``.

    An ascending run satisfies ``a[lo] <= a[lo+1] <= ...``; a descending run
    satisfies ``a[lo] > a[lo+1] > ...`` (strict, so reversing it is stable).
    """
    if lo >= hi:
        raise ValueError(f"count_run requires lo < hi; got lo={lo}, hi={hi}")
    if lo + 1 == hi:
        return 1, False

    k = lo + 2
    if compare(a[lo + 1], a[lo]) < 0:
        while k < hi and compare(a[k], a[k - 1]) < 0:
            k += 1
        return k - lo, True

    while k < hi and compare(a[k], a[k - 1]) >= 0:
        k += 1
    return k - lo, False


def binary_insertion_sort(
    a: MutableSequence[Any], lo: int, hi: int, start: int, compare: Compare
) -> None:
    """
    Sort ``a[lo:hi]`` by binary insertion, given that ``a[lo:start]`` is sorted.

    The insertion point for each pivot is after every element equal to it,
    which keeps the sort stable.
    """
    if not lo <= start <= hi:
        raise ValueError(f"binary_insertion_sort requires lo <= start <= hi; got {lo}, {start}, {hi}")
    if start == lo:
        start += 1

    while start < hi:
        pivot = a[start]
        left, right = lo, start
        # pivot >= all in [lo, left); pivot < all in [right, start)
        while left < right:
            mid = (left + right) >> 1
            if compare(pivot, a[mid]) < 0:
                right = mid
            else:
                left = mid + 1

        for p in range(start, left, -1):
            a[p] = a[p - 1]
        a[left] = pivot
        start += 1


# ------------------------- helpers ------------------------- #


def _check_range(a: MutableSequence[Any], lo: int, hi: Optional[int]) -> Tuple[int, int]:
    if a is None:
        raise TypeError("sequence to sort must not be None")
    n = len(a)
    if hi is None:
        hi = n
    if not 0 <= lo <= hi <= n:
        raise ValueError(f"invalid sort range [{lo}, {hi}) for length {n}")
    return lo, hi


def _make_ascending_run(a: MutableSequence[Any], lo: int, hi: int, compare: Compare) -> int:
    run_len, descending = count_run(a, lo, hi, compare)
    if descending:
        _reverse_range(a, lo, lo + run_len)
    return run_len


def _reverse_range(a: MutableSequence[Any], lo: int, hi: int) -> None:
    hi -= 1
    while lo < hi:
        a[lo], a[hi] = a[hi], a[lo]
        lo += 1
        hi -= 1


def _merge_collapse(a: MutableSequence[Any], runs: List[List[int]], compare: Compare) -> None:
    while len(runs) > 1:
        n = len(runs) - 2
        if (n > 0 and runs[n - 1][1] <= runs[n][1] + runs[n + 1][1]) or (
            n > 1 and runs[n - 2][1] <= runs[n - 1][1] + runs[n][1]
        ):
            if runs[n - 1][1] < runs[n + 1][1]:
                n -= 1
        elif runs[n][1] > runs[n + 1][1]:
            break
        _merge_at(a, runs, n, compare)


def _merge_force_collapse(a: MutableSequence[Any], runs: List[List[int]], compare: Compare) -> None:
    while len(runs) > 1:
        n = len(runs) - 2
        if n > 0 and runs[n - 1][1] < runs[n + 1][1]:
            n -= 1
        _merge_at(a, runs, n, compare)


def _merge_at(a: MutableSequence[Any], runs: List[List[int]], i: int, compare: Compare) -> None:
    base1, len1 = runs[i]
    base2, len2 = runs[i + 1]
    assert base1 + len1 == base2

    runs[i] = [base1, len1 + len2]
    del runs[i + 1]

    # Already in order: nothing to move
    if compare(a[base2 - 1], a[base2]) <= 0:
        return

    _merge_lo(a, base1, len1, base2, len2, compare)


def _merge_lo(
    a: MutableSequence[Any], base1: int, len1: int, base2: int, len2: int, compare: Compare
) -> None:
    tmp = [a[k] for k in range(base1, base1 + len1)]
    i = 0
    j = base2
    end2 = base2 + len2
    dest = base1

    while i < len1 and j < end2:
        # Strict < keeps equal elements from the left run first
        if compare(a[j], tmp[i]) < 0:
            a[dest] = a[j]
            j += 1
        else:
            a[dest] = tmp[i]
            i += 1
        dest += 1

    # Leftovers of the right run are already in place
    while i < len1:
        a[dest] = tmp[i]
        i += 1
        dest += 1
