"""
Oracle for permutation-sort correctness.

We use Python's built-in `sorted()` as the ground truth:
- Stable, so it yields the exact permutation a stable sort must produce
- Deterministic and portable
- Accepts any three-way comparator through `functools.cmp_to_key`

Public API (stable):
    oracle_argsort(values, comparator=natural_order) -> list[int]
    oracle_apply(data, index) -> list
    equals_oracle(values, index, comparator=natural_order) -> bool

Conventions:
- The oracle never mutates its input and always returns a **new** list.
- The permutation engine must match the oracle's index exactly, since any
  stable sort has exactly one valid output permutation.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, List, Sequence

from ..comparators import Comparator, natural_order

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_argsort", "oracle_apply", "equals_oracle"]


def oracle_argsort(values: Sequence[Any], comparator: Comparator = natural_order) -> List[int]:
    """
    Return the stable sorting permutation of `values`.

    ``result[k]`` is the original position of the value that belongs at
    sorted position k.
    """
    key = cmp_to_key(comparator)
    return sorted(range(len(values)), key=lambda i: key(values[i]))


def oracle_apply(data: Sequence[Any], index: Sequence[int]) -> List[Any]:
    """Return a new list with ``out[k] == data[index[k]]``."""
    return [data[i] for i in index]


def equals_oracle(values: Sequence[Any], index: Sequence[int], comparator: Comparator = natural_order) -> bool:
    """True iff `index` equals the oracle's stable permutation of `values`."""
    return list(index) == oracle_argsort(values, comparator)
