"""
Apply a permutation to storage in place.

Given storage ``data[0..n)`` and a permutation ``index[0..n)``, rewrite
`data` so that afterwards

    data[k] == original_data[index[k]]     for every k

with no element duplicated or lost. `data` can be a Python list, a
``numpy.ndarray``, or any container exposing ``len()``, ``data[i]`` and
``data[i] = v``; the algorithm only uses those primitives.

Strategies
----------
"cycle" (default)
    Decompose `index` into disjoint cycles and rotate each one by holding
    its first value, walking the cycle, and depositing the held value when
    the walk returns to the start. A ``bytearray`` marks visited positions.
    O(n) time, n bytes of bookkeeping, and a constant call depth for every n.

"buffered"
    Copy ``data[index[k]]`` for every k into a full-size buffer in one scan,
    then copy the buffer back. O(n) extra references.

Both strategies produce identical output for every (data, index) pair.

Public API (stable):
    apply_permutation(data, index, strategy="cycle") -> None
    check_permutation(index, n) -> None
    STRATEGIES
"""

from __future__ import annotations

import logging
from typing import Any, List, MutableSequence, Sequence

import numpy as np

logger = logging.getLogger(__name__)

STRATEGIES = ("cycle", "buffered")

__all__ = ["STRATEGIES", "apply_permutation", "check_permutation"]


def apply_permutation(data: MutableSequence[Any], index: Sequence[int], strategy: str = "cycle") -> None:
    """
    Reorder `data` in place so that ``data[k]`` becomes ``data[index[k]]``.

    Parameters
    ----------
    data : mutable sequence
        Storage to reorder. Exclusively owned by the caller for the duration
        of the call.
    index : sequence of int
        A permutation of ``range(len(data))``. Not modified.
    strategy : str
        One of `STRATEGIES`.

    Raises
    ------
    TypeError
        If `data` or `index` is None.
    ValueError
        If the lengths differ, `index` is not a permutation, or `strategy` is
        unknown. Nothing is moved in that case.
    """
    if data is None:
        raise TypeError("data must not be None")
    if index is None:
        raise TypeError("index must not be None")
    if strategy not in STRATEGIES:
        raise ValueError(f"Unsupported permutation strategy: {strategy!r}. Supported: {list(STRATEGIES)}")

    n = len(data)
    if len(index) != n:
        raise ValueError(f"len(data) [{n}] and len(index) [{len(index)}] must be equal")
    check_permutation(index, n)

    logger.debug("applying permutation of length %d with strategy %r", n, strategy)
    if strategy == "cycle":
        _apply_cycles(data, index, n)
    else:
        _apply_buffered(data, index, n)


def check_permutation(index: Sequence[int], n: int) -> None:
    """Raise ValueError unless `index` is a permutation of ``range(n)``."""
    if len(index) != n:
        raise ValueError(f"index has length {len(index)}; expected {n}")
    seen = bytearray(n)
    for k in range(n):
        i = int(index[k])
        if i < 0 or i >= n:
            raise ValueError(f"index[{k}] = {i} is out of range [0, {n})")
        if seen[i]:
            raise ValueError(f"index[{k}] = {i} appears more than once")
        seen[i] = 1


# ------------------------- strategies ------------------------- #


def _apply_cycles(data: MutableSequence[Any], index: Sequence[int], n: int) -> None:
    visited = bytearray(n)
    for start in range(n):
        if visited[start]:
            continue
        if int(index[start]) == start:
            visited[start] = 1
            continue

        held = _take(data, start)
        k = start
        while True:
            visited[k] = 1
            src = int(index[k])
            if src == start:
                data[k] = held
                break
            data[k] = data[src]
            k = src


def _apply_buffered(data: MutableSequence[Any], index: Sequence[int], n: int) -> None:
    buffer: List[Any] = [_take(data, int(index[k])) for k in range(n)]
    for k in range(n):
        data[k] = buffer[k]
        buffer[k] = None


def _take(data: MutableSequence[Any], i: int) -> Any:
    value = data[i]
    # Rows of a multi-dimensional ndarray are views into `data`
    if isinstance(value, np.ndarray):
        return value.copy()
    return value
