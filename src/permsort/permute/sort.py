"""
Correlated sorting: order storage through an index permutation.

Both front-ends sort an index array and then commit the resulting order to
storage in place. Because the permutation is computed once, the same order
can be applied to several parallel containers and they stay correlated by
original position.

Example
-------
    >>> data = list("gijheacdbf")
    >>> order = [6, 8, 9, 7, 4, 0, 2, 3, 1, 5]
    >>> sort_paired(data, order)
    IndexPermutation([5, 8, 6, 7, 4, 9, 0, 3, 1, 2])
    >>> "".join(data), order
    ('abcdefghij', [0, 1, 2, 3, 4, 5, 6, 7, 8, 9])

Public API (stable):
    sort_indexed(data, comparator, *, strategy="cycle") -> IndexPermutation
    sort_paired(data, order, comparator=DEFAULT_COMPARATOR, *, strategy="cycle",
                sort_order=True) -> IndexPermutation
"""

from __future__ import annotations

import logging
from typing import Any, MutableSequence

from ..comparators import DEFAULT_COMPARATOR, Comparator, index_comparator, require_comparator
from .index import IndexPermutation

logger = logging.getLogger(__name__)

__all__ = ["sort_indexed", "sort_paired"]


def sort_indexed(
    data: MutableSequence[Any], comparator: Comparator, *, strategy: str = "cycle"
) -> IndexPermutation:
    """
    Stably sort `data` in place by computing and applying an index permutation.

    Returns the permutation that was applied, so callers can reorder other
    containers that run parallel to `data`.
    """
    if data is None:
        raise TypeError("data must not be None")
    require_comparator(comparator)

    perm = IndexPermutation(len(data))
    perm.sort(index_comparator(data, comparator))
    perm.apply_to(data, strategy=strategy)
    return perm


def sort_paired(
    data: MutableSequence[Any],
    order: MutableSequence[Any],
    comparator: Comparator = DEFAULT_COMPARATOR,
    *,
    strategy: str = "cycle",
    sort_order: bool = True,
) -> IndexPermutation:
    """
    Sort `data` by the keys held in the parallel sequence `order`.

    Parameters
    ----------
    data : mutable sequence
        Values to reorder.
    order : mutable sequence
        Sort keys; ``order[i]`` is the key of ``data[i]``.
    comparator : callable
        Three-way comparator over keys. Defaults to natural order with
        ``None`` keys first. Passing ``None`` is rejected.
    strategy : str
        Permutation strategy, see `permsort.permute.apply.STRATEGIES`.
    sort_order : bool
        If True, `order` is reordered with the same permutation.

    Raises
    ------
    TypeError
        If `data`, `order` or `comparator` is None.
    ValueError
        If ``len(data) != len(order)``.
    """
    if data is None:
        raise TypeError("data must not be None")
    if order is None:
        raise TypeError("order must not be None")
    require_comparator(comparator)
    if len(data) != len(order):
        raise ValueError(f"len(data) [{len(data)}] and len(order) [{len(order)}] must be equal")

    perm = IndexPermutation(len(order))
    perm.sort(index_comparator(order, comparator))
    logger.debug("sorted paired index of length %d", len(perm))

    perm.apply_to(data, strategy=strategy)
    if sort_order:
        perm.apply_to(order, strategy=strategy)
    return perm
