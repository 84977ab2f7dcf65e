"""
Permutation-sort engine public API.

Re-exports:
    - Index arrays:
        build_index
        IndexPermutation

    - Ordering:
        sort (stable run-detecting merge sort)

    - Applying:
        STRATEGIES
        apply_permutation
        check_permutation

    - Front-ends:
        sort_indexed
        sort_paired
"""

from .apply import STRATEGIES, apply_permutation, check_permutation
from .index import IndexPermutation, build_index
from .sort import sort_indexed, sort_paired
from .timsort import sort

__all__ = [
    "build_index",
    "IndexPermutation",
    "sort",
    "STRATEGIES",
    "apply_permutation",
    "check_permutation",
    "sort_indexed",
    "sort_paired",
]
