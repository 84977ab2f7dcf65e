"""
permsort: correlated permutation sorting and an order-maintaining array set.

Re-exports the stable public API so callers can write:
    from permsort import sort_paired, OrderedArraySet
"""

from .collections import OrderedArraySet, OrderedArraySetCursor
from .comparators import (
    DEFAULT_COMPARATOR,
    comparing,
    index_comparator,
    natural_order,
    nulls_first,
    reverse_order,
)
from .errors import NoSuchElementError, UnsupportedOperationError
from .permute import (
    IndexPermutation,
    apply_permutation,
    build_index,
    sort_indexed,
    sort_paired,
)

__version__ = "0.1.0"

__all__ = [
    "OrderedArraySet",
    "OrderedArraySetCursor",
    "DEFAULT_COMPARATOR",
    "comparing",
    "index_comparator",
    "natural_order",
    "nulls_first",
    "reverse_order",
    "NoSuchElementError",
    "UnsupportedOperationError",
    "IndexPermutation",
    "apply_permutation",
    "build_index",
    "sort_indexed",
    "sort_paired",
]
