"""
Sorted collections public API.

Re-exports:
    - OrderedArraySet, OrderedArraySetCursor
    - binary_search, binary_closest_search, upper_bound
"""

from .ordered_set import OrderedArraySet, OrderedArraySetCursor
from .search import binary_closest_search, binary_search, upper_bound

__all__ = [
    "OrderedArraySet",
    "OrderedArraySetCursor",
    "binary_search",
    "binary_closest_search",
    "upper_bound",
]
