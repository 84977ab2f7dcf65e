"""
Datasets package public API.

Re-export the generators so callers can write:
    from permsort.datasets import make_dataset, make_permutation, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, make_dataset, make_permutation, make_records

__all__ = ["SUPPORTED_DISTS", "make_dataset", "make_permutation", "make_records"]
