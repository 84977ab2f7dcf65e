"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_argsort
        oracle_apply
        equals_oracle

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_index_permutation
        is_permutation
        permutation_counter_diff
        is_stable
        assert_no_mutation
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_apply, oracle_argsort
from .properties import (
    assert_no_mutation,
    first_nondecreasing_violation_index,
    is_index_permutation,
    is_nondecreasing,
    is_permutation,
    is_stable,
    permutation_counter_diff,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_argsort",
    "oracle_apply",
    "equals_oracle",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_index_permutation",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
    "assert_no_mutation",
]
