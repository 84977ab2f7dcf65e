"""
Index arrays: the addressable handle the sort engine orders.

An `IndexPermutation` starts as the identity ``[0, 1, ..., n-1]``. Sorting it
with a comparator over indices leaves ``index[k]`` holding the original
position that belongs at sorted position k. The storage itself is untouched
until the permutation is applied (see `permsort.permute.apply`).

Invariant: the held list is always a permutation of ``range(n)``.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, List, MutableSequence, Sequence

from . import timsort
from .apply import apply_permutation, check_permutation

__all__ = ["build_index", "IndexPermutation"]


def build_index(n: int) -> List[int]:
    """Return the identity permutation ``[0, 1, ..., n-1]``."""
    if not isinstance(n, int):
        raise TypeError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")
    return list(range(n))


class IndexPermutation(Sequence[int]):
    """A permutation of ``range(n)`` held as a list of ints."""

    __slots__ = ("_index",)

    def __init__(self, n: int) -> None:
        self._index = build_index(n)

    @classmethod
    def from_sequence(cls, index: Sequence[int]) -> "IndexPermutation":
        """Wrap a caller-supplied permutation, validating it first."""
        if index is None:
            raise TypeError("index must not be None")
        values = [int(i) for i in index]
        check_permutation(values, len(values))
        perm = cls(0)
        perm._index = values
        return perm

    def __len__(self) -> int:
        return len(self._index)

    def __getitem__(self, k):  # type: ignore[override]
        return self._index[k]

    def __iter__(self) -> Iterator[int]:
        return iter(self._index)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndexPermutation):
            return self._index == other._index
        if isinstance(other, (list, tuple)):
            return self._index == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"IndexPermutation({self._index!r})"

    def sort(self, compare: Callable[[int, int], int]) -> "IndexPermutation":
        """Stably sort the indices with a comparator over index positions."""
        timsort.sort(self._index, compare)
        return self

    def is_identity(self) -> bool:
        return all(i == k for k, i in enumerate(self._index))

    def validate(self) -> None:
        check_permutation(self._index, len(self._index))

    def inverse(self) -> List[int]:
        """Return the inverse permutation: ``inv[index[k]] == k``."""
        inv = [0] * len(self._index)
        for k, i in enumerate(self._index):
            inv[i] = k
        return inv

    def apply_to(self, data: MutableSequence[Any], strategy: str = "cycle") -> None:
        apply_permutation(data, self._index, strategy=strategy)

    def to_list(self) -> List[int]:
        return list(self._index)
