"""
An array-backed sequence that stays sorted after every mutation.

`OrderedArraySet` is list-like (positional reads, index lookup, deletion by
position) and set-like (no value-equal duplicates, sorted membership tests).
A single comparator, fixed at construction, defines the order.

Two notions of equality are in play and they are deliberately kept apart:

- comparator-equal: ``comparator(a, b) == 0``; decides *where* a value sorts.
- value-equal: ``a == b``; decides whether a value is *already present*.

A comparator keyed on one field of a record equates records that differ in
other fields. Such records can coexist in the set, adjacent to each other
in insertion order, and lookups return the position of the record that is
actually equal to the query.

Operations that would let a caller choose a position (``insert``,
``s[i] = v``, ``append``, slicing into a mutable sub-range, sub-set views,
cursor ``add``/``set``) raise `UnsupportedOperationError` without touching
the set.

Public API (stable):
    OrderedArraySet(iterable=None, comparator=None, *, capacity=0, accepts=None)
    OrderedArraySetCursor
"""

from __future__ import annotations

import logging
from collections.abc import Set as AbstractSet
from functools import cmp_to_key
from typing import (
    Any,
    Callable,
    Collection,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from ..comparators import DEFAULT_COMPARATOR, Comparator, require_comparator
from ..errors import NoSuchElementError, UnsupportedOperationError
from .search import binary_closest_search, binary_search

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = ["OrderedArraySet", "OrderedArraySetCursor"]


class OrderedArraySet(Sequence[T]):
    """
    A sorted, duplicate-free, array-backed sequence.

    Parameters
    ----------
    iterable : iterable, optional
        Initial elements. They are copied, sorted once, and value-equal
        duplicates are dropped.
    comparator : callable, optional
        Three-way comparator defining the order. ``None`` selects
        `DEFAULT_COMPARATOR` (natural order with ``None`` first).
    capacity : int
        Expected number of elements. Must be nonnegative; Python lists grow
        on their own, so this is only validated.
    accepts : callable, optional
        Predicate telling which query objects `comparator` may be applied
        to. Lookups for rejected objects report "not found" instead of
        calling the comparator; adding a rejected object raises TypeError.
        ``None`` means every object is accepted.

    Invariant: ``comparator(s[i], s[j]) <= 0`` for all ``i < j``.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        iterable: Optional[Iterable[T]] = None,
        comparator: Optional[Comparator] = None,
        *,
        capacity: int = 0,
        accepts: Optional[Callable[[Any], bool]] = None,
    ) -> None:
        if not isinstance(capacity, int) or capacity < 0:
            raise ValueError(f"capacity must be a nonnegative int; got {capacity!r}")
        if accepts is not None and not callable(accepts):
            raise TypeError("accepts must be callable")

        self._comparator: Comparator = require_comparator(
            comparator if comparator is not None else DEFAULT_COMPARATOR
        )
        self._accepts = accepts
        self._data: List[T] = []
        self._mod_count = 0
        if iterable is not None:
            self._load(iterable)

    # ------------------------- read-only surface ------------------------- #

    @property
    def comparator(self) -> Comparator:
        return self._comparator

    @property
    def accepts(self) -> Optional[Callable[[Any], bool]]:
        return self._accepts

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            raise UnsupportedOperationError("slicing", "sub-ranges cannot be kept in order")
        return self._data[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._data)

    def __contains__(self, value: object) -> bool:
        return self.index_of(value) >= 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedArraySet):
            return self._data == other._data
        if isinstance(other, (list, tuple)):
            return self._data == list(other)
        if isinstance(other, AbstractSet):
            if len(other) != len(self._data):
                return False
            try:
                return all(value in other for value in self._data)
            except TypeError:
                # unhashable members can never be in a builtin set
                return False
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def first(self) -> T:
        if not self._data:
            raise NoSuchElementError("first() on an empty set")
        return self._data[0]

    def last(self) -> T:
        if not self._data:
            raise NoSuchElementError("last() on an empty set")
        return self._data[-1]

    def index_of(self, value: object) -> int:
        """
        Return the position of the first element value-equal to `value`, or -1.

        Runtime: O(log n) to reach the comparator-equal run, then linear in
        the length of that run.
        """
        return self._find(value, 0, len(self._data), last=False)

    def last_index_of(self, value: object) -> int:
        """Return the position of the last element value-equal to `value`, or -1."""
        return self._find(value, 0, len(self._data), last=True)

    def index(self, value: Any, start: int = 0, stop: Optional[int] = None) -> int:
        """Sequence contract: like `index_of`, but raises ValueError when absent."""
        lo, hi, _ = slice(start, stop).indices(len(self._data))
        i = self._find(value, lo, max(lo, hi), last=False)
        if i < 0:
            raise ValueError(f"{value!r} is not in {type(self).__name__}")
        return i

    def count(self, value: Any) -> int:
        bounds = self._run_of(value, 0, len(self._data))
        if bounds is None:
            return 0
        start, end = bounds
        return sum(1 for j in range(start, end) if self._data[j] == value)

    def contains_all(self, values: Iterable[Any]) -> bool:
        """
        Return True if every element of `values` is in this set.

        When `values` is an OrderedArraySet sharing this set's comparator the
        search range shrinks monotonically; otherwise each element is looked
        up independently.
        """
        if values is None:
            raise TypeError("values must not be None")

        if self._is_like_sorted(values):
            lo = 0
            n = len(self._data)
            for value in values:
                bounds = self._run_of(value, lo, n)
                if bounds is None or self._first_equal(value, *bounds) < 0:
                    return False
                lo = bounds[0]
            return True

        return all(self.index_of(value) >= 0 for value in values)

    def copy(self) -> "OrderedArraySet[T]":
        clone = type(self)(comparator=self._comparator, accepts=self._accepts)
        clone._data = list(self._data)
        return clone

    def cursor(self, index: int = 0) -> "OrderedArraySetCursor[T]":
        """Return a bidirectional cursor positioned before ``self[index]``."""
        if not 0 <= index <= len(self._data):
            raise IndexError(f"cursor index {index} out of range [0, {len(self._data)}]")
        return OrderedArraySetCursor(self, index)

    # ------------------------- order-preserving mutation ------------------------- #

    def add(self, value: T) -> bool:
        """
        Insert `value` at its sorted position.

        Returns False, leaving the set unchanged, if a value-equal element is
        already present. Comparator-equal but unequal values are inserted
        after the existing run.
        """
        added, _ = self._add(value, 0)
        return added

    def update(self, values: Iterable[T]) -> bool:
        """Add every element of `values`; return True if the set changed."""
        if values is None:
            raise TypeError("values must not be None")

        changed = False
        if self._is_like_sorted(values):
            lo = 0
            for value in list(values):
                added, lo = self._add(value, lo)
                changed |= added
            return changed

        for value in values:
            changed |= self._add(value, 0)[0]
        return changed

    def discard(self, value: object) -> bool:
        """Remove `value` if present; return True if it was removed."""
        i = self.index_of(value)
        if i < 0:
            return False
        del self._data[i]
        self._mod_count += 1
        return True

    def remove(self, value: object) -> None:
        if not self.discard(value):
            raise ValueError(f"{value!r} is not in {type(self).__name__}")

    def difference_update(self, values: Iterable[Any]) -> bool:
        """Remove every element of `values`; return True if the set changed."""
        if values is None:
            raise TypeError("values must not be None")
        changed = False
        for value in values:
            changed |= self.discard(value)
        return changed

    def retain_all(self, values: Iterable[Any]) -> bool:
        """
        Keep only elements that are in `values`; return True if the set changed.

        The scan runs from the tail. Adjacent value-equal elements share one
        membership decision, so `values` is probed once per distinct run.
        """
        if values is None:
            raise TypeError("values must not be None")
        if not isinstance(values, Collection):
            values = list(values)

        size = len(self._data)
        if size == 0:
            return False
        if len(values) == 0:
            self._data.clear()
            self._mod_count += 1
            return True

        end = size - 1
        prev: Any = None
        removed = False
        for i in range(end, -1, -1):
            elem = self._data[i]
            same_as_prev = i != end and prev == elem
            if not same_as_prev:
                removed = elem not in values
                if removed:
                    del self._data[i]
            elif removed:
                del self._data[i]
            prev = elem

        if size != len(self._data):
            self._mod_count += 1
        return size != len(self._data)

    def clear(self) -> None:
        self._data.clear()
        self._mod_count += 1

    def pop(self, index: int = -1) -> T:
        if not self._data:
            raise IndexError(f"pop from empty {type(self).__name__}")
        value = self._data.pop(index)
        self._mod_count += 1
        return value

    def __delitem__(self, index) -> None:
        # Removing any positions keeps the remainder sorted
        del self._data[index]
        self._mod_count += 1

    def sort(self, comparator: Optional[Comparator] = None) -> None:
        """Re-sort by the set's own comparator; any other comparator is refused."""
        if comparator is not None and comparator is not self._comparator:
            raise UnsupportedOperationError("sort with a foreign comparator")
        self._data.sort(key=cmp_to_key(self._comparator))
        self._mod_count += 1

    # ------------------------- refused structural operations ------------------------- #

    def insert(self, index: int, value: T) -> None:
        raise UnsupportedOperationError("insert")

    def __setitem__(self, index, value) -> None:
        raise UnsupportedOperationError("item assignment")

    def append(self, value: T) -> None:
        raise UnsupportedOperationError("append", "use add() to insert in sorted position")

    def sub_list(self, start: int, stop: int) -> "OrderedArraySet[T]":
        raise UnsupportedOperationError("sub_list", "sub-ranges cannot be kept in order")

    def head_set(self, to_element: T) -> "OrderedArraySet[T]":
        raise UnsupportedOperationError("head_set", "sub-ranges cannot be kept in order")

    def tail_set(self, from_element: T) -> "OrderedArraySet[T]":
        raise UnsupportedOperationError("tail_set", "sub-ranges cannot be kept in order")

    def sub_set(self, from_element: T, to_element: T) -> "OrderedArraySet[T]":
        raise UnsupportedOperationError("sub_set", "sub-ranges cannot be kept in order")

    # ------------------------- internals ------------------------- #

    def _load(self, iterable: Iterable[T]) -> None:
        items = list(iterable)
        for item in items:
            self._check_accepted(item)
        # Stable: comparator-equal items keep their source order
        items.sort(key=cmp_to_key(self._comparator))

        compare = self._comparator
        out = self._data
        for item in items:
            j = len(out) - 1
            duplicate = False
            while j >= 0 and compare(out[j], item) == 0:
                if out[j] == item:
                    duplicate = True
                    break
                j -= 1
            if not duplicate:
                out.append(item)
        logger.debug("bulk-loaded %d of %d elements", len(out), len(items))

    def _add(self, value: T, lo: int) -> Tuple[bool, int]:
        """Insert `value` searching from `lo`; return (added, start of its run)."""
        self._check_accepted(value)
        n = len(self._data)
        i = binary_closest_search(self._data, value, self._comparator, lo, n)
        if i < n and self._comparator(self._data[i], value) == 0:
            start, end = self._expand_run(value, i, lo, n)
            if self._first_equal(value, start, end) >= 0:
                return False, start
            self._data.insert(end, value)
            self._mod_count += 1
            return True, start

        self._data.insert(i, value)
        self._mod_count += 1
        return True, i

    def _find(self, value: object, lo: int, hi: int, last: bool) -> int:
        bounds = self._run_of(value, lo, hi)
        if bounds is None:
            return -1
        start, end = bounds
        if last:
            for j in range(end - 1, start - 1, -1):
                if self._data[j] == value:
                    return j
            return -1
        return self._first_equal(value, start, end)

    def _run_of(self, value: object, lo: int, hi: int) -> Optional[Tuple[int, int]]:
        """Return the bounds of the comparator-equal run for `value` in [lo, hi)."""
        if not self._is_accepted(value):
            return None
        i = binary_search(self._data, value, self._comparator, lo, hi)
        if i < 0:
            return None
        return self._expand_run(value, i, lo, hi)

    def _expand_run(self, value: object, i: int, lo: int, hi: int) -> Tuple[int, int]:
        compare = self._comparator
        start = i
        while start > lo and compare(self._data[start - 1], value) == 0:
            start -= 1
        end = i + 1
        while end < hi and compare(self._data[end], value) == 0:
            end += 1
        return start, end

    def _first_equal(self, value: object, start: int, end: int) -> int:
        for j in range(start, end):
            if self._data[j] == value:
                return j
        return -1

    def _is_accepted(self, value: object) -> bool:
        return self._accepts is None or bool(self._accepts(value))

    def _check_accepted(self, value: object) -> None:
        if not self._is_accepted(value):
            raise TypeError(f"{value!r} is not accepted by this set's comparator")

    def _is_like_sorted(self, values: object) -> bool:
        return isinstance(values, OrderedArraySet) and values._comparator is self._comparator


class OrderedArraySetCursor(Generic[T]):
    """
    Bidirectional cursor over an `OrderedArraySet`.

    Supports removal of the element last returned by `next` or `previous`.
    `add` and `set` are refused since the caller cannot choose positions.
    The cursor is also a plain Python iterator moving forward.
    Changing the owner other than through this cursor invalidates it: the
    next move or removal raises RuntimeError.
    """

    def __init__(self, owner: OrderedArraySet[T], index: int) -> None:
        self._owner = owner
        self._cursor = index
        self._expected_mod_count = owner._mod_count
        self._last = -1

    def __iter__(self) -> "OrderedArraySetCursor[T]":
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.next()

    def has_next(self) -> bool:
        return self._cursor < len(self._owner)

    def has_previous(self) -> bool:
        return self._cursor > 0

    def next_index(self) -> int:
        return self._cursor

    def previous_index(self) -> int:
        return self._cursor - 1

    def next(self) -> T:
        self._check_for_comodification()
        if not self.has_next():
            raise NoSuchElementError("cursor is at the end")
        item = self._owner[self._cursor]
        self._last = self._cursor
        self._cursor += 1
        return item

    def previous(self) -> T:
        self._check_for_comodification()
        if not self.has_previous():
            raise NoSuchElementError("cursor is at the start")
        self._cursor -= 1
        self._last = self._cursor
        return self._owner[self._cursor]

    def remove(self) -> None:
        if self._last < 0:
            raise RuntimeError("remove() requires a preceding next() or previous()")
        self._check_for_comodification()
        del self._owner[self._last]
        if self._last < self._cursor:
            self._cursor -= 1
        self._last = -1
        self._expected_mod_count = self._owner._mod_count

    def add(self, value: T) -> None:
        raise UnsupportedOperationError("cursor add")

    def set(self, value: T) -> None:
        raise UnsupportedOperationError("cursor set")

    def _check_for_comodification(self) -> None:
        if self._owner._mod_count != self._expected_mod_count:
            raise RuntimeError("OrderedArraySet changed during cursor traversal")
