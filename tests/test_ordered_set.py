"""
Tests for OrderedArraySet.

What we check:
- Sorted invariant after any sequence of adds
- Value-equal duplicates are rejected, comparator-equal values are kept
- Lookups distinguish "sorts the same" from "is the same"
- Refused structural operations raise and leave the set untouched
- Bulk operations (update / contains_all / retain_all / difference_update)
- Cursor traversal and removal
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import pytest
from hypothesis import given, settings, strategies as st

from permsort import (
    DEFAULT_COMPARATOR,
    NoSuchElementError,
    OrderedArraySet,
    UnsupportedOperationError,
    comparing,
)
from permsort.validate import is_nondecreasing

LETTERS = ["e", "b", "a", "c", "b", "f", "a", "g", "g", "d", "e"]


@dataclass(frozen=True)
class Item:
    key: int
    name: str


by_key = comparing(lambda item: item.key)


def _assert_index_of(s: OrderedArraySet) -> None:
    cursor = s.cursor()
    for i, expected in enumerate(s):
        assert s.index_of(expected) == i
        assert s.last_index_of(expected) == i
        assert cursor.has_next()
        assert cursor.next() == expected
        with pytest.raises(UnsupportedOperationError):
            cursor.add("x")
        with pytest.raises(UnsupportedOperationError):
            cursor.set("x")
    assert not cursor.has_next()


# ------------------------- construction ------------------------- #


def test_constructor_sorts_and_dedupes() -> None:
    s = OrderedArraySet(LETTERS)
    assert s == list("abcdefg")
    _assert_index_of(s)
    assert s.contains_all(LETTERS)


def test_update_sorts_and_dedupes() -> None:
    s: OrderedArraySet[str] = OrderedArraySet()
    assert s.update(LETTERS)
    assert s == list("abcdefg")
    _assert_index_of(s)
    assert not s.update(["a", "g"])


def test_default_comparator_puts_none_first() -> None:
    s = OrderedArraySet([3, None, 1, None])
    assert s == [None, 1, 3]
    assert s.comparator is DEFAULT_COMPARATOR
    assert s.index_of(None) == 0


def test_bulk_load_keeps_comparator_equal_values() -> None:
    a, b = Item(1, "a"), Item(1, "b")
    s = OrderedArraySet([Item(2, "z"), a, b, a], by_key)
    assert list(s) == [a, b, Item(2, "z")]


@pytest.mark.parametrize("capacity", [-1, 1.5, "10"])
def test_invalid_capacity(capacity: object) -> None:
    with pytest.raises(ValueError):
        OrderedArraySet(capacity=capacity)  # type: ignore[arg-type]


def test_capacity_hint_accepted() -> None:
    s: OrderedArraySet[int] = OrderedArraySet(capacity=100)
    assert len(s) == 0


def test_non_callable_comparator_rejected() -> None:
    with pytest.raises(TypeError):
        OrderedArraySet([], comparator=42)  # type: ignore[arg-type]


# ------------------------- insertion ------------------------- #


def test_end_to_end_example() -> None:
    s: OrderedArraySet[int] = OrderedArraySet()
    results = [s.add(v) for v in [5, 1, 3, 1, 4]]
    assert results == [True, True, True, False, True]
    assert s == [1, 3, 4, 5]
    assert len(s) == 4
    assert s.index_of(3) == 1
    assert s.index_of(2) == -1
    assert 2 not in s
    with pytest.raises(ValueError):
        s.index(2)


def test_add_duplicate_is_noop() -> None:
    s = OrderedArraySet([1, 2, 3])
    assert not s.add(2)
    assert s == [1, 2, 3]


def test_comparator_equal_values_coexist() -> None:
    a, b = Item(1, "a"), Item(1, "b")
    s = OrderedArraySet([Item(0, "x"), Item(2, "y")], by_key)
    assert s.add(a)
    assert s.add(b)
    assert not s.add(Item(1, "a"))
    assert not s.add(Item(1, "b"))
    assert len(s) == 4

    assert s.index_of(a) == 1
    assert s.index_of(b) == 2
    assert s.last_index_of(a) == 1
    assert s.last_index_of(b) == 2
    assert s.count(a) == 1


def test_comparator_match_without_value_match_is_not_found() -> None:
    s = OrderedArraySet([Item(1, "a"), Item(1, "b")], by_key)
    ghost = Item(1, "ghost")
    assert s.index_of(ghost) == -1
    assert s.last_index_of(ghost) == -1
    assert ghost not in s
    assert s.count(ghost) == 0
    assert not s.discard(ghost)


def test_accepts_predicate_guards_lookups() -> None:
    s = OrderedArraySet([Item(1, "a")], by_key, accepts=lambda o: isinstance(o, Item))
    assert s.index_of("not an item") == -1
    assert "not an item" not in s
    with pytest.raises(TypeError):
        s.add("not an item")  # type: ignore[arg-type]
    assert len(s) == 1


def test_index_with_bounds() -> None:
    s = OrderedArraySet([10, 20, 30, 40])
    assert s.index(30, 1) == 2
    assert s.index(30, -2) == 2
    with pytest.raises(ValueError):
        s.index(10, 1)
    with pytest.raises(ValueError):
        s.index(40, 0, 3)


# ------------------------- refused operations ------------------------- #


@pytest.mark.parametrize(
    "op",
    [
        lambda s: s.insert(0, 99),
        lambda s: s.__setitem__(0, 99),
        lambda s: s.append(99),
        lambda s: s[0:2],
        lambda s: s.sub_list(0, 2),
        lambda s: s.head_set(2),
        lambda s: s.tail_set(2),
        lambda s: s.sub_set(1, 3),
        lambda s: s.sort(lambda a, b: b - a),
    ],
)
def test_structural_operations_are_unsupported(op) -> None:
    s = OrderedArraySet([1, 2, 3])
    with pytest.raises(UnsupportedOperationError):
        op(s)
    assert s == [1, 2, 3]


def test_unsupported_is_not_implemented_error() -> None:
    assert issubclass(UnsupportedOperationError, NotImplementedError)


def test_sort_with_own_comparator_is_allowed() -> None:
    s = OrderedArraySet([3, 1, 2])
    s.sort()
    s.sort(s.comparator)
    assert s == [1, 2, 3]


# ------------------------- positional access ------------------------- #


def test_first_last() -> None:
    s = OrderedArraySet([4, 2, 9])
    assert s.first() == 2
    assert s.last() == 9
    assert s[-1] == 9
    assert list(reversed(s)) == [9, 4, 2]


def test_first_last_empty() -> None:
    s: OrderedArraySet[int] = OrderedArraySet()
    with pytest.raises(NoSuchElementError):
        s.first()
    with pytest.raises(NoSuchElementError):
        s.last()
    with pytest.raises(IndexError):
        s.pop()


def test_deletion_keeps_order() -> None:
    s = OrderedArraySet(range(10))
    del s[0]
    del s[2:4]
    assert s.pop() == 9
    assert s.pop(0) == 1
    assert s == [2, 5, 6, 7, 8]


# ------------------------- bulk operations ------------------------- #


def test_retain_all() -> None:
    s = OrderedArraySet(LETTERS)
    retain = ["e", "c", "f", "g"]
    assert s.retain_all(retain)
    assert len(s) == len(retain)
    assert s.contains_all(retain)
    assert not s.retain_all(retain)


def test_retain_all_with_empty_argument_clears() -> None:
    s = OrderedArraySet([1, 2])
    assert s.retain_all([])
    assert len(s) == 0
    assert not s.retain_all([1])


def test_retain_all_accepts_iterators() -> None:
    s = OrderedArraySet([1, 2, 3, 4])
    assert s.retain_all(iter([2, 4]))
    assert s == [2, 4]


def test_difference_update() -> None:
    s = OrderedArraySet(LETTERS)
    assert s.difference_update(["e", "c", "f", "g"])
    assert len(s) == 3
    assert s.contains_all(["a", "b", "d"])
    assert not s.difference_update(["z"])


def test_remove_and_discard() -> None:
    s = OrderedArraySet([1, 2, 3])
    s.remove(2)
    assert s == [1, 3]
    with pytest.raises(ValueError):
        s.remove(2)
    assert s.discard(3)
    assert not s.discard(3)
    s.clear()
    assert len(s) == 0


def test_contains_all_fast_path_with_shared_comparator() -> None:
    a, b, c = Item(1, "a"), Item(1, "b"), Item(2, "c")
    s = OrderedArraySet([a, b, c, Item(3, "d")], by_key)
    probe = OrderedArraySet([b, a, c], by_key)
    assert s.contains_all(probe)
    assert not s.contains_all(OrderedArraySet([a, Item(2, "ghost")], by_key))
    assert s.contains_all([])


def test_update_fast_path_with_shared_comparator() -> None:
    a, b, c = Item(1, "a"), Item(1, "b"), Item(2, "c")
    s = OrderedArraySet([a, Item(3, "d")], by_key)
    assert s.update(OrderedArraySet([a, b, c], by_key))
    assert list(s) == [a, b, c, Item(3, "d")]


def test_bulk_arguments_must_not_be_none() -> None:
    s = OrderedArraySet([1])
    for op in (s.update, s.contains_all, s.retain_all, s.difference_update):
        with pytest.raises(TypeError):
            op(None)  # type: ignore[arg-type]


def test_copy_is_independent() -> None:
    s = OrderedArraySet([1, 2])
    clone = s.copy()
    clone.add(3)
    assert s == [1, 2]
    assert clone == [1, 2, 3]
    assert clone.comparator is s.comparator
    assert s == OrderedArraySet([2, 1])


def test_equality_with_builtin_sets() -> None:
    s = OrderedArraySet([3, 1, 2])
    assert s == {1, 2, 3}
    assert s == frozenset([3, 2, 1])
    assert s != {1, 2}
    assert s != {1, 2, 4}
    assert OrderedArraySet([[1], [2]]) != {1, 2}
    assert s != "123"


# ------------------------- cursor ------------------------- #


def _remove_via(s: OrderedArraySet) -> None:
    cursor = s.cursor()
    cursor.next()
    cursor.remove()
    assert s == list("bcdefg")

    cursor.next()
    cursor.next()
    cursor.remove()
    assert s == list("bdefg")

    cursor.next()
    cursor.next()
    cursor.next()
    cursor.remove()
    assert s == list("bdeg")

    cursor.next()
    cursor.remove()
    assert s == list("bde")


def test_cursor_remove() -> None:
    s = OrderedArraySet(LETTERS)
    _remove_via(s)
    assert s.cursor(1).next() == "d"


def test_cursor_navigation() -> None:
    s = OrderedArraySet([1, 2, 3])
    cursor = s.cursor(3)
    assert not cursor.has_next()
    assert cursor.previous_index() == 2
    assert cursor.previous() == 3
    cursor.remove()
    assert s == [1, 2]
    assert cursor.next_index() == 2
    with pytest.raises(RuntimeError):
        cursor.remove()
    with pytest.raises(NoSuchElementError):
        cursor.next()
    assert list(s.cursor()) == [1, 2]
    with pytest.raises(IndexError):
        s.cursor(5)


@pytest.mark.parametrize(
    "change",
    [
        lambda s: s.__delitem__(0),
        lambda s: s.add(0),
        lambda s: s.discard(3),
        lambda s: s.pop(),
        lambda s: s.clear(),
        lambda s: s.retain_all([2, 3]),
    ],
)
def test_cursor_rejects_outside_changes(change) -> None:
    s = OrderedArraySet([1, 2, 3, 4])
    cursor = s.cursor()
    cursor.next()
    cursor.next()
    change(s)
    with pytest.raises(RuntimeError):
        cursor.remove()
    with pytest.raises(RuntimeError):
        cursor.previous()


def test_cursor_ignores_no_op_changes() -> None:
    s = OrderedArraySet([1, 2, 3])
    cursor = s.cursor()
    assert cursor.next() == 1
    assert not s.add(2)
    assert not s.discard(9)
    assert not s.retain_all([1, 2, 3])
    cursor.remove()
    assert s == [2, 3]
    assert cursor.next() == 2


# ------------------------- property-based tests (randomized) ------------------------- #


@settings(deadline=None, max_examples=100)
@given(st.lists(st.one_of(st.none(), st.integers(-100, 100)), max_size=200))
def test_property_sorted_and_unique_after_adds(values: List[Optional[int]]) -> None:
    s: OrderedArraySet[Optional[int]] = OrderedArraySet()
    for v in values:
        s.add(v)
    assert is_nondecreasing(list(s), DEFAULT_COMPARATOR)
    assert len(s) == len(set(values))
    assert OrderedArraySet(values) == s


@settings(deadline=None, max_examples=100)
@given(st.lists(st.tuples(st.integers(0, 5), st.sampled_from("abc")), max_size=120))
def test_property_projected_lookup(pairs: List[tuple]) -> None:
    items = [Item(k, n) for k, n in pairs]
    s: OrderedArraySet[Item] = OrderedArraySet(comparator=by_key)
    for item in items:
        s.add(item)

    assert is_nondecreasing(list(s), by_key)
    assert len(s) == len(set(items))
    for item in set(items):
        i = s.index_of(item)
        assert s[i] == item
        assert s.last_index_of(item) == i
