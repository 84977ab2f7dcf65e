"""
Benchmark targets.

Each target is a callable taking a fresh list of integer keys and returning
the sequence it produced, so the runner can check it against an oracle.

    TARGETS[name] -> Target(fn, oracle)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from ..collections import OrderedArraySet
from ..comparators import natural_order
from ..permute import sort_indexed, sort_paired

__all__ = ["Target", "TARGETS", "resolve_target"]


@dataclass(frozen=True)
class Target:
    name: str
    fn: Callable[[List[int]], List[Any]]
    oracle: Callable[[List[int]], List[Any]]


def _sort_indexed_cycle(keys: List[int]) -> List[int]:
    sort_indexed(keys, natural_order, strategy="cycle")
    return keys


def _sort_indexed_buffered(keys: List[int]) -> List[int]:
    sort_indexed(keys, natural_order, strategy="buffered")
    return keys


def _sort_paired(keys: List[int]) -> List[int]:
    # Payload is each key's original position; it must follow the keys
    payload = list(range(len(keys)))
    sort_paired(payload, keys, natural_order)
    return keys


def _builtin_sorted(keys: List[int]) -> List[int]:
    keys.sort()
    return keys


def _ordered_set_build(keys: List[int]) -> List[int]:
    return list(OrderedArraySet(keys))


def _ordered_set_add(keys: List[int]) -> List[int]:
    s: OrderedArraySet[int] = OrderedArraySet()
    for k in keys:
        s.add(k)
    return list(s)


def _sorted_oracle(keys: List[int]) -> List[int]:
    return sorted(keys)


def _unique_oracle(keys: List[int]) -> List[int]:
    return sorted(set(keys))


TARGETS: Dict[str, Target] = {
    t.name: t
    for t in (
        Target("sort_indexed_cycle", _sort_indexed_cycle, _sorted_oracle),
        Target("sort_indexed_buffered", _sort_indexed_buffered, _sorted_oracle),
        Target("sort_paired", _sort_paired, _sorted_oracle),
        Target("builtin_sorted", _builtin_sorted, _sorted_oracle),
        Target("ordered_set_build", _ordered_set_build, _unique_oracle),
        Target("ordered_set_add", _ordered_set_add, _unique_oracle),
    )
}


def resolve_target(name: str) -> Target:
    if name not in TARGETS:
        raise ValueError(f"Unknown benchmark target: {name!r}. Supported: {sorted(TARGETS)}")
    return TARGETS[name]
