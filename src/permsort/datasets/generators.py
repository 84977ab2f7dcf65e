"""
Input generators for the permutation engine and the ordered set.

Key distributions (make_dataset):
- "random":        integers drawn uniformly from an inclusive range.
- "nearly_sorted": [0, 1, ..., n-1] degraded by ceil(swap_frac * n) swaps.
- "few_uniques":   at most k distinct values; exercises long equal runs,
                   which is where stability matters.
- "small_range":   integers from a narrow domain, [0, 255] by default;
                   many duplicates without fixing the number of uniques.
- "reversed":      [n-1, ..., 0]; a single strictly descending run.

Also:
- make_permutation(n, rng): a uniformly random permutation of [0, n).
- make_records(keys): (key, tag) pairs where tag is the original position,
  for checking that comparator-equal keys keep their relative order.

Conventions:
- Ranges in params["range"] are inclusive on both ends.
- The caller supplies the RNG (numpy.random.Generator) for reproducibility.
- Returns plain Python lists; the engine itself stays NumPy-agnostic.

Public API (stable):
    make_dataset(n, spec, rng) -> list[int]
    make_permutation(n, rng) -> list[int]
    make_records(keys) -> list[tuple[int, int]]
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "nearly_sorted",
    "few_uniques",
    "small_range",
    "reversed",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset", "make_permutation", "make_records"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate sort keys according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of keys. Must be >= 0.
    spec : dict
        {"dist": <one of SUPPORTED_DISTS>, "params": {...}}

            random:        {"range": [min_int, max_int]}          # required
            nearly_sorted: {"swap_frac": 0.05}                    # in [0, 1]
            few_uniques:   {"k": 8, "range": [min_int, max_int]}  # range optional
            small_range:   {"min_val": 0, "max_val": 255}          # or "range"
            reversed:      {}
    rng : numpy.random.Generator

    Raises
    ------
    ValueError
        If inputs are invalid or the distribution is unsupported.
    """
    _validate_n(n)
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )
    params = spec.get("params", {}) or {}

    if dist == "random":
        if "range" not in params:
            raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
        lo, hi = _parse_inclusive_range(params["range"])
        if n == 0:
            return []
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        num_swaps = int(np.ceil(swap_frac * n))
        if num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i, j = int(idxs[2 * k]), int(idxs[2 * k + 1])
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "few_uniques":
        k = params.get("k")
        if not isinstance(k, int) or k < 1:
            raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
        lo, hi = _parse_inclusive_range(params.get("range", (0, 2**31 - 1)))
        if n == 0:
            return []
        actual_k = int(min(k, n, hi - lo + 1))
        # Distinct values without replacement, tied to `rng` for determinism
        offsets = rng.choice(hi - lo + 1, size=actual_k, replace=False)
        values = [lo + int(v) for v in offsets]
        return [values[int(t)] for t in rng.integers(0, actual_k, size=n)]

    if dist == "small_range":
        lo, hi = _parse_small_range(params)
        if n == 0:
            return []
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    # "reversed": deterministic, `rng` unused
    return list(range(n - 1, -1, -1))


def make_permutation(n: int, rng: np.random.Generator) -> List[int]:
    """Return a uniformly random permutation of ``range(n)``."""
    _validate_n(n)
    return rng.permutation(n).tolist()


def make_records(keys: Sequence[int]) -> List[Tuple[int, int]]:
    """Tag each key with its original position: ``[(key, position), ...]``."""
    return [(int(key), pos) for pos, key in enumerate(keys)]


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, (int, np.integer)):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_inclusive_range(rng_spec: Any) -> Tuple[int, int]:
    if not isinstance(rng_spec, (list, tuple)) or len(rng_spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = rng_spec
    if not isinstance(lo_raw, (int, np.integer)) or not isinstance(hi_raw, (int, np.integer)):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_small_range(params: Dict[str, Any]) -> Tuple[int, int]:
    if "range" in params:
        return _parse_inclusive_range(params["range"])
    return _parse_inclusive_range([params.get("min_val", 0), params.get("max_val", 255)])


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x
