"""
Timing harness for permutation-sort and ordered-set targets.

We measure exactly one call to a target's ``fn(keys)`` per sample, using a
monotonic high-resolution clock. Copying the input, GC and warmup happen
outside the timed block. Every target sorts or builds in place, so each
sample gets its own fresh copy of the keys.

Public API (stable):
    time_call(... ) -> dict

Returned dict schema:
    {
        "target": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

__all__ = ["time_call"]


def time_call(
    *,
    target_name: str,
    target_fn: Callable[[List[Any]], Any],
    keys: List[Any],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated calls to ``target_fn(list(keys))``.

    Parameters
    ----------
    target_name : str
        Logical name of the target (for records).
    target_fn : Callable[[list], Any]
        Callable that sorts or loads the list it receives.
    keys : list
        Input keys. Never passed to `target_fn` directly.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call first.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; the
        previous GC state is restored afterwards.
    timeout_seconds : float
        Per-sample threshold. A sample over it marks status="timeout" and
        stops further sampling.

    Returns
    -------
    dict
        See module docstring for the schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "target": target_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    if warmup and repeats > 0:
        try:
            target_fn(list(keys))
        except Exception as e:
            logger.warning("warmup of %s failed: %r", target_name, e)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(keys)
            try:
                t0 = time.perf_counter_ns()
                target_fn(arg)
                t1 = time.perf_counter_ns()
            except Exception as e:
                logger.warning("%s failed at repeat %d: %r", target_name, r, e)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))
            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
