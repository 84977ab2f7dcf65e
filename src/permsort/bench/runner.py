"""
Experiment runner: times permutation-sort and ordered-set targets from a YAML config.

Usage (from repo root):
    python -m permsort.bench.runner experiments/configs/01_random_scaling.yaml
    permsort-bench experiments/configs/01_random_scaling.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per successful timing sample
    - summary.csv             # median + IQR per (target, n)
    - (console) rich/tqdm summaries

Design notes:
- For each size n, we generate ONE key list and give a copy to every target.
- With `validate: true`, each target's output for each n is checked once
  against its oracle before timing; a mismatch marks the target as failed.
- On timeout/error for a target at size n, larger sizes are skipped for it.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import platform
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from ..datasets import make_dataset
from .measure import time_call
from .targets import Target, resolve_target

logger = logging.getLogger(__name__)
_console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "targets",
]

_SUMMARY_COLUMNS = ["target", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- helpers: IO & meta ------------------------- #


def load_config(path: Path) -> Dict[str, Any]:
    """Load and validate an experiment config."""
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a YAML mapping: {path}")

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")
    if not cfg["sizes"] or any(not isinstance(n, int) or n < 0 for n in cfg["sizes"]):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    if not cfg["targets"]:
        raise ValueError("Config 'targets' must be a non-empty list of target names")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_targets(names: List[Any]) -> List[Target]:
    targets: List[Target] = []
    seen = set()
    for name in names:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Each target must be a non-empty string; got {name!r}")
        if name in seen:
            raise ValueError(f"Duplicate target name in config: {name}")
        seen.add(name)
        targets.append(resolve_target(name))
    return targets


# ------------------------- aggregation ------------------------- #


def _iqr_ns(group: pd.Series) -> int:
    return int(group.quantile(0.75) - group.quantile(0.25))


def aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    """Median/IQR/min/max per (target, n) over the successful samples."""
    if not jsonl_path.exists():
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)

    out = df.groupby(["target", "n"], as_index=False).agg(
        samples_ok=("time_ns", "count"),
        median_ns=("time_ns", "median"),
        iqr_ns=("time_ns", _iqr_ns),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
    )
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[
        ["median_ns", "iqr_ns", "min_ns", "max_ns"]
    ].astype("int64")
    return out[_SUMMARY_COLUMNS].sort_values(["target", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Target", style="bold")
    picks: List[Tuple[str, int]] = []
    for n in dict.fromkeys([sizes[0], sizes[len(sizes) // 2], sizes[-1]]):
        picks.append((f"n={n}", n))
        table.add_column(f"n={n}", justify="right")

    for target in summary["target"].unique():
        row = [f"[bold]{target}[/]"]
        for _, npick in picks:
            s = summary[(summary["target"] == target) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                median_ms = int(s["median_ns"].values[0]) / 1e6
                iqr_ms = int(s["iqr_ns"].values[0]) / 1e6
                row.append(f"{median_ms:.2f} ± {iqr_ms:.2f}")
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #


def run_experiment(config_path: Path) -> Path:
    cfg = load_config(config_path)

    experiment_name = str(cfg["experiment_name"])
    sizes: List[int] = list(cfg["sizes"])
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    validate = bool(cfg.get("validate", False))
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    targets = _resolve_targets(list(cfg["targets"]))

    run_dir = _ensure_run_dir(Path(cfg["output_dir"]), experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    skipped = {t.name: False for t in targets}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Targets:[/bold] {', '.join(t.name for t in targets)}")

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        keys = make_dataset(int(n), dataset_spec, rng)

        for target in targets:
            if skipped[target.name]:
                continue

            if validate:
                failure = _validate_target(target, keys)
                if failure is not None:
                    skipped[target.name] = True
                    logger.error("%s failed validation at n=%d: %s", target.name, n, failure)
                    _append_jsonl(
                        {"target": target.name, "n": int(n), "status": "invalid", "error": failure},
                        results_path,
                    )
                    continue

            res = time_call(
                target_name=target.name,
                target_fn=target.fn,
                keys=keys,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "target": target.name,
                        "n": int(n),
                        "dataset": dataset_spec,
                        "trial": int(trial_idx),
                        "time_ns": int(t_ns),
                    },
                    results_path,
                )

            status = res["status"]
            if status != "ok":
                skipped[target.name] = True
                logger.warning("%s stopped at n=%d with status %s", target.name, n, status)
                _append_jsonl(
                    {
                        "target": target.name,
                        "n": int(n),
                        "status": status,
                        "error": res["error"],
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                    },
                    results_path,
                )

    summary_df = aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_rich_summary(summary_df, sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {path}")

    return run_dir


def _validate_target(target: Target, keys: List[int]) -> Optional[str]:
    out = target.fn(list(keys))
    expected = target.oracle(list(keys))
    if list(out) != expected:
        for i, (x, y) in enumerate(zip(out, expected)):
            if x != y:
                return f"output differs from oracle at index {i}: {x!r} != {y!r}"
        return f"output length {len(out)} != oracle length {len(expected)}"
    return None


# ------------------------- CLI ------------------------- #


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a permutation-sort benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=_console, show_path=False)],
    )

    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
