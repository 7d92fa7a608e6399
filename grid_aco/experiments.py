"""
Seeded batch runs of the colony on one objective.

`run_repeated_trials` repeats a configuration under consecutive seeds and
summarizes the best values; `run_parameter_sweep` does that for every
combination of a parameter grid and can append one CSV row per combination.
"""
from __future__ import annotations
import csv
import itertools
import logging
import os
import statistics
from dataclasses import asdict, replace
from typing import Any, Dict, List, Optional, Tuple, Type

import numpy as np

from .aco_base import ACOBase, ACOConfig, ACOResult
from .ant_system import AntSystem
from .mmas import MaxMinAntSystem
from .objectives import Objective

logger = logging.getLogger(__name__)

ALGORITHMS: Dict[str, Type[ACOBase]] = {"as": AntSystem, "mmas": MaxMinAntSystem}


def get_algorithm(name: str) -> Type[ACOBase]:
    try:
        return ALGORITHMS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown algorithm {name}") from None


def summarize(results: List[ACOResult], algo: str) -> Dict[str, Any]:
    values = [r.best_value for r in results]
    # first iteration whose best-so-far equals the final best
    hit = [int(np.argmax(np.asarray(r.history_best_values) <= r.best_value)) + 1 for r in results]
    return {
        "mean_value": statistics.mean(values),
        "std_value": statistics.stdev(values) if len(values) > 1 else 0.0,
        "min_value": min(values),
        "max_value": max(values),
        "median_value": statistics.median(values),
        "mean_hit_iteration": statistics.mean(hit),
        "mean_time": statistics.mean(r.elapsed_sec for r in results),
        "algo": algo,
        "n_runs": len(results),
    }


def run_repeated_trials(objective: Objective, algo: str, cfg: ACOConfig, n_runs: int = 10,
                        base_seed: int = 42) -> Tuple[Dict[str, Any], List[ACOResult]]:
    """Run `algo` with seeds base_seed .. base_seed + n_runs - 1; returns (stats, results)."""
    algocls = get_algorithm(algo)
    results = [algocls(objective, replace(cfg, seed=base_seed + r)).run() for r in range(n_runs)]
    stats = summarize(results, algo)
    logger.info(f"{algo}: {n_runs} runs, mean best {stats['mean_value']:.4g} "
                f"(min {stats['min_value']:.4g}, found by iteration {stats['mean_hit_iteration']:.1f} on average)")
    return stats, results


def _append_row(csv_path: str, row: Dict[str, Any]):
    write_header = not os.path.exists(csv_path)
    with open(csv_path, "a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=row.keys())
        if write_header:
            w.writeheader()
        w.writerow(row)


def run_parameter_sweep(objective: Objective, algo: str, param_grid: Dict[str, List[Any]],
                        base_cfg: Optional[ACOConfig] = None, n_runs: int = 5, base_seed: int = 100,
                        csv_path: Optional[str] = None) -> List[Dict[str, Any]]:
    base_cfg = base_cfg or ACOConfig()
    unknown = set(param_grid) - set(asdict(base_cfg))
    if unknown:
        raise ValueError(f"Unknown config fields in sweep: {sorted(unknown)}")
    keys = sorted(param_grid)
    rows = []
    for values in itertools.product(*(param_grid[k] for k in keys)):
        point = dict(zip(keys, values))
        stats, _ = run_repeated_trials(objective, algo, replace(base_cfg, **point),
                                       n_runs=n_runs, base_seed=base_seed)
        row = {**point, **stats}
        rows.append(row)
        if csv_path is not None:
            _append_row(csv_path, row)
    return rows
