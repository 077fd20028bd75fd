"""Parameter sweep orchestration across transport settings and seeds."""

from __future__ import annotations

import itertools
import logging
import statistics
from dataclasses import replace
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from dunescape.config.constants import MAX_SWEEP_WORK_UNITS
from dunescape.config.types import ConfigurationError, RunResult, SweepConfig
from dunescape.io.paths import (
    logs_dir,
    sweep_point_dir,
    sweep_point_id,
    sweep_runs_path,
    sweep_summary_path,
)
from dunescape.io.schemas import (
    SWEEP_RUNS_SCHEMA,
    SWEEP_SCHEMA_VERSION,
    SWEEP_SUMMARY_METRIC_NAMES,
    SWEEP_SUMMARY_SCHEMA,
)
from dunescape.simulation.engine import run_simulation

logger = logging.getLogger(__name__)


def _validate_sweep_config(config: SweepConfig) -> None:
    """Fail fast when the sweep workload exceeds the safety threshold."""
    base = config.base
    total_work_units = (
        config.n_points() * config.n_seeds * base.cycles * base.grid_width * base.grid_height
    )
    if total_work_units > MAX_SWEEP_WORK_UNITS:
        raise ConfigurationError(
            "sweep workload exceeds safety threshold; reduce axes/n-seeds/cycles/grid size"
        )


def _summarize_point(point_rows: list[dict[str, Any]]) -> dict[str, Any]:
    first = point_rows[0]
    summary: dict[str, Any] = {
        "schema_version": SWEEP_SCHEMA_VERSION,
        "point_id": first["point_id"],
        "hop_length": first["hop_length"],
        "prob_deposit_bare": first["prob_deposit_bare"],
        "prob_deposit_sand": first["prob_deposit_sand"],
        "n_runs": len(point_rows),
    }
    for name in SWEEP_SUMMARY_METRIC_NAMES:
        values = [float(row[name]) for row in point_rows]
        summary[f"{name}_mean"] = statistics.fmean(values)
        summary[f"{name}_std"] = statistics.pstdev(values)
    return summary


def run_param_sweep(config: SweepConfig) -> list[RunResult]:
    """Run every (hop_length, bare, sand) point for every seed and persist tables."""
    _validate_sweep_config(config)
    out_dir = Path(config.out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    hop_lengths, bare_values, sand_values = config.resolved_axes()
    results: list[RunResult] = []
    run_rows: list[dict[str, Any]] = []
    summary_rows: list[dict[str, Any]] = []

    for hop_length, prob_bare, prob_sand in itertools.product(
        hop_lengths, bare_values, sand_values
    ):
        point_id = sweep_point_id(hop_length, prob_bare, prob_sand)
        point_dir = sweep_point_dir(out_dir, hop_length, prob_bare, prob_sand)
        logger.info("Sweep point %s (%d seeds)", point_id, config.n_seeds)
        point_rows: list[dict[str, Any]] = []
        for seed in range(config.seed_start, config.seed_start + config.n_seeds):
            run_config = replace(
                config.base,
                hop_length=hop_length,
                prob_deposit_bare=prob_bare,
                prob_deposit_sand=prob_sand,
                seed=seed,
            )
            result = run_simulation(
                run_config,
                out_dir=point_dir / f"seed_{seed}",
                run_id=f"{point_id}_s{seed}",
            )
            results.append(result)
            point_rows.append(
                {
                    "schema_version": SWEEP_SCHEMA_VERSION,
                    "run_id": result.run_id,
                    "point_id": point_id,
                    "hop_length": hop_length,
                    "prob_deposit_bare": prob_bare,
                    "prob_deposit_sand": prob_sand,
                    "seed": seed,
                    "cycles": result.cycles,
                    "total_sand": result.total_sand,
                    "max_height": result.max_height,
                    "shadow_fraction": result.shadow_fraction,
                    "roughness": result.roughness,
                    "capped_hops": result.capped_hops,
                }
            )
        run_rows.extend(point_rows)
        summary_rows.append(_summarize_point(point_rows))

    pq.write_table(
        pa.Table.from_pylist(run_rows, schema=SWEEP_RUNS_SCHEMA), sweep_runs_path(out_dir)
    )
    pq.write_table(
        pa.Table.from_pylist(summary_rows, schema=SWEEP_SUMMARY_SCHEMA),
        sweep_summary_path(out_dir),
    )
    return results
