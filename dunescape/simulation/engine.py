"""Run driver: seeded dune-field simulation with per-cycle metrics and frame logs."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from dunescape.config.constants import FLUSH_THRESHOLD
from dunescape.config.types import DuneFieldConfig, RunResult
from dunescape.domain.field import DuneField
from dunescape.io.paths import (
    cycle_metrics_path,
    height_frames_path,
    logs_dir,
    run_payload_path,
    runs_dir,
)
from dunescape.io.schemas import CYCLE_METRICS_SCHEMA, RUN_PAYLOAD_SCHEMA_VERSION
from dunescape.metrics.surface import compute_cycle_metrics, roughness, shadow_fraction
from dunescape.simulation.persistence import (
    append_frame,
    flush_frame_columns,
    new_frame_columns,
)

logger = logging.getLogger(__name__)


def deterministic_run_id(config: DuneFieldConfig) -> str:
    """Build a run ID that is stable across runs for identical shape and seed."""
    return f"dune_w{config.grid_width}_h{config.grid_height}_s{config.seed}"


def run_simulation(
    config: DuneFieldConfig,
    out_dir: Path,
    run_id: str | None = None,
) -> RunResult:
    """Run one seeded simulation and persist metrics, frames and a JSON payload.

    Frame 0 is the initial state; further frames are recorded every
    ``snapshot_interval`` cycles and after the final cycle.
    """
    run_id = run_id or deterministic_run_id(config)
    out_dir = Path(out_dir)
    runs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    frames_path = height_frames_path(out_dir)
    metrics_path = cycle_metrics_path(out_dir)

    logger.info(
        "Starting run %s: %dx%d, %d cycles, seed=%d",
        run_id,
        config.grid_width,
        config.grid_height,
        config.cycles,
        config.seed,
    )
    field = DuneField.from_config(config)
    initial_sand = field.heights.total()

    metric_columns: dict[str, list[int | str | float | None]] = {
        name: [] for name in CYCLE_METRICS_SCHEMA.names
    }
    frame_columns = new_frame_columns()
    frame_writer: pq.ParquetWriter | None = None
    total_capped = 0

    try:
        append_frame(frame_columns, run_id, 0, field)
        for cycle in range(1, config.cycles + 1):
            stats = field.run_cycle()
            total_capped += stats.capped_hops
            if stats.capped_hops:
                logger.warning(
                    "Run %s cycle %d: %d slabs hit the hop cap (max_hops=%s)",
                    run_id,
                    cycle,
                    stats.capped_hops,
                    config.max_hops,
                )
            row = compute_cycle_metrics(field, stats)
            metric_columns["run_id"].append(run_id)
            metric_columns["cycle"].append(cycle)
            for key, value in row.items():
                metric_columns[key].append(value)
            logger.debug(
                "Run %s cycle %d: active=%d shadowed=%d hops=%d",
                run_id,
                cycle,
                stats.active_cells,
                stats.shadowed_cells,
                stats.hops,
            )

            if cycle % config.snapshot_interval == 0 or cycle == config.cycles:
                append_frame(frame_columns, run_id, cycle, field)
            if len(frame_columns["run_id"]) >= FLUSH_THRESHOLD:
                frame_writer = flush_frame_columns(frame_columns, frames_path, frame_writer)

        frame_writer = flush_frame_columns(frame_columns, frames_path, frame_writer)
    finally:
        if frame_writer is not None:
            frame_writer.close()

    pq.write_table(pa.Table.from_pydict(metric_columns, schema=CYCLE_METRICS_SCHEMA), metrics_path)

    heights = field.height_array()
    result = RunResult(
        run_id=run_id,
        seed=config.seed,
        cycles=config.cycles,
        total_sand=int(heights.sum()),
        max_height=int(heights.max()),
        shadow_fraction=shadow_fraction(field.shadow_array()),
        roughness=roughness(heights),
        capped_hops=total_capped,
    )
    if result.total_sand != initial_sand:
        logger.error(
            "Run %s: sand mass changed from %d to %d", run_id, initial_sand, result.total_sand
        )

    payload = {
        "run_id": run_id,
        "config": asdict(config),
        "result": asdict(result),
        "metadata": {
            "grid_width": config.grid_width,
            "grid_height": config.grid_height,
            "initial_sand": initial_sand,
            "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
        },
    }
    run_payload_path(out_dir, run_id).write_text(
        json.dumps(payload, ensure_ascii=False, indent=2)
    )
    logger.info(
        "Finished run %s: max_height=%d roughness=%.3f shadow_fraction=%.3f",
        run_id,
        result.max_height,
        result.roughness,
        result.shadow_fraction,
    )
    return result
