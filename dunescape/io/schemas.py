"""Parquet schema definitions for dune-field run and sweep artifacts.

Every module that writes or reads a Parquet log works against the column
contracts defined here.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

RUN_PAYLOAD_SCHEMA_VERSION = 1
SWEEP_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Single-run schemas
# ---------------------------------------------------------------------------

CYCLE_METRICS_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("cycle", pa.int64()),
        ("total_sand", pa.int64()),
        ("mean_height", pa.float64()),
        ("height_std", pa.float64()),
        ("min_height", pa.int64()),
        ("max_height", pa.int64()),
        ("bare_fraction", pa.float64()),
        ("shadow_fraction", pa.float64()),
        ("roughness", pa.float64()),
        ("crest_density", pa.float64()),
        ("dominant_wavelength", pa.float64()),
        ("active_cells", pa.int64()),
        ("mean_hops", pa.float64()),
        ("capped_hops", pa.int64()),
        ("avalanches", pa.int64()),
    ]
)

HEIGHT_FRAMES_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("cycle", pa.int64()),
        ("i", pa.int64()),
        ("j", pa.int64()),
        ("height", pa.int64()),
        ("shadow", pa.int8()),
    ]
)

# Metric names that can be plotted as a per-cycle timeseries.
CYCLE_METRIC_NAMES = [
    field.name for field in CYCLE_METRICS_SCHEMA if field.name not in {"run_id", "cycle"}
]

# ---------------------------------------------------------------------------
# Sweep schemas
# ---------------------------------------------------------------------------

SWEEP_RUNS_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("point_id", pa.string()),
        ("hop_length", pa.int64()),
        ("prob_deposit_bare", pa.float64()),
        ("prob_deposit_sand", pa.float64()),
        ("seed", pa.int64()),
        ("cycles", pa.int64()),
        ("total_sand", pa.int64()),
        ("max_height", pa.int64()),
        ("shadow_fraction", pa.float64()),
        ("roughness", pa.float64()),
        ("capped_hops", pa.int64()),
    ]
)

SWEEP_SUMMARY_METRIC_NAMES = ["roughness", "shadow_fraction", "max_height"]

SWEEP_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("point_id", pa.string()),
        ("hop_length", pa.int64()),
        ("prob_deposit_bare", pa.float64()),
        ("prob_deposit_sand", pa.float64()),
        ("n_runs", pa.int64()),
    ]
    + [
        (f"{name}_{stat}", pa.float64())
        for name in SWEEP_SUMMARY_METRIC_NAMES
        for stat in ("mean", "std")
    ]
)
