"""Simulation driver: seeded runs, per-cycle metrics, and Parquet frame logs."""

from dunescape.simulation.engine import deterministic_run_id, run_simulation
from dunescape.simulation.persistence import (
    flush_frame_columns,
    frame_cycles,
    load_height_frame,
)

__all__ = [
    "deterministic_run_id",
    "flush_frame_columns",
    "frame_cycles",
    "load_height_frame",
    "run_simulation",
]
