"""Configuration layer: constants and typed config dataclasses."""

from dunescape.config.constants import (
    AVALANCHE_THRESHOLD,
    FLUSH_THRESHOLD,
    GRID_HEIGHT,
    GRID_WIDTH,
    HOP_LENGTH,
    INITIAL_HEIGHT,
    MAX_HOPS_PER_SLAB,
    MAX_SWEEP_WORK_UNITS,
    NUM_CYCLES,
    PROB_DEPOSIT_BARE,
    PROB_DEPOSIT_SAND,
    SEED,
    SHADOW_SLOPE,
    SNAPSHOT_INTERVAL,
    TILE_SIZE,
)
from dunescape.config.types import (
    ConfigurationError,
    DuneFieldConfig,
    RunResult,
    SweepConfig,
    TransportParams,
    snap_dimension,
    validate_shape,
)

__all__ = [
    "AVALANCHE_THRESHOLD",
    "ConfigurationError",
    "DuneFieldConfig",
    "FLUSH_THRESHOLD",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "HOP_LENGTH",
    "INITIAL_HEIGHT",
    "MAX_HOPS_PER_SLAB",
    "MAX_SWEEP_WORK_UNITS",
    "NUM_CYCLES",
    "PROB_DEPOSIT_BARE",
    "PROB_DEPOSIT_SAND",
    "RunResult",
    "SEED",
    "SHADOW_SLOPE",
    "SNAPSHOT_INTERVAL",
    "SweepConfig",
    "TILE_SIZE",
    "TransportParams",
    "snap_dimension",
    "validate_shape",
]
