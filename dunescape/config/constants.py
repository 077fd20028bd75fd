"""Centralized domain constants for dune-field simulations.

All magic numbers shared across modules are defined here. Consuming modules
should import from this module rather than defining their own inline literals.
"""

from __future__ import annotations

import math

GRID_WIDTH = 512
"""Default grid width in cells (transport axis)."""

GRID_HEIGHT = 128
"""Default grid height in cells (cross-wind axis)."""

TILE_SIZE = 32
"""Tiling unit that grid dimensions are conventionally snapped to."""

INITIAL_HEIGHT = 4
"""Default upper bound of the uniform initial sand-slab distribution."""

SEED = 1
"""Default random seed."""

SHADOW_SLOPE = 3.0 * math.tan(math.radians(15.0))
"""Shadow slope, 3 * tan(15 deg) ~= 0.8038."""

HOP_LENGTH = 1
"""Default downwind hop length in cells."""

PROB_DEPOSIT_BARE = 0.4
"""Default deposition probability on bare ground."""

PROB_DEPOSIT_SAND = 0.6
"""Default deposition probability on sandy ground."""

AVALANCHE_THRESHOLD = 2
"""Height difference (in slabs) above which a change topples onto a neighbor."""

MAX_HOPS_PER_SLAB = 10_000
"""Default hop cap for one eroded slab before it is forced to deposit."""

NUM_CYCLES = 100
"""Default number of simulation cycles per run."""

SNAPSHOT_INTERVAL = 10
"""Record a height frame every K cycles."""

FLUSH_THRESHOLD = 65_536
"""Flush height-frame rows to Parquet once this in-memory row count is reached."""

MAX_SWEEP_WORK_UNITS = 10_000_000_000
"""Safety cap on total cell-cycles across all sweep points and seeds."""
