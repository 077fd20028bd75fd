"""Domain layer: grid, wind shadow, transport rule, and the field controller."""

from dunescape.domain.field import DuneField
from dunescape.domain.grid import Grid
from dunescape.domain.shadow import cast_shadow, is_shadowed, shadow_mask, shadow_reach
from dunescape.domain.transport import (
    CycleStats,
    Direction,
    deposit,
    run_transport,
    transport_cell,
)

__all__ = [
    "CycleStats",
    "Direction",
    "DuneField",
    "Grid",
    "cast_shadow",
    "deposit",
    "is_shadowed",
    "run_transport",
    "shadow_mask",
    "shadow_reach",
    "transport_cell",
]
