"""Dune-field simulation controller.

``DuneField`` owns the height grid, the shadow mask, the transport
parameters and the random stream. One ``run_cycle`` call refreshes the
shadow mask from the current heights and applies the transport rule to every
cell. The mask is recast once transport finishes, so between cycles it always
matches the heights. Callers must not read or modify the field while a cycle
runs.
"""

from __future__ import annotations

from dataclasses import replace
from random import Random
from typing import Any

import numpy as np

from dunescape.config.constants import SEED
from dunescape.config.types import DuneFieldConfig, TransportParams
from dunescape.domain.grid import Grid
from dunescape.domain.shadow import cast_shadow
from dunescape.domain.transport import CycleStats, run_transport


class DuneField:
    """Toroidal dune field: sand heights, wind shadow, and transport state."""

    def __init__(
        self,
        width: int,
        height: int,
        params: TransportParams | None = None,
        seed: int = SEED,
    ) -> None:
        self.heights = Grid(width, height)
        self.shadow = Grid(width, height)
        self.params = params or TransportParams()
        self.seed = seed
        self.rng = Random(seed)
        self.cycle_count = 0

    @classmethod
    def from_config(cls, config: DuneFieldConfig) -> DuneField:
        """Create a field and seed its initial heights from ``config``."""
        field = cls(
            config.grid_width,
            config.grid_height,
            params=config.transport_params(),
            seed=config.seed,
        )
        field.reset(config.initial_height)
        return field

    @property
    def width(self) -> int:
        return self.heights.width

    @property
    def height(self) -> int:
        return self.heights.height

    @property
    def shape(self) -> tuple[int, int]:
        return self.heights.shape

    def set_shape(self, width: int, height: int) -> None:
        """Reallocate both grids with zeroed contents."""
        self.heights.reshape(width, height)
        self.shadow.reshape(width, height)
        self.cycle_count = 0

    def reset(self, initial_height: int, seed: int | None = None) -> None:
        """Refill heights uniformly in [0, initial_height] and restart the random stream."""
        if seed is not None:
            self.seed = seed
        self.heights.fill_random(0, initial_height, self.seed)
        self.rng = Random(self.seed)
        self.cycle_count = 0
        self.update_shadow()

    def update_params(self, **changes: Any) -> TransportParams:
        """Replace transport parameters between cycles and recast the shadow mask."""
        self.params = replace(self.params, **changes)
        self.update_shadow()
        return self.params

    def update_shadow(self) -> int:
        return cast_shadow(self.heights, self.shadow, self.params.shadow_slope)

    def run_cycle(self) -> CycleStats:
        """Refresh the shadow mask, transport sand once over every cell, recast the shadow.

        ``CycleStats.shadowed_cells`` counts the mask the transport pass used.
        """
        shadowed = self.update_shadow()
        stats = run_transport(
            self.heights,
            self.shadow,
            self.params,
            self.rng,
            shadowed_cells=shadowed,
        )
        self.update_shadow()
        self.cycle_count += 1
        return stats

    def run(self, n_cycles: int) -> list[CycleStats]:
        if n_cycles < 0:
            raise ValueError("n_cycles must be >= 0")
        return [self.run_cycle() for _ in range(n_cycles)]

    # -- read accessors -----------------------------------------------------

    def height_values(self) -> list[int]:
        return list(self.heights.values)

    def shadow_values(self) -> list[int]:
        return list(self.shadow.values)

    def height_array(self) -> np.ndarray:
        return self.heights.as_array()

    def shadow_array(self) -> np.ndarray:
        return self.shadow.as_array()
