"""Configuration dataclasses and error types for dune-field runs.

All frozen dataclasses that parameterise a single simulation, a parameter
sweep, and the transport rule itself live here. Validation happens once, in
``__post_init__``, so nothing inside the per-cycle loop has to re-check it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dunescape.config.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    HOP_LENGTH,
    INITIAL_HEIGHT,
    MAX_HOPS_PER_SLAB,
    NUM_CYCLES,
    PROB_DEPOSIT_BARE,
    PROB_DEPOSIT_SAND,
    SEED,
    SHADOW_SLOPE,
    SNAPSHOT_INTERVAL,
    TILE_SIZE,
)

__all__ = [
    "ConfigurationError",
    "DuneFieldConfig",
    "RunResult",
    "SweepConfig",
    "TransportParams",
    "snap_dimension",
    "validate_shape",
]


class ConfigurationError(ValueError):
    """Raised when a shape or parameter is rejected at the configuration boundary."""


def validate_shape(width: int, height: int) -> None:
    """Reject non-positive grid dimensions before any storage is allocated."""
    if width < 1 or height < 1:
        raise ConfigurationError(f"grid dimensions must be >= 1, got {width}x{height}")


def snap_dimension(value: int, tile: int = TILE_SIZE) -> int:
    """Round a grid dimension down to a multiple of ``tile`` (never below one tile)."""
    if tile < 1:
        raise ConfigurationError("tile must be >= 1")
    return max(tile, value - value % tile)


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunResult:
    """Top-level result for one simulation run."""

    run_id: str
    seed: int
    cycles: int
    total_sand: int
    max_height: int
    shadow_fraction: float
    roughness: float
    capped_hops: int


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransportParams:
    """Scalar knobs of the erosion / hop / deposit rule.

    ``prob_deposit_sand`` is not required to exceed ``prob_deposit_bare``.
    ``max_hops=None`` disables the hop cap entirely.
    """

    shadow_slope: float = SHADOW_SLOPE
    hop_length: int = HOP_LENGTH
    prob_deposit_bare: float = PROB_DEPOSIT_BARE
    prob_deposit_sand: float = PROB_DEPOSIT_SAND
    max_hops: int | None = MAX_HOPS_PER_SLAB

    def __post_init__(self) -> None:
        if not self.shadow_slope > 0.0:
            raise ConfigurationError("shadow_slope must be > 0")
        if self.hop_length < 1:
            raise ConfigurationError("hop_length must be >= 1")
        if not 0.0 <= self.prob_deposit_bare <= 1.0:
            raise ConfigurationError("prob_deposit_bare must be in [0.0, 1.0]")
        if not 0.0 <= self.prob_deposit_sand <= 1.0:
            raise ConfigurationError("prob_deposit_sand must be in [0.0, 1.0]")
        if self.max_hops is not None and self.max_hops < 1:
            raise ConfigurationError("max_hops must be >= 1 or None")


@dataclass(frozen=True)
class DuneFieldConfig:
    """Runtime settings for a single dune-field simulation run."""

    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    initial_height: int = INITIAL_HEIGHT
    seed: int = SEED
    cycles: int = NUM_CYCLES
    snapshot_interval: int = SNAPSHOT_INTERVAL
    shadow_slope: float = SHADOW_SLOPE
    hop_length: int = HOP_LENGTH
    prob_deposit_bare: float = PROB_DEPOSIT_BARE
    prob_deposit_sand: float = PROB_DEPOSIT_SAND
    max_hops: int | None = MAX_HOPS_PER_SLAB

    def __post_init__(self) -> None:
        validate_shape(self.grid_width, self.grid_height)
        if self.initial_height < 0:
            raise ConfigurationError("initial_height must be >= 0")
        if self.cycles < 1:
            raise ConfigurationError("cycles must be >= 1")
        if self.snapshot_interval < 1:
            raise ConfigurationError("snapshot_interval must be >= 1")
        self.transport_params()

    def transport_params(self) -> TransportParams:
        """Return the (validated) transport sub-config."""
        return TransportParams(
            shadow_slope=self.shadow_slope,
            hop_length=self.hop_length,
            prob_deposit_bare=self.prob_deposit_bare,
            prob_deposit_sand=self.prob_deposit_sand,
            max_hops=self.max_hops,
        )

    @classmethod
    def from_components(
        cls,
        params: TransportParams | None = None,
        *,
        grid_width: int = GRID_WIDTH,
        grid_height: int = GRID_HEIGHT,
        initial_height: int = INITIAL_HEIGHT,
        seed: int = SEED,
        cycles: int = NUM_CYCLES,
        snapshot_interval: int = SNAPSHOT_INTERVAL,
    ) -> DuneFieldConfig:
        """Compose a run config from a reusable ``TransportParams``."""
        params = params or TransportParams()
        return cls(
            grid_width=grid_width,
            grid_height=grid_height,
            initial_height=initial_height,
            seed=seed,
            cycles=cycles,
            snapshot_interval=snapshot_interval,
            shadow_slope=params.shadow_slope,
            hop_length=params.hop_length,
            prob_deposit_bare=params.prob_deposit_bare,
            prob_deposit_sand=params.prob_deposit_sand,
            max_hops=params.max_hops,
        )


@dataclass(frozen=True)
class SweepConfig:
    """Settings for a grid sweep over transport parameters and seeds.

    Axes left empty fall back to the value in ``base``.
    """

    base: DuneFieldConfig = DuneFieldConfig()
    hop_lengths: tuple[int, ...] = ()
    prob_deposit_bare_values: tuple[float, ...] = ()
    prob_deposit_sand_values: tuple[float, ...] = ()
    n_seeds: int = 1
    seed_start: int = 0
    out_dir: Path = Path("data/sweep")

    def __post_init__(self) -> None:
        if self.n_seeds < 1:
            raise ConfigurationError("n_seeds must be >= 1")
        for hop_length in self.hop_lengths:
            if hop_length < 1:
                raise ConfigurationError("hop_lengths values must be >= 1")
        for label, values in (
            ("prob_deposit_bare_values", self.prob_deposit_bare_values),
            ("prob_deposit_sand_values", self.prob_deposit_sand_values),
        ):
            if any(not 0.0 <= value <= 1.0 for value in values):
                raise ConfigurationError(f"{label} must be in [0.0, 1.0]")

    def resolved_axes(self) -> tuple[tuple[int, ...], tuple[float, ...], tuple[float, ...]]:
        """Return (hop_lengths, bare_values, sand_values) with base fallbacks applied."""
        return (
            self.hop_lengths or (self.base.hop_length,),
            self.prob_deposit_bare_values or (self.base.prob_deposit_bare,),
            self.prob_deposit_sand_values or (self.base.prob_deposit_sand,),
        )

    def n_points(self) -> int:
        hops, bare, sand = self.resolved_axes()
        return len(hops) * len(bare) * len(sand)
