"""Tests for dunescape.config.types."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from dunescape.config.constants import HOP_LENGTH, PROB_DEPOSIT_BARE, PROB_DEPOSIT_SAND
from dunescape.config.types import (
    ConfigurationError,
    DuneFieldConfig,
    SweepConfig,
    TransportParams,
    snap_dimension,
    validate_shape,
)


class TestValidateShape:
    def test_accepts_single_cell(self) -> None:
        validate_shape(1, 1)

    @pytest.mark.parametrize(("width", "height"), [(0, 4), (4, 0), (-1, 3)])
    def test_rejects_non_positive(self, width: int, height: int) -> None:
        with pytest.raises(ConfigurationError, match="grid dimensions"):
            validate_shape(width, height)

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_shape(0, 0)


class TestSnapDimension:
    def test_rounds_down_to_tile(self) -> None:
        assert snap_dimension(100) == 96
        assert snap_dimension(512) == 512

    def test_never_below_one_tile(self) -> None:
        assert snap_dimension(5) == 32

    def test_custom_tile(self) -> None:
        assert snap_dimension(17, tile=8) == 16


class TestTransportParams:
    def test_defaults(self) -> None:
        params = TransportParams()
        assert params.hop_length == HOP_LENGTH
        assert params.prob_deposit_bare == PROB_DEPOSIT_BARE
        assert params.prob_deposit_sand == PROB_DEPOSIT_SAND

    def test_sand_probability_may_be_below_bare(self) -> None:
        params = TransportParams(prob_deposit_bare=0.9, prob_deposit_sand=0.1)
        assert params.prob_deposit_sand < params.prob_deposit_bare

    def test_max_hops_none_disables_cap(self) -> None:
        assert TransportParams(max_hops=None).max_hops is None

    @pytest.mark.parametrize(
        ("overrides", "match"),
        [
            ({"shadow_slope": 0.0}, "shadow_slope"),
            ({"hop_length": 0}, "hop_length"),
            ({"prob_deposit_bare": 1.5}, "prob_deposit_bare"),
            ({"prob_deposit_sand": -0.1}, "prob_deposit_sand"),
            ({"max_hops": 0}, "max_hops"),
        ],
    )
    def test_invalid_values_raise(self, overrides: dict[str, object], match: str) -> None:
        with pytest.raises(ConfigurationError, match=match):
            TransportParams(**overrides)  # type: ignore[arg-type]

    def test_is_frozen(self) -> None:
        params = TransportParams()
        with pytest.raises(FrozenInstanceError):
            params.hop_length = 3  # type: ignore[misc]


class TestDuneFieldConfig:
    def test_transport_params_round_trip(self) -> None:
        config = DuneFieldConfig(hop_length=3, prob_deposit_bare=0.2, max_hops=50)
        params = config.transport_params()
        assert params.hop_length == 3
        assert params.prob_deposit_bare == 0.2
        assert params.max_hops == 50

    def test_from_components(self) -> None:
        params = TransportParams(hop_length=2, prob_deposit_sand=0.5)
        config = DuneFieldConfig.from_components(params, grid_width=16, grid_height=8, seed=7)
        assert config.grid_width == 16
        assert config.seed == 7
        assert config.transport_params() == params

    @pytest.mark.parametrize(
        ("overrides", "match"),
        [
            ({"grid_width": 0}, "grid dimensions"),
            ({"initial_height": -1}, "initial_height"),
            ({"cycles": 0}, "cycles"),
            ({"snapshot_interval": 0}, "snapshot_interval"),
            ({"hop_length": 0}, "hop_length"),
        ],
    )
    def test_invalid_values_raise(self, overrides: dict[str, object], match: str) -> None:
        with pytest.raises(ConfigurationError, match=match):
            DuneFieldConfig(**overrides)  # type: ignore[arg-type]


class TestSweepConfig:
    def test_empty_axes_fall_back_to_base(self) -> None:
        base = DuneFieldConfig(hop_length=2, prob_deposit_bare=0.3, prob_deposit_sand=0.7)
        config = SweepConfig(base=base, out_dir=Path("out"))
        assert config.resolved_axes() == ((2,), (0.3,), (0.7,))
        assert config.n_points() == 1

    def test_n_points_is_axis_product(self) -> None:
        config = SweepConfig(
            hop_lengths=(1, 2, 3),
            prob_deposit_bare_values=(0.2, 0.4),
            prob_deposit_sand_values=(0.6,),
        )
        assert config.n_points() == 6

    def test_zero_seeds_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="n_seeds"):
            SweepConfig(n_seeds=0)

    def test_bad_hop_length_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="hop_lengths"):
            SweepConfig(hop_lengths=(1, 0))

    def test_bad_probability_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="prob_deposit_sand_values"):
            SweepConfig(prob_deposit_sand_values=(0.5, 1.2))
