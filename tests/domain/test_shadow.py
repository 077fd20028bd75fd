"""Tests for dunescape.domain.shadow."""

from __future__ import annotations

import numpy as np
import pytest

from dunescape.config.constants import SHADOW_SLOPE
from dunescape.config.types import ConfigurationError
from dunescape.domain.grid import Grid
from dunescape.domain.shadow import cast_shadow, is_shadowed, shadow_mask, shadow_reach


def _grid(rows: list[list[int]]) -> Grid:
    return Grid.from_array(np.array(rows, dtype=np.int64))


class TestShadowReach:
    def test_flat_field_has_no_search(self) -> None:
        assert shadow_reach(0, SHADOW_SLOPE) == 1

    def test_kmax_formula(self) -> None:
        assert shadow_reach(3, 1.0) == 4
        assert shadow_reach(1, SHADOW_SLOPE) == 2
        assert shadow_reach(4, SHADOW_SLOPE) == 5

    def test_non_positive_slope_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="shadow_slope"):
            shadow_reach(3, 0.0)


class TestCastShadow:
    def test_single_peak_shadows_downwind_cells(self) -> None:
        heights = Grid(4, 4)
        heights.set(0, 0, 3)
        shadow = Grid(4, 4)
        count = cast_shadow(heights, shadow, 1.0)
        shadowed = {(i, j) for i in range(4) for j in range(4) if shadow.get(i, j)}
        assert shadowed == {(1, 0), (2, 0)}
        assert count == 2

    def test_flat_field_is_fully_lit(self) -> None:
        heights = Grid(6, 3)
        heights.fill(5)
        shadow = Grid(6, 3)
        assert cast_shadow(heights, shadow, SHADOW_SLOPE) == 0
        assert set(shadow.values) == {0}

    def test_shadow_wraps_across_boundary(self) -> None:
        heights = _grid([[0], [0], [0], [3]])
        shadow = Grid(4, 1)
        cast_shadow(heights, shadow, 1.0)
        assert shadow.values == [1, 1, 0, 0]

    def test_recompute_overwrites_previous_mask(self) -> None:
        heights = _grid([[3], [0], [0], [0]])
        shadow = Grid(4, 1)
        cast_shadow(heights, shadow, 1.0)
        heights.fill(0)
        cast_shadow(heights, shadow, 1.0)
        assert shadow.values == [0, 0, 0, 0]

    def test_mask_values_are_zero_or_one(self) -> None:
        heights = Grid(16, 8)
        heights.fill_random(0, 6, seed=2)
        shadow = Grid(16, 8)
        cast_shadow(heights, shadow, SHADOW_SLOPE)
        assert set(shadow.values) <= {0, 1}

    def test_shape_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            cast_shadow(Grid(4, 4), Grid(4, 3), 1.0)


class TestVectorisedMatchesPerCell:
    def test_random_field_agrees_with_loop(self) -> None:
        heights = Grid(20, 7)
        heights.fill_random(0, 8, seed=11)
        kmax = shadow_reach(heights.max(), SHADOW_SLOPE)
        mask = shadow_mask(heights.as_array(), SHADOW_SLOPE)
        for i in range(heights.width):
            for j in range(heights.height):
                assert mask[i, j] == is_shadowed(heights, i, j, SHADOW_SLOPE, kmax)

    def test_rolled_field_gives_rolled_mask(self) -> None:
        heights = Grid(12, 5)
        heights.fill_random(0, 6, seed=13)
        arr = heights.as_array()
        mask = shadow_mask(arr, SHADOW_SLOPE)
        rolled = shadow_mask(np.roll(arr, (5, 2), axis=(0, 1)), SHADOW_SLOPE)
        np.testing.assert_array_equal(np.roll(mask, (5, 2), axis=(0, 1)), rolled)
