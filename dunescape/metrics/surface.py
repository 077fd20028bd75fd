"""Surface metrics for a dune field: mass, relief, roughness, crests, wavelength.

All functions take ``(width, height)`` arrays indexed ``[i, j]`` with the
transport direction along axis 0, and treat that axis as periodic.
"""

from __future__ import annotations

import numpy as np

from dunescape.domain.field import DuneField
from dunescape.domain.transport import CycleStats


def total_sand(heights: np.ndarray) -> int:
    return int(np.asarray(heights).sum())


def height_summary(heights: np.ndarray) -> dict[str, float]:
    """Mean, population std, min and max of the height field."""
    h = np.asarray(heights, dtype=np.float64)
    return {
        "mean_height": float(h.mean()),
        "height_std": float(h.std()),
        "min_height": float(h.min()),
        "max_height": float(h.max()),
    }


def bare_fraction(heights: np.ndarray) -> float:
    """Fraction of cells with no sand."""
    h = np.asarray(heights)
    return float(np.count_nonzero(h <= 0)) / h.size


def shadow_fraction(shadow: np.ndarray) -> float:
    s = np.asarray(shadow)
    return float(np.count_nonzero(s)) / s.size


def roughness(heights: np.ndarray) -> float:
    """Mean absolute height step between downwind neighbors (periodic)."""
    h = np.asarray(heights, dtype=np.float64)
    return float(np.abs(np.roll(h, -1, axis=0) - h).mean())


def crest_density(heights: np.ndarray) -> float:
    """Fraction of cells strictly higher than both transport-axis neighbors."""
    h = np.asarray(heights)
    if h.shape[0] < 3:
        return 0.0
    crests = (h > np.roll(h, 1, axis=0)) & (h > np.roll(h, -1, axis=0))
    return float(np.count_nonzero(crests)) / h.size


def dominant_wavelength(heights: np.ndarray) -> float | None:
    """Dominant periodicity (in cells) along the transport axis.

    Uses the power spectrum of each transport-axis profile averaged over the
    cross-wind axis. Returns ``None`` when the field has no relief.
    """
    h = np.asarray(heights, dtype=np.float64)
    n = h.shape[0]
    if n < 2:
        return None
    profiles = h - h.mean(axis=0, keepdims=True)
    power = (np.abs(np.fft.rfft(profiles, axis=0)) ** 2).mean(axis=1)
    power[0] = 0.0
    if not np.any(power > 0.0):
        return None
    peak = int(np.argmax(power))
    return n / peak


def compute_cycle_metrics(field: DuneField, stats: CycleStats) -> dict[str, float | int | None]:
    """Compute one row of per-cycle metrics for a field after a cycle."""
    heights = field.height_array()
    shadow = field.shadow_array()
    summary = height_summary(heights)
    mean_hops = stats.hops / stats.active_cells if stats.active_cells else 0.0
    return {
        "total_sand": total_sand(heights),
        "mean_height": summary["mean_height"],
        "height_std": summary["height_std"],
        "min_height": int(summary["min_height"]),
        "max_height": int(summary["max_height"]),
        "bare_fraction": bare_fraction(heights),
        "shadow_fraction": shadow_fraction(shadow),
        "roughness": roughness(heights),
        "crest_density": crest_density(heights),
        "dominant_wavelength": dominant_wavelength(heights),
        "active_cells": stats.active_cells,
        "mean_hops": mean_hops,
        "capped_hops": stats.capped_hops,
        "avalanches": stats.avalanches,
    }
