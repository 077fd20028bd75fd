"""Dune-field metrics."""

from dunescape.metrics.surface import (
    bare_fraction,
    compute_cycle_metrics,
    crest_density,
    dominant_wavelength,
    height_summary,
    roughness,
    shadow_fraction,
    total_sand,
)

__all__ = [
    "bare_fraction",
    "compute_cycle_metrics",
    "crest_density",
    "dominant_wavelength",
    "height_summary",
    "roughness",
    "shadow_fraction",
    "total_sand",
]
