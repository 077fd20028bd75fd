"""Visualization theme presets for dune-field renderers.

Themes are frozen dataclasses that group styling constants so renderers can
swap palettes via the ``--theme`` CLI argument or programmatically.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    metric_labels: dict[str, str] = field(default_factory=dict)
    metric_colors: dict[str, str] = field(default_factory=dict)

    # Height-field panels
    height_cmap: str = "nipy_spectral"
    background_color: str = "#1A1A1A"
    title_color: str = "white"


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

_DEFAULT_METRIC_LABELS: dict[str, str] = {
    "total_sand": "Total Sand (slabs)",
    "mean_height": "Mean Height",
    "height_std": "Height Std",
    "min_height": "Min Height",
    "max_height": "Max Height",
    "bare_fraction": "Bare Fraction",
    "shadow_fraction": "Shadow Fraction",
    "roughness": "Roughness",
    "crest_density": "Crest Density",
    "dominant_wavelength": "Dominant Wavelength (cells)",
    "active_cells": "Active Cells",
    "mean_hops": "Mean Hops per Slab",
    "capped_hops": "Capped Hops",
    "avalanches": "Avalanches",
}

_DEFAULT_METRIC_COLORS: dict[str, str] = {
    "roughness": "tab:orange",
    "shadow_fraction": "tab:gray",
    "crest_density": "tab:red",
    "dominant_wavelength": "tab:purple",
    "max_height": "tab:brown",
    "bare_fraction": "tab:olive",
    "mean_hops": "tab:blue",
}

DEFAULT_THEME = Theme(
    metric_labels=_DEFAULT_METRIC_LABELS,
    metric_colors=_DEFAULT_METRIC_COLORS,
)

PAPER_THEME = Theme(
    metric_labels=_DEFAULT_METRIC_LABELS,
    metric_colors={
        "roughness": "#ff7f0e",
        "shadow_fraction": "#7f7f7f",
        "crest_density": "#d62728",
        "dominant_wavelength": "#9467bd",
        "max_height": "#8c564b",
        "bare_fraction": "#bcbd22",
        "mean_hops": "#1f77b4",
    },
    height_cmap="gray",
    background_color="#FFFFFF",
    title_color="black",
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "paper": PAPER_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
