"""Visualization subpackage: image export, matplotlib renderers, themes, CLI."""

from dunescape.viz.render import (
    render_filmstrip,
    render_frame_png,
    render_metric_timeseries,
    save_png,
    to_grayscale_8bit,
    to_image_8bit,
    to_nipy_spectral_8bit,
)
from dunescape.viz.theme import DEFAULT_THEME, PAPER_THEME, Theme, get_theme

__all__ = [
    "DEFAULT_THEME",
    "PAPER_THEME",
    "Theme",
    "get_theme",
    "render_filmstrip",
    "render_frame_png",
    "render_metric_timeseries",
    "save_png",
    "to_grayscale_8bit",
    "to_image_8bit",
    "to_nipy_spectral_8bit",
]
