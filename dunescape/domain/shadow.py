"""Wind-shadow casting from the sand-height field.

A cell is shadowed when some upwind cell at distance ``k`` (along the first
axis, wrapped) is higher than it by more than ``k * shadow_slope``. The
search depth ``kmax`` depends only on the global maximum height.

Each cell only reads heights and writes its own mask entry, so the whole pass
is evaluated at once with numpy instead of cell by cell.
"""

from __future__ import annotations

import numpy as np

from dunescape.config.types import ConfigurationError
from dunescape.domain.grid import Grid


def shadow_reach(max_height: int, shadow_slope: float) -> int:
    """Return ``kmax = 1 + floor(max_height / shadow_slope)``.

    Offsets ``k`` in ``[1, kmax)`` are examined; ``kmax == 1`` means no search.
    """
    if not shadow_slope > 0.0:
        raise ConfigurationError("shadow_slope must be > 0")
    return 1 + int(max_height / shadow_slope)


def is_shadowed(heights: Grid, i: int, j: int, shadow_slope: float, kmax: int) -> bool:
    """Per-cell shadow test, scanning upwind until a caster is found or kmax is hit."""
    h_ij = heights.get(i, j)
    for k in range(1, kmax):
        upwind = (i - k) % heights.width
        if heights.get(upwind, j) - h_ij - k * shadow_slope > 0.0:
            return True
    return False


def shadow_mask(height_array: np.ndarray, shadow_slope: float) -> np.ndarray:
    """Return a boolean ``(width, height)`` mask for a height array."""
    h = np.asarray(height_array, dtype=np.float64)
    kmax = shadow_reach(int(h.max()), shadow_slope)
    mask = np.zeros(h.shape, dtype=bool)
    for k in range(1, kmax):
        # roll by +k along axis 0 puts h[i - k] at position i
        mask |= np.roll(h, k, axis=0) - h - k * shadow_slope > 0.0
    return mask


def cast_shadow(heights: Grid, shadow: Grid, shadow_slope: float) -> int:
    """Recompute ``shadow`` (0 lit / 1 shadowed) from ``heights``; return shadowed count."""
    if shadow.shape != heights.shape:
        raise ValueError("shadow grid shape must match heights grid shape")
    mask = shadow_mask(heights.as_array(), shadow_slope)
    shadow.values = mask.ravel().astype(np.int64).tolist()
    return int(mask.sum())
