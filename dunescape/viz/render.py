"""Image export and matplotlib rendering for dune-field heights.

Height arrays are indexed ``[i, j]``. Exported images put ``(0, 0)`` at the
bottom-left: image row 0 holds ``j = height - 1`` and columns follow
increasing ``i``.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pyarrow.compute as pc
import pyarrow.parquet as pq

from dunescape.simulation.persistence import frame_cycles, load_height_frame
from dunescape.viz.theme import DEFAULT_THEME, Theme

COLORMAPS = ("grayscale", "nipy_spectral")


def _to_image_orientation(heights: np.ndarray) -> np.ndarray:
    """Return a ``(height, width)`` view with j decreasing down the rows."""
    return np.asarray(heights).T[::-1, :]


def _normalized(heights: np.ndarray) -> np.ndarray | None:
    """Map [min, max] linearly onto [0, 1]; ``None`` for a flat field."""
    h = np.asarray(heights, dtype=np.float64)
    vmin, vmax = h.min(), h.max()
    if vmin == vmax:
        return None
    return (h - vmin) / (vmax - vmin)


def to_grayscale_8bit(heights: np.ndarray) -> np.ndarray:
    """Convert a height array to a ``(height, width)`` uint8 grayscale image."""
    h = np.asarray(heights)
    norm = _normalized(h)
    if norm is None:
        return np.zeros((h.shape[1], h.shape[0]), dtype=np.uint8)
    return _to_image_orientation(np.floor(255.0 * norm).astype(np.uint8))


def to_nipy_spectral_8bit(heights: np.ndarray) -> np.ndarray:
    """Convert a height array to a ``(height, width, 3)`` uint8 RGB image."""
    h = np.asarray(heights)
    norm = _normalized(h)
    if norm is None:
        return np.zeros((h.shape[1], h.shape[0], 3), dtype=np.uint8)
    rgba = matplotlib.colormaps["nipy_spectral"](_to_image_orientation(norm))
    return np.floor(255.0 * rgba[..., :3]).astype(np.uint8)


def to_image_8bit(heights: np.ndarray, colormap: str = "grayscale") -> np.ndarray:
    if colormap == "grayscale":
        return to_grayscale_8bit(heights)
    if colormap == "nipy_spectral":
        return to_nipy_spectral_8bit(heights)
    raise ValueError(f"colormap must be one of {', '.join(COLORMAPS)}")


def save_png(heights: np.ndarray, output_path: Path, colormap: str = "grayscale") -> Path:
    """Write a height array as a PNG, one pixel per cell."""
    image = to_image_8bit(heights, colormap)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if image.ndim == 2:
        plt.imsave(output_path, image, cmap="gray", vmin=0, vmax=255)
    else:
        plt.imsave(output_path, image)
    return output_path


# ---------------------------------------------------------------------------
# Frame-log renderers
# ---------------------------------------------------------------------------


def render_frame_png(
    frames_path: Path,
    run_id: str,
    output_path: Path,
    cycle: int | None = None,
    colormap: str = "grayscale",
) -> Path:
    """Export one recorded frame (last one by default) as a PNG."""
    heights, _ = load_height_frame(frames_path, run_id, cycle)
    return save_png(heights, output_path, colormap)


def render_filmstrip(
    frames_path: Path,
    run_id: str,
    output_path: Path,
    n_frames: int = 6,
    show_shadow: bool = False,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Render a vertical strip of evenly spaced recorded frames with cycle labels."""
    if n_frames < 1:
        raise ValueError("n_frames must be >= 1")
    cycles = frame_cycles(frames_path, run_id)
    if not cycles:
        raise ValueError(f"No frames found for run_id={run_id}")

    actual_n = max(1, min(n_frames, len(cycles)))
    indices = [int(i * (len(cycles) - 1) / max(1, actual_n - 1)) for i in range(actual_n)]
    selected = [cycles[i] for i in indices]

    frames = [load_height_frame(frames_path, run_id, cycle) for cycle in selected]
    vmin = min(int(h.min()) for h, _ in frames)
    vmax = max(int(h.max()) for h, _ in frames)
    width, height = frames[0][0].shape
    panel_height = max(1.0, 8.0 * height / width)

    fig, axes = plt.subplots(actual_n, 1, figsize=(8, panel_height * actual_n), squeeze=False)
    fig.patch.set_facecolor(theme.background_color)
    for row_idx, (cycle, (heights, shadow)) in enumerate(zip(selected, frames, strict=True)):
        ax = axes[row_idx, 0]
        ax.imshow(
            heights.T,
            origin="lower",
            cmap=theme.height_cmap,
            vmin=vmin,
            vmax=max(vmax, vmin + 1),
            interpolation="nearest",
        )
        if show_shadow:
            ax.imshow(
                np.ma.masked_equal(shadow.T, 0),
                origin="lower",
                cmap="Greys",
                alpha=0.35,
                interpolation="nearest",
            )
        ax.set_title(f"Cycle {cycle}", fontsize=9, color=theme.title_color)
        ax.set_xticks([])
        ax.set_yticks([])

    fig.suptitle(f"Run: {run_id}", fontsize=11, color=theme.title_color)
    fig.tight_layout(rect=(0, 0, 1, 0.96))
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)


def render_metric_timeseries(
    metrics_path: Path,
    metric_names: list[str],
    output_path: Path,
    run_ids: list[str] | None = None,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Plot per-cycle metric trajectories, one panel per metric."""
    if not metric_names:
        raise ValueError("metric_names must not be empty")
    table = pq.read_table(metrics_path)
    missing = [name for name in metric_names if name not in table.column_names]
    if missing:
        raise ValueError(f"Unknown metric(s): {', '.join(missing)}")
    if run_ids is None:
        run_ids = sorted(set(table.column("run_id").to_pylist()))

    n_metrics = len(metric_names)
    fig, axes = plt.subplots(n_metrics, 1, figsize=(7, 2.8 * n_metrics), squeeze=False)
    for m_idx, metric_name in enumerate(metric_names):
        ax = axes[m_idx, 0]
        color = theme.metric_colors.get(metric_name, "tab:blue")
        for run_id in run_ids:
            rows = table.filter(pc.equal(table["run_id"], run_id)).to_pylist()
            rows.sort(key=lambda r: int(r["cycle"]))
            cycles = [int(r["cycle"]) for r in rows]
            vals = [float(r[metric_name]) if r[metric_name] is not None else np.nan for r in rows]
            ax.plot(cycles, vals, color=color, alpha=0.6, linewidth=1.5)
        ax.set_ylabel(theme.metric_labels.get(metric_name, metric_name))
        ax.grid(True, alpha=0.3)
    axes[-1, 0].set_xlabel("Cycle")
    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=200)
    plt.close(fig)
