"""Path construction helpers for simulation output directories.

Centralises the directory/file naming conventions used by the run driver,
the sweep orchestration and the renderers.
"""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def runs_dir(out_dir: Path) -> Path:
    """Return path to the run-payload subdirectory within an output directory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    return runs_dir(out_dir) / f"{run_id}.json"


def cycle_metrics_path(out_dir: Path) -> Path:
    """Return path to the per-cycle metrics Parquet file."""
    return logs_dir(out_dir) / "cycle_metrics.parquet"


def height_frames_path(out_dir: Path) -> Path:
    """Return path to the height-frame Parquet file."""
    return logs_dir(out_dir) / "height_frames.parquet"


def sweep_runs_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "sweep_runs.parquet"


def sweep_summary_path(out_dir: Path) -> Path:
    return logs_dir(out_dir) / "sweep_summary.parquet"


def sweep_point_dir(
    out_dir: Path, hop_length: int, prob_deposit_bare: float, prob_deposit_sand: float
) -> Path:
    """Return path to the per-point output subdirectory of a sweep."""
    return out_dir / sweep_point_id(hop_length, prob_deposit_bare, prob_deposit_sand)


def sweep_point_id(hop_length: int, prob_deposit_bare: float, prob_deposit_sand: float) -> str:
    return f"hop{hop_length}_bare{prob_deposit_bare:g}_sand{prob_deposit_sand:g}"
