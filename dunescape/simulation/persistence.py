"""Parquet persistence helpers for height frames."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pyarrow as pa
import pyarrow.compute as pc
import pyarrow.parquet as pq

from dunescape.domain.field import DuneField
from dunescape.io.schemas import HEIGHT_FRAMES_SCHEMA


def new_frame_columns() -> dict[str, list[int | str]]:
    return {field.name: [] for field in HEIGHT_FRAMES_SCHEMA}


def append_frame(
    frame_columns: dict[str, list[int | str]], run_id: str, cycle: int, field: DuneField
) -> None:
    """Buffer the raw height and shadow values of ``field`` as one frame."""
    width, height = field.shape
    n_cells = width * height
    frame_columns["run_id"].extend([run_id] * n_cells)
    frame_columns["cycle"].extend([cycle] * n_cells)
    frame_columns["i"].extend(i for i in range(width) for _ in range(height))
    frame_columns["j"].extend(list(range(height)) * width)
    frame_columns["height"].extend(field.heights.values)
    frame_columns["shadow"].extend(field.shadow.values)


def flush_frame_columns(
    frame_columns: dict[str, list[int | str]],
    frames_path: Path,
    frame_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated frame rows to Parquet and clear in-memory buffers."""
    if not frame_columns["run_id"]:
        return frame_writer
    frame_table = pa.Table.from_pydict(frame_columns, schema=HEIGHT_FRAMES_SCHEMA)
    if frame_writer is None:
        frame_writer = pq.ParquetWriter(frames_path, HEIGHT_FRAMES_SCHEMA)
    frame_writer.write_table(frame_table)
    for values in frame_columns.values():
        values.clear()
    return frame_writer


def frame_cycles(frames_path: Path, run_id: str) -> list[int]:
    """Return the sorted cycles recorded for ``run_id``."""
    table = pq.read_table(frames_path, columns=["run_id", "cycle"])
    table = table.filter(pc.equal(table["run_id"], run_id))
    return sorted(set(table.column("cycle").to_pylist()))


def load_height_frame(
    frames_path: Path, run_id: str, cycle: int | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """Load one recorded frame as ``(heights, shadow)`` arrays of shape (width, height).

    ``cycle=None`` selects the last recorded frame.
    """
    cycles = frame_cycles(frames_path, run_id)
    if not cycles:
        raise ValueError(f"No frames found for run_id={run_id}")
    if cycle is None:
        cycle = cycles[-1]
    elif cycle not in cycles:
        raise ValueError(f"No frame recorded at cycle={cycle} for run_id={run_id}")

    table = pq.read_table(frames_path, filters=[("run_id", "=", run_id), ("cycle", "=", cycle)])
    i = np.asarray(table.column("i").to_pylist(), dtype=np.int64)
    j = np.asarray(table.column("j").to_pylist(), dtype=np.int64)
    width, height = int(i.max()) + 1, int(j.max()) + 1
    heights = np.zeros((width, height), dtype=np.int64)
    shadow = np.zeros((width, height), dtype=np.int64)
    heights[i, j] = table.column("height").to_pylist()
    shadow[i, j] = table.column("shadow").to_pylist()
    return heights, shadow
