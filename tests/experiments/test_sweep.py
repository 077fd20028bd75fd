"""Tests for experiments/sweep.py: config validation and persisted tables."""

from __future__ import annotations

from pathlib import Path

import pyarrow.parquet as pq
import pytest

from dunescape.config.types import ConfigurationError, DuneFieldConfig, SweepConfig
from dunescape.experiments.sweep import _summarize_point, _validate_sweep_config, run_param_sweep
from dunescape.io.paths import sweep_point_dir, sweep_runs_path, sweep_summary_path
from dunescape.io.schemas import SWEEP_RUNS_SCHEMA, SWEEP_SUMMARY_SCHEMA


def _base(**overrides: object) -> DuneFieldConfig:
    defaults: dict[str, object] = {"grid_width": 8, "grid_height": 4, "cycles": 2}
    defaults.update(overrides)
    return DuneFieldConfig(**defaults)  # type: ignore[arg-type]


def test_valid_config_passes(tmp_path: Path) -> None:
    _validate_sweep_config(SweepConfig(base=_base(), out_dir=tmp_path))


def test_excessive_workload_raises(tmp_path: Path) -> None:
    config = SweepConfig(
        base=DuneFieldConfig(grid_width=1024, grid_height=1024, cycles=10_000),
        hop_lengths=(1, 2, 3),
        n_seeds=10,
        out_dir=tmp_path,
    )
    with pytest.raises(ConfigurationError, match="workload exceeds"):
        _validate_sweep_config(config)


def test_summarize_point_mean_and_std() -> None:
    rows = [
        {
            "point_id": "p",
            "hop_length": 1,
            "prob_deposit_bare": 0.4,
            "prob_deposit_sand": 0.6,
            "roughness": value,
            "shadow_fraction": 0.0,
            "max_height": 4,
        }
        for value in (1.0, 3.0)
    ]
    summary = _summarize_point(rows)
    assert summary["n_runs"] == 2
    assert summary["roughness_mean"] == pytest.approx(2.0)
    assert summary["roughness_std"] == pytest.approx(1.0)
    assert summary["max_height_std"] == 0.0


def test_run_param_sweep_covers_every_point_and_seed(tmp_path: Path) -> None:
    config = SweepConfig(
        base=_base(),
        hop_lengths=(1, 2),
        prob_deposit_sand_values=(0.5,),
        n_seeds=2,
        seed_start=3,
        out_dir=tmp_path,
    )
    results = run_param_sweep(config)
    assert len(results) == 4
    assert {r.seed for r in results} == {3, 4}
    assert results[0].run_id == "hop1_bare0.4_sand0.5_s3"

    runs = pq.read_table(sweep_runs_path(tmp_path))
    assert runs.schema.equals(SWEEP_RUNS_SCHEMA)
    assert runs.num_rows == 4
    summary = pq.read_table(sweep_summary_path(tmp_path))
    assert summary.schema.equals(SWEEP_SUMMARY_SCHEMA)
    assert summary.column("hop_length").to_pylist() == [1, 2]
    assert summary.column("n_runs").to_pylist() == [2, 2]


def test_run_param_sweep_writes_per_seed_run_dirs(tmp_path: Path) -> None:
    config = SweepConfig(base=_base(), n_seeds=1, out_dir=tmp_path)
    run_param_sweep(config)
    point_dir = sweep_point_dir(tmp_path, 1, 0.4, 0.6)
    assert (point_dir / "seed_0" / "runs" / "hop1_bare0.4_sand0.6_s0.json").exists()
