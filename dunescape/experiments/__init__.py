"""Experiment orchestration: parameter sweeps and the run CLI."""

from dunescape.experiments.sweep import run_param_sweep

__all__ = ["run_param_sweep"]
