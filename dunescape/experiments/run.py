"""CLI entrypoint for single runs and parameter sweeps.

This module owns argument parsing and mode dispatch. Domain logic lives in:

- ``dunescape.config``              – configuration dataclasses
- ``dunescape.simulation.engine``   – ``run_simulation`` driver
- ``dunescape.experiments.sweep``   – parameter sweep orchestration
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dunescape.config import constants
from dunescape.config.types import DuneFieldConfig, SweepConfig, snap_dimension
from dunescape.experiments.sweep import run_param_sweep
from dunescape.simulation.engine import run_simulation

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _coerce_optional_int(raw: object, key: str) -> int | None:
    """Coerce to int, mapping None / "none" / "off" to ``None`` (disabled).

    Other values pass through unchanged so the config layer can reject them.
    """
    if raw is None:
        return None
    if isinstance(raw, str) and raw.strip().lower() in {"none", "off", ""}:
        return None
    return _coerce_int(raw, key)


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _parse_int_csv(raw_values: str, label: str) -> tuple[int, ...]:
    parts = [part.strip() for part in raw_values.split(",") if part.strip()]
    try:
        return tuple(int(part) for part in parts)
    except ValueError as exc:
        raise ValueError(f"{label} must contain integers") from exc


def _parse_float_csv(raw_values: str, label: str) -> tuple[float, ...]:
    parts = [part.strip() for part in raw_values.split(",") if part.strip()]
    try:
        return tuple(float(part) for part in parts)
    except ValueError as exc:
        raise ValueError(f"{label} must contain numbers") from exc


def _load_config_file(parser: argparse.ArgumentParser, path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    try:
        loaded = json.loads(Path(path).read_text())
    except FileNotFoundError:
        parser.error(f"Config file not found: {path}")
    except json.JSONDecodeError as exc:
        parser.error(f"Config file is not valid JSON: {path}: {exc}")
    if not isinstance(loaded, dict):
        parser.error(f"Config file must contain a JSON object: {path}")
    return loaded


def _resolve_field_config(
    args: argparse.Namespace, file_cfg: dict[str, object]
) -> DuneFieldConfig:
    """Build a DuneFieldConfig with CLI > config file > built-in defaults."""
    width = _coerce_int(
        _get_val(args.width, "grid_width", file_cfg, constants.GRID_WIDTH), "grid_width"
    )
    height = _coerce_int(
        _get_val(args.height, "grid_height", file_cfg, constants.GRID_HEIGHT), "grid_height"
    )
    if args.snap_to_tile:
        width, height = snap_dimension(width), snap_dimension(height)
    return DuneFieldConfig(
        grid_width=width,
        grid_height=height,
        initial_height=_coerce_int(
            _get_val(args.initial_height, "initial_height", file_cfg, constants.INITIAL_HEIGHT),
            "initial_height",
        ),
        seed=_coerce_int(_get_val(args.seed, "seed", file_cfg, constants.SEED), "seed"),
        cycles=_coerce_int(
            _get_val(args.cycles, "cycles", file_cfg, constants.NUM_CYCLES), "cycles"
        ),
        snapshot_interval=_coerce_int(
            _get_val(
                args.snapshot_interval,
                "snapshot_interval",
                file_cfg,
                constants.SNAPSHOT_INTERVAL,
            ),
            "snapshot_interval",
        ),
        shadow_slope=_coerce_float(
            _get_val(args.shadow_slope, "shadow_slope", file_cfg, constants.SHADOW_SLOPE),
            "shadow_slope",
        ),
        hop_length=_coerce_int(
            _get_val(args.hop_length, "hop_length", file_cfg, constants.HOP_LENGTH),
            "hop_length",
        ),
        prob_deposit_bare=_coerce_float(
            _get_val(
                args.prob_deposit_bare, "prob_deposit_bare", file_cfg, constants.PROB_DEPOSIT_BARE
            ),
            "prob_deposit_bare",
        ),
        prob_deposit_sand=_coerce_float(
            _get_val(
                args.prob_deposit_sand, "prob_deposit_sand", file_cfg, constants.PROB_DEPOSIT_SAND
            ),
            "prob_deposit_sand",
        ),
        max_hops=_coerce_optional_int(
            _get_val(args.max_hops, "max_hops", file_cfg, constants.MAX_HOPS_PER_SLAB),
            "max_hops",
        ),
    )


# ---------------------------------------------------------------------------
# Parser construction
# ---------------------------------------------------------------------------


def _add_field_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    p.add_argument("--width", type=int, default=None)
    p.add_argument("--height", type=int, default=None)
    p.add_argument(
        "--snap-to-tile",
        action=argparse.BooleanOptionalAction,
        default=False,
        help=f"Round width/height down to a multiple of {constants.TILE_SIZE}",
    )
    p.add_argument("--initial-height", type=int, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cycles", type=int, default=None)
    p.add_argument(
        "--snapshot-interval",
        type=int,
        default=None,
        help="Record a height frame every N cycles",
    )
    p.add_argument("--shadow-slope", type=float, default=None)
    p.add_argument("--hop-length", type=int, default=None)
    p.add_argument("--prob-deposit-bare", type=float, default=None)
    p.add_argument("--prob-deposit-sand", type=float, default=None)
    p.add_argument(
        "--max-hops",
        type=str,
        default=None,
        help="Hop cap per eroded slab; 'none' disables the cap",
    )
    p.add_argument("--out-dir", type=Path, default=None)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Aeolian dune-field simulation")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_parser = sub.add_parser("run", help="Run a single simulation")
    run_parser.set_defaults(func=_handle_run)
    _add_field_arguments(run_parser)
    run_parser.add_argument("--run-id", type=str, default=None)

    sweep_parser = sub.add_parser("sweep", help="Sweep transport parameters over seeds")
    sweep_parser.set_defaults(func=_handle_sweep)
    _add_field_arguments(sweep_parser)
    sweep_parser.add_argument("--hop-lengths", type=str, default="")
    sweep_parser.add_argument("--prob-deposit-bare-values", type=str, default="")
    sweep_parser.add_argument("--prob-deposit-sand-values", type=str, default="")
    sweep_parser.add_argument("--n-seeds", type=int, default=1)
    sweep_parser.add_argument("--seed-start", type=int, default=0)
    return parser


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_run(args: argparse.Namespace, file_cfg: dict[str, object]) -> None:
    config = _resolve_field_config(args, file_cfg)
    out_dir = Path(str(_get_val(args.out_dir, "out_dir", file_cfg, "data/run")))
    result = run_simulation(config, out_dir=out_dir, run_id=args.run_id)
    print(json.dumps({"out_dir": str(out_dir), "run_id": result.run_id}, ensure_ascii=False))


def _handle_sweep(args: argparse.Namespace, file_cfg: dict[str, object]) -> None:
    base = _resolve_field_config(args, file_cfg)
    out_dir = Path(str(_get_val(args.out_dir, "out_dir", file_cfg, "data/sweep")))
    sweep_config = SweepConfig(
        base=base,
        hop_lengths=_parse_int_csv(args.hop_lengths, "hop-lengths"),
        prob_deposit_bare_values=_parse_float_csv(
            args.prob_deposit_bare_values, "prob-deposit-bare-values"
        ),
        prob_deposit_sand_values=_parse_float_csv(
            args.prob_deposit_sand_values, "prob-deposit-sand-values"
        ),
        n_seeds=args.n_seeds,
        seed_start=args.seed_start,
        out_dir=out_dir,
    )
    results = run_param_sweep(sweep_config)
    print(
        json.dumps(
            {"out_dir": str(out_dir), "points": sweep_config.n_points(), "runs": len(results)},
            ensure_ascii=False,
        )
    )


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    file_cfg = _load_config_file(parser, args.config)
    try:
        args.func(args, file_cfg)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
