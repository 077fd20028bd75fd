from __future__ import annotations

import argparse
import logging
from pathlib import Path

import matplotlib

from dunescape.io.paths import resolve_within_base
from dunescape.io.schemas import CYCLE_METRIC_NAMES
from dunescape.viz.render import (
    COLORMAPS,
    render_filmstrip,
    render_frame_png,
    render_metric_timeseries,
)
from dunescape.viz.theme import Theme, get_theme

logger = logging.getLogger(__name__)


def _build_png_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("png", help="Export one recorded height frame as a PNG")
    p.set_defaults(func=_handle_png)
    p.add_argument("--frames", type=Path, required=True)
    p.add_argument("--run-id", type=str, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--cycle", type=int, default=None, help="Defaults to the last frame")
    p.add_argument("--colormap", type=str, choices=COLORMAPS, default="grayscale")


def _build_filmstrip_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("filmstrip", help="Render filmstrip of recorded frames")
    p.set_defaults(func=_handle_filmstrip)
    p.add_argument("--frames", type=Path, required=True)
    p.add_argument("--run-id", type=str, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--n-frames", type=int, default=6)
    p.add_argument("--show-shadow", action=argparse.BooleanOptionalAction, default=False)


def _build_timeseries_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("timeseries", help="Plot per-cycle metric trajectories")
    p.set_defaults(func=_handle_timeseries)
    p.add_argument("--metrics", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument(
        "--metric",
        action="append",
        choices=CYCLE_METRIC_NAMES,
        default=None,
        help="Metric name (can repeat); defaults to roughness and shadow_fraction",
    )
    p.add_argument("--run-id", action="append", default=None)


def _handle_png(args: argparse.Namespace, base_dir: Path, theme: Theme) -> None:
    output = render_frame_png(
        frames_path=resolve_within_base(args.frames, base_dir),
        run_id=args.run_id,
        output_path=resolve_within_base(args.output, base_dir),
        cycle=args.cycle,
        colormap=args.colormap,
    )
    logger.info("Wrote %s", output)


def _handle_filmstrip(args: argparse.Namespace, base_dir: Path, theme: Theme) -> None:
    render_filmstrip(
        frames_path=resolve_within_base(args.frames, base_dir),
        run_id=args.run_id,
        output_path=resolve_within_base(args.output, base_dir),
        n_frames=args.n_frames,
        show_shadow=args.show_shadow,
        theme=theme,
    )


def _handle_timeseries(args: argparse.Namespace, base_dir: Path, theme: Theme) -> None:
    render_metric_timeseries(
        metrics_path=resolve_within_base(args.metrics, base_dir),
        metric_names=args.metric or ["roughness", "shadow_fraction"],
        output_path=resolve_within_base(args.output, base_dir),
        run_ids=args.run_id,
        theme=theme,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(description="Visualization tools for dune-field runs")
    parser.add_argument(
        "--theme",
        type=str,
        default="default",
        help="Theme preset name (default, paper)",
    )
    parser.add_argument("--base-dir", type=Path, default=Path("."))
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _build_png_parser(sub)
    _build_filmstrip_parser(sub)
    _build_timeseries_parser(sub)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    matplotlib.use("Agg")
    theme = get_theme(args.theme)
    args.func(args, Path(args.base_dir).resolve(), theme)


if __name__ == "__main__":
    main()
