"""CLI entry point for the percolation simulation."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import platform
import time

import numpy as np
from percolation.clay import ClayParseError, clay_coordinates
from percolation.config import (
    DEFAULT_PNG_SCALE,
    DEFAULT_SOURCE_COLUMN,
    EngineConfig,
    RenderConfig,
    SimulationConfig,
    SourceConfig,
)
from percolation.engine import WORK_ORDERS, PercolationEngine
from percolation.ground import GroundMap
from percolation.io import read_clay_file, write_json, write_png_rgb, write_text
from percolation.metrics import count_water
from percolation.render import render_text, state_raster, state_rgb

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate water percolating through clay veins")
    parser.add_argument("input", help="Text file of clay ranges (e.g. 'x=495, y=2..7')")
    parser.add_argument(
        "--source-column",
        type=int,
        default=DEFAULT_SOURCE_COLUMN,
        help="Column of the water source on row 0",
    )
    parser.add_argument(
        "--order",
        choices=WORK_ORDERS,
        default="stack",
        help="Pour-point backlog discipline; queue is a diagnostic mode whose counts can differ from stack",
    )
    parser.add_argument("--text", help="Write a glyph rendering of the final ground to this path")
    parser.add_argument("--png", help="Write a colour rendering of the final ground to this path")
    parser.add_argument("--png-scale", type=int, default=DEFAULT_PNG_SCALE, help="Pixels per cell in --png output")
    parser.add_argument("--json", help="Write a run summary JSON to this path")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.png_scale < 1:
        parser.error("--png-scale must be >= 1")

    config = SimulationConfig(
        source=SourceConfig(column=args.source_column),
        engine=EngineConfig(order=args.order),
        render=RenderConfig(png_scale=args.png_scale),
    )

    try:
        runs = read_clay_file(args.input)
    except FileNotFoundError:
        parser.error(f"input file not found: {args.input}")
    except ClayParseError as exc:
        parser.error(str(exc))
    except UnicodeDecodeError:
        parser.error(f"input file is not UTF-8 text: {args.input}")
    except OSError as exc:
        parser.error(f"cannot read input file {args.input}: {exc.strerror or exc}")

    try:
        ground = GroundMap.from_clay(clay_coordinates(runs), source=config.source.coordinate)
    except ValueError as exc:
        parser.error(str(exc))

    logger.info(
        "Loaded %d clay runs (%d cells); rows %d..%d, columns %d..%d",
        len(runs),
        sum(run.length for run in runs),
        ground.bounds.min.row,
        ground.bounds.max.row,
        ground.bounds.min.column,
        ground.bounds.max.column,
    )

    simulation_start = time.perf_counter()
    stats = PercolationEngine(ground, order=config.engine.order).run()
    simulation_seconds = time.perf_counter() - simulation_start
    metrics = count_water(ground)
    logger.info("Simulation time: %.3f s", simulation_seconds)

    if args.text:
        write_text(args.text, render_text(ground, margin=config.render.margin))
    if args.png:
        raster = state_raster(ground, margin=config.render.margin)
        write_png_rgb(args.png, state_rgb(raster, config.render.palette), scale=config.render.png_scale)
    if args.json:
        write_json(
            args.json,
            {
                "input": str(Path(args.input)),
                "config": config.to_dict(),
                "bounds": {
                    "min_row": ground.bounds.min.row,
                    "max_row": ground.bounds.max.row,
                    "min_column": ground.bounds.min.column,
                    "max_column": ground.bounds.max.column,
                },
                "metrics": metrics.to_dict(),
                "engine": stats.to_dict(),
                "simulation_seconds": simulation_seconds,
                "python_version": platform.python_version(),
                "numpy_version": np.__version__,
            },
        )

    print(metrics.total)
    print(metrics.settled)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
