"""
Application Entry Point
=======================
This module wires the generator, the session store and the exporters into a
command-line run.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Generates a batch (random or patterned) and loads it into a Store.
3. Applies the requested filters and projects onto the chosen plane.
4. Writes the requested exports (JSON, CSV, HDF5, PNG).

Usage:
    $ python -m pointexplorer --dims 4 --points 500 --filter 2:greater:0 --plot out.png
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from pointexplorer.app.state import Store
from pointexplorer.config import DEFAULT_COLOR_SCHEME
from pointexplorer.controller.generator import DataGenerator, GeneratorConfig, Pattern, PatternConfig
from pointexplorer.controller.projection import FilterCondition, WindowConfig
from pointexplorer.logging_config import setup_logging
from pointexplorer.model.errors import ValidationError
from pointexplorer.model.io import IOManager
from pointexplorer.model.values import ValueKind
from pointexplorer.view import colors
from pointexplorer.view.scatter import save_projection_plot

logger = logging.getLogger(__name__)


def parse_filter(text: str) -> tuple[int, dict]:
    """
    Parse 'DIM:CONDITION[:VALUE[:TOLERANCE]]', e.g. '2:greater:0' or '0:equal:5:0.5'.
    """
    parts = text.split(":")
    if len(parts) < 2 or len(parts) > 4:
        raise argparse.ArgumentTypeError(f"Invalid filter '{text}', expected DIM:CONDITION[:VALUE[:TOLERANCE]]")
    try:
        dim = int(parts[0])
        updates: dict = {"condition": FilterCondition(parts[1].lower())}
        if len(parts) > 2:
            updates["value"] = float(parts[2])
        if len(parts) > 3:
            updates["tolerance"] = float(parts[3])
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid filter '{text}': {e}") from None
    return dim, updates


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pointexplorer",
                                     description="Generate, filter and project N-dimensional points.")
    parser.add_argument("--dims", type=int, default=3)
    parser.add_argument("--points", type=int, default=100)
    parser.add_argument("--kind", choices=[k.value for k in ValueKind], default=ValueKind.SCALAR.value)
    parser.add_argument("--vector-size", dest="vector_size", type=int)
    parser.add_argument("--interval-ratio", dest="interval_ratio", type=float, default=0.1)
    parser.add_argument("--pattern", choices=[p.value for p in Pattern],
                        help="Generate a full regular grid instead of random points")
    parser.add_argument("--grid-size", dest="grid_size", type=int, default=5)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--x", type=int, default=0, help="Dimension shown on the x axis")
    parser.add_argument("--y", type=int, default=1, help="Dimension shown on the y axis")
    parser.add_argument("--filter", dest="filters", type=parse_filter, action="append", default=[])
    parser.add_argument("--window", type=float, nargs=2, metavar=("X_MIN", "X_MAX"))
    parser.add_argument("--scheme", default=DEFAULT_COLOR_SCHEME,
                        choices=[s.value for s in colors.available_schemes()])
    parser.add_argument("--json")
    parser.add_argument("--csv")
    parser.add_argument("--h5")
    parser.add_argument("--plot")
    parser.add_argument("--summary", action="store_true")
    parser.add_argument("--log-level", dest="log_level", type=str.upper, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-file", dest="log_file")
    return parser


def run(args: argparse.Namespace) -> int:
    generator = DataGenerator(seed=args.seed)
    if args.pattern:
        batch = generator.generate_patterned_data(PatternConfig(
            dimensions=args.dims,
            grid_size=args.grid_size,
            value_kind=ValueKind(args.kind),
            vector_size=args.vector_size,
            pattern=Pattern(args.pattern),
        ))
    else:
        batch = generator.generate_points(GeneratorConfig(
            dimensions=args.dims,
            point_count=args.points,
            value_kind=ValueKind(args.kind),
            vector_size=args.vector_size,
            interval_ratio=args.interval_ratio,
        ))

    store = Store()
    store.load(batch)
    for dim, updates in args.filters:
        store.update_filter(dim, **updates)

    window = WindowConfig(*args.window) if args.window else None
    projected = store.project(args.x, args.y, window)
    logger.info(f"{len(projected)} of {len(batch)} points visible on ({args.x}, {args.y}).")

    if args.summary:
        print(json.dumps(IOManager.generate_summary(batch), indent=2))
    if args.json:
        IOManager.write_text(IOManager.export_json(batch), args.json)
    if args.csv:
        IOManager.write_text(IOManager.export_csv(batch), args.csv)
    if args.h5:
        IOManager.save_batch(batch, args.h5)
    if args.plot:
        names = batch.axes.names
        point_colors = [store.engine.color_for(p.record, args.scheme) for p in projected]
        save_projection_plot(projected, point_colors, args.plot,
                             x_label=names[args.x], y_label=names[args.y],
                             title=f"{len(projected)} points")
        logger.info(f"Plot saved to: {args.plot}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)
    try:
        return run(args)
    except (ValidationError, KeyError) as e:
        logger.error(f"Invalid input: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
