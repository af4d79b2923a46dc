#!/usr/bin/env python3
"""
Command line entry point: render a Sierpinski triangle to a PNG file.

    python -m sierpinski --size 1024 --quality 4000000 -d out/
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from tqdm import tqdm

from sierpinski.config import DEFAULT_ITERATIONS, RenderConfig
from sierpinski.core import ChaosGame
from sierpinski.errors import ChaosGameError
from sierpinski.logging_config import setup_logging
from sierpinski.utils import check_output_path, output_filename, save_canvas

# Progress bar refresh granularity, in iterations
PROGRESS_CHUNK = 10_000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sierpinski",
        description="Render a Sierpinski triangle with the chaos game.",
    )
    parser.add_argument("-s", "--size", type=int, help="Width and height of a square image")
    parser.add_argument("--width", type=int, help="Image width (overrides --size)")
    parser.add_argument("--height", type=int, help="Image height (overrides --size)")
    parser.add_argument("-q", "--quality", type=int, default=DEFAULT_ITERATIONS,
                        help="Number of points to plot (default: %(default)s)")
    parser.add_argument("-d", "--output-directory", default="./",
                        help="Directory the PNG is written to (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible output")
    parser.add_argument("--batch", action="store_true",
                        help="Use the jit-compiled batch kernel instead of the sequential engine")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    return parser


def _resolve_size(parser: argparse.ArgumentParser, args: argparse.Namespace):
    width = args.width if args.width is not None else args.size
    height = args.height if args.height is not None else args.size
    if width is None or height is None:
        parser.error("give --size, or both --width and --height")
    return width, height


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    width, height = _resolve_size(parser, args)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(level)

    path = os.path.join(args.output_directory, output_filename(width, height, args.quality))
    try:
        check_output_path(path)
        config = RenderConfig(width=width, height=height, iterations=args.quality, seed=args.seed)
        game = ChaosGame.from_config(config)
    except (FileNotFoundError, ChaosGameError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print("[1/3] 🌀  Generating fractal...")
    if args.batch:
        canvas = game.render_batch()
    else:
        with tqdm(total=config.iterations, unit="pt", unit_scale=True) as bar:
            def progress(done: int, total: int) -> None:
                if done % PROGRESS_CHUNK == 0 or done == total:
                    bar.update(done - bar.n)

            canvas = game.run(progress=progress)

    print("[2/3] 💾  Saving file...")
    save_canvas(canvas, path)
    print(f"[3/3] ✅  Saved to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
