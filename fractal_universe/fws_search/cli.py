"""
Command-line entry point for the fractal word search.

Usage:
    fractal-word-search                         # N=10, A=5, B=6, C=7
    fractal-word-search --n 12 --auto-periods --max-depth 50
    fractal-word-search --config run.json --receipt-dir receipts --quiet
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fws_core.config import ConfigurationError, FractalConfig, load_config

from .bounds import choose_periods, predicted_word_depth
from .search import run_search
from .sink import PrintSink, ResultsSink
from .utils import build_receipt, depth_histogram, save_receipt, setup_logger

EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Minimal first-occurrence depths of 2×2 patterns and 3-words in a fractal tiling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fractal-word-search
  fractal-word-search --n 12 --auto-periods --max-depth 100
  fractal-word-search --config run.json --receipt-dir receipts --quiet
        """,
    )
    defaults = FractalConfig.default()
    parser.add_argument("--n", type=int, default=defaults.n, help="Alphabet size N (default: 10)")
    parser.add_argument("--a", type=int, default=defaults.a, help="Top-left period A (default: 5)")
    parser.add_argument("--b", type=int, default=defaults.b, help="Top-right period B (default: 6)")
    parser.add_argument("--c", type=int, default=defaults.c, help="Bottom-left period C (default: 7)")
    parser.add_argument(
        "--auto-periods",
        action="store_true",
        help="Choose A, B, C from N to maximise lcm(A, B, C)",
    )
    parser.add_argument("--config", type=Path, help="JSON file with n, a, b, c (overrides --n/--a/--b/--c)")
    parser.add_argument("--max-depth", type=int, help="Do not expand patterns at this depth or deeper")
    parser.add_argument("--max-steps", type=int, help="Maximum number of expansions")
    parser.add_argument("--receipt-dir", type=Path, help="Write a JSON receipt into this directory")
    parser.add_argument("--log-file", type=Path, help="Also write the log to this file")
    parser.add_argument("--quiet", action="store_true", help="Suppress the discovery report on stdout")
    parser.add_argument("--trace", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> FractalConfig:
    """
    Resolve the run configuration from parsed arguments.

    Raises:
        ConfigurationError: On invalid constants
        FileNotFoundError: If --config points nowhere
    """
    if args.config is not None:
        base = load_config(args.config)
        n, a, b, c = base.n, base.a, base.b, base.c
        max_depth = args.max_depth if args.max_depth is not None else base.max_depth
        max_steps = args.max_steps if args.max_steps is not None else base.max_steps
    else:
        n, a, b, c = args.n, args.a, args.b, args.c
        max_depth, max_steps = args.max_depth, args.max_steps

    if args.auto_periods:
        a, b, c = choose_periods(n)

    return FractalConfig(n=n, a=a, b=b, c=c, max_depth=max_depth, max_steps=max_steps).validate()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.trace else logging.INFO
    # Named after the package so module loggers (fws_search.search) propagate here
    logger = setup_logger("fws_search", args.log_file, level=level)

    try:
        config = config_from_args(args)
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    sink = ResultsSink() if args.quiet else PrintSink(sys.stdout)
    state, receipt = run_search(config, sink)

    logger.info(
        f"Latest word at depth {receipt.max_word_depth} "
        f"(construction predicts {predicted_word_depth(config)})"
    )

    if args.receipt_dir is not None:
        receipt_dict = build_receipt(
            config,
            receipt,
            pattern_histogram=depth_histogram(state.pattern_depths),
            word_histogram=depth_histogram(state.word_depths),
        )
        path = save_receipt(receipt_dict, args.receipt_dir)
        logger.info(f"Receipt saved to: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
