"""
Command-line driver for sliding window statistics.

Reads samples from the command line or a CSV column, pushes them one by one
and prints the window statistics after each push.

    winstat -w 5 1 2 3 4 5 6 7 8
    winstat --config config.yml --csv latencies.csv --column ms
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from .accumulators import REGISTRY
from .config import ConfigLoader, WindowSettings, setup_logging
from .exceptions import InvalidDataError, WindowError
from .stream import load_values

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='winstat',
        description='Running mean and standard deviation over a sliding window.'
    )
    parser.add_argument('values', nargs='*', type=float, help='Samples to push, in order')
    parser.add_argument('-w', '--window', type=int, help='Window size (>= 2)')
    parser.add_argument('-m', '--method', help=f"Variance method: {', '.join(REGISTRY.list_methods())}")
    parser.add_argument('--ddof', type=int, help='Delta degrees of freedom (0 = population)')
    parser.add_argument('--strict', action=argparse.BooleanOptionalAction, default=None,
                        help='Reject NaN and infinite samples (--no-strict accepts them)')
    parser.add_argument('--config', help='YAML file with window and logging sections')
    parser.add_argument('--csv', help='Read samples from this CSV file')
    parser.add_argument('--column', help='CSV column to read (default: first numeric)')
    return parser


def resolve_settings(args: argparse.Namespace) -> WindowSettings:
    """Merge config file settings with command-line overrides."""
    settings = WindowSettings()

    if args.config:
        config_loader = ConfigLoader(args.config)
        log_config = config_loader.logging_config()
        if log_config:
            setup_logging(log_config)
        settings = config_loader.window_settings()

    if args.window is not None:
        settings.size = args.window
    if args.method is not None:
        settings.method = args.method
    if args.ddof is not None:
        settings.ddof = args.ddof
    if args.strict is not None:
        settings.strict = args.strict
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = resolve_settings(args)
        window = settings.build()
    except (WindowError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    values = list(args.values)
    if args.csv:
        try:
            values.extend(load_values(args.csv, args.column).tolist())
        except (OSError, KeyError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_USAGE

    logger.info(f"Streaming {len(values)} values through {window!r}")

    for value in values:
        try:
            mean, stddev = window.push(value)
        except InvalidDataError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_REJECTED
        print(f"add {value}, window stats => mean: {mean}, standard deviation: {stddev}")

    return EXIT_OK
