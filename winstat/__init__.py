"""
winstat: second-order statistics online in a sliding window.

Efficiently produces the instant mean and standard deviation of the most
recent N samples of a stream, in O(1) time per new sample.

This library provides:
- StatWindow, a fixed-size ring buffer with running aggregates
- Numerically stable Welford updates (default) or plain sum of squares
- Population or sample standard deviation (ddof)
- Optional strict mode rejecting NaN and infinite samples
- pandas helpers and a small command-line driver

Example Usage:
    import winstat

    # static window for 5 elements; None for sizes below 2
    sw = winstat.StatWindow.new(5)
    if sw is None:
        print("bad window size")

    for v in [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]:
        mean, stddev = sw.push(v)
        print(f"add {v}, window stats => mean: {mean}, standard deviation: {stddev}")

    # Factory with named variance methods
    naive = winstat.create(5, method='sum_of_squares')
    methods = winstat.list_methods()
"""

__version__ = "1.0.0"

from .accumulators import (
    VarianceAccumulator,
    WelfordAccumulator,
    SumOfSquaresAccumulator,
)
from .exceptions import (
    WindowError,
    InvalidParameterError,
    InvalidWindowSizeError,
    InvalidDataError,
    MethodNotFoundError,
)
from .factory import create, list_methods, describe
from .validation import (
    MIN_WINDOW_SIZE,
    is_valid_window_size,
    validate_window_size,
    validate_ddof,
    validate_method,
)
from .window import InstantStat, StatWindow, WindowState

__all__ = [
    # Core classes
    "StatWindow",
    "InstantStat",
    "WindowState",

    # Factory functions
    "create",
    "list_methods",
    "describe",

    # Variance accumulators
    "VarianceAccumulator",
    "WelfordAccumulator",
    "SumOfSquaresAccumulator",

    # Validation utilities
    "MIN_WINDOW_SIZE",
    "is_valid_window_size",
    "validate_window_size",
    "validate_ddof",
    "validate_method",

    # Exceptions
    "WindowError",
    "InvalidParameterError",
    "InvalidWindowSizeError",
    "InvalidDataError",
    "MethodNotFoundError",

    "__version__",
]
