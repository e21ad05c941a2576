"""Parameter validation for sliding windows."""

import numbers
from typing import Any, Type

from .accumulators import REGISTRY, VarianceAccumulator
from .exceptions import InvalidParameterError, InvalidWindowSizeError

MIN_WINDOW_SIZE = 2


def is_valid_window_size(window_size: Any) -> bool:
    """Check that ``window_size`` is an integer of at least two."""
    if isinstance(window_size, bool) or not isinstance(window_size, numbers.Integral):
        return False
    return window_size >= MIN_WINDOW_SIZE


def validate_window_size(window_size: Any) -> int:
    """
    Validate the window size parameter.

    A window of one sample has no spread to measure, so the minimum is two.

    Args:
        window_size (Any): The window size to validate

    Returns:
        int: Validated window size

    Raises:
        InvalidWindowSizeError: If window size is not an integer >= 2
    """
    if not is_valid_window_size(window_size):
        raise InvalidWindowSizeError(window_size)

    return int(window_size)


def validate_ddof(ddof: Any, window_size: int) -> int:
    """
    Validate the delta degrees of freedom.

    Args:
        ddof (Any): The ddof value to validate
        window_size (int): Capacity of the window the ddof applies to

    Returns:
        int: Validated ddof

    Raises:
        InvalidParameterError: If ddof is not an integer in [0, window_size)
    """
    if isinstance(ddof, bool) or not isinstance(ddof, numbers.Integral):
        raise InvalidParameterError("ddof", ddof, "non-negative integer")

    if not 0 <= ddof < window_size:
        raise InvalidParameterError("ddof", ddof, f"integer in [0, {window_size})")

    return int(ddof)


def validate_method(method: Any) -> Type[VarianceAccumulator]:
    """
    Resolve a variance method name to its accumulator class.

    Raises:
        InvalidParameterError: If method is not a string
        MethodNotFoundError: If no accumulator is registered under that name
    """
    if not isinstance(method, str):
        raise InvalidParameterError("method", method, "string")

    return REGISTRY.get(method)
