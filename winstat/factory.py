"""Factory for creating sliding windows."""

import inspect
from typing import Any, Dict, List

from .accumulators import REGISTRY
from .exceptions import InvalidParameterError
from .validation import validate_method
from .window import StatWindow


def create(window_size: int, method: str = 'welford', **kwargs) -> StatWindow:
    """
    Factory function to create a sliding window by variance method name.

    Unlike ``StatWindow.new`` this raises on every invalid parameter,
    including the window size.

    Args:
        window_size (int): Number of most recent samples in the window (>= 2).
        method (str): Name or alias of the variance method (case-insensitive).
            Available methods can be listed using list_methods().
        **kwargs: Further StatWindow options:
            - ddof (int): Delta degrees of freedom, 0 for population stddev
            - strict (bool): Reject non-finite samples

    Returns:
        StatWindow: Empty window ready for use

    Raises:
        InvalidWindowSizeError: If window_size is not an integer >= 2
        MethodNotFoundError: If the method name is not recognized
        InvalidParameterError: If other options are invalid or unknown

    Examples:
        >>> import winstat
        >>> sw = winstat.create(20)
        >>> naive = winstat.create(20, method='sumsq')
        >>> sample = winstat.create(20, method='STABLE', ddof=1, strict=True)
    """
    try:
        return StatWindow(window_size, method=method, **kwargs)
    except TypeError as e:
        sig = inspect.signature(StatWindow.__init__)
        params = list(sig.parameters.keys())[1:]  # Skip 'self'

        raise InvalidParameterError(
            parameter_name="options",
            value=str(kwargs),
            expected=f"valid StatWindow parameters: {params}",
            component="create"
        ) from e


def list_methods() -> List[str]:
    """
    Get a list of all available variance method names.

    Example:
        >>> import winstat
        >>> winstat.list_methods()
        ['sum_of_squares', 'welford']
    """
    return REGISTRY.list_methods()


def describe(method: str) -> Dict[str, Any]:
    """
    Get information about a variance method.

    Args:
        method (str): Name or alias of the method (case-insensitive)

    Returns:
        Dict[str, Any]: Dictionary containing:
            - name: Canonical method name
            - class: Accumulator class name
            - aliases: All names resolving to this method
            - docstring: Accumulator documentation

    Raises:
        MethodNotFoundError: If the method name is not recognized
    """
    accumulator_class = validate_method(method)

    return {
        'name': accumulator_class.name,
        'class': accumulator_class.__name__,
        'aliases': REGISTRY.get_aliases(method),
        'docstring': inspect.getdoc(accumulator_class),
    }
