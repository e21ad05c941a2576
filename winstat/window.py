"""
Sliding window statistics.

StatWindow keeps the most recent ``window_size`` samples in a preallocated
ring buffer together with O(1) running aggregates, so every push returns the
instant mean and standard deviation of the window without rescanning it.

Under the hood the window operates in two phases:
    1. Warming: the buffer is not yet full and grows with every push.
    2. Full: every push overwrites the oldest sample, whose contribution is
       removed from the aggregates.
"""

import logging
import math
from enum import Enum
from typing import Any, Iterable, List, NamedTuple, Optional

from .accumulators import VarianceAccumulator
from .exceptions import InvalidDataError
from .validation import (
    is_valid_window_size,
    validate_ddof,
    validate_method,
    validate_window_size,
)

logger = logging.getLogger(__name__)


class InstantStat(NamedTuple):
    """Window statistics right after a push."""

    mean: float
    stddev: float


class WindowState(Enum):
    WARMING = "warming"
    FULL = "full"


class StatWindow:
    """
    Fixed-size sliding window producing running mean and standard deviation.

    Adding a value is O(1) in time and the memory used is proportional to the
    window size, with no allocation after construction.

    Non-finite samples (NaN, +/-inf) are accepted by default and propagate into
    the statistics for as long as they stay in the window. Once the last one
    is evicted the aggregates are rebuilt from the buffer. A strict window
    rejects them instead. Finite samples whose squares overflow are handled
    the same way: the aggregates are rebuilt after every slide that leaves
    them non-finite.

    Example:
        >>> sw = StatWindow.new(5)
        >>> if sw is None:
        ...     print("bad window size")
        >>> for v in [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]:
        ...     mean, stddev = sw.push(v)
        >>> round(mean, 6), round(stddev, 6)
        (4.0, 1.414214)
    """

    def __init__(self, window_size: int, method: str = 'welford', ddof: int = 0, strict: bool = False):
        """
        Initialize an empty window.

        Args:
            window_size (int): Number of most recent samples in the window.
                Must be an integer >= 2.
            method (str): Variance method, see ``winstat.list_methods()``.
                Defaults to 'welford'.
            ddof (int): Delta degrees of freedom. 0 (default) gives the
                population standard deviation, 1 the sample one.
            strict (bool): Reject NaN and infinite samples with
                InvalidDataError instead of propagating them.

        Raises:
            InvalidWindowSizeError: If window_size is not an integer >= 2.
            InvalidParameterError: If ddof or method has the wrong type/range.
            MethodNotFoundError: If the method name is unknown.
        """
        self._capacity = validate_window_size(window_size)
        self._ddof = validate_ddof(ddof, self._capacity)
        accumulator_class = validate_method(method)

        self._strict = bool(strict)
        self._accumulator: VarianceAccumulator = accumulator_class()

        self._buffer: List[float] = [0.0] * self._capacity
        self._cursor = 0
        self._count = 0
        self._pushes = 0
        self._nonfinite = 0
        self._last: Optional[InstantStat] = None

        logger.debug(
            f"Initialized StatWindow with window_size={self._capacity}, "
            f"method={self.method}, ddof={self._ddof}, strict={self._strict}"
        )

    @classmethod
    def new(cls, window_size: int, **options: Any) -> Optional["StatWindow"]:
        """
        Create a window, or return None when the window size is invalid.

        Only the window size is checked this way; invalid ``options`` still
        raise.
        """
        if not is_valid_window_size(window_size):
            logger.debug(f"Rejected window size {window_size!r}")
            return None
        return cls(window_size, **options)

    def push(self, value: float) -> InstantStat:
        """
        Add a new value and return the instant statistics of the window.

        Args:
            value (float): The new sample. Anything convertible to float.

        Returns:
            InstantStat: ``(mean, stddev)`` of the ``count`` most recent samples.

        Raises:
            InvalidDataError: If the value is not numeric, or is non-finite
                on a strict window. The window is left unchanged.
        """
        value = self._coerce(value)
        if not math.isfinite(value):
            self._nonfinite += 1

        stale = False
        if self._count < self._capacity:
            self._buffer[self._cursor] = value
            self._count += 1
            self._accumulator.grow(value, self._count)
        else:
            evicted = self._buffer[self._cursor]
            self._buffer[self._cursor] = value
            if not math.isfinite(evicted):
                self._nonfinite -= 1
                # last non-finite sample just left the window
                stale = self._nonfinite == 0
            if not stale:
                self._accumulator.slide(value, evicted, self._count)
                # finite samples large enough to overflow the aggregates
                stale = self._nonfinite == 0 and not self._accumulator.is_finite(self._count)

        self._cursor = (self._cursor + 1) % self._capacity
        self._pushes += 1

        if stale:
            self.rebuild()

        self._last = InstantStat(self.mean, self.stddev)
        return self._last

    def extend(self, values: Iterable[float]) -> Optional[InstantStat]:
        """Push every value in order; return the statistics after the last one."""
        stat = None
        for value in values:
            stat = self.push(value)
        return stat

    def rebuild(self) -> None:
        """
        Recompute the aggregates exactly from the buffer contents.

        Discards the floating-point drift accumulated over a long stream.
        O(window_size). Does nothing while a non-finite value is in the
        window.
        """
        if self._nonfinite:
            logger.debug("Skipped rebuild: window holds non-finite values")
            return

        self._accumulator.rebuild(self.values())
        logger.debug(f"Rebuilt {self.method} aggregates over {self._count} values")

    def reset(self) -> None:
        """Return to the post-construction state, keeping size and options."""
        self._buffer = [0.0] * self._capacity
        self._cursor = 0
        self._count = 0
        self._pushes = 0
        self._nonfinite = 0
        self._last = None
        self._accumulator.reset()

        logger.debug("Reset StatWindow state")

    def values(self) -> List[float]:
        """Samples currently in the window, oldest first."""
        if self._count < self._capacity:
            return self._buffer[:self._count]
        return self._buffer[self._cursor:] + self._buffer[:self._cursor]

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return self._count

    @property
    def pushes(self) -> int:
        """Total number of values pushed since construction or reset."""
        return self._pushes

    @property
    def method(self) -> str:
        return self._accumulator.name

    @property
    def ddof(self) -> int:
        return self._ddof

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def state(self) -> WindowState:
        if self._count < self._capacity:
            return WindowState.WARMING
        return WindowState.FULL

    @property
    def is_full(self) -> bool:
        return self._count == self._capacity

    @property
    def stat(self) -> Optional[InstantStat]:
        """Statistics returned by the last push, None before the first one."""
        return self._last

    @property
    def mean(self) -> float:
        """Mean of the window, NaN when empty."""
        if self._count == 0:
            return math.nan
        return self._accumulator.mean(self._count)

    @property
    def variance(self) -> float:
        """Variance of the window (denominator ``count - ddof``), NaN when empty."""
        if self._count == 0:
            return math.nan
        return self._accumulator.variance(self._count, self._ddof)

    @property
    def stddev(self) -> float:
        """Standard deviation of the window, NaN when empty."""
        return math.sqrt(self.variance)

    def _coerce(self, value: Any) -> float:
        if isinstance(value, (str, bytes)):
            raise InvalidDataError(value, "value is not numeric", "StatWindow")
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidDataError(value, "value is not numeric", "StatWindow") from e

        if not math.isfinite(value):
            if self._strict:
                raise InvalidDataError(value, "value is not finite", "StatWindow")
            logger.debug(f"Accepted non-finite value {value}")
        return value

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        status = "full" if self.is_full else f"warming up ({self._count}/{self._capacity})"
        return f"StatWindow(window_size={self._capacity}, method='{self.method}', {status})"
