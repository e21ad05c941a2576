"""
Variance accumulators for sliding windows.

This module implements the Strategy pattern for the running aggregates a
StatWindow keeps. Every accumulator supports two O(1) updates, one for the
growing (warm-up) phase and one for the sliding phase where the oldest value
is ejected as the new value arrives.

Classes:
    VarianceAccumulator: Abstract base class for accumulators
    WelfordAccumulator: Welford's algorithm with an eviction-aware sliding update
    SumOfSquaresAccumulator: Running sum and sum of squares
    AccumulatorRegistry: Name and alias lookup for accumulator classes
"""

import math
import sys
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence, Type

from .exceptions import MethodNotFoundError

# rounding error allowed per sample when a sum of squares cancels to zero
RESIDUE_EPSILON = 2 * sys.float_info.epsilon


def exact_sum(values: Iterable[float]) -> float:
    """
    Correctly rounded sum of ``values``.

    Falls back to plain float addition when a partial sum overflows, giving
    the infinite result instead of raising.
    """
    values = list(values)
    try:
        return math.fsum(values)
    except OverflowError:
        return sum(values)


class VarianceAccumulator(ABC):
    """
    Abstract base class for running mean/variance aggregates.

    The window owns the sample buffer and the sample count; an accumulator
    only holds the O(1) aggregates describing the values currently in the
    window and is told the count on every call.
    """

    name: str = ""

    def __init__(self):
        self.reset()

    @abstractmethod
    def grow(self, value: float, count: int) -> None:
        """
        Add a value while the window is still filling up.

        Args:
            value (float): The new sample.
            count (int): Number of samples in the window including ``value``.
        """
        pass

    @abstractmethod
    def slide(self, value: float, evicted: float, count: int) -> None:
        """
        Replace the oldest sample with a new one in a full window.

        Args:
            value (float): The new sample.
            evicted (float): The sample leaving the window.
            count (int): Number of samples in the window (the capacity).
        """
        pass

    @abstractmethod
    def mean(self, count: int) -> float:
        """Mean of the ``count`` samples in the window."""
        pass

    @abstractmethod
    def spread(self, count: int) -> float:
        """Sum of squared deviations from the mean."""
        pass

    @abstractmethod
    def rebuild(self, values: Sequence[float]) -> None:
        """Recompute the aggregates exactly from the window contents."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset the aggregates to the empty window."""
        pass

    def is_finite(self, count: int) -> bool:
        """Whether both the mean and the spread are finite numbers."""
        return math.isfinite(self.mean(count)) and math.isfinite(self.spread(count))

    def variance(self, count: int, ddof: int = 0) -> float:
        """
        Variance of the window with ``count - ddof`` as the denominator.

        Cancellation can drive a true zero variance slightly negative, so the
        result is clamped at zero. NaN is passed through untouched.

        Returns:
            float: The variance, or 0.0 when ``count <= ddof``.
        """
        if count <= ddof:
            return 0.0

        variance = self.spread(count) / (count - ddof)
        if variance < 0.0:
            return 0.0
        return variance


class WelfordAccumulator(VarianceAccumulator):
    """
    Running mean and sum of squared deviations (M2).

    Growing phase, Welford's online algorithm:
        mean_n = mean_(n-1) + (x - mean_(n-1)) / n
        M2_n   = M2_(n-1) + (x - mean_(n-1)) * (x - mean_n)

    Sliding phase, replacing y with x in a window of n values:
        mean' = mean + (x - y) / n
        M2'   = M2 + (x - y) * (x + y - mean - mean')

    Avoids the catastrophic cancellation of ``sum_sq / n - mean^2`` for
    streams with a large magnitude and a small spread.
    """

    name = "welford"

    def grow(self, value: float, count: int) -> None:
        if count < 2:
            self._mean = value
            # NaN for a non-finite first sample
            self._m2 = value - value
            return

        delta = value - self._mean
        self._mean += delta / count
        self._m2 += delta * (value - self._mean)

    def slide(self, value: float, evicted: float, count: int) -> None:
        old_mean = self._mean
        self._mean = old_mean + (value - evicted) / count
        self._m2 += (value - evicted) * (value + evicted - old_mean - self._mean)

    def mean(self, count: int) -> float:
        return self._mean

    def spread(self, count: int) -> float:
        return self._m2

    def rebuild(self, values: Sequence[float]) -> None:
        if not values:
            self.reset()
            return

        self._mean = exact_sum(values) / len(values)
        deviations = [v - self._mean for v in values]
        self._m2 = exact_sum(d * d for d in deviations)

    def reset(self) -> None:
        self._mean = 0.0
        self._m2 = 0.0


class SumOfSquaresAccumulator(VarianceAccumulator):
    """
    Running sum and sum of squares.

    Mathematical Formula:
        mean     = sum / n
        variance = sum_sq / n - mean^2      (population)

    Cheapest update, but loses precision when the values are large compared
    to their spread.
    """

    name = "sum_of_squares"

    def grow(self, value: float, count: int) -> None:
        self._sum += value
        self._sum_sq += value * value

    def slide(self, value: float, evicted: float, count: int) -> None:
        self._sum = self._sum - evicted + value
        self._sum_sq = self._sum_sq - evicted * evicted + value * value

    def mean(self, count: int) -> float:
        return self._sum / count

    def spread(self, count: int) -> float:
        """
        ``sum_sq - sum^2 / n``, snapped to zero within the rounding error.

        Values that are not exact binary fractions leave a tiny positive
        residue when a constant window cancels, so anything below
        ``n * RESIDUE_EPSILON * sum_sq`` counts as zero.
        """
        spread = self._sum_sq - self._sum * self._sum / count
        tolerance = count * RESIDUE_EPSILON * self._sum_sq
        if math.isfinite(tolerance) and abs(spread) <= tolerance:
            return 0.0
        return spread

    def rebuild(self, values: Sequence[float]) -> None:
        self._sum = exact_sum(values)
        self._sum_sq = exact_sum(v * v for v in values)

    def reset(self) -> None:
        self._sum = 0.0
        self._sum_sq = 0.0


class AccumulatorRegistry:
    """Registry for variance accumulators with aliases."""

    def __init__(self):
        self._registry: Dict[str, Type[VarianceAccumulator]] = {}
        self._register_builtin_accumulators()

    def _register_builtin_accumulators(self) -> None:
        self.register('welford', WelfordAccumulator, aliases=['stable', 'sliding_welford'])
        self.register('sum_of_squares', SumOfSquaresAccumulator, aliases=['sumsq', 'naive'])

    def register(self, name: str, accumulator_class: Type[VarianceAccumulator],
                 aliases: Optional[Iterable[str]] = None) -> None:
        """Register accumulator class with aliases."""
        self._registry[name.lower()] = accumulator_class

        if aliases:
            for alias in aliases:
                self._registry[alias.lower()] = accumulator_class

    def get(self, name: str) -> Type[VarianceAccumulator]:
        """Get accumulator class by name or alias."""
        name_lower = name.lower()
        if name_lower not in self._registry:
            raise MethodNotFoundError(name, self.list_methods())

        return self._registry[name_lower]

    def list_methods(self) -> List[str]:
        """List canonical method names."""
        return sorted({cls.name for cls in self._registry.values()})

    def get_aliases(self, name: str) -> List[str]:
        """All names (canonical and aliases) resolving to the same class."""
        try:
            target_class = self.get(name)
        except MethodNotFoundError:
            return []
        return [key for key, cls in self._registry.items() if cls is target_class]


# Global registry instance
REGISTRY = AccumulatorRegistry()
