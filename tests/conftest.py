"""Shared fixtures for winstat tests."""

import math
import sys
from pathlib import Path
from typing import List, Sequence, Tuple

import pytest

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from winstat import StatWindow  # noqa: E402

# Tolerance used wherever results are not expected to be bit-exact
TOLERANCE = 1e-9

METHODS = ['welford', 'sum_of_squares']


def exact_stat(values: Sequence[float], ddof: int = 0) -> Tuple[float, float]:
    """Direct two-pass mean and standard deviation."""
    n = len(values)
    mean = math.fsum(values) / n
    if n <= ddof:
        return mean, 0.0
    variance = math.fsum((v - mean) ** 2 for v in values) / (n - ddof)
    return mean, math.sqrt(variance)


@pytest.fixture
def project_root_path() -> Path:
    return project_root


@pytest.fixture(params=METHODS)
def method(request) -> str:
    """Run a test once per variance method."""
    return request.param


@pytest.fixture
def window5(method) -> StatWindow:
    return StatWindow(5, method=method)


@pytest.fixture
def mixed_values() -> List[float]:
    return [1.0, 2.0, 4.0, 4.0, 7.2, 12.5, 2.8, 3.1, 65.3, 98.01]
