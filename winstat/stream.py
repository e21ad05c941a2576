"""
Helpers driving a StatWindow over a whole series.

Functions:
    iter_stats: Lazily push values and yield the statistics after each one
    rolling_stats: Tabulate value/mean/stddev/count as a pandas DataFrame
    load_values: Read a numeric column from a CSV file
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Union

import numpy as np
import pandas as pd

from .window import InstantStat, StatWindow

logger = logging.getLogger(__name__)

STAT_COLUMNS = ['value', 'mean', 'stddev', 'count']


def iter_stats(values: Iterable[float], window: StatWindow) -> Iterator[InstantStat]:
    """Push each value into ``window`` and yield the resulting statistics."""
    for value in values:
        yield window.push(value)


def rolling_stats(values: Iterable[float], window_size: int, **options: Any) -> pd.DataFrame:
    """
    Compute sliding window statistics for a whole series.

    Args:
        values (Iterable[float]): Samples in arrival order. A pandas Series
            keeps its index in the result.
        window_size (int): Window size (>= 2).
        **options: Further StatWindow options (method, ddof, strict).

    Returns:
        pd.DataFrame: One row per sample with columns value, mean, stddev
            and count (number of samples in the window after the push).

    Raises:
        InvalidWindowSizeError: If window_size is invalid.
        InvalidDataError: If a sample is rejected.
    """
    window = StatWindow(window_size, **options)
    index = values.index if isinstance(values, pd.Series) else None

    rows: List[List[float]] = []
    for value in values:
        mean, stddev = window.push(value)
        rows.append([float(value), mean, stddev, window.count])

    frame = pd.DataFrame(rows, columns=STAT_COLUMNS, index=index)
    frame['count'] = frame['count'].astype(np.int64)

    logger.debug(f"Computed rolling stats for {len(frame)} values with {window!r}")
    return frame


def load_values(path: Union[str, Path], column: Optional[str] = None) -> pd.Series:
    """
    Read samples from a CSV file.

    Args:
        path: CSV file with a header row.
        column: Column to read. Defaults to the first numeric column.

    Returns:
        pd.Series: The samples as float64, in file order.

    Raises:
        KeyError: If the column does not exist.
        ValueError: If the file has no numeric column.
    """
    frame = pd.read_csv(path)

    if column is None:
        numeric = frame.select_dtypes(include=[np.number]).columns
        if len(numeric) == 0:
            raise ValueError(f"No numeric column in {path}")
        column = numeric[0]
    elif column not in frame.columns:
        raise KeyError(f"Column '{column}' not found in {path}. Columns: {list(frame.columns)}")

    series = frame[column].astype(np.float64)
    logger.debug(f"Loaded {len(series)} values from column '{column}' of {path}")
    return series
