"""
Statistics module for summarising repeated measurements.

Page-load metrics are noisy: a single run can be skewed by a GC pause or a
slow DNS lookup. Every summary is therefore computed on a sample set from
which outliers were trimmed with the interquartile-range rule.
"""

import math
import statistics
from typing import List, Sequence, Tuple

import numpy as np

from models.measurement import StatisticalSummary

# Minimum number of samples before IQR trimming is attempted
MIN_SAMPLES_FOR_TRIMMING = 4

DEFAULT_IQR_FACTOR = 1.5


def median(values: Sequence[float]) -> float:
    """
    Median of a sample set.

    Args:
        values: Numeric samples (need not be sorted)

    Returns:
        Middle value of the sorted samples, or the mean of the two middle
        values for an even count

    Raises:
        ValueError: if values is empty
    """
    if not values:
        raise ValueError("median() requires at least one value")
    return float(statistics.median(values))


def population_stddev(values: Sequence[float]) -> float:
    """Population standard deviation (divisor N); 0.0 for fewer than 2 values."""
    if len(values) < 2:
        return 0.0
    return float(statistics.pstdev(values))


def iqr_bounds(values: Sequence[float], factor: float = DEFAULT_IQR_FACTOR) -> Tuple[float, float]:
    """
    Compute the lower and upper outlier fences.

    Quartiles use linear interpolation between closest ranks (numpy default).

    Returns:
        (Q1 - factor * IQR, Q3 + factor * IQR)
    """
    q1, q3 = np.percentile(np.asarray(values, dtype=float), [25, 75])
    iqr = q3 - q1
    return float(q1 - factor * iqr), float(q3 + factor * iqr)


def remove_outliers_iqr(
    values: Sequence[float], factor: float = DEFAULT_IQR_FACTOR
) -> List[float]:
    """
    Drop samples outside the IQR fences.

    Sets smaller than MIN_SAMPLES_FOR_TRIMMING are returned unchanged, since
    quartiles of two or three points are meaningless. Kept values retain
    their input order.

    Raises:
        ValueError: if any value is NaN or infinite
    """
    values = [float(v) for v in values]
    if not all(math.isfinite(v) for v in values):
        raise ValueError("Cannot trim a sample set containing NaN or infinite values")
    if len(values) < MIN_SAMPLES_FOR_TRIMMING:
        return values

    lower, upper = iqr_bounds(values, factor)
    return [v for v in values if lower <= v <= upper]


def summarize(
    values: Sequence[float], factor: float = DEFAULT_IQR_FACTOR
) -> StatisticalSummary:
    """
    Build a StatisticalSummary from raw samples.

    All fields (including ``runs``) describe the trimmed sample set.

    Raises:
        ValueError: if values is empty
    """
    if not values:
        raise ValueError("Cannot summarize an empty sample set")

    trimmed = remove_outliers_iqr(values, factor)
    return StatisticalSummary(
        mean=float(statistics.mean(trimmed)),
        median=median(trimmed),
        stddev=population_stddev(trimmed),
        min=min(trimmed),
        max=max(trimmed),
        runs=len(trimmed),
        outliers_removed=len(values) - len(trimmed),
    )


def compression_ratio(transferred: float, uncompressed: float) -> float:
    """
    Percentage of bytes saved by compression, rounded to one decimal.

    Returns 0.0 when there is nothing to compress.
    """
    if uncompressed <= 0:
        return 0.0
    return round((1 - transferred / uncompressed) * 100, 1)
