"""Distribution-free confidence interval for a median.

The interval comes from the binomial sign test around the median: the
bounds are the order statistics sitting r ranks either side of the
middle, with r taken from the normal approximation to the binomial.
Bounds are always values present in the sample, never interpolated.

Functions:
    - z_for_confidence(): z value for a supported confidence level
    - median_ci_ranks(): 1-based ranks of the interval bounds
    - compute_median_ci(): interval for a sample of positive values
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ratiostudy.core.constants import DEFAULT_CONFIDENCE, Z_90, Z_95
from ratiostudy.core.exceptions import DataValidationError, StatisticalError
from ratiostudy.core.result import ConfidenceInterval


def z_for_confidence(confidence: float) -> float:
    """Return 1.64 for exactly 0.90 and 1.96 for anything else."""
    return Z_90 if confidence == 0.90 else Z_95


def median_ci_ranks(n: int, confidence: float = DEFAULT_CONFIDENCE) -> tuple[int, int]:
    """
    1-based ranks of the lower and upper median CI bounds.

    With r = ceil(z * sqrt(n) / 2 (+ 0.5 when n is even)):
        odd n:  m = (n + 1) / 2, ranks (m - r, m + r)
        even n: ranks (n/2 + 1 - r, n/2 + r)
    Both ranks are clamped to [1, n].

    Args:
        n: Sample size (>= 1)
        confidence: 0.90 or 0.95; other values use the 0.95 z value

    Returns:
        Tuple (lower_rank, upper_rank)

    Example:
        >>> median_ci_ranks(10)
        (2, 9)
    """
    if n < 1:
        raise StatisticalError(f"median_ci_ranks requires n >= 1, got {n}")

    z = z_for_confidence(confidence)
    r_base = z * math.sqrt(n) / 2
    if n % 2 == 0:
        r_base += 0.5
    r = math.ceil(r_base)

    if n % 2 == 1:
        m = (n + 1) // 2
        lower, upper = m - r, m + r
    else:
        lower, upper = n // 2 + 1 - r, n // 2 + r

    return max(1, min(n, lower)), max(1, min(n, upper))


def compute_median_ci(
    values: ArrayLike,
    confidence: float = DEFAULT_CONFIDENCE,
) -> ConfidenceInterval:
    """
    Order-statistic confidence interval for the median of positive values.

    Non-finite and non-positive values are discarded before ranking.

    Args:
        values: 1-D sample, typically assessment ratios
        confidence: 0.90 or 0.95 (default)

    Returns:
        ConfidenceInterval whose bounds are sample values, or an undefined
        interval if no usable values remain

    Example:
        >>> ci = compute_median_ci([0.9, 0.95, 1.0, 1.02, 1.1])
        >>> ci.low, ci.high
        (0.9, 1.1)
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise DataValidationError(f"values must be 1-D, got shape {arr.shape}")

    ordered = _sorted_positive(arr)
    n = ordered.shape[0]
    if n == 0:
        return ConfidenceInterval.undefined()

    lower, upper = median_ci_ranks(n, confidence)
    return ConfidenceInterval(low=float(ordered[lower - 1]), high=float(ordered[upper - 1]))


def _sorted_positive(arr: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.sort(arr[np.isfinite(arr) & (arr > 0)])
