"""Central tendency and dispersion of assessment ratios.

Functions:
    - median(), mean(): basic location statistics
    - weighted_mean_ratio(): aggregate assessed / aggregate sale
    - compute_cod(): coefficient of dispersion
    - compute_prd(): price-related differential
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from ratiostudy.core.dataset import RatioDataset


def finite_or_none(value: float) -> float | None:
    """Map inf/NaN (overflowed sums, inf ratios) to None."""
    return value if math.isfinite(value) else None


def median(values: ArrayLike) -> float | None:
    """Median of values; the mean of the two middle values for even N.

    Returns None for empty input or a non-finite median.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return None
    with np.errstate(over="ignore", invalid="ignore"):
        return finite_or_none(float(np.median(arr)))


def mean(values: ArrayLike) -> float | None:
    """Arithmetic mean of values, None for empty input or on overflow."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return None
    with np.errstate(over="ignore", invalid="ignore"):
        return finite_or_none(float(np.mean(arr)))


def weighted_mean_ratio(dataset: RatioDataset) -> float | None:
    """
    Sale-weighted mean ratio: sum(assessed) / sum(sale).

    This is the ratio of aggregate assessed value to aggregate sale price,
    not the mean of the individual ratios. None when either sum overflows.
    """
    if dataset.num_sales == 0:
        return None
    with np.errstate(over="ignore", invalid="ignore"):
        return finite_or_none(float(np.sum(dataset.assessed) / np.sum(dataset.sale)))


def compute_cod(ratios: ArrayLike, sample_median: float | None = None) -> float | None:
    """
    Coefficient of dispersion (COD), in percent.

        COD = 100 * median(|r_i - median(r)|) / median(r)

    Lower values mean more uniform assessments.

    Args:
        ratios: Assessment ratios
        sample_median: Median of ratios, if already known

    Returns:
        COD, or None if the sample is empty, its median ratio is zero, or
        the result is not finite
    """
    arr = np.asarray(ratios, dtype=np.float64)
    if sample_median is None:
        sample_median = median(arr)
    if sample_median is None or sample_median == 0:
        return None
    with np.errstate(over="ignore", invalid="ignore"):
        deviation = float(np.median(np.abs(arr - sample_median)))
        return finite_or_none(100.0 * deviation / sample_median)


def compute_prd(
    ratios: ArrayLike | None = None,
    weighted_mean: float | None = None,
    *,
    dataset: RatioDataset | None = None,
) -> float | None:
    """
    Price-related differential: mean(ratio) / weighted mean ratio.

    Values above 1 suggest lower-priced properties carry higher ratios.
    Either pass a dataset, or the ratios together with the weighted mean.

    Returns:
        PRD, or None if the sample is empty, the weighted mean is zero, or
        either mean is not finite
    """
    if dataset is not None:
        ratios = dataset.ratio
        weighted_mean = weighted_mean_ratio(dataset)
    mean_ratio = mean(ratios if ratios is not None else [])
    if mean_ratio is None or weighted_mean is None or weighted_mean == 0:
        return None
    if not math.isfinite(weighted_mean):
        return None
    return finite_or_none(mean_ratio / weighted_mean)
