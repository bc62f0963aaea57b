"""Vertical equity index (VEI) over value-ordered strata.

Sales are ordered from low to high value by a ranking proxy that blends
sale price with the assessed value normalised by the median ratio, then
split into 2, 4 or 10 near-equal groups depending on sample size. A block
of exactly tied proxy values is never split across two groups.

VEI compares the median ratio of the highest-value group with that of the
lowest-value group, as a percent of the overall median ratio. Its
significance band uses the outer CI bounds of the two extreme groups.
"""

from __future__ import annotations

import time

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ratiostudy.core.constants import (
    DEFAULT_CONFIDENCE,
    MAX_STRATA,
    MIN_VEI_SAMPLE,
    PROXY_SALE_WEIGHT,
    STRATA_BREAKPOINTS,
)
from ratiostudy.core.exceptions import DataValidationError
from ratiostudy.core.result import ConfidenceInterval, Stratum, VEIResult
from ratiostudy.core.types import IndexArray
from ratiostudy.algorithms.central_tendency import finite_or_none, median
from ratiostudy.algorithms.order_statistics import compute_median_ci

NON_FINITE_NOTE = "Cannot compute VEI: assessment ratios overflow (not finite)."


def stratum_count(n: int) -> int:
    """Number of strata for N sales: 2 up to 50, 4 up to 500, else 10."""
    for max_n, groups in STRATA_BREAKPOINTS:
        if n <= max_n:
            return groups
    return MAX_STRATA


def ranking_proxy(
    sale: ArrayLike,
    assessed: ArrayLike,
    sample_median: float,
) -> NDArray[np.float64]:
    """Value proxy used only to order sales: 0.5 * sale + 0.5 * assessed / median."""
    sale = np.asarray(sale, dtype=np.float64)
    assessed = np.asarray(assessed, dtype=np.float64)
    with np.errstate(over="ignore"):
        return PROXY_SALE_WEIGHT * sale + (1.0 - PROXY_SALE_WEIGHT) * (assessed / sample_median)


def partition_by_proxy(proxy: ArrayLike, num_groups: int) -> list[IndexArray]:
    """
    Split sale indices into value-ordered groups.

    Indices are stable-sorted by proxy (ties keep input order). Group sizes
    start at floor(N / G), the first N mod G groups taking one extra member.
    Each group boundary is then pushed forward while the next proxy equals
    the last included one, so tied blocks stay together; later groups
    shrink accordingly and trailing empty groups are dropped.

    Args:
        proxy: Ranking proxy per sale
        num_groups: Requested number of groups G (>= 1)

    Returns:
        List of index arrays, lowest proxy first. Together they cover every
        index exactly once.

    Example:
        >>> [g.tolist() for g in partition_by_proxy([3.0, 1.0, 1.0, 2.0], 2)]
        [[1, 2], [3, 0]]
    """
    proxy = np.asarray(proxy, dtype=np.float64)
    if num_groups < 1:
        raise DataValidationError(f"num_groups must be >= 1, got {num_groups}")

    n = proxy.shape[0]
    order = np.argsort(proxy, kind="stable")
    base, remainder = divmod(n, num_groups)

    groups: list[IndexArray] = []
    start = 0
    for g in range(num_groups):
        size = base + (1 if g < remainder else 0)
        end = min(start + size, n)
        while 0 < end < n and proxy[order[end - 1]] == proxy[order[end]]:
            end += 1
        groups.append(order[start:end])
        start = end
        if start >= n:
            break

    return [grp for grp in groups if grp.size > 0]


def compute_vei(
    sale: ArrayLike,
    assessed: ArrayLike,
    ratio: ArrayLike,
    sample_median: float | None,
    confidence: float = DEFAULT_CONFIDENCE,
) -> VEIResult:
    """
    Compute the vertical equity index and its significance band.

        VEI              = 100 * (median_last - median_first) / sample_median
        VEI_significance = 100 * (ci_high_last - ci_low_first) / sample_median

    VEI needs at least 10 sales. Undefined results carry a note explaining
    why; they are not errors. Whether the band indicates a meaningful
    difference is left to the reader of the report.

    Args:
        sale: Sale prices
        assessed: Assessed values
        ratio: Assessment ratios
        sample_median: Median ratio of the whole sample
        confidence: Confidence level for the per-stratum median CIs

    Returns:
        VEIResult with VEI, significance band and strata

    Example:
        >>> result = compute_vei(sale, assessed, ratio, sample_median=0.98)
        >>> print(f"VEI: {result.vei:.2f}%")
    """
    start_time = time.perf_counter()

    sale = np.asarray(sale, dtype=np.float64)
    assessed = np.asarray(assessed, dtype=np.float64)
    ratio = np.asarray(ratio, dtype=np.float64)
    if not (sale.shape == assessed.shape == ratio.shape) or sale.ndim != 1:
        raise DataValidationError(
            f"sale {sale.shape}, assessed {assessed.shape} and ratio {ratio.shape} "
            f"must be 1-D arrays of equal length"
        )

    def undefined(note: str, strata: tuple[Stratum, ...] = ()) -> VEIResult:
        return VEIResult(
            vei=None,
            vei_significance=None,
            strata=strata,
            note=note,
            computation_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    n = ratio.shape[0]
    if n < MIN_VEI_SAMPLE:
        return undefined(f"Cannot compute VEI: N < {MIN_VEI_SAMPLE}")
    if sample_median is None or sample_median == 0 or not np.isfinite(sample_median):
        return undefined("Cannot compute VEI: median ratio is zero or undefined.")
    if not np.all(np.isfinite(ratio)):
        return undefined(NON_FINITE_NOTE)

    proxy = ranking_proxy(sale, assessed, sample_median)
    groups = partition_by_proxy(proxy, stratum_count(n))

    strata = []
    for group in groups:
        r = ratio[group]
        ci = compute_median_ci(r, confidence) if r.shape[0] >= 2 else ConfidenceInterval.undefined()
        strata.append(Stratum(count=int(r.shape[0]), median=median(r), ci_low=ci.low, ci_high=ci.high))
    strata = tuple(strata)

    if len(strata) < 2:
        return undefined("Insufficient strata after tie handling.", strata)

    first, last = strata[0], strata[-1]
    if first.median is None or last.median is None:
        return undefined(NON_FINITE_NOTE, strata)

    with np.errstate(over="ignore", invalid="ignore"):
        vei = finite_or_none((last.median - first.median) / sample_median * 100)
        vei_significance = None
        if last.ci_high is not None and first.ci_low is not None:
            vei_significance = finite_or_none(
                (last.ci_high - first.ci_low) / sample_median * 100
            )
    if vei is None:
        return undefined(NON_FINITE_NOTE, strata)

    return VEIResult(
        vei=vei,
        vei_significance=vei_significance,
        strata=strata,
        note="",
        computation_time_ms=(time.perf_counter() - start_time) * 1000,
    )
