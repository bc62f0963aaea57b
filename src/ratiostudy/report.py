"""Ratio study report assembly.

compute_metrics() runs the full ratio study on raw (sale, assessed) rows:

    1. filter rows and count exclusions
    2. median ratio, its order-statistic CI, mean and weighted mean
    3. COD and PRD
    4. PRB (skipped with a message when N < 3 or sale prices do not vary)
    5. VEI (self-gating: undefined with a note when N < 10)

Every call builds its own arrays and report; nothing is shared between
calls, so the function is safe to call from concurrent tasks.
"""

from __future__ import annotations

import time
from typing import Callable, Iterable, Literal

import numpy as np

from ratiostudy.core.constants import DEFAULT_CONFIDENCE, MIN_PRB_SAMPLE
from ratiostudy.core.dataset import filter_pairs
from ratiostudy.core.result import ConfidenceInterval, MetricsReport
from ratiostudy.core.types import RawPair
from ratiostudy.algorithms.central_tendency import (
    compute_cod,
    compute_prd,
    mean,
    median,
    weighted_mean_ratio,
)
from ratiostudy.algorithms.equity import compute_vei
from ratiostudy.algorithms.order_statistics import compute_median_ci
from ratiostudy.algorithms.regression import compute_prb

ProgressCallback = Callable[[float, str], None]

NO_VALID_ROWS = "No valid rows after exclusions."
PRB_SKIPPED = f"PRB cannot be computed: need N ≥ {MIN_PRB_SAMPLE} and variation in sale_price."
PRB_UNDEFINED = "PRB cannot be computed: {}."
PRB_NO_PVALUE = "PRB p-value undefined: robust standard error is zero."


def compute_metrics(
    pairs: Iterable[RawPair],
    confidence: float = DEFAULT_CONFIDENCE,
    progress: ProgressCallback | None = None,
    invalid_policy: Literal["drop", "warn"] = "drop",
) -> MetricsReport:
    """
    Compute a complete ratio study report from raw sale/assessment rows.

    Degenerate samples never raise: statistics that cannot be computed are
    None and the reason is recorded in ``messages`` or ``vei_note``. When
    no rows survive filtering the report carries ``error`` and nothing
    else is computed.

    Args:
        pairs: Iterable of (raw_sale, raw_assessed) rows; fields may be
            numbers or numeric strings with thousands separators
        confidence: 0.90 or 0.95 (default) for the median CIs
        progress: Optional callback ``progress(fraction, message)`` called
            as each stage completes
        invalid_policy: Passed to filter_pairs ('drop' or 'warn')

    Returns:
        MetricsReport

    Example:
        >>> pairs = [(100000 * k, 100000 * k) for k in range(1, 11)]
        >>> report = compute_metrics(pairs)
        >>> report.median, report.cod, report.prd
        (1.0, 0.0, 1.0)
    """
    start_time = time.perf_counter()

    def notify(fraction: float, message: str) -> None:
        if progress is not None:
            progress(fraction, message)

    rows = filter_pairs(pairs, invalid_policy=invalid_policy)
    data = rows.dataset
    n = data.num_sales
    messages = [
        f"{rows.total_rows} rows read. "
        f"{rows.ignored_count} ignored for empty/non-numeric fields. "
        f"{rows.non_positive_count} excluded for sale_price ≤ 0."
    ]
    notify(0.1, "Rows filtered")

    if n == 0:
        notify(1.0, "Done")
        return MetricsReport(
            messages=tuple(messages),
            n=0,
            median=None,
            ci=ConfidenceInterval.undefined(),
            cod=None,
            prd=None,
            prb_slope=None,
            prb_p=None,
            vei=None,
            vei_significance=None,
            strata=(),
            vei_note="",
            confidence=confidence,
            total_rows=rows.total_rows,
            ignored_count=rows.ignored_count,
            non_positive_count=rows.non_positive_count,
            error=NO_VALID_ROWS,
            computation_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    ratio = data.ratio
    med = median(ratio)
    ci = compute_median_ci(ratio, confidence)
    cod = compute_cod(ratio, med)
    weighted = weighted_mean_ratio(data)
    prd = compute_prd(ratio, weighted)
    notify(0.4, "Median, CI, COD and PRD computed")

    prb_slope = prb_p = None
    if n >= MIN_PRB_SAMPLE and np.unique(data.sale).shape[0] > 1:
        prb = compute_prb(data.sale, ratio)
        prb_slope, prb_p = prb.slope, prb.p_value
        if not prb.is_defined:
            messages.append(PRB_UNDEFINED.format(prb.note))
        elif prb_p is None:
            messages.append(PRB_NO_PVALUE)
    else:
        messages.append(PRB_SKIPPED)
    notify(0.7, "PRB computed")

    vei = compute_vei(data.sale, data.assessed, ratio, med, confidence)
    notify(0.9, "VEI computed")

    report = MetricsReport(
        messages=tuple(messages),
        n=n,
        median=med,
        ci=ci,
        cod=cod,
        prd=prd,
        prb_slope=prb_slope,
        prb_p=prb_p,
        vei=vei.vei,
        vei_significance=vei.vei_significance,
        strata=vei.strata,
        vei_note=vei.note,
        confidence=confidence,
        mean_ratio=mean(ratio),
        weighted_mean_ratio=weighted,
        total_rows=rows.total_rows,
        ignored_count=rows.ignored_count,
        non_positive_count=rows.non_positive_count,
        computation_time_ms=(time.perf_counter() - start_time) * 1000,
    )
    notify(1.0, "Done")
    return report


# Short name for the computation entry point
compute = compute_metrics
