"""Ratio study algorithms."""

from ratiostudy.algorithms.central_tendency import (
    median,
    mean,
    weighted_mean_ratio,
    compute_cod,
    compute_prd,
)
from ratiostudy.algorithms.order_statistics import (
    z_for_confidence,
    median_ci_ranks,
    compute_median_ci,
)
from ratiostudy.algorithms.regression import (
    OLSFit,
    normal_cdf,
    fit_ols_hc3,
    compute_prb,
)
from ratiostudy.algorithms.equity import (
    stratum_count,
    ranking_proxy,
    partition_by_proxy,
    compute_vei,
)

__all__ = [
    # Central tendency / dispersion
    "median",
    "mean",
    "weighted_mean_ratio",
    "compute_cod",
    "compute_prd",
    # Median confidence interval
    "z_for_confidence",
    "median_ci_ranks",
    "compute_median_ci",
    # PRB
    "OLSFit",
    "normal_cdf",
    "fit_ols_hc3",
    "compute_prb",
    # VEI
    "stratum_count",
    "ranking_proxy",
    "partition_by_proxy",
    "compute_vei",
]
