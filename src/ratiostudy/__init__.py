"""
ratiostudy: Assessment ratio study metrics for mass appraisal.

Level (median ratio with order-statistic CI), uniformity (COD) and vertical
equity (PRD, HC3-robust PRB, stratified VEI) from paired sale prices and
assessed values.
"""

from ratiostudy.core.dataset import FilterResult, RatioDataset, filter_pairs, parse_number
from ratiostudy.core.result import (
    ConfidenceInterval,
    MetricsReport,
    PRBResult,
    Stratum,
    VEIResult,
)
from ratiostudy.core.exceptions import (
    RatioStudyError,
    DataValidationError,
    InsufficientDataError,
    RegressionError,
    StatisticalError,
    DataQualityWarning,
    NumericalInstabilityWarning,
)
from ratiostudy.algorithms.central_tendency import (
    median,
    mean,
    weighted_mean_ratio,
    compute_cod,
    compute_prd,
)
from ratiostudy.algorithms.order_statistics import median_ci_ranks, compute_median_ci
from ratiostudy.algorithms.regression import normal_cdf, fit_ols_hc3, compute_prb
from ratiostudy.algorithms.equity import (
    stratum_count,
    ranking_proxy,
    partition_by_proxy,
    compute_vei,
)
from ratiostudy.report import compute, compute_metrics
from ratiostudy.worker import handle_message
from ratiostudy.generators import generate_sales, generate_positive_bias_sales

__version__ = "0.1.0"

__all__ = [
    # Data structures
    "RatioDataset",
    "FilterResult",
    "filter_pairs",
    "parse_number",
    # Result types
    "ConfidenceInterval",
    "Stratum",
    "PRBResult",
    "VEIResult",
    "MetricsReport",
    # Exceptions
    "RatioStudyError",
    "DataValidationError",
    "InsufficientDataError",
    "RegressionError",
    "StatisticalError",
    # Warnings
    "DataQualityWarning",
    "NumericalInstabilityWarning",
    # Central tendency / dispersion
    "median",
    "mean",
    "weighted_mean_ratio",
    "compute_cod",
    "compute_prd",
    # Median CI
    "median_ci_ranks",
    "compute_median_ci",
    # PRB
    "normal_cdf",
    "fit_ols_hc3",
    "compute_prb",
    # VEI
    "stratum_count",
    "ranking_proxy",
    "partition_by_proxy",
    "compute_vei",
    # Report
    "compute_metrics",
    "compute",
    "handle_message",
    # Synthetic data
    "generate_sales",
    "generate_positive_bias_sales",
]
