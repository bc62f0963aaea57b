"""Core data structures for ratiostudy."""

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

__all__ = [
    "RatioDataset",
    "FilterResult",
    "filter_pairs",
    "parse_number",
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
]
