"""Custom exceptions and warnings for ratiostudy.

Row-level data problems (non-numeric fields, non-positive sale prices) are
never raised: they are tallied and reported as counts. The exceptions below
cover misuse of the individual algorithms, which the report orchestrator
gates against before calling them.

Exception Hierarchy:
    RatioStudyError (ValueError)
    ├── DataValidationError
    ├── InsufficientDataError
    ├── RegressionError
    └── StatisticalError

Warning Classes:
    DataQualityWarning (UserWarning)
    NumericalInstabilityWarning (UserWarning)
"""

from __future__ import annotations


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class RatioStudyError(ValueError):
    """Base exception for all ratiostudy errors.

    Inherits from ValueError so callers that already catch ValueError
    around numeric input handling keep working.

    Example:
        >>> try:
        ...     compute_prb(sale, ratio)
        ... except RatioStudyError as e:
        ...     print(f"ratio study error: {e}")
    """

    pass


# =============================================================================
# DATA EXCEPTIONS
# =============================================================================


class DataValidationError(RatioStudyError):
    """Raised when already-parsed input arrays fail validation.

    Common causes:
        - sale and ratio arrays of different lengths
        - Non-positive sale prices passed straight to an algorithm
          (bypassing filter_pairs)
        - Multi-dimensional input where a 1-D vector is expected
    """

    pass


class InsufficientDataError(RatioStudyError):
    """Raised when there is not enough data for the requested statistic.

    Minimum requirements:
        - PRB: at least 3 sales and more than one distinct sale price

    Example:
        >>> compute_prb([100000.0, 200000.0], [1.0, 0.9])
        InsufficientDataError: PRB needs N >= 3 sales, got 2...
    """

    pass


# =============================================================================
# COMPUTATION EXCEPTIONS
# =============================================================================


class RegressionError(RatioStudyError):
    """Raised when the PRB regression cannot produce estimates.

    A singular design is not an error (it yields an undefined PRBResult);
    this covers non-finite predictors or responses reaching the solver.
    """

    pass


class StatisticalError(RatioStudyError):
    """Raised when a statistical computation receives invalid parameters."""

    pass


# =============================================================================
# WARNINGS
# =============================================================================


class DataQualityWarning(UserWarning):
    """Warning for rows dropped during preprocessing.

    Emitted by filter_pairs(invalid_policy='warn') when rows are ignored for
    non-numeric fields or excluded for a non-positive sale price.

    Example:
        >>> import warnings
        >>> warnings.filterwarnings('error', category=DataQualityWarning)
    """

    pass


class NumericalInstabilityWarning(UserWarning):
    """Warning for numerically degenerate computations.

    Emitted when:
        - The PRB design matrix determinant falls below tolerance
          (e.g. sale prices that differ only in the last digits)

    The affected statistic is reported as undefined (None).
    """

    pass
