"""Tests for custom exceptions and warnings in ratiostudy."""

import pytest

from ratiostudy import (
    DataQualityWarning,
    DataValidationError,
    InsufficientDataError,
    NumericalInstabilityWarning,
    RatioStudyError,
    RegressionError,
    StatisticalError,
    compute_metrics,
    compute_prb,
)


class TestExceptionHierarchy:
    """Test that exception hierarchy is correct."""

    def test_base_is_value_error(self):
        assert issubclass(RatioStudyError, ValueError)

    @pytest.mark.parametrize(
        "exc", [DataValidationError, InsufficientDataError, RegressionError, StatisticalError]
    )
    def test_subclasses(self, exc):
        assert issubclass(exc, RatioStudyError)

    def test_warnings_hierarchy(self):
        assert issubclass(DataQualityWarning, UserWarning)
        assert issubclass(NumericalInstabilityWarning, UserWarning)

    def test_catch_as_value_error(self):
        with pytest.raises(ValueError):
            compute_prb([1.0], [1.0])


class TestNeverRaisedForData:
    """Bad rows and degenerate samples never raise from compute_metrics."""

    @pytest.mark.parametrize(
        "pairs, expected_n",
        [
            ([], 0),
            ([("", "")], 0),
            ([(1, 1)], 1),
            ([(100000, 0)] * 12, 12),
            ([(100000, 90000)] * 12, 12),
            ([("1,000", "x"), (None, None), (5, -5)], 1),
        ],
    )
    def test_degenerate_inputs(self, pairs, expected_n):
        report = compute_metrics(pairs)
        assert report.n == expected_n
        assert isinstance(report.summary(), str)

    def test_zero_median(self):
        """All-zero assessments leave ratio-relative statistics undefined."""
        report = compute_metrics([(100000 * k, 0) for k in range(1, 13)])
        assert report.median == 0.0
        assert report.cod is None
        assert report.prd is None
        assert not report.ci.is_defined
        assert report.vei is None
