"""Tests for the order-statistic median confidence interval."""

import numpy as np
import pytest

from ratiostudy import (
    ConfidenceInterval,
    DataValidationError,
    StatisticalError,
    compute_median_ci,
    median_ci_ranks,
)
from ratiostudy.algorithms.order_statistics import z_for_confidence


class TestZValue:
    """Only 90% and 95% are supported."""

    def test_ninety(self):
        assert z_for_confidence(0.90) == 1.64

    def test_ninety_five(self):
        assert z_for_confidence(0.95) == 1.96

    def test_other_levels_fall_back(self):
        assert z_for_confidence(0.99) == 1.96
        assert z_for_confidence(0.5) == 1.96


class TestMedianCIRanks:
    """Tests for rank selection."""

    @pytest.mark.parametrize(
        "n, confidence, expected",
        [
            (1, 0.95, (1, 1)),
            (5, 0.95, (1, 5)),
            (10, 0.95, (2, 9)),
            (49, 0.95, (18, 32)),
            (49, 0.90, (19, 31)),
            (100, 0.95, (40, 61)),
            (100, 0.90, (42, 59)),
        ],
    )
    def test_known_ranks(self, n, confidence, expected):
        assert median_ci_ranks(n, confidence) == expected

    @pytest.mark.parametrize("confidence", [0.90, 0.95])
    def test_ranks_always_in_range(self, confidence):
        """Clamped ranks never leave [1, n]."""
        for n in range(1, 400):
            lower, upper = median_ci_ranks(n, confidence)
            assert 1 <= lower <= upper <= n

    def test_ninety_is_not_wider(self):
        """The 90% interval is nested in the 95% interval."""
        for n in range(1, 200):
            lo90, hi90 = median_ci_ranks(n, 0.90)
            lo95, hi95 = median_ci_ranks(n, 0.95)
            assert lo95 <= lo90 and hi90 <= hi95

    def test_zero_n_rejected(self):
        with pytest.raises(StatisticalError):
            median_ci_ranks(0)


class TestComputeMedianCI:
    """Tests for compute_median_ci()."""

    @pytest.mark.parametrize("confidence", [0.90, 0.95])
    def test_identical_values(self, confidence):
        """All-equal data gives a zero-width interval at that value."""
        ci = compute_median_ci([0.87] * 15, confidence)
        assert ci.low == ci.high == 0.87

    def test_small_sample(self):
        ci = compute_median_ci([1.1, 0.9, 1.02, 0.95, 1.0])
        assert (ci.low, ci.high) == (0.9, 1.1)

    def test_bounds_are_sample_values(self):
        """Bounds are order statistics, not interpolated."""
        values = np.random.default_rng(3).lognormal(0.0, 0.2, size=137)
        ci = compute_median_ci(values)

        assert ci.low in values
        assert ci.high in values
        assert ci.low <= float(np.median(values)) <= ci.high

    def test_even_sample_uses_ranks(self):
        values = [float(v) for v in range(1, 11)]
        ci = compute_median_ci(values[::-1])
        assert (ci.low, ci.high) == (2.0, 9.0)

    def test_discards_non_positive_and_non_finite(self):
        ci = compute_median_ci([-1.0, 0.0, np.nan, np.inf, 2.0])
        assert (ci.low, ci.high) == (2.0, 2.0)

    def test_empty_is_undefined(self):
        ci = compute_median_ci([])
        assert ci == ConfidenceInterval.undefined()
        assert not ci.is_defined
        assert ci.width is None

    def test_two_dimensional_rejected(self):
        with pytest.raises(DataValidationError):
            compute_median_ci(np.ones((3, 3)))
