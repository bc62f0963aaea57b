"""Tests for synthetic sale generators."""

import numpy as np
import pytest

from ratiostudy import generate_positive_bias_sales, generate_sales


class TestGenerateSales:
    """Tests for generate_sales()."""

    def test_row_count_and_shape(self):
        pairs = generate_sales(250, seed=1)
        assert len(pairs) == 250
        assert all(len(p) == 2 for p in pairs)

    def test_deterministic_with_seed(self):
        assert generate_sales(100, seed=42) == generate_sales(100, seed=42)
        assert generate_sales(100, seed=42) != generate_sales(100, seed=43)

    @pytest.mark.parametrize("distribution", ["log", "uniform"])
    def test_price_range(self, distribution):
        pairs = generate_sales(500, min_price=20000, max_price=400000, distribution=distribution, seed=2)
        prices = np.array([p[0] for p in pairs])

        assert prices.min() >= 20000
        assert prices.max() <= 400000
        assert np.all(prices == np.round(prices))

    def test_error_bound(self):
        pairs = generate_sales(1000, max_error=0.1, seed=3)
        sale = np.array([p[0] for p in pairs])
        assessed = np.array([p[1] for p in pairs])

        assert np.all(np.abs(assessed - sale) <= 0.1 * sale + 0.5)
        assert np.all(assessed >= 0)

    def test_zero_error(self):
        pairs = generate_sales(50, max_error=0.0, seed=4)
        assert all(s == v for s, v in pairs)

    def test_log_favors_low_prices(self):
        """Log-uniform prices put most sales below the midpoint."""
        prices = np.array([p[0] for p in generate_sales(2000, seed=5)])
        midpoint = (10000 + 3000000) / 2
        assert np.mean(prices < midpoint) > 0.8

    def test_argument_normalization(self):
        """Row count, bounds and distribution are clamped to valid values."""
        assert len(generate_sales(0, seed=6)) == 1
        pairs = generate_sales(20, min_price=5000, max_price=1000, seed=6)
        assert all(p[0] == 5000 for p in pairs)
        assert len(generate_sales(5, distribution="normal", seed=6)) == 5


class TestGeneratePositiveBias:
    """Tests for generate_positive_bias_sales()."""

    def test_assessed_is_square(self):
        pairs = generate_positive_bias_sales(100, seed=1)
        assert all(v == s * s for s, v in pairs)

    def test_deterministic_with_seed(self):
        assert generate_positive_bias_sales(30, seed=9) == generate_positive_bias_sales(30, seed=9)
