"""Tests for value stratification and the vertical equity index."""

import numpy as np
import pytest

from ratiostudy import (
    DataValidationError,
    compute_vei,
    partition_by_proxy,
    ranking_proxy,
    stratum_count,
)


def _split(pairs):
    sale = np.array([p[0] for p in pairs], dtype=float)
    assessed = np.array([p[1] for p in pairs], dtype=float)
    return sale, assessed, assessed / sale


class TestStratumCount:
    """Group count depends on sample size."""

    @pytest.mark.parametrize(
        "n, expected",
        [(10, 2), (50, 2), (51, 4), (500, 4), (501, 10), (10000, 10)],
    )
    def test_breakpoints(self, n, expected):
        assert stratum_count(n) == expected


class TestRankingProxy:
    """Tests for the value proxy."""

    def test_blend(self):
        proxy = ranking_proxy([100000.0], [90000.0], sample_median=0.9)
        assert proxy[0] == pytest.approx(0.5 * 100000.0 + 0.5 * 100000.0)


class TestPartitionByProxy:
    """Tests for tie-aware partitioning."""

    def test_sizes_without_ties(self):
        """The first N mod G groups take one extra member."""
        groups = partition_by_proxy(np.arange(11, dtype=float), 2)
        assert [g.size for g in groups] == [6, 5]

        groups = partition_by_proxy(np.arange(103, dtype=float), 4)
        assert [g.size for g in groups] == [26, 26, 26, 25]

    def test_ordered_by_proxy(self):
        groups = partition_by_proxy([3.0, 1.0, 1.0, 2.0], 2)
        assert [g.tolist() for g in groups] == [[1, 2], [3, 0]]

    def test_ties_keep_input_order(self):
        groups = partition_by_proxy([5.0, 5.0, 5.0, 1.0], 2)
        assert [g.tolist() for g in groups] == [[3, 0, 1, 2]]

    @pytest.mark.parametrize("num_groups", [2, 4, 10])
    def test_cover_every_index_once(self, num_groups):
        """Groups have no gaps and no overlaps, ties included."""
        rng = np.random.default_rng(num_groups)
        for n in (10, 37, 64, 501):
            proxy = rng.integers(0, 6, size=n).astype(float)
            groups = partition_by_proxy(proxy, num_groups)

            combined = np.concatenate(groups)
            assert sorted(combined.tolist()) == list(range(n))
            assert len(groups) <= num_groups
            assert all(g.size > 0 for g in groups)

    def test_never_split_tied_block(self):
        rng = np.random.default_rng(99)
        proxy = rng.integers(0, 8, size=200).astype(float)
        groups = partition_by_proxy(proxy, 4)

        for left, right in zip(groups, groups[1:]):
            assert proxy[left].max() < proxy[right].min()

    def test_tie_extension_absorbs_remaining(self):
        """A tied block spanning the boundary moves into the earlier group."""
        proxy = [1.0] * 9 + [2.0]
        groups = partition_by_proxy(proxy, 2)
        assert [g.size for g in groups] == [9, 1]

    def test_all_tied_single_group(self):
        groups = partition_by_proxy([4.0] * 12, 2)
        assert len(groups) == 1
        assert groups[0].size == 12

    def test_invalid_group_count(self):
        with pytest.raises(DataValidationError):
            partition_by_proxy([1.0, 2.0], 0)


class TestComputeVEI:
    """Tests for compute_vei()."""

    def test_step_in_ratio(self):
        """Low-value half at 0.8, high-value half at 1.2: VEI = 40%."""
        pairs = [(100000.0 * k, 100000.0 * k * (0.8 if k <= 5 else 1.2)) for k in range(1, 11)]
        sale, assessed, ratio = _split(pairs)

        result = compute_vei(sale, assessed, ratio, sample_median=1.0)

        assert result.is_defined
        assert result.note == ""
        assert result.num_strata == 2
        assert [s.count for s in result.strata] == [5, 5]
        assert result.strata[0].median == pytest.approx(0.8)
        assert result.strata[1].median == pytest.approx(1.2)
        assert result.vei == pytest.approx(40.0)
        assert result.vei_significance == pytest.approx(40.0)

    def test_equal_ratios_zero_vei(self, equal_ratio_pairs):
        sale, assessed, ratio = _split(equal_ratio_pairs)
        result = compute_vei(sale, assessed, ratio, sample_median=1.0)
        assert result.vei == pytest.approx(0.0, abs=1e-12)

    def test_rising_ratios_positive_vei(self, rising_ratio_pairs):
        sale, assessed, ratio = _split(rising_ratio_pairs)
        result = compute_vei(sale, assessed, ratio, sample_median=float(np.median(ratio)))

        assert result.strata[-1].median > result.strata[0].median
        assert result.vei > 0

    def test_strata_cover_sample(self, rising_ratio_pairs):
        sale, assessed, ratio = _split(rising_ratio_pairs)
        result = compute_vei(sale, assessed, ratio, sample_median=float(np.median(ratio)))
        assert sum(s.count for s in result.strata) == len(ratio)

    def test_stratum_ci_bounds_median(self):
        rng = np.random.default_rng(21)
        sale = np.exp(rng.uniform(11, 14, size=300))
        ratio = rng.normal(1.0, 0.1, size=300)
        assessed = sale * ratio

        result = compute_vei(sale, assessed, ratio, sample_median=float(np.median(ratio)))

        assert result.num_strata == 4
        for s in result.strata:
            assert s.ci_low <= s.median <= s.ci_high

    def test_too_few_sales(self, two_row_pairs):
        sale, assessed, ratio = _split(two_row_pairs)
        result = compute_vei(sale, assessed, ratio, sample_median=1.0)

        assert result.vei is None
        assert result.vei_significance is None
        assert result.strata == ()
        assert "N < 10" in result.note

    def test_all_tied_insufficient_strata(self):
        sale = np.full(12, 100000.0)
        assessed = np.full(12, 90000.0)
        result = compute_vei(sale, assessed, assessed / sale, sample_median=0.9)

        assert result.vei is None
        assert result.note == "Insufficient strata after tie handling."
        assert len(result.strata) == 1
        assert result.strata[0].count == 12

    def test_single_member_stratum_has_no_ci(self):
        """A one-sale top stratum leaves the significance band undefined."""
        sale = np.array([100000.0] * 9 + [200000.0])
        assessed = sale * 0.9
        result = compute_vei(sale, assessed, assessed / sale, sample_median=0.9)

        assert [s.count for s in result.strata] == [9, 1]
        assert result.strata[1].ci_low is None
        assert result.strata[1].ci_high is None
        assert result.vei == pytest.approx(0.0)
        assert result.vei_significance is None

    def test_zero_median_undefined(self, equal_ratio_pairs):
        sale, assessed, ratio = _split(equal_ratio_pairs)
        result = compute_vei(sale, assessed, ratio, sample_median=0.0)
        assert result.vei is None
        assert "median ratio" in result.note

    def test_shape_mismatch(self):
        with pytest.raises(DataValidationError):
            compute_vei([1.0] * 10, [1.0] * 9, [1.0] * 10, sample_median=1.0)

    def test_non_finite_ratio_undefined(self):
        sale = np.array([100000.0 * k for k in range(1, 12)] + [1e-320])
        assessed = np.array([95000.0 * k for k in range(1, 12)] + [1.0])
        ratio = np.array([0.95] * 11 + [np.inf])

        result = compute_vei(sale, assessed, ratio, sample_median=0.95)

        assert result.vei is None
        assert result.vei_significance is None
        assert "not finite" in result.note

    def test_infinite_median_undefined(self, equal_ratio_pairs):
        sale, assessed, ratio = _split(equal_ratio_pairs)
        result = compute_vei(sale, assessed, ratio, sample_median=np.inf)
        assert result.vei is None
        assert "median ratio" in result.note
