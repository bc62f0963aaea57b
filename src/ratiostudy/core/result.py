"""Result dataclasses for ratio study metrics.

All results are immutable. A statistic that cannot be computed for the
given sample is represented as ``None`` rather than NaN, so results
compare and serialize predictably.

Result types:
    - ConfidenceInterval: Order-statistic interval for a median
    - Stratum: Summary of one value-ordered group used by VEI
    - PRBResult: Price-related bias regression (slope, robust p-value)
    - VEIResult: Vertical equity index over value strata
    - MetricsReport: Complete ratio study report
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ratiostudy.core.constants import (
    IAAO_COD_MAX,
    IAAO_LEVEL_RANGE,
    IAAO_PRB_RANGE,
    IAAO_PRD_RANGE,
    IAAO_VEI_RANGE,
)
from ratiostudy.core.mixins import ResultSummaryMixin


@dataclass(frozen=True)
class ConfidenceInterval:
    """
    Confidence interval for a median.

    Both bounds are sample values picked by rank (order statistics), never
    interpolated. They are None when the interval is undefined, e.g. for an
    empty sample or a single-member stratum.

    Attributes:
        low: Lower bound
        high: Upper bound
    """

    low: float | None
    high: float | None

    @classmethod
    def undefined(cls) -> ConfidenceInterval:
        """Interval for which no bounds exist."""
        return cls(low=None, high=None)

    @property
    def is_defined(self) -> bool:
        """True if both bounds are available."""
        return self.low is not None and self.high is not None

    @property
    def width(self) -> float | None:
        """Distance between the bounds."""
        if not self.is_defined:
            return None
        return self.high - self.low

    def contains(self, value: float) -> bool:
        """True if value lies within [low, high]."""
        return self.is_defined and self.low <= value <= self.high

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {"low": self.low, "high": self.high}

    def __repr__(self) -> str:
        if not self.is_defined:
            return "ConfidenceInterval(undefined)"
        return f"ConfidenceInterval([{self.low:.4f}, {self.high:.4f}])"


@dataclass(frozen=True)
class Stratum:
    """
    Aggregate statistics for one value-ordered group of sales.

    A stratum holds no sales itself, only statistics over a contiguous run
    of the proxy-sorted sample.

    Attributes:
        count: Number of sales in the group
        median: Median ratio of the group
        ci_low: Lower CI bound of the group median (None if count < 2)
        ci_high: Upper CI bound of the group median (None if count < 2)
    """

    count: int
    median: float | None
    ci_low: float | None
    ci_high: float | None

    @property
    def ci(self) -> ConfidenceInterval:
        """The group CI as a ConfidenceInterval."""
        return ConfidenceInterval(low=self.ci_low, high=self.ci_high)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "n": self.count,
            "median": self.median,
            "ci_low": self.ci_low,
            "ci_high": self.ci_high,
        }


@dataclass(frozen=True)
class PRBResult:
    """
    Result of the price-related bias (PRB) regression.

    PRB regresses the assessment ratio on ln(sale price) by OLS and tests
    the slope with HC3 heteroskedasticity-robust standard errors. A positive
    slope means ratios rise with price; a negative slope means lower-priced
    properties are assessed at relatively higher ratios.

    Attributes:
        slope: OLS slope on ln(sale price), None if it cannot be estimated
        p_value: Two-sided p-value for slope = 0, None if undefined
        intercept: OLS intercept, None if the slope is undefined
        std_error: HC3 standard error of the slope
        num_sales: Number of sales used
        computation_time_ms: Time taken in milliseconds
        note: Why the slope is undefined, empty otherwise
    """

    slope: float | None
    p_value: float | None
    intercept: float | None
    std_error: float | None
    num_sales: int
    computation_time_ms: float
    note: str = ""

    @property
    def is_defined(self) -> bool:
        """True if a slope was estimated."""
        return self.slope is not None

    def is_significant(self, alpha: float = 0.05) -> bool | None:
        """Whether the slope differs from zero at level alpha.

        Returns None when the p-value is undefined.
        """
        if self.p_value is None:
            return None
        return self.p_value < alpha

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("PRICE-RELATED BIAS (PRB) REPORT")]
        lines.append(m._format_section("Metrics"))
        lines.append(m._format_metric("Slope (ln sale)", self.slope))
        lines.append(m._format_metric("Intercept", self.intercept))
        lines.append(m._format_metric("HC3 Std. Error", self.std_error))
        lines.append(m._format_metric("p-value", self.p_value))
        lines.append(m._format_metric("Sales", self.num_sales))
        lines.append(m._format_section("Interpretation"))
        lines.append("  " + m._format_range_check(
            self.slope, IAAO_PRB_RANGE,
            "regressive: ratios fall as sale price rises",
            "progressive: ratios rise as sale price rises",
        ))
        if self.note:
            lines.append(f"\nNote: {self.note}")
        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "slope": self.slope,
            "p": self.p_value,
            "intercept": self.intercept,
            "std_error": self.std_error,
            "num_sales": self.num_sales,
            "note": self.note,
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        if not self.is_defined:
            return f"PRBResult(undefined, n={self.num_sales})"
        p = "N/A" if self.p_value is None else f"{self.p_value:.4f}"
        return f"PRBResult(slope={self.slope:.4f}, p={p})"


@dataclass(frozen=True)
class VEIResult:
    """
    Result of the vertical equity index (VEI) computation.

    Sales are ordered by a value proxy and split into strata; VEI is the
    percent difference between the median ratio of the highest- and
    lowest-value strata, relative to the overall median ratio.

    Attributes:
        vei: 100 * (last median - first median) / sample median
        vei_significance: 100 * (last ci_high - first ci_low) / sample median,
            a widest-gap significance band
        strata: Strata from lowest to highest value
        note: Explanation when VEI is undefined, empty otherwise
        computation_time_ms: Time taken in milliseconds
    """

    vei: float | None
    vei_significance: float | None
    strata: tuple[Stratum, ...]
    note: str
    computation_time_ms: float

    @property
    def is_defined(self) -> bool:
        """True if VEI was computed."""
        return self.vei is not None

    @property
    def num_strata(self) -> int:
        """Number of non-empty strata."""
        return len(self.strata)

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("VERTICAL EQUITY INDEX (VEI) REPORT")]
        lines.append(m._format_section("Metrics"))
        lines.append(m._format_metric("VEI (%)", self.vei))
        lines.append(m._format_metric("VEI significance (%)", self.vei_significance))
        lines.append(m._format_metric("Strata", self.num_strata))
        if self.strata:
            lines.append(m._format_section("Strata"))
            lines.append(_format_strata_table(self.strata))
        if self.note:
            lines.append(f"\nNote: {self.note}")
        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        return {
            "VEI": self.vei,
            "VEI_significance": self.vei_significance,
            "strata": [s.to_dict() for s in self.strata],
            "vei_note": self.note,
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        if not self.is_defined:
            return f"VEIResult(undefined, note={self.note!r})"
        return f"VEIResult(vei={self.vei:.2f}%, strata={self.num_strata})"


@dataclass(frozen=True)
class MetricsReport:
    """
    Complete ratio study report for one set of sales.

    Built once per computation and never modified. When no rows survive
    filtering, ``error`` is set and every statistic is None.

    Attributes:
        messages: Diagnostic messages (row counts, skipped statistics)
        n: Number of sales used
        median: Median assessment ratio (level of assessment)
        ci: Order-statistic confidence interval of the median
        cod: Coefficient of dispersion, in percent
        prd: Price-related differential
        prb_slope: PRB regression slope
        prb_p: Two-sided p-value of the PRB slope
        vei: Vertical equity index, in percent
        vei_significance: VEI widest-gap significance band, in percent
        strata: VEI strata from lowest to highest value
        vei_note: Explanation when VEI is undefined
        confidence: Confidence level used for all median intervals
        mean_ratio: Arithmetic mean of the ratios
        weighted_mean_ratio: sum(assessed) / sum(sale)
        total_rows: Raw rows read
        ignored_count: Rows ignored for empty/non-numeric fields
        non_positive_count: Rows excluded for sale price <= 0
        error: Set only when no valid rows remain
        computation_time_ms: Time taken in milliseconds
    """

    messages: tuple[str, ...]
    n: int
    median: float | None
    ci: ConfidenceInterval
    cod: float | None
    prd: float | None
    prb_slope: float | None
    prb_p: float | None
    vei: float | None
    vei_significance: float | None
    strata: tuple[Stratum, ...]
    vei_note: str
    confidence: float
    mean_ratio: float | None = None
    weighted_mean_ratio: float | None = None
    total_rows: int = 0
    ignored_count: int = 0
    non_positive_count: int = 0
    error: str | None = None
    computation_time_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """True if the report was computed (no terminal error)."""
        return self.error is None

    def summary(self) -> str:
        """Return human-readable summary report."""
        m = ResultSummaryMixin
        lines = [m._format_header("RATIO STUDY REPORT")]

        if self.error is not None:
            lines.append(f"\nError: {self.error}")
        else:
            pct = int(round(self.confidence * 100))

            lines.append(m._format_section("Sample"))
            lines.append(m._format_metric("Rows read", self.total_rows))
            lines.append(m._format_metric("Sales used (N)", self.n))

            lines.append(m._format_section("Level"))
            lines.append(m._format_metric("Median ratio", self.median))
            lines.append(m._format_metric(f"{pct}% CI low", self.ci.low))
            lines.append(m._format_metric(f"{pct}% CI high", self.ci.high))
            lines.append(m._format_metric("Mean ratio", self.mean_ratio))
            lines.append(m._format_metric("Weighted mean ratio", self.weighted_mean_ratio))

            lines.append(m._format_section("Uniformity"))
            lines.append(m._format_metric("COD (%)", self.cod))

            lines.append(m._format_section("Vertical Equity"))
            lines.append(m._format_metric("PRD", self.prd))
            lines.append(m._format_metric("PRB slope", self.prb_slope))
            lines.append(m._format_metric("PRB p-value", self.prb_p))
            lines.append(m._format_metric("VEI (%)", self.vei))
            lines.append(m._format_metric("VEI significance (%)", self.vei_significance))

            if self.strata:
                lines.append(m._format_section("Strata"))
                lines.append(_format_strata_table(self.strata))
            if self.vei_note:
                lines.append(f"  Note: {self.vei_note}")

            lines.append(m._format_section("Interpretation"))
            lines.extend("  " + line for line in self._interpretation())

        lines.append(m._format_section("Messages"))
        lines.append(m._format_list(list(self.messages), max_items=10, item_name="message"))
        lines.append(m._format_footer(self.computation_time_ms))
        return "\n".join(lines)

    def _interpretation(self) -> list[str]:
        m = ResultSummaryMixin
        level = m._format_range_check(
            self.median, IAAO_LEVEL_RANGE, "under-assessed", "over-assessed"
        )
        if self.cod is None:
            uniformity = "not computed"
        elif self.cod <= IAAO_COD_MAX:
            uniformity = f"within guidance (<= {IAAO_COD_MAX:g}%)"
        else:
            uniformity = f"non-uniform (> {IAAO_COD_MAX:g}%)"
        prd = m._format_range_check(self.prd, IAAO_PRD_RANGE, "progressive", "regressive")
        prb = m._format_range_check(self.prb_slope, IAAO_PRB_RANGE, "regressive", "progressive")
        vei = m._format_range_check(self.vei, IAAO_VEI_RANGE, "regressive", "progressive")
        return [
            f"Level (median): {level}",
            f"Uniformity (COD): {uniformity}",
            f"PRD: {prd}",
            f"PRB: {prb}",
            f"VEI: {vei}",
        ]

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation using the report field names."""
        if self.error is not None:
            return {"messages": list(self.messages), "n": self.n, "error": self.error}
        return {
            "messages": list(self.messages),
            "n": self.n,
            "median": self.median,
            "ci": self.ci.to_dict(),
            "COD": self.cod,
            "PRD": self.prd,
            "PRB_slope": self.prb_slope,
            "PRB_p": self.prb_p,
            "VEI": self.vei,
            "VEI_significance": self.vei_significance,
            "strata": [s.to_dict() for s in self.strata],
            "vei_note": self.vei_note,
            "confidence": self.confidence,
        }

    def __repr__(self) -> str:
        if self.error is not None:
            return f"MetricsReport(error={self.error!r})"
        med = "N/A" if self.median is None else f"{self.median:.4f}"
        return f"MetricsReport(n={self.n}, median={med}, {self.computation_time_ms:.2f}ms)"


def _format_strata_table(strata: tuple[Stratum, ...]) -> str:
    fmt = ResultSummaryMixin._format_value
    rows = [f"  {'#':>3} {'N':>6} {'Median':>10} {'CI low':>10} {'CI high':>10}"]
    for i, s in enumerate(strata, start=1):
        rows.append(
            f"  {i:>3} {s.count:>6} {fmt(s.median):>10} "
            f"{fmt(s.ci_low):>10} {fmt(s.ci_high):>10}"
        )
    return "\n".join(rows)
