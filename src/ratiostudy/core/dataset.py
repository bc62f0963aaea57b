"""Sale/assessment data containers and row preprocessing.

This module turns raw (sale price, assessed value) rows into a validated
ratio dataset. Raw fields may be numbers or strings with thousands
separators; rows that cannot be used are counted, never raised.

Main entry point:
    - filter_pairs(): parse, validate and tally raw rows
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import Iterable, Literal

import numpy as np
from numpy.typing import NDArray

from ratiostudy.core.exceptions import DataQualityWarning, DataValidationError
from ratiostudy.core.types import RawPair, RawValue


def parse_number(value: RawValue) -> float | None:
    """Coerce one raw field to a finite float.

    Strings are stripped and have ``,`` thousands separators removed before
    parsing as a decimal. Empty, non-numeric and non-finite inputs return None.

    Example:
        >>> parse_number("1,250,000")
        1250000.0
        >>> parse_number("n/a") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        x = float(value)
        return x if math.isfinite(x) else None

    text = str(value).strip()
    if not text:
        return None
    text = text.replace(",", "")
    # float() also accepts "1_000"; a thousands separator is only ever ","
    if "_" in text:
        return None
    try:
        x = float(text)
    except ValueError:
        return None
    return x if math.isfinite(x) else None


@dataclass(frozen=True)
class RatioDataset:
    """
    Validated sales used in one ratio study.

    Each position i holds one property: its market sale price and its
    assessed value. The assessment ratio is ``assessed / sale``.

    Attributes:
        sale: 1-D array of sale prices, all strictly positive
        assessed: 1-D array of assessed values, same length as sale

    Properties:
        ratio: Per-sale assessment ratio
        num_sales: Number of sales N

    The arrays are made read-only on construction; the dataset is never
    modified after it is built.

    Example:
        >>> ds = RatioDataset(sale=[100000.0, 250000.0], assessed=[95000.0, 240000.0])
        >>> ds.num_sales
        2
    """

    sale: NDArray[np.float64]
    assessed: NDArray[np.float64]
    _ratio: NDArray[np.float64] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        sale = np.array(self.sale, dtype=np.float64)
        assessed = np.array(self.assessed, dtype=np.float64)

        if sale.ndim != 1 or assessed.ndim != 1:
            raise DataValidationError(
                f"sale and assessed must be 1-D, got shapes {sale.shape} and {assessed.shape}"
            )
        if sale.shape != assessed.shape:
            raise DataValidationError(
                f"sale length {sale.shape[0]} does not match assessed length {assessed.shape[0]}"
            )
        if sale.size and not np.all(np.isfinite(sale) & np.isfinite(assessed)):
            raise DataValidationError("sale and assessed must be finite")
        if np.any(sale <= 0):
            bad = np.where(sale <= 0)[0][:5].tolist()
            raise DataValidationError(
                f"Found {int(np.sum(sale <= 0))} non-positive sale prices at positions {bad}. "
                f"Use filter_pairs() to exclude them."
            )

        # inf for a subnormal sale price
        with np.errstate(over="ignore"):
            ratio = assessed / sale
        for arr in (sale, assessed, ratio):
            arr.flags.writeable = False

        object.__setattr__(self, "sale", sale)
        object.__setattr__(self, "assessed", assessed)
        object.__setattr__(self, "_ratio", ratio)

    @property
    def ratio(self) -> NDArray[np.float64]:
        """Assessment ratios ``assessed / sale``."""
        return self._ratio

    @property
    def num_sales(self) -> int:
        """Number of sales N."""
        return int(self.sale.shape[0])

    def __len__(self) -> int:
        return self.num_sales


@dataclass(frozen=True)
class FilterResult:
    """
    Outcome of preprocessing raw rows.

    Attributes:
        dataset: Rows that survived filtering
        total_rows: Number of raw rows read
        ignored_count: Rows dropped for an empty or non-numeric field
        non_positive_count: Rows dropped for a sale price <= 0

    ``ignored_count + non_positive_count + dataset.num_sales == total_rows``
    always holds.
    """

    dataset: RatioDataset
    total_rows: int
    ignored_count: int
    non_positive_count: int

    @property
    def kept_count(self) -> int:
        """Number of rows kept."""
        return self.dataset.num_sales

    @property
    def dropped_count(self) -> int:
        """Number of rows dropped for any reason."""
        return self.ignored_count + self.non_positive_count


def filter_pairs(
    pairs: Iterable[RawPair],
    invalid_policy: Literal["drop", "warn"] = "drop",
) -> FilterResult:
    """
    Parse raw (sale, assessed) rows into a RatioDataset.

    A row is ignored when either field is empty or not a number, and
    excluded when its sale price is zero or negative. Assessed values of
    zero or below are kept. Malformed rows are only counted, never raised.

    Args:
        pairs: Iterable of (raw_sale, raw_assessed) rows. Fields may be
            numbers or strings such as ``"1,250,000"``.
        invalid_policy: 'drop' drops unusable rows silently, 'warn' drops them
            and emits one DataQualityWarning with the counts.

    Returns:
        FilterResult with the dataset and exclusion counts

    Example:
        >>> result = filter_pairs([("abc", 100000), (0, 50000), ("200,000", 190000)])
        >>> result.ignored_count, result.non_positive_count, result.kept_count
        (1, 1, 1)
    """
    sale: list[float] = []
    assessed: list[float] = []
    total = ignored = non_positive = 0

    for row in pairs:
        total += 1
        # short rows read as missing fields, extra columns are ignored
        raw_sale, raw_value = (tuple(row) + (None, None))[:2]
        s = parse_number(raw_sale)
        v = parse_number(raw_value)
        if s is None or v is None:
            ignored += 1
            continue
        if s <= 0:
            non_positive += 1
            continue
        sale.append(s)
        assessed.append(v)

    if invalid_policy == "warn" and (ignored or non_positive):
        warnings.warn(
            f"Dropped {ignored + non_positive} of {total} rows "
            f"({ignored} empty/non-numeric, {non_positive} with sale_price <= 0).",
            DataQualityWarning,
            stacklevel=2,
        )

    return FilterResult(
        dataset=RatioDataset(sale=sale, assessed=assessed),
        total_rows=total,
        ignored_count=ignored,
        non_positive_count=non_positive,
    )
