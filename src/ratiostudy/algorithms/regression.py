"""Price-related bias (PRB) via OLS with HC3 robust standard errors.

The assessment ratio is regressed on ln(sale price):

    ratio_i = b0 + b1 * ln(sale_i) + e_i

The slope b1 is tested against zero with the HC3 sandwich covariance

    V = (X'X)^-1 [sum_i e_i^2 / (1 - h_i)^2 * x_i x_i'] (X'X)^-1

where h_i is the leverage of observation i. The two-sided p-value uses the
Zelen & Severo (1964) rational approximation to the normal CDF, which is
kept as-is so p-values match previously published reports.

References:
    MacKinnon, J. G., & White, H. (1985). Some heteroskedasticity-consistent
    covariance matrix estimators with improved finite sample properties.
    Journal of Econometrics, 29(3), 305-325.
    Zelen, M., & Severo, N. C. (1964). Probability functions. In Handbook of
    Mathematical Functions, 26.2.17.
"""

from __future__ import annotations

import math
import time
import warnings
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ratiostudy.core.constants import (
    LEVERAGE_CAP,
    MIN_PRB_SAMPLE,
    SINGULAR_DET_TOLERANCE,
)
from ratiostudy.core.exceptions import (
    DataValidationError,
    InsufficientDataError,
    NumericalInstabilityWarning,
    RegressionError,
)
from ratiostudy.core.result import PRBResult


def normal_cdf(x: float) -> float:
    """Standard normal CDF, Zelen-Severo approximation (|error| < 7.5e-8)."""
    t = 1.0 / (1.0 + 0.2316419 * abs(x))
    d = 0.3989423 * math.exp(-x * x / 2.0)
    p = d * t * (
        0.3193815 + t * (-0.3565638 + t * (1.781478 + t * (-1.821256 + t * 1.330274)))
    )
    if x > 0:
        return 1.0 - p
    return p


@dataclass(frozen=True)
class OLSFit:
    """Single-predictor OLS fit with HC3 slope variance.

    Attributes:
        intercept: b0
        slope: b1
        slope_variance: HC3 variance of b1 (V[1, 1])
        residuals: e_i = y_i - (b0 + b1 x_i)
        leverage: Diagonal of the hat matrix
    """

    intercept: float
    slope: float
    slope_variance: float
    residuals: NDArray[np.float64]
    leverage: NDArray[np.float64]

    @property
    def slope_std_error(self) -> float:
        """Robust standard error of the slope (negative variance clipped to 0)."""
        return math.sqrt(max(self.slope_variance, 0.0))


def fit_ols_hc3(x: ArrayLike, y: ArrayLike) -> OLSFit | None:
    """
    Fit y = b0 + b1 x by OLS and compute the HC3 covariance of b1.

    (X'X)^-1 is taken in closed form from the 2x2 normal equations.

    Args:
        x: Predictor values
        y: Response values, same length as x

    Returns:
        OLSFit, or None if det(X'X) is below tolerance (singular design)

    Raises:
        RegressionError: If x or y contains NaN/Inf
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise RegressionError("Regression inputs contain NaN/Inf values")

    n = x.shape[0]
    sum_x = float(np.sum(x))
    sum_xx = float(np.sum(x * x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))

    det = n * sum_xx - sum_x * sum_x
    if abs(det) < SINGULAR_DET_TOLERANCE:
        return None

    xtx_inv = np.array([[sum_xx, -sum_x], [-sum_x, float(n)]]) / det
    beta = xtx_inv @ np.array([sum_y, sum_xy])
    b0, b1 = float(beta[0]), float(beta[1])

    X = np.column_stack([np.ones(n), x])
    residuals = y - (b0 + b1 * x)
    leverage = np.einsum("ij,jk,ik->i", X, xtx_inv, X)

    # HC3: e_i^2 / (1 - h_i)^2, leverage capped below 1
    weights = residuals**2 / (1.0 - np.minimum(leverage, LEVERAGE_CAP)) ** 2
    meat = X.T @ (weights[:, None] * X)
    cov = xtx_inv @ meat @ xtx_inv

    return OLSFit(
        intercept=b0,
        slope=b1,
        slope_variance=float(cov[1, 1]),
        residuals=residuals,
        leverage=leverage,
    )


def compute_prb(sale: ArrayLike, ratio: ArrayLike) -> PRBResult:
    """
    Price-related bias: slope of ratio on ln(sale price), HC3 p-value.

    A near-zero or undefined slope is a normal result. A singular design,
    a non-finite ratio or an overflowing fit yields an undefined result
    (slope and p-value None, with a note) and a NumericalInstabilityWarning;
    an exact fit (zero robust standard error) yields a slope with an
    undefined p-value.

    Args:
        sale: Sale prices, all > 0
        ratio: Assessment ratios, same length as sale

    Returns:
        PRBResult with slope and two-sided p-value

    Raises:
        DataValidationError: If lengths differ or a sale price is <= 0
        InsufficientDataError: If N < 3 or all sale prices are equal

    Example:
        >>> sale = [100000.0, 200000.0, 400000.0, 800000.0]
        >>> ratio = [1.10, 1.02, 0.97, 0.90]
        >>> result = compute_prb(sale, ratio)
        >>> result.slope < 0
        True
    """
    start_time = time.perf_counter()

    sale = np.asarray(sale, dtype=np.float64)
    ratio = np.asarray(ratio, dtype=np.float64)
    if sale.ndim != 1 or sale.shape != ratio.shape:
        raise DataValidationError(
            f"sale shape {sale.shape} does not match ratio shape {ratio.shape}"
        )
    n = sale.shape[0]
    if n < MIN_PRB_SAMPLE:
        raise InsufficientDataError(
            f"PRB needs N >= {MIN_PRB_SAMPLE} sales, got {n}"
        )
    if np.any(sale <= 0):
        raise DataValidationError("PRB requires all sale prices > 0")
    if np.unique(sale).shape[0] < 2:
        raise InsufficientDataError("PRB needs variation in sale price")

    def undefined(note: str) -> PRBResult:
        warnings.warn(
            f"PRB slope undefined: {note}",
            NumericalInstabilityWarning,
            stacklevel=3,
        )
        return PRBResult(
            slope=None,
            p_value=None,
            intercept=None,
            std_error=None,
            num_sales=n,
            note=note,
            computation_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    if not np.all(np.isfinite(ratio)):
        return undefined("assessment ratios are not finite (assessed / sale overflows)")

    with np.errstate(over="ignore", invalid="ignore"):
        fit = fit_ols_hc3(np.log(sale), ratio)

    if fit is None:
        return undefined("sale prices too close together (singular design)")

    se = fit.slope_std_error
    if not (math.isfinite(fit.slope) and math.isfinite(fit.intercept) and math.isfinite(se)):
        return undefined("regression sums overflow")

    p_value = None
    if se > 0:
        z = abs(fit.slope / se)
        p_value = 2.0 * (1.0 - normal_cdf(z))

    return PRBResult(
        slope=fit.slope,
        p_value=p_value,
        intercept=fit.intercept,
        std_error=se,
        num_sales=n,
        computation_time_ms=(time.perf_counter() - start_time) * 1000,
    )
