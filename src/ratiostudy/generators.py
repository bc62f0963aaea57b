"""Synthetic sale/assessment data for exercising ratio studies."""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import NDArray

Distribution = Literal["uniform", "log"]


def generate_sales(
    n_rows: int = 1000,
    min_price: float = 10000.0,
    max_price: float = 3000000.0,
    max_error: float = 0.15,
    distribution: Distribution = "log",
    seed: int | None = None,
) -> list[tuple[float, float]]:
    """
    Generate (sale_price, assessed_value) pairs with symmetric random error.

    assessed = round(price * (1 +/- e)) with e uniform in [0, max_error)
    and a random sign, floored at 0. Prices are rounded to whole dollars.

    Args:
        n_rows: Number of rows (at least 1)
        min_price: Minimum sale price (at least 0)
        max_price: Maximum sale price (at least min_price)
        max_error: Maximum absolute error fraction, e.g. 0.15 for +/-15%
        distribution: 'log' (log-uniform, many low-priced sales) or 'uniform'
        seed: Random seed for reproducibility

    Returns:
        List of (sale_price, assessed_value) tuples
    """
    n_rows, min_price, max_price, distribution = _normalize(
        n_rows, min_price, max_price, distribution
    )
    max_error = max(0.0, max_error)
    rng = np.random.default_rng(seed)

    prices = _sample_prices(rng, n_rows, min_price, max_price, distribution)
    magnitude = max_error * rng.random(n_rows)
    sign = np.where(rng.random(n_rows) < 0.5, -1.0, 1.0)
    assessed = np.maximum(np.round(prices * (1.0 + sign * magnitude)), 0.0)

    return list(zip(prices.tolist(), assessed.tolist()))


def generate_positive_bias_sales(
    n_rows: int = 1000,
    min_price: float = 10000.0,
    max_price: float = 3000000.0,
    distribution: Distribution = "log",
    seed: int | None = None,
) -> list[tuple[float, float]]:
    """
    Generate pairs with assessed = price**2, an extreme progressive pattern.

    The assessment ratio equals the sale price, so PRB and VEI are strongly
    positive. Arguments are as for generate_sales().
    """
    n_rows, min_price, max_price, distribution = _normalize(
        n_rows, min_price, max_price, distribution
    )
    rng = np.random.default_rng(seed)

    prices = _sample_prices(rng, n_rows, min_price, max_price, distribution)
    assessed = np.round(prices * prices)

    return list(zip(prices.tolist(), assessed.tolist()))


def _normalize(
    n_rows: int, min_price: float, max_price: float, distribution: str
) -> tuple[int, float, float, str]:
    n_rows = max(1, int(n_rows))
    min_price = max(0.0, float(min_price))
    max_price = max(min_price, float(max_price))
    if distribution not in ("uniform", "log"):
        distribution = "log"
    return n_rows, min_price, max_price, distribution


def _sample_prices(
    rng: np.random.Generator,
    n: int,
    min_price: float,
    max_price: float,
    distribution: str,
) -> NDArray[np.float64]:
    """Sample whole-dollar prices, never below 1."""
    u = rng.random(n)
    if distribution == "uniform":
        prices = min_price + (max_price - min_price) * u
    else:
        # log(0) is -inf; a zero minimum samples from $1 upward
        ln_min = np.log(max(min_price, 1.0))
        ln_max = np.log(max(max_price, 1.0))
        prices = np.exp(ln_min + (ln_max - ln_min) * u)
    return np.maximum(np.round(prices), 1.0)
