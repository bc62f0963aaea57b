"""Pytest fixtures for ratiostudy tests."""

import pytest


@pytest.fixture
def equal_ratio_pairs() -> list[tuple[int, int]]:
    """
    Ten sales from $100k to $1M, each assessed at exactly its sale price.

    Every ratio is 1.0: perfect level, no dispersion, no price bias.
    """
    return [(100000 * k, 100000 * k) for k in range(1, 11)]


@pytest.fixture
def mixed_validity_pairs() -> list[tuple]:
    """
    Seven raw rows: one non-numeric, one with a zero sale price, five valid.

    Valid rows include string fields with thousands separators.
    """
    return [
        ("abc", 100000),
        (0, 50000),
        (150000, 140000),
        ("250,000", "245,000"),
        (320000, 300000),
        ("410,000", 395000),
        (500000, "480,000"),
    ]


@pytest.fixture
def two_row_pairs() -> list[tuple[int, int]]:
    """Only two valid sales: too few for PRB and VEI."""
    return [(100000, 95000), (200000, 210000)]


@pytest.fixture
def rising_ratio_pairs() -> list[tuple[float, float]]:
    """
    Twenty sales whose ratio rises with sale price.

    ratio_i = 0.5 + 0.3 * sale_i / max(sale), so higher-priced properties
    are assessed at higher ratios.
    """
    sales = [50000.0 * k for k in range(1, 21)]
    top = max(sales)
    return [(s, s * (0.5 + 0.3 * s / top)) for s in sales]
