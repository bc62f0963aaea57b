"""Configuration constants for ratio study computations."""

# Order-statistic confidence interval z values (only 90% and 95% are supported)
Z_90 = 1.64
Z_95 = 1.96
DEFAULT_CONFIDENCE = 0.95

# Regression (PRB)
SINGULAR_DET_TOLERANCE = 1e-12
LEVERAGE_CAP = 0.999999  # HC3 weights blow up as leverage -> 1
MIN_PRB_SAMPLE = 3

# Vertical equity (VEI) stratification
MIN_VEI_SAMPLE = 10
STRATA_BREAKPOINTS = ((50, 2), (500, 4))  # (max N, groups)
MAX_STRATA = 10
PROXY_SALE_WEIGHT = 0.5

# IAAO guidance ranges used for interpretation text
IAAO_LEVEL_RANGE = (0.90, 1.10)
IAAO_COD_MAX = 15.0  # percent
IAAO_PRD_RANGE = (0.98, 1.03)
IAAO_PRB_RANGE = (-0.05, 0.05)
IAAO_VEI_RANGE = (-10.0, 10.0)  # percent
