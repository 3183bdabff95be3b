"""
Numerical constants and tolerances for strike solving.

This module defines the time floor, the normal CDF approximation
coefficients, and the bisection search parameters shared by the
delta-neutral rebalancer and the premium matcher.
"""

# Time handling
DAYS_PER_YEAR = 365.0
MIN_TIME_TO_EXPIRY = 0.001  # Years; non-positive expiries are clamped to this

# Zelen-Severo normal CDF approximation (Abramowitz & Stegun 26.2.17)
CDF_P = 0.2316419
CDF_DENSITY = 0.3989423  # ~1/sqrt(2*pi), truncated as in the published table
CDF_COEFFICIENTS = (0.3193815, -0.3565638, 1.781478, -1.821256, 1.330274)

# Reference CDF bounds
MAX_STANDARD_DEVIATIONS = 8.0  # Beyond ±8σ, CDF is effectively 0 or 1

# Bisection solver parameters
DELTA_TOLERANCE = 0.001  # Delta units
PREMIUM_TOLERANCE = 0.01  # Currency units
MAX_BISECTION_ITERATIONS = 100
MIN_BRACKET_WIDTH = 0.5  # Strike units; search stops below this width

# Strike search brackets, as multiples of spot
REBALANCE_STRIKE_BOUNDS = (0.7, 1.5)
PREMIUM_MATCH_STRIKE_BOUNDS = (0.5, 1.8)

# Diagnostics tolerances
PARITY_TOLERANCE = 1e-6
CDF_ACCURACY_TOLERANCE = 1e-5
NET_DELTA_TOLERANCE = 0.05

# Default market scenario for the interfaces
DEFAULT_SPOT = 828.0
DEFAULT_DAYS_TO_EXPIRY = 18
DEFAULT_VOLATILITY_PCT = 20.0
DEFAULT_RATE_PCT = 6.5
