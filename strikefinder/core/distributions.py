"""
Standard normal cumulative distribution functions.

This module provides the closed-form rational approximation used by the
pricing engine and an exact scipy-backed reference used to measure its
error. The approximation must stay as is: switching the engine to the
exact CDF shifts every delta and premium by up to ~1e-7.
"""

import math
from scipy.stats import norm

from strikefinder.utils.constants import (
    CDF_COEFFICIENTS,
    CDF_DENSITY,
    CDF_P,
    MAX_STANDARD_DEVIATIONS,
)


def normal_cdf(x: float) -> float:
    """
    Standard normal CDF via the Zelen-Severo polynomial approximation.

    Evaluates the five-term polynomial in t = 1 / (1 + p|x|) times the
    normal density, which gives the upper tail for |x|, and reflects it
    for positive x.

    Args:
        x: Value at which to evaluate the CDF

    Returns:
        Approximate probability that a standard normal variable is below x

    Examples:
        >>> abs(normal_cdf(0.0) - 0.5) < 1e-6
        True
        >>> abs(normal_cdf(1.96) - 0.975) < 1e-4
        True

    Notes:
        Absolute error is bounded by roughly 1e-7. normal_cdf(x) +
        normal_cdf(-x) is exactly 1 for x != 0.
    """
    t = 1.0 / (1.0 + CDF_P * abs(x))
    density = CDF_DENSITY * math.exp(-x * x / 2.0)

    # Horner form of b1 + b2*t + ... + b5*t^4
    poly = 0.0
    for coefficient in reversed(CDF_COEFFICIENTS):
        poly = coefficient + t * poly

    tail = density * t * poly
    return 1.0 - tail if x > 0 else tail


def exact_normal_cdf(x: float) -> float:
    """
    Exact standard normal CDF with bounds clamping.

    For |x| > 8 the CDF is effectively 0 or 1 in double precision, so we
    clamp to those values.

    Args:
        x: Value at which to evaluate the CDF

    Returns:
        Probability that a standard normal random variable is less than x
    """
    if x > MAX_STANDARD_DEVIATIONS:
        return 1.0
    if x < -MAX_STANDARD_DEVIATIONS:
        return 0.0

    return float(norm.cdf(x))
