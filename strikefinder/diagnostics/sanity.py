"""
Consistency checks on engine and solver output.

This module implements checks that a caller can run on computed values
before trusting them:
- Put-call parity of the engine's premiums
- Delta range by option kind
- Premium bounds
- CDF approximation accuracy against scipy
- Net delta of a rebalanced position

Every check returns a SanityCheck and never raises on a failed condition.
"""

import math
from typing import Iterable

from strikefinder.core.black_scholes import black_scholes_price, clamp_time
from strikefinder.core.distributions import exact_normal_cdf, normal_cdf
from strikefinder.utils.constants import (
    CDF_ACCURACY_TOLERANCE,
    NET_DELTA_TOLERANCE,
    PARITY_TOLERANCE,
)
from strikefinder.utils.types import OptionKind, OptionType, RebalanceResult, SanityCheck


def check_put_call_parity(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    tolerance: float = PARITY_TOLERANCE,
) -> SanityCheck:
    """
    Validate put-call parity of the engine's premiums.

    Put-call parity:
        C - P = S - K·e^(-rT)

    Args:
        S, K, T, r, sigma: Standard Black-Scholes parameters
        tolerance: Tolerance for parity check

    Returns:
        SanityCheck with validation results
    """
    T = clamp_time(T)
    call_price = black_scholes_price(S, K, T, r, sigma, OptionKind.CALL)
    put_price = black_scholes_price(S, K, T, r, sigma, OptionKind.PUT)

    lhs = call_price - put_price
    rhs = S - K * math.exp(-r * T)
    diff = abs(lhs - rhs)
    is_valid = diff < tolerance

    violations = []
    if not is_valid:
        violations.append(
            f"Put-call parity violated: C - P = {lhs:.6f}, "
            f"S - K·e^(-rT) = {rhs:.6f}, diff = {diff:.6f}"
        )

    details = {"parity_lhs": lhs, "parity_rhs": rhs, "difference": diff}
    return SanityCheck(is_valid=is_valid, violations=violations, details=details)


def check_delta_range(delta_value: float, option_type: OptionType) -> SanityCheck:
    """Call delta must lie in [0, 1], put delta in [-1, 0]."""
    kind = OptionKind(option_type)
    lower, upper = (0.0, 1.0) if kind is OptionKind.CALL else (-1.0, 0.0)
    is_valid = lower <= delta_value <= upper

    violations = []
    if not is_valid:
        violations.append(
            f"{kind.value.capitalize()} delta {delta_value:.6f} "
            f"outside [{lower:g}, {upper:g}]"
        )

    details = {"delta": delta_value, "lower": lower, "upper": upper}
    return SanityCheck(is_valid=is_valid, violations=violations, details=details)


def check_price_bounds(
    price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    option_type: OptionType,
    tolerance: float = PARITY_TOLERANCE,
) -> SanityCheck:
    """
    Validate a premium against no-arbitrage bounds.

    Checks:
    1. Premium is non-negative
    2. Call premium <= S
    3. Put premium <= K·e^(-rT)

    Args:
        price: Premium to check
        S, K, T, r: Standard parameters
        option_type: "call" or "put"
        tolerance: Tolerance for floating point comparisons

    Returns:
        SanityCheck with validation results
    """
    kind = OptionKind(option_type)
    upper = S if kind is OptionKind.CALL else K * math.exp(-r * clamp_time(T))

    violations = []
    details: dict[str, object] = {}

    non_negative = price >= 0.0
    details["non_negative"] = non_negative
    if not non_negative:
        violations.append(f"{kind.value.capitalize()} price {price:.4f} is negative")

    below_upper = price <= upper + tolerance
    details["upper_bound"] = below_upper
    if not below_upper:
        violations.append(
            f"{kind.value.capitalize()} price {price:.4f} above upper bound {upper:.4f}"
        )

    return SanityCheck(is_valid=not violations, violations=violations, details=details)


def check_cdf_accuracy(
    points: Iterable[float],
    tolerance: float = CDF_ACCURACY_TOLERANCE,
) -> SanityCheck:
    """
    Compare the polynomial CDF approximation with scipy's exact CDF.

    Args:
        points: Values of x at which to compare
        tolerance: Maximum allowed absolute difference

    Returns:
        SanityCheck whose details hold the maximum error and where it occurred
    """
    violations = []
    max_error = 0.0
    worst_x = None

    for x in points:
        error = abs(normal_cdf(x) - exact_normal_cdf(x))
        if error > max_error:
            max_error, worst_x = error, x
        if error > tolerance:
            violations.append(f"CDF approximation error {error:.2e} at x={x:g}")

    details = {"max_error": max_error, "worst_x": worst_x}
    return SanityCheck(is_valid=not violations, violations=violations, details=details)


def check_rebalance(
    result: RebalanceResult,
    tolerance: float = NET_DELTA_TOLERANCE,
) -> SanityCheck:
    """
    Check that a rebalanced position is close to delta-neutral.

    Args:
        result: Output of the rebalancer
        tolerance: Maximum allowed |net delta|

    Returns:
        SanityCheck with validation results
    """
    violations = []

    neutral = abs(result.net_delta) < tolerance
    if not neutral:
        violations.append(
            f"Net delta {result.net_delta:.4f} exceeds tolerance {tolerance:g}"
        )
    if not result.solve.converged:
        violations.append(f"Strike search did not converge: {result.solve.message}")

    details = {
        "net_delta": result.net_delta,
        "delta_neutral": neutral,
        "converged": result.solve.converged,
    }
    return SanityCheck(is_valid=not violations, violations=violations, details=details)
