"""
Strike searches for a target delta or a target premium.

Both searches wrap the shared Black-Scholes engine in an evaluator and
hand it to the bisection solver with the option kind's monotonicity.
Inputs are in engine units: time in years, rate and volatility as
fractions.
"""

import math

from strikefinder.core.black_scholes import black_scholes_price, delta
from strikefinder.solvers.bisection import (
    ABS_DELTA_MONOTONICITY,
    PREMIUM_MONOTONICITY,
    bisect_strike,
)
from strikefinder.utils.constants import (
    DELTA_TOLERANCE,
    MAX_BISECTION_ITERATIONS,
    PREMIUM_TOLERANCE,
)
from strikefinder.utils.types import OptionKind, OptionType, StrikeSolveResult


def find_strike_for_delta(
    S: float,
    target_delta: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType,
    min_strike: float,
    max_strike: float,
    tolerance: float = DELTA_TOLERANCE,
    max_iterations: int = MAX_BISECTION_ITERATIONS,
) -> StrikeSolveResult:
    """
    Solve for the strike whose delta matches target_delta.

    The comparison is made on absolute deltas, so a put target may be
    passed signed (-0.30) or unsigned (0.30).

    Args:
        S: Spot price
        target_delta: Raw per-unit delta to reach
        T, r, sigma: Standard Black-Scholes parameters
        option_type: "call" or "put"
        min_strike: Lower bound of the search
        max_strike: Upper bound of the search
        tolerance: Tolerance in delta units
        max_iterations: Maximum bisection iterations

    Returns:
        StrikeSolveResult with the unrounded strike; value is |delta|

    Example:
        >>> result = find_strike_for_delta(828, 0.31, 18 / 365, 0.065, 0.20,
        ...                                "call", 828 * 0.7, 828 * 1.5)
        >>> 840 < result.strike < 860
        True
    """
    kind = OptionKind(option_type)

    def objective(strike: float) -> float:
        return abs(delta(S, strike, T, r, sigma, kind))

    return bisect_strike(
        objective,
        abs(target_delta),
        min_strike,
        max_strike,
        ABS_DELTA_MONOTONICITY[kind],
        tolerance=tolerance,
        max_iterations=max_iterations,
    )


def find_strike_for_premium(
    S: float,
    T: float,
    r: float,
    sigma: float,
    target_premium: float,
    option_type: OptionType,
    min_strike: float,
    max_strike: float,
    tolerance: float = PREMIUM_TOLERANCE,
    max_iterations: int = MAX_BISECTION_ITERATIONS,
) -> StrikeSolveResult:
    """
    Solve for the strike whose Black-Scholes premium equals target_premium.

    Args:
        S: Spot price
        T, r, sigma: Standard Black-Scholes parameters
        target_premium: Premium to reach
        option_type: "call" or "put"
        min_strike: Lower bound of the search
        max_strike: Upper bound of the search
        tolerance: Tolerance in currency units
        max_iterations: Maximum bisection iterations

    Returns:
        StrikeSolveResult with the unrounded strike; value is the premium
    """
    kind = OptionKind(option_type)

    def objective(strike: float) -> float:
        return black_scholes_price(S, strike, T, r, sigma, kind)

    return bisect_strike(
        objective,
        target_premium,
        min_strike,
        max_strike,
        PREMIUM_MONOTONICITY[kind],
        tolerance=tolerance,
        max_iterations=max_iterations,
    )


def round_strike(strike: float) -> float:
    """Round a solved strike to the nearest integer, halves rounding up."""
    return float(math.floor(strike + 0.5))
