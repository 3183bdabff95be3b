"""
Entry points in form units.

Rates and volatilities are taken as percentages and expiry as calendar
days, the way they are entered on the pricing forms, and converted to
engine units before calling the core.
"""

from strikefinder.core.black_scholes import (
    black_scholes_price,
    calculate_greeks,
    years_to_expiry,
)
from strikefinder.solvers import strike_search
from strikefinder.strategies.premium_match import match_premium
from strikefinder.strategies.rebalance import rebalance
from strikefinder.utils.constants import MAX_BISECTION_ITERATIONS, PREMIUM_TOLERANCE
from strikefinder.utils.types import Greeks, OptionType

__all__ = [
    "greeks",
    "price",
    "find_strike_for_delta",
    "find_strike_for_premium",
    "rebalance",
    "match_premium",
]


def greeks(
    spot: float,
    strike: float,
    days_to_expiry: float,
    rate_pct: float,
    vol_pct: float,
    option_type: OptionType,
) -> Greeks:
    """Delta, d1 and d2 for one option."""
    return calculate_greeks(
        spot,
        strike,
        years_to_expiry(days_to_expiry),
        rate_pct / 100.0,
        vol_pct / 100.0,
        option_type,
    )


def price(
    spot: float,
    strike: float,
    days_to_expiry: float,
    rate_pct: float,
    vol_pct: float,
    option_type: OptionType,
) -> float:
    """Black-Scholes premium for one option."""
    return black_scholes_price(
        spot,
        strike,
        years_to_expiry(days_to_expiry),
        rate_pct / 100.0,
        vol_pct / 100.0,
        option_type,
    )


def find_strike_for_delta(
    spot: float,
    target_delta: float,
    days_to_expiry: float,
    rate_pct: float,
    vol_pct: float,
    option_type: OptionType,
    min_strike: float,
    max_strike: float,
) -> float:
    """
    Strike whose delta is closest to target_delta within the bounds.

    Returns the unrounded best-effort strike; use
    strike_search.find_strike_for_delta directly to see whether the
    target was reachable.
    """
    result = strike_search.find_strike_for_delta(
        spot,
        target_delta,
        years_to_expiry(days_to_expiry),
        rate_pct / 100.0,
        vol_pct / 100.0,
        option_type,
        min_strike,
        max_strike,
    )
    return result.strike


def find_strike_for_premium(
    spot: float,
    days_to_expiry: float,
    rate_pct: float,
    vol_pct: float,
    target_premium: float,
    option_type: OptionType,
    min_strike: float,
    max_strike: float,
    tolerance: float = PREMIUM_TOLERANCE,
    max_iterations: int = MAX_BISECTION_ITERATIONS,
) -> float:
    """Strike whose premium is closest to target_premium within the bounds."""
    result = strike_search.find_strike_for_premium(
        spot,
        years_to_expiry(days_to_expiry),
        rate_pct / 100.0,
        vol_pct / 100.0,
        target_premium,
        option_type,
        min_strike,
        max_strike,
        tolerance=tolerance,
        max_iterations=max_iterations,
    )
    return result.strike
