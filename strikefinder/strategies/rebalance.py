"""
Delta-neutral rebalancing of a two-leg option position.

Given one leg already held, find the strike of a second leg (of a chosen
kind and side, same quantity) whose position delta offsets the first, so
that the combined position is approximately delta-neutral. The typical
use is completing a short strangle: short call held, short put wanted.
"""

from typing import Optional

from strikefinder.core.black_scholes import delta, years_to_expiry
from strikefinder.solvers.strike_search import find_strike_for_delta, round_strike
from strikefinder.utils.constants import DELTA_TOLERANCE, REBALANCE_STRIKE_BOUNDS
from strikefinder.utils.logging_config import get_logger
from strikefinder.utils.types import (
    LegToFind,
    MarketParameters,
    OptionLeg,
    RebalanceResult,
)

logger = get_logger("strategies.rebalance")


def rebalance(
    existing_leg: OptionLeg,
    leg_to_find: LegToFind,
    market: MarketParameters,
    strike_bounds: Optional[tuple[float, float]] = None,
    tolerance: float = DELTA_TOLERANCE,
) -> RebalanceResult:
    """
    Find the balancing leg that makes the combined position delta ≈ 0.

    Workflow:
    1. Raw delta of the existing leg
    2. Existing position delta = raw × quantity, negated if short
    3. Target position delta for the new leg = -(existing position delta)
    4. Target raw delta = target / quantity, negated if the new leg is short
    5. Bisect over [0.7·S, 1.5·S] comparing |delta| with |target|
    6. Round the strike and recompute the new leg's deltas there
    7. Net delta = existing + new position deltas

    Args:
        existing_leg: Leg already held, strike known
        leg_to_find: Kind and side of the balancing leg
        market: Spot, expiry, volatility and rate
        strike_bounds: Search bracket as multiples of spot
        tolerance: Delta tolerance for the search

    Returns:
        RebalanceResult. net_delta is close to zero but not exact, because
        of the search tolerance and the strike rounding.

    Example:
        >>> market = MarketParameters.from_percent(828, 18, 20, 6.5)
        >>> result = rebalance(OptionLeg("call", 850, 1, "short"),
        ...                    LegToFind("put", "short"), market)
        >>> result.new_leg.strike < 828 and abs(result.net_delta) < 0.05
        True
    """
    S = market.spot
    T = years_to_expiry(market.days_to_expiry)
    r = market.risk_free_rate
    sigma = market.volatility
    low_multiple, high_multiple = strike_bounds or REBALANCE_STRIKE_BOUNDS

    existing_raw_delta = delta(S, existing_leg.strike, T, r, sigma, existing_leg.kind)
    existing_position_delta = existing_leg.position_delta(existing_raw_delta)

    # New leg is sized like the existing one
    quantity = existing_leg.quantity
    target_position_delta = -existing_position_delta
    target_raw_delta = target_position_delta / quantity * leg_to_find.side.sign

    solve = find_strike_for_delta(
        S,
        target_raw_delta,
        T,
        r,
        sigma,
        leg_to_find.kind,
        S * low_multiple,
        S * high_multiple,
        tolerance=tolerance,
    )

    new_leg = OptionLeg(
        kind=leg_to_find.kind,
        strike=round_strike(solve.strike),
        quantity=quantity,
        side=leg_to_find.side,
    )
    new_raw_delta = delta(S, new_leg.strike, T, r, sigma, new_leg.kind)
    new_position_delta = new_leg.position_delta(new_raw_delta)
    net_delta = existing_position_delta + new_position_delta

    logger.debug(
        "Rebalanced %s %s @ %s with %s %s @ %s, net delta %.4f",
        existing_leg.side.value,
        existing_leg.kind.value,
        existing_leg.strike,
        new_leg.side.value,
        new_leg.kind.value,
        new_leg.strike,
        net_delta,
    )

    return RebalanceResult(
        existing_leg=existing_leg,
        existing_raw_delta=existing_raw_delta,
        existing_position_delta=existing_position_delta,
        new_leg=new_leg,
        new_raw_delta=new_raw_delta,
        new_position_delta=new_position_delta,
        net_delta=net_delta,
        target_raw_delta=target_raw_delta,
        solve=solve,
    )
