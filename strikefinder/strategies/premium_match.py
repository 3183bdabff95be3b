"""
Premium matching across option kinds.

Given the last traded price of a put (or call), find the strike of the
opposite kind whose theoretical premium equals that price.
"""

from typing import Optional

from strikefinder.core.black_scholes import black_scholes_price, years_to_expiry
from strikefinder.solvers.strike_search import find_strike_for_premium, round_strike
from strikefinder.utils.constants import PREMIUM_MATCH_STRIKE_BOUNDS, PREMIUM_TOLERANCE
from strikefinder.utils.logging_config import get_logger
from strikefinder.utils.types import MarketParameters, OptionQuote, PremiumMatchResult

logger = get_logger("strategies.premium_match")


def match_premium(
    quote: OptionQuote,
    market: MarketParameters,
    strike_bounds: Optional[tuple[float, float]] = None,
    tolerance: float = PREMIUM_TOLERANCE,
) -> PremiumMatchResult:
    """
    Find the opposite-kind strike priced at the quote's LTP.

    The search runs over [0.5·S, 1.8·S] by default. The reported premium
    is recomputed at the rounded strike, so it can differ from the LTP by
    more than the search tolerance.

    Args:
        quote: Observed option (kind, strike, LTP)
        market: Spot, expiry, volatility and rate
        strike_bounds: Search bracket as multiples of spot
        tolerance: Premium tolerance for the search

    Returns:
        PremiumMatchResult with the opposite kind, rounded strike, premium
        at that strike and the input quote
    """
    S = market.spot
    T = years_to_expiry(market.days_to_expiry)
    r = market.risk_free_rate
    sigma = market.volatility
    low_multiple, high_multiple = strike_bounds or PREMIUM_MATCH_STRIKE_BOUNDS

    target_kind = quote.kind.opposite()
    solve = find_strike_for_premium(
        S,
        T,
        r,
        sigma,
        quote.ltp,
        target_kind,
        S * low_multiple,
        S * high_multiple,
        tolerance=tolerance,
    )

    strike = round_strike(solve.strike)
    premium = black_scholes_price(S, strike, T, r, sigma, target_kind)

    logger.debug(
        "Matched %s @ %s (LTP %.2f) with %s @ %s (premium %.4f)",
        quote.kind.value,
        quote.strike,
        quote.ltp,
        target_kind.value,
        strike,
        premium,
    )

    return PremiumMatchResult(
        target_kind=target_kind,
        strike=strike,
        premium=premium,
        quote=quote,
        solve=solve,
    )
