"""
Black-Scholes delta and premium for European calls and puts.

This module is the single pricing engine shared by the delta search and
the premium search. It uses the polynomial normal CDF approximation from
distributions.py throughout, so deltas and premiums agree between the
two solvers to the last bit.

Mathematical Background:
    d1 = [ln(S/K) + (r + σ²/2)T] / (σ√T)
    d2 = d1 - σ√T
    C  = S·N(d1) - K·e^(-rT)·N(d2)
    P  = K·e^(-rT)·N(-d2) - S·N(-d1)

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
"""

import math

from strikefinder.core.distributions import normal_cdf
from strikefinder.utils.constants import DAYS_PER_YEAR, MIN_TIME_TO_EXPIRY
from strikefinder.utils.types import Greeks, OptionKind, OptionType


def _validate_inputs(S: float, K: float, sigma: float) -> None:
    """
    Validate pricing inputs.

    Raises:
        ValueError: If spot, strike or volatility is not positive
    """
    if S <= 0:
        raise ValueError(f"Spot price must be positive, got S={S}")
    if K <= 0:
        raise ValueError(f"Strike price must be positive, got K={K}")
    if sigma <= 0:
        raise ValueError(f"Volatility must be positive, got sigma={sigma}")


def clamp_time(T: float) -> float:
    """Replace a non-positive time to expiry with MIN_TIME_TO_EXPIRY."""
    if T <= 0:
        return MIN_TIME_TO_EXPIRY
    return T


def years_to_expiry(days_to_expiry: float) -> float:
    """
    Convert calendar days to years, clamped to a positive floor.

    Examples:
        >>> years_to_expiry(365)
        1.0
        >>> years_to_expiry(0)
        0.001
    """
    return clamp_time(days_to_expiry / DAYS_PER_YEAR)


def d1_d2(S: float, K: float, T: float, r: float, sigma: float) -> tuple[float, float]:
    """
    Calculate the d1 and d2 terms of the Black-Scholes formula.

    Args:
        S: Current spot price
        K: Strike price
        T: Time to expiration in years (clamped if non-positive)
        r: Risk-free interest rate (annualized, continuous)
        sigma: Volatility (annualized standard deviation)

    Returns:
        Tuple (d1, d2)

    Raises:
        ValueError: If S, K or sigma is not positive
    """
    _validate_inputs(S, K, sigma)
    T = clamp_time(T)

    diffusion = sigma * math.sqrt(T)
    d1_value = (math.log(S / K) + (r + 0.5 * sigma ** 2) * T) / diffusion
    return d1_value, d1_value - diffusion


def _delta_from_d1(d1_value: float, kind: OptionKind) -> float:
    call_delta = normal_cdf(d1_value)
    if kind is OptionKind.CALL:
        return call_delta
    return call_delta - 1.0


def delta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate raw per-unit option delta (∂V/∂S).

    Call delta is N(d1) and lies in [0, 1]; put delta is N(d1) - 1 and
    lies in [-1, 0]. The value is not signed by long/short position.

    Args:
        S, K, T, r, sigma: Standard Black-Scholes parameters
        option_type: "call" or "put"

    Returns:
        Delta value
    """
    kind = OptionKind(option_type)
    d1_value, _ = d1_d2(S, K, T, r, sigma)
    return _delta_from_d1(d1_value, kind)


def black_scholes_price(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> float:
    """
    Calculate European option premium (call or put).

    Args:
        S: Current spot price
        K: Strike price
        T: Time to expiration in years (clamped if non-positive)
        r: Risk-free interest rate
        sigma: Volatility
        option_type: "call" or "put"

    Returns:
        Option premium, never negative

    Raises:
        ValueError: If option_type is not "call" or "put", or inputs are invalid

    Examples:
        >>> price = black_scholes_price(100, 100, 1.0, 0.05, 0.20, "call")
        >>> abs(price - 10.4506) < 0.01
        True
    """
    kind = OptionKind(option_type)
    d1_value, d2_value = d1_d2(S, K, T, r, sigma)
    discount_strike = K * math.exp(-r * clamp_time(T))

    if kind is OptionKind.CALL:
        premium = S * normal_cdf(d1_value) - discount_strike * normal_cdf(d2_value)
    else:
        premium = discount_strike * normal_cdf(-d2_value) - S * normal_cdf(-d1_value)

    # CDF approximation error can push far out-of-the-money values a hair below zero
    return max(premium, 0.0)


def calculate_greeks(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType = "call",
) -> Greeks:
    """
    Calculate delta together with d1 and d2.

    Example:
        >>> greeks = calculate_greeks(828, 850, 18 / 365, 0.065, 0.20, "call")
        >>> 0.30 < greeks.delta < 0.35
        True
    """
    kind = OptionKind(option_type)
    d1_value, d2_value = d1_d2(S, K, T, r, sigma)
    return Greeks(
        delta=_delta_from_d1(d1_value, kind),
        d1=d1_value,
        d2=d2_value,
    )
