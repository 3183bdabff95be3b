"""
Unit tests for Black-Scholes delta and premium.

This module validates:
1. Known analytical solutions
2. Put-call parity relationship
3. Delta ranges and monotonicity in strike
4. Time clamping and input validation
"""

import pytest
import math
import strikefinder.core.black_scholes as bs
from strikefinder.core.black_scholes import (
    black_scholes_price,
    calculate_greeks,
    clamp_time,
    d1_d2,
    delta,
    years_to_expiry,
)
from strikefinder.utils.constants import MIN_TIME_TO_EXPIRY
from strikefinder.utils.types import OptionKind


# ===========================
# Known Solutions Tests
# ===========================


def test_atm_call_known_solution(standard_params):
    """S=100, K=100, T=1, r=5%, σ=20% → Call ≈ 10.4506"""
    price = black_scholes_price(**standard_params, option_type="call")
    assert abs(price - 10.4506) < 0.01, f"Expected ~10.4506, got {price}"


def test_atm_put_known_solution(standard_params):
    """S=100, K=100, T=1, r=5%, σ=20% → Put ≈ 5.5735"""
    price = black_scholes_price(**standard_params, option_type="put")
    assert abs(price - 5.5735) < 0.01, f"Expected ~5.5735, got {price}"


def test_atm_call_delta_known_solution(standard_params):
    """ATM 1-year call delta ≈ 0.6368."""
    assert abs(delta(**standard_params, option_type="call") - 0.6368) < 1e-3


def test_scenario_call_delta(scenario_params):
    """Spot 828, strike 850, 18 days: call delta sits around 0.31."""
    call_delta = delta(**scenario_params, option_type="call")
    assert 0.30 <= call_delta <= 0.35


def test_enum_and_string_kinds_agree(scenario_params):
    assert delta(**scenario_params, option_type=OptionKind.PUT) == delta(
        **scenario_params, option_type="put"
    )


# ===========================
# Put-Call Parity Tests
# ===========================


@pytest.mark.parametrize(
    "S,K,T,r,sigma",
    [
        (100, 100, 1.0, 0.05, 0.20),  # ATM
        (110, 100, 1.0, 0.05, 0.20),  # ITM call
        (90, 100, 1.0, 0.05, 0.20),  # OTM call
        (828, 850, 18 / 365, 0.065, 0.20),  # Short-dated
        (828, 770, 18 / 365, 0.065, 0.35),  # Short-dated, high vol
    ],
)
def test_put_call_parity(S, K, T, r, sigma):
    """C - P = S - K·e^(-rT)."""
    call_price = black_scholes_price(S, K, T, r, sigma, "call")
    put_price = black_scholes_price(S, K, T, r, sigma, "put")

    lhs = call_price - put_price
    rhs = S - K * math.exp(-r * T)

    assert abs(lhs - rhs) < 1e-6


# ===========================
# Delta Tests
# ===========================


@pytest.mark.parametrize("K", [500, 700, 800, 828, 850, 900, 1200])
def test_delta_ranges(K):
    call_delta = delta(828, K, 18 / 365, 0.065, 0.20, "call")
    put_delta = delta(828, K, 18 / 365, 0.065, 0.20, "put")

    assert 0.0 <= call_delta <= 1.0
    assert -1.0 <= put_delta <= 0.0


def test_put_delta_is_call_delta_minus_one(scenario_params):
    call_delta = delta(**scenario_params, option_type="call")
    put_delta = delta(**scenario_params, option_type="put")
    assert put_delta == pytest.approx(call_delta - 1.0, abs=1e-12)


def test_abs_delta_monotonic_in_strike():
    """|call delta| falls and |put delta| rises as strike increases."""
    strikes = [750 + 10 * i for i in range(16)]
    calls = [abs(delta(828, k, 18 / 365, 0.065, 0.20, "call")) for k in strikes]
    puts = [abs(delta(828, k, 18 / 365, 0.065, 0.20, "put")) for k in strikes]

    assert all(a >= b for a, b in zip(calls, calls[1:]))
    assert all(a <= b for a, b in zip(puts, puts[1:]))


# ===========================
# Premium Tests
# ===========================


@pytest.mark.parametrize("K", [414, 600, 770, 828, 900, 1200, 1490])
def test_premium_non_negative(K):
    for kind in ("call", "put"):
        assert black_scholes_price(828, K, 18 / 365, 0.065, 0.20, kind) >= 0.0


def test_premium_monotonic_in_strike():
    """Call premium decreases and put premium increases with strike."""
    strikes = [750 + 10 * i for i in range(16)]
    calls = [black_scholes_price(828, k, 18 / 365, 0.065, 0.20, "call") for k in strikes]
    puts = [black_scholes_price(828, k, 18 / 365, 0.065, 0.20, "put") for k in strikes]

    assert all(a >= b for a, b in zip(calls, calls[1:]))
    assert all(a <= b for a, b in zip(puts, puts[1:]))


def test_deep_itm_call_near_intrinsic():
    S, K, T, r = 200.0, 100.0, 1.0, 0.05
    price = black_scholes_price(S, K, T, r, 0.20, "call")
    assert abs(price - (S - K * math.exp(-r * T))) < 0.05


# ===========================
# d1 / d2 and Time Tests
# ===========================


def test_d1_d2_relationship(standard_params):
    """d2 = d1 - σ√T."""
    d1_value, d2_value = d1_d2(**standard_params)
    expected = d1_value - standard_params["sigma"] * math.sqrt(standard_params["T"])
    assert abs(d2_value - expected) < 1e-12


def test_calculate_greeks_matches_components(scenario_params):
    greeks = calculate_greeks(**scenario_params, option_type="put")
    d1_value, d2_value = d1_d2(**scenario_params)

    assert greeks.delta == delta(**scenario_params, option_type="put")
    assert greeks.d1 == d1_value
    assert greeks.d2 == d2_value


def test_calculate_greeks_evaluates_d1_d2_once(scenario_params, monkeypatch):
    calls = []
    real_d1_d2 = bs.d1_d2

    def counting_d1_d2(*args):
        calls.append(args)
        return real_d1_d2(*args)

    monkeypatch.setattr(bs, "d1_d2", counting_d1_d2)
    greeks = bs.calculate_greeks(**scenario_params, option_type="call")

    assert len(calls) == 1
    assert greeks.delta == pytest.approx(delta(**scenario_params, option_type="call"), abs=1e-15)


@pytest.mark.parametrize("T", [0.0, -0.5])
def test_non_positive_time_is_clamped(T):
    clamped = d1_d2(828, 850, T, 0.065, 0.20)
    floor = d1_d2(828, 850, MIN_TIME_TO_EXPIRY, 0.065, 0.20)
    assert clamped == floor


def test_small_positive_time_not_clamped():
    assert clamp_time(0.0005) == 0.0005


def test_years_to_expiry():
    assert years_to_expiry(365) == 1.0
    assert years_to_expiry(18) == pytest.approx(18 / 365)
    assert years_to_expiry(0) == MIN_TIME_TO_EXPIRY
    assert years_to_expiry(-3) == MIN_TIME_TO_EXPIRY


# ===========================
# Validation Tests
# ===========================


@pytest.mark.parametrize(
    "S,K,sigma",
    [
        (0.0, 100.0, 0.2),
        (100.0, 0.0, 0.2),
        (100.0, -5.0, 0.2),
        (100.0, 100.0, 0.0),
        (100.0, 100.0, -0.1),
    ],
)
def test_invalid_inputs_raise(S, K, sigma):
    with pytest.raises(ValueError):
        black_scholes_price(S, K, 1.0, 0.05, sigma, "call")


def test_invalid_option_type_raises(standard_params):
    with pytest.raises(ValueError):
        delta(**standard_params, option_type="straddle")
