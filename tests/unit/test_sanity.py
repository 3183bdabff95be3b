"""Unit tests for the consistency checks."""

from strikefinder.diagnostics.sanity import (
    check_cdf_accuracy,
    check_delta_range,
    check_price_bounds,
    check_put_call_parity,
    check_rebalance,
)
from strikefinder.strategies.rebalance import rebalance
from strikefinder.utils.types import LegToFind, OptionLeg


def test_put_call_parity_holds(scenario_params):
    result = check_put_call_parity(**scenario_params)
    assert result.is_valid
    assert result.details["difference"] < 1e-6


def test_put_call_parity_with_clamped_time():
    result = check_put_call_parity(S=828, K=830, T=0.0, r=0.065, sigma=0.20)
    assert result.is_valid


def test_delta_range_valid():
    assert check_delta_range(0.31, "call").is_valid
    assert check_delta_range(-0.31, "put").is_valid


def test_delta_range_violations():
    result = check_delta_range(-0.31, "call")
    assert not result.is_valid
    assert "Call delta" in result.violations[0]

    assert not check_delta_range(0.2, "put").is_valid


def test_price_bounds_valid():
    assert check_price_bounds(7.0, S=828, K=850, T=18 / 365, r=0.065, option_type="call").is_valid
    assert check_price_bounds(6.5, S=828, K=770, T=18 / 365, r=0.065, option_type="put").is_valid


def test_price_bounds_violations():
    negative = check_price_bounds(-1.0, S=828, K=850, T=18 / 365, r=0.065, option_type="call")
    assert not negative.is_valid
    assert negative.details["non_negative"] is False

    too_high = check_price_bounds(900.0, S=828, K=850, T=18 / 365, r=0.065, option_type="call")
    assert not too_high.is_valid
    assert too_high.details["upper_bound"] is False


def test_cdf_accuracy_default_tolerance():
    points = [x / 4.0 for x in range(-24, 25)]
    result = check_cdf_accuracy(points)

    assert result.is_valid
    assert result.details["max_error"] < 1e-6


def test_cdf_accuracy_reports_violations():
    result = check_cdf_accuracy([0.0, 1.0], tolerance=0.0)
    assert not result.is_valid
    assert len(result.violations) == 2


def test_rebalance_check(scenario_market):
    result = rebalance(
        OptionLeg("call", 850, 1, "short"), LegToFind("put", "short"), scenario_market
    )
    check = check_rebalance(result)

    assert check.is_valid
    assert check.details["delta_neutral"] is True


def test_rebalance_check_flags_unconverged(scenario_market):
    result = rebalance(
        OptionLeg("call", 850, 1, "short"),
        LegToFind("put", "short"),
        scenario_market,
        strike_bounds=(0.9, 0.95),
    )
    check = check_rebalance(result)

    assert not check.is_valid
    assert any("did not converge" in v for v in check.violations)
