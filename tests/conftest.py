"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest

from strikefinder.utils.logging_config import ROOT_LOGGER_NAME
from strikefinder.utils.types import MarketParameters


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any setup_logging() call made by a test (e.g. through the CLI)."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters."""
    return {
        "S": 100.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
    }


@pytest.fixture
def scenario_params():
    """Short-dated index scenario: spot 828, strike 850, 18 days, 20% vol, 6.5% rate."""
    return {
        "S": 828.0,
        "K": 850.0,
        "T": 18 / 365,
        "r": 0.065,
        "sigma": 0.20,
    }


@pytest.fixture
def scenario_market():
    """The scenario above as form inputs (percent vol and rate)."""
    return MarketParameters.from_percent(
        spot=828.0, days_to_expiry=18, volatility_pct=20.0, risk_free_rate_pct=6.5
    )
