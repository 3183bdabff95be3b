"""
Command-line interface for the strike finder.

This CLI provides access to:
- Option pricing and delta (Black-Scholes)
- Strike search for a target delta or premium
- Delta-neutral rebalancing of a two-leg position
- Premium matching across option kinds

Volatility and rate are entered in percent and expiry in days.
"""

import click

from strikefinder import api
from strikefinder.utils.constants import (
    DEFAULT_DAYS_TO_EXPIRY,
    DEFAULT_RATE_PCT,
    DEFAULT_SPOT,
    DEFAULT_VOLATILITY_PCT,
    PREMIUM_MATCH_STRIKE_BOUNDS,
    REBALANCE_STRIKE_BOUNDS,
)
from strikefinder.utils.logging_config import setup_logging
from strikefinder.utils.types import LegToFind, MarketParameters, OptionLeg, OptionQuote

KIND_CHOICE = click.Choice(["call", "put"])
SIDE_CHOICE = click.Choice(["long", "short"])


def market_options(func):
    """Attach the shared market data options to a command."""
    options = [
        click.option("--spot", "-S", type=float, default=DEFAULT_SPOT, show_default=True, help="Spot price"),
        click.option("--days", "-d", type=int, default=DEFAULT_DAYS_TO_EXPIRY, show_default=True, help="Days to expiry"),
        click.option("--vol", "-v", type=float, default=DEFAULT_VOLATILITY_PCT, show_default=True, help="Volatility (%)"),
        click.option("--rate", "-r", type=float, default=DEFAULT_RATE_PCT, show_default=True, help="Risk-free rate (%)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version="1.0.0")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write logs to this file")
def cli(log_level, log_file):
    """Strike Finder - Black-Scholes strike solving for delta and premium targets."""
    setup_logging(log_level, log_file)


@cli.command()
@market_options
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--type", "-t", type=KIND_CHOICE, default="call")
def price(spot, days, vol, rate, strike, type):
    """Calculate option premium using Black-Scholes."""
    try:
        premium = api.price(spot, strike, days, rate, vol, type)
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return
    click.echo(f"\n{type.capitalize()} Option Price: {premium:.4f}")


@cli.command()
@market_options
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--type", "-t", type=KIND_CHOICE, default="call")
def greeks(spot, days, vol, rate, strike, type):
    """Calculate delta, d1 and d2."""
    try:
        values = api.greeks(spot, strike, days, rate, vol, type)
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(f"\nGreeks for {type.capitalize()} Option:")
    click.echo(f"  Delta:  {values.delta:>10.6f}")
    click.echo(f"  d1:     {values.d1:>10.6f}")
    click.echo(f"  d2:     {values.d2:>10.6f}")


@cli.command("strike-for-delta")
@market_options
@click.option("--delta", "target_delta", type=float, required=True, help="Target raw delta")
@click.option("--type", "-t", type=KIND_CHOICE, default="call")
@click.option("--min-strike", type=float, default=None, help="Lower bound (default 0.7 x spot)")
@click.option("--max-strike", type=float, default=None, help="Upper bound (default 1.5 x spot)")
def strike_for_delta(spot, days, vol, rate, target_delta, type, min_strike, max_strike):
    """Find the strike with a given delta."""
    min_strike = spot * REBALANCE_STRIKE_BOUNDS[0] if min_strike is None else min_strike
    max_strike = spot * REBALANCE_STRIKE_BOUNDS[1] if max_strike is None else max_strike
    try:
        strike = api.find_strike_for_delta(
            spot, target_delta, days, rate, vol, type, min_strike, max_strike
        )
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return
    click.echo(f"\n{type.capitalize()} strike for delta {target_delta:.4f}: {strike:.2f}")


@cli.command("strike-for-premium")
@market_options
@click.option("--premium", "-p", type=float, required=True, help="Target premium")
@click.option("--type", "-t", type=KIND_CHOICE, default="call")
@click.option("--min-strike", type=float, default=None, help="Lower bound (default 0.5 x spot)")
@click.option("--max-strike", type=float, default=None, help="Upper bound (default 1.8 x spot)")
def strike_for_premium(spot, days, vol, rate, premium, type, min_strike, max_strike):
    """Find the strike priced at a given premium."""
    min_strike = spot * PREMIUM_MATCH_STRIKE_BOUNDS[0] if min_strike is None else min_strike
    max_strike = spot * PREMIUM_MATCH_STRIKE_BOUNDS[1] if max_strike is None else max_strike
    try:
        strike = api.find_strike_for_premium(
            spot, days, rate, vol, premium, type, min_strike, max_strike
        )
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return
    click.echo(f"\n{type.capitalize()} strike for premium {premium:.2f}: {strike:.2f}")


@cli.command()
@market_options
@click.option("--type", "-t", type=KIND_CHOICE, default="call", help="Existing leg type")
@click.option("--strike", "-K", type=float, required=True, help="Existing leg strike")
@click.option("--quantity", "-q", type=int, default=1, show_default=True, help="Lots")
@click.option("--side", type=SIDE_CHOICE, default="short", help="Existing leg side")
@click.option("--find-type", type=KIND_CHOICE, default="put", help="Balancing leg type")
@click.option("--find-side", type=SIDE_CHOICE, default="short", help="Balancing leg side")
def rebalance(spot, days, vol, rate, type, strike, quantity, side, find_type, find_side):
    """Find the balancing leg for a delta-neutral position."""
    try:
        market = MarketParameters.from_percent(spot, days, vol, rate)
        existing = OptionLeg(kind=type, strike=strike, quantity=quantity, side=side)
        result = api.rebalance(existing, LegToFind(kind=find_type, side=find_side), market)
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(f"\nExisting Leg Delta:  {result.existing_position_delta:>8.4f}")
    click.echo(f"New Leg Delta:       {result.new_position_delta:>8.4f}")
    click.echo(f"Combined Net Delta:  {result.net_delta:>8.4f}")
    click.echo(f"\nRecommended Trade: {result.summary()}")
    if not result.solve.converged:
        click.echo(f"Warning: {result.solve.message}", err=True)


@cli.command("match-premium")
@market_options
@click.option("--type", "-t", type=KIND_CHOICE, default="put", help="Input option type")
@click.option("--strike", "-K", type=float, required=True, help="Input option strike")
@click.option("--ltp", type=float, required=True, help="Input option last traded price")
def match_premium(spot, days, vol, rate, type, strike, ltp):
    """Find the opposite option strike with the same premium."""
    try:
        market = MarketParameters.from_percent(spot, days, vol, rate)
        result = api.match_premium(OptionQuote(kind=type, strike=strike, ltp=ltp), market)
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(
        f"\nMatching {result.target_kind.value.upper()} Strike: {result.strike:g}"
    )
    click.echo(f"Computed premium: {result.premium:.2f}")
    if not result.solve.converged:
        click.echo(f"Warning: {result.solve.message}", err=True)


if __name__ == "__main__":
    cli()
