"""
Data types and structures for strike solving.

This module defines the option kind and position side enumerations,
the market and leg records supplied by callers, and the result records
returned by the solvers and strategies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union


class OptionKind(str, Enum):
    """Option type. Compares equal to the plain strings "call" and "put"."""

    CALL = "call"
    PUT = "put"

    def opposite(self) -> "OptionKind":
        return _OPPOSITE_KIND[self]


_OPPOSITE_KIND = {
    OptionKind.CALL: OptionKind.PUT,
    OptionKind.PUT: OptionKind.CALL,
}


class PositionSide(str, Enum):
    """Long or short holding; only used to sign position deltas."""

    LONG = "long"
    SHORT = "short"

    @property
    def sign(self) -> int:
        return _SIDE_SIGN[self]


_SIDE_SIGN = {
    PositionSide.LONG: 1,
    PositionSide.SHORT: -1,
}

OptionType = Union[OptionKind, Literal["call", "put"]]

SolveStatus = Literal["tolerance", "bracket", "max_iterations"]


@dataclass(frozen=True)
class MarketParameters:
    """
    Immutable market inputs for one computation.

    Attributes:
        spot: Current price of the underlying
        days_to_expiry: Calendar days to expiry; non-positive values are
            clamped to a small positive time when converted to years
        volatility: Annualized volatility as a fraction (0.20 for 20%)
        risk_free_rate: Annualized risk-free rate as a fraction
    """
    spot: float
    days_to_expiry: float
    volatility: float
    risk_free_rate: float

    def __post_init__(self) -> None:
        if self.spot <= 0:
            raise ValueError(f"Spot price must be positive, got spot={self.spot}")
        if self.volatility <= 0:
            raise ValueError(
                f"Volatility must be positive, got volatility={self.volatility}"
            )

    @classmethod
    def from_percent(
        cls,
        spot: float,
        days_to_expiry: float,
        volatility_pct: float,
        risk_free_rate_pct: float,
    ) -> "MarketParameters":
        """Build from percentage volatility and rate, as entered on a form."""
        return cls(
            spot=spot,
            days_to_expiry=days_to_expiry,
            volatility=volatility_pct / 100.0,
            risk_free_rate=risk_free_rate_pct / 100.0,
        )


@dataclass(frozen=True)
class OptionLeg:
    """
    One real or hypothetical option holding.

    Attributes:
        kind: Call or put
        strike: Strike price
        quantity: Number of lots (positive integer)
        side: Long or short
    """
    kind: OptionKind
    strike: float
    quantity: int = 1
    side: PositionSide = PositionSide.SHORT

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", OptionKind(self.kind))
        object.__setattr__(self, "side", PositionSide(self.side))
        if self.strike <= 0:
            raise ValueError(f"Strike price must be positive, got strike={self.strike}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Quantity must be a whole number of lots, got quantity={self.quantity!r}")
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive, got quantity={self.quantity}")

    def position_delta(self, raw_delta: float) -> float:
        """Scale a per-unit delta by quantity and sign it by side."""
        return raw_delta * self.quantity * self.side.sign


@dataclass(frozen=True)
class LegToFind:
    """Description of a leg whose strike is unknown."""
    kind: OptionKind
    side: PositionSide = PositionSide.SHORT

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", OptionKind(self.kind))
        object.__setattr__(self, "side", PositionSide(self.side))


@dataclass(frozen=True)
class OptionQuote:
    """
    An observed option price.

    Attributes:
        kind: Call or put
        strike: Strike price
        ltp: Last traded price (observed premium)
    """
    kind: OptionKind
    strike: float
    ltp: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", OptionKind(self.kind))


@dataclass
class Greeks:
    """
    Delta and the Black-Scholes auxiliary terms.

    Attributes:
        delta: Raw per-unit delta, not signed by position
        d1: First standardized Black-Scholes term
        d2: d1 - σ√T
    """
    delta: float
    d1: float
    d2: float


@dataclass
class StrikeSolveResult:
    """
    Result from a bisection strike search.

    Attributes:
        strike: Best strike found (midpoint of the final bracket, unrounded)
        value: Evaluator value at that strike
        iterations: Number of midpoints evaluated
        converged: True if the target was met within tolerance or the
            bracket narrowed to the width floor around it; False if the
            iteration cap ended the search or the target is out of reach
        status: Which stopping rule ended the search
        message: Additional information about termination
    """
    strike: float
    value: float
    iterations: int
    converged: bool
    status: SolveStatus
    message: str = ""


@dataclass
class RebalanceResult:
    """
    Result from the delta-neutral rebalancer.

    Attributes:
        existing_leg: The leg already held
        existing_raw_delta: Per-unit delta of the existing leg
        existing_position_delta: Existing raw delta scaled and signed by position
        new_leg: The balancing leg, with its strike rounded to an integer
        new_raw_delta: Per-unit delta of the new leg at the rounded strike
        new_position_delta: New raw delta scaled and signed by position
        net_delta: existing_position_delta + new_position_delta
        target_raw_delta: Raw delta the search aimed for
        solve: Underlying strike search result
    """
    existing_leg: OptionLeg
    existing_raw_delta: float
    existing_position_delta: float
    new_leg: OptionLeg
    new_raw_delta: float
    new_position_delta: float
    net_delta: float
    target_raw_delta: float
    solve: StrikeSolveResult = field(repr=False)

    def summary(self) -> str:
        leg = self.new_leg
        return (
            f"{leg.side.value.upper()} {leg.quantity} LOT "
            f"{leg.kind.value.upper()} @ {leg.strike:g}"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "existing_kind": self.existing_leg.kind.value,
            "existing_side": self.existing_leg.side.value,
            "existing_strike": self.existing_leg.strike,
            "existing_raw_delta": self.existing_raw_delta,
            "existing_position_delta": self.existing_position_delta,
            "new_kind": self.new_leg.kind.value,
            "new_side": self.new_leg.side.value,
            "new_strike": self.new_leg.strike,
            "new_quantity": self.new_leg.quantity,
            "new_raw_delta": self.new_raw_delta,
            "new_position_delta": self.new_position_delta,
            "net_delta": self.net_delta,
            "converged": self.solve.converged,
        }


@dataclass
class PremiumMatchResult:
    """
    Result from the premium matcher.

    Attributes:
        target_kind: Opposite kind of the input quote
        strike: Solved strike, rounded to an integer
        premium: Theoretical premium at the rounded strike
        quote: Echo of the input quote
        solve: Underlying strike search result
    """
    target_kind: OptionKind
    strike: float
    premium: float
    quote: OptionQuote
    solve: StrikeSolveResult = field(repr=False)

    def summary(self) -> str:
        return (
            f"{self.quote.kind.value.upper()} @ {self.quote.strike:g} "
            f"(LTP {self.quote.ltp:.2f}) -> "
            f"{self.target_kind.value.upper()} @ {self.strike:g} "
            f"(premium {self.premium:.2f})"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "input_kind": self.quote.kind.value,
            "input_strike": self.quote.strike,
            "input_ltp": self.quote.ltp,
            "target_kind": self.target_kind.value,
            "strike": self.strike,
            "premium": self.premium,
            "converged": self.solve.converged,
        }


@dataclass
class SanityCheck:
    """
    Result from a consistency check on engine or solver output.

    Attributes:
        is_valid: Whether every condition held
        violations: List of specific violations detected
        details: Dictionary with the individual check results and values
    """
    is_valid: bool
    violations: list[str]
    details: dict[str, object]
