"""
Bisection search over a strike interval.

This module implements a best-effort bisection for any scalar function
of strike that is monotonic over the search bracket. The direction of
monotonicity is supplied by the caller, usually looked up from one of
the per-option-kind tables below, because calls and puts move in
opposite directions as the strike rises.
"""

from enum import Enum
from typing import Callable

from strikefinder.utils.constants import MAX_BISECTION_ITERATIONS, MIN_BRACKET_WIDTH
from strikefinder.utils.logging_config import get_logger
from strikefinder.utils.types import OptionKind, StrikeSolveResult

logger = get_logger("solvers.bisection")


class Monotonicity(str, Enum):
    """Direction in which the evaluated quantity moves as strike increases."""

    INCREASING = "increasing"
    DECREASING = "decreasing"


# |delta| vs strike: a call's delta shrinks as strike rises, a put's grows
ABS_DELTA_MONOTONICITY = {
    OptionKind.CALL: Monotonicity.DECREASING,
    OptionKind.PUT: Monotonicity.INCREASING,
}

# Premium vs strike: calls get cheaper as strike rises, puts dearer
PREMIUM_MONOTONICITY = {
    OptionKind.CALL: Monotonicity.DECREASING,
    OptionKind.PUT: Monotonicity.INCREASING,
}


def _root_is_above(value: float, target: float, monotonicity: Monotonicity) -> bool:
    """Return True if the strike achieving target lies above the one giving value."""
    if monotonicity is Monotonicity.INCREASING:
        return value < target
    return value > target


def bisect_strike(
    evaluate: Callable[[float], float],
    target: float,
    low: float,
    high: float,
    monotonicity: Monotonicity,
    tolerance: float,
    max_iterations: int = MAX_BISECTION_ITERATIONS,
    min_width: float = MIN_BRACKET_WIDTH,
) -> StrikeSolveResult:
    """
    Find a strike in [low, high] where evaluate(strike) ≈ target.

    At each step the midpoint is evaluated. If it is within tolerance of
    the target it is returned immediately; otherwise the bracket is halved
    toward the side that must contain the target given the monotonicity.
    The search stops after max_iterations midpoints or once the bracket is
    no wider than min_width, and then returns the midpoint of the final
    bracket. It never raises for non-convergence.

    Args:
        evaluate: Function of strike, monotonic over [low, high]
        target: Value to reach
        low: Lower strike bound
        high: Upper strike bound
        monotonicity: Whether evaluate increases or decreases with strike
        tolerance: Absolute tolerance on evaluate(strike) - target
        max_iterations: Maximum number of midpoint evaluations
        min_width: Bracket width (strike units) at which the search stops

    Returns:
        StrikeSolveResult. converged is True when the tolerance was met or
        the bracket narrowed to min_width around the target. It is False
        when the iteration cap was hit first or the target lies outside the
        values reachable inside the initial bracket.

    Raises:
        ValueError: If low >= high

    Example:
        >>> result = bisect_strike(lambda k: k, 42.0, 0.0, 100.0,
        ...                        Monotonicity.INCREASING, tolerance=0.1)
        >>> abs(result.strike - 42.0) < 0.5
        True
    """
    if low >= high:
        raise ValueError(f"Search bounds must satisfy low < high, got [{low}, {high}]")

    monotonicity = Monotonicity(monotonicity)
    iterations = 0

    while iterations < max_iterations and high - low > min_width:
        mid = (low + high) / 2.0
        value = evaluate(mid)
        iterations += 1

        if abs(value - target) < tolerance:
            logger.debug(
                "Bisection met tolerance at strike %.4f after %d iterations",
                mid,
                iterations,
            )
            return StrikeSolveResult(
                strike=mid,
                value=value,
                iterations=iterations,
                converged=True,
                status="tolerance",
                message=f"Converged in {iterations} iterations (value tol)",
            )

        if _root_is_above(value, target, monotonicity):
            low = mid
        else:
            high = mid

    strike = (low + high) / 2.0
    value = evaluate(strike)
    status = "bracket" if high - low <= min_width else "max_iterations"

    # The final bracket straddles the target iff the endpoints fall on opposite sides
    value_low, value_high = evaluate(low), evaluate(high)
    bracketed = min(value_low, value_high) <= target <= max(value_low, value_high)
    converged = abs(value - target) < tolerance or (bracketed and status == "bracket")

    if converged:
        message = (
            f"Bracket narrowed to [{low:.4f}, {high:.4f}] after {iterations} iterations"
        )
        logger.debug(message)
    elif bracketed:
        message = (
            f"Iteration cap {max_iterations} reached with bracket "
            f"[{low:.4f}, {high:.4f}]; best estimate {strike:.4f} gives {value:.6f}"
        )
        logger.warning(message)
    else:
        message = (
            f"Target {target:.6f} not reachable in search bounds; "
            f"best estimate {strike:.4f} gives {value:.6f}"
        )
        logger.warning(message)

    return StrikeSolveResult(
        strike=strike,
        value=value,
        iterations=iterations,
        converged=converged,
        status=status,
        message=message,
    )
