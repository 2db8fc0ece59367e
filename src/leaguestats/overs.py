"""Conversion between decimal-overs notation and legal ball counts.

Cricket records overs as ``overs.balls`` where the digit after the point is
the number of balls bowled in the current over (``4.3`` is four overs and
three balls, i.e. 27 balls). The value is *not* a decimal fraction, so every
run-rate computation has to go through a ball count first.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

BALLS_PER_OVER = 6

OversValue = Union[int, float, str, Decimal]


class InvalidOversFormat(ValueError):
    """Raised when a decimal-overs value cannot represent a legal ball count."""

    def __init__(self, value: object, reason: str):
        super().__init__(f"invalid overs value {value!r}: {reason}")
        self.value = value
        self.reason = reason


def _as_decimal(overs: OversValue) -> Decimal:
    if isinstance(overs, bool):
        raise InvalidOversFormat(overs, "boolean is not an overs value")
    try:
        # str() first so that 4.3 stays 4.3 instead of its binary expansion.
        value = Decimal(str(overs).strip())
    except (InvalidOperation, ValueError):
        raise InvalidOversFormat(overs, "not numeric") from None
    if not value.is_finite():
        raise InvalidOversFormat(overs, "not finite")
    return value


def overs_to_balls(overs: OversValue) -> int:
    """Return the number of legal balls represented by ``overs``.

    ``4.0`` is 24 balls and ``4.3`` is 27. A ``.0`` remainder is accepted and
    adds no balls (an over closed early, e.g. a declared innings).
    """

    value = _as_decimal(overs)
    if value < 0:
        raise InvalidOversFormat(overs, "overs cannot be negative")

    whole_overs = int(value)
    tenths = (value - whole_overs) * 10
    if tenths != tenths.to_integral_value():
        raise InvalidOversFormat(overs, "only one digit is allowed after the point")
    remainder_balls = int(tenths)
    if remainder_balls > BALLS_PER_OVER:
        raise InvalidOversFormat(overs, f"ball digit {remainder_balls} exceeds {BALLS_PER_OVER}")
    return whole_overs * BALLS_PER_OVER + remainder_balls


def balls_to_overs(balls: int) -> float:
    """Inverse of :func:`overs_to_balls` (27 balls -> ``4.3``)."""

    if balls < 0:
        raise ValueError(f"ball count cannot be negative, got {balls}")
    whole_overs, remainder = divmod(int(balls), BALLS_PER_OVER)
    return float(f"{whole_overs}.{remainder}")


def format_overs(balls: int) -> str:
    whole_overs, remainder = divmod(int(balls), BALLS_PER_OVER)
    return f"{whole_overs}.{remainder}"


def run_rate(runs: int, balls: int) -> float | None:
    """Runs per six-ball over, or ``None`` when no balls were bowled."""

    if balls <= 0:
        return None
    return runs / (balls / BALLS_PER_OVER)


__all__ = [
    "BALLS_PER_OVER",
    "InvalidOversFormat",
    "balls_to_overs",
    "format_overs",
    "overs_to_balls",
    "run_rate",
]
