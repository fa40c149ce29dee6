"""
Decimal string helpers for order quantities and prices.

Coinspot accepts amounts with at most 8 decimal places and rates (AUD)
with at most 6. Values are carried as strings end to end so nothing
passes through binary floating point.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import InvalidParameterError

AMOUNT_DECIMALS = 8
RATE_DECIMALS = 6

Number = Union[str, int, float, Decimal]


def _to_decimal(value: Number, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidParameterError(f"{field} is required")

    if isinstance(value, float):
        # str() gives the shortest repr, e.g. 0.1 -> "0.1"
        value = str(value)

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidParameterError(f"{field} is required")

    try:
        dec = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidParameterError(f"{field} is not a number: {value!r}")

    if not dec.is_finite():
        raise InvalidParameterError(f"{field} must be finite: {value!r}")
    if dec <= 0:
        raise InvalidParameterError(f"{field} must be positive: {value!r}")

    return dec


def decimal_places(value: Decimal) -> int:
    """Number of digits after the decimal point (0 for integers)."""
    exponent = value.as_tuple().exponent
    return max(0, -exponent)


def format_decimal(value: Number, places: int, field: str = "value") -> str:
    """
    Validate value and render it in plain fixed-point notation.

    The caller's digits are kept as given ("0.50" stays "0.50"). Trailing
    zeros do not count towards `places`; when they push the text past it
    they are dropped ("0.100000000" becomes "0.1"). Values with more
    significant decimals than `places` are rejected rather than rounded.

    Raises:
        InvalidParameterError: missing, non-numeric, non-positive or
            over-precise value.
    """
    dec = _to_decimal(value, field)

    if decimal_places(dec) <= places:
        return format(dec, "f")

    trimmed = dec.normalize()
    if decimal_places(trimmed) > places:
        raise InvalidParameterError(
            f"{field} allows at most {places} decimal places: {value!r}"
        )

    return format(trimmed, "f")


def format_amount(value: Number) -> str:
    """Coin amount, max 8 decimal places."""
    return format_decimal(value, AMOUNT_DECIMALS, field="amount")


def format_rate(value: Number) -> str:
    """AUD rate, max 6 decimal places."""
    return format_decimal(value, RATE_DECIMALS, field="rate")
