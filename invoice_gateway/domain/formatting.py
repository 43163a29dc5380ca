"""Currency formatting and numeric coercion for view records"""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from invoice_gateway.domain.models import Number

CENTS = Decimal("0.01")


def to_number(value: Any) -> Number:
    """
    Coerce a driver value to a plain Python number.

    Drivers hand back NUMERIC/SUM results as Decimal (PostgreSQL) or int
    (SQLite), and some return numeric text. Integral values come back as int,
    everything else as float.

    Raises:
        TypeError: value is not numeric at all (including bool and None)
        ValueError: value is numeric text that does not parse, or not finite
    """
    if isinstance(value, bool):
        raise TypeError("Expected a number, got bool")

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Not a finite number: {value!r}")
        return int(value) if value.is_integer() else value

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Not a finite number: {value!r}")
        return int(value) if value == value.to_integral_value() else float(value)

    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
        return to_number(parsed)

    raise TypeError(f"Expected a number, got {type(value).__name__}")


def to_int(value: Any) -> int:
    """Coerce a driver value to int, rejecting fractional values"""
    number = to_number(value)
    if isinstance(number, float):
        raise ValueError(f"Expected an integral value, got {value!r}")
    return number


def cents_to_dollars(amount_cents: int) -> float:
    """Convert stored cents to a dollar amount (12345 -> 123.45)"""
    return amount_cents / 100


def format_currency(amount_cents: Number) -> str:
    """
    Format an amount in cents as US dollars.

    Examples:
        12345   -> "$123.45"
        100000  -> "$1,000.00"
        -500    -> "-$5.00"
    """
    dollars = (Decimal(amount_cents) / 100).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
