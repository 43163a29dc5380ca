"""Unit tests for currency formatting and numeric coercion"""

import pytest
from decimal import Decimal
from invoice_gateway.domain.formatting import cents_to_dollars, format_currency, to_int, to_number


@pytest.mark.parametrize(
    "cents, expected",
    [
        (0, "$0.00"),
        (5, "$0.05"),
        (12345, "$123.45"),
        (100000, "$1,000.00"),
        (123456789, "$1,234,567.89"),
        (-500, "-$5.00"),
    ],
)
def test_format_currency(cents, expected):
    assert format_currency(cents) == expected


def test_format_currency_is_deterministic():
    """Same input always yields the same string"""
    results = {format_currency(125632) for _ in range(10)}
    assert results == {"$1,256.32"}


def test_cents_to_dollars():
    assert cents_to_dollars(15795) == 157.95
    assert cents_to_dollars(0) == 0


def test_to_number_coerces_driver_values():
    """PostgreSQL returns SUM/NUMERIC as Decimal, some drivers return text"""
    assert to_number(2000) == 2000
    assert to_number(Decimal("2000")) == 2000
    assert isinstance(to_number(Decimal("2000")), int)
    assert to_number("1800") == 1800
    assert to_number(" 12.5 ") == 12.5
    assert to_number(3.0) == 3
    assert to_number(Decimal("0.25")) == 0.25


@pytest.mark.parametrize("value", [None, True, [1], object()])
def test_to_number_rejects_non_numeric_types(value):
    with pytest.raises(TypeError):
        to_number(value)


@pytest.mark.parametrize("value", ["abc", "", "NaN", float("inf")])
def test_to_number_rejects_bad_values(value):
    with pytest.raises(ValueError):
        to_number(value)


def test_to_int_rejects_fractions():
    assert to_int("42") == 42
    with pytest.raises(ValueError):
        to_int(Decimal("1.5"))
