"""Tests for amount parsing utilities."""

import pytest
from decimal import Decimal

from dremap.utils.amount_parser import parse_amount, parse_optional_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("-123.45", Decimal("-123.45")),
        ("R$ 123,45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("1.234,56", Decimal("1234.56")),
        ("-1.234,56", Decimal("-1234.56")),
        ("1.234.567", Decimal("1234567")),
        ("1,234,567", Decimal("1234567")),
        ("1,234", Decimal("1.234")),
        ("(123.45)", Decimal("-123.45")),
        ("(R$ 1.000,00)", Decimal("-1000.00")),
        ("0", Decimal("0")),
    ],
)
def test_parse_amount(text, expected):
    """Test parsing common amount formats."""
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "12a", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    """Test that unparseable amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_optional_amount_blank_is_zero():
    """Test that missing cells are read as zero."""
    assert parse_optional_amount(None) == Decimal("0")
    assert parse_optional_amount("") == Decimal("0")
    assert parse_optional_amount("  ") == Decimal("0")
    assert parse_optional_amount("10,5") == Decimal("10.5")
