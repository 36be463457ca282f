"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from fintrack.domain.errors import InvalidArgumentError
from fintrack.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123.45", Decimal("123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("€ 12", Decimal("12")),
        ("  7 ", Decimal("7")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_rejects_garbage(raw):
    with pytest.raises(InvalidArgumentError):
        parse_amount(raw)
