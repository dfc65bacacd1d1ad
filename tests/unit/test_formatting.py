"""Unit tests for currency and percentage formatting."""

import pytest

from ledgercalc.sdk.formatting import (
    format_currency,
    format_number,
    format_percent,
    get_currency_code,
    round_half_up,
)


@pytest.mark.parametrize("value,expected", [
    (0.5, 1),
    (1.5, 2),
    (2.5, 3),
    (2.4, 2),
    (-0.5, -1),
    (-2.5, -3),
    (0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_format_percent():
    assert format_percent(0.7) == "70%"
    assert format_percent(0.125) == "13%"
    assert format_percent(1) == "100%"


@pytest.mark.parametrize("ratio,expected", [
    (0.285, "29%"),
    (0.145, "15%"),
    (0.575, "58%"),
    (0.284, "28%"),
])
def test_format_percent_exact_halves(ratio, expected):
    assert format_percent(ratio) == expected


def test_format_number():
    assert format_number(28) == "28"
    assert format_number(28.0) == "28"
    assert format_number(42.5) == "42.5"


class TestFormatCurrency:

    def test_whole_amounts(self):
        assert format_currency(1234.5, "£") == "£1,235"
        assert format_currency(0, "$") == "$0"

    def test_negative(self):
        assert format_currency(-50, "£") == "-£50"

    def test_negative_rounding_to_zero_has_no_sign(self):
        assert format_currency(-0.4, "£") == "£0"

    def test_decimals(self):
        assert format_currency(1234.5, "€", decimals=2) == "€1,234.50"
        assert format_currency(-50.25, "A$", decimals=2) == "-A$50.25"


def test_currency_codes():
    assert get_currency_code("$") == "USD"
    assert get_currency_code("€") == "EUR"
    assert get_currency_code("???") == "GBP"
