"""Display formatting for currency amounts and percentages.

Rounding is half away from zero, matching how dashboard figures are shown.
Locale-specific separators are out of scope; amounts use ',' grouping.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CURRENCY_CODES = {
    "£": "GBP",
    "$": "USD",
    "€": "EUR",
    "¥": "JPY",
    "₹": "INR",
    "A$": "AUD",
    "C$": "CAD",
    "CHF": "CHF",
    "NZ$": "NZD",
    "R": "ZAR",
    "kr": "SEK",
    "R$": "BRL",
    "₽": "RUB",
    "₩": "KRW",
    "₪": "ILS",
    "₦": "NGN",
    "₨": "PKR",
    "₫": "VND",
    "₱": "PHP",
    "₴": "UAH",
}

DEFAULT_CURRENCY_CODE = "GBP"


def get_currency_code(symbol: str) -> str:
    """Map a currency symbol to its ISO 4217 code (GBP if unknown)."""
    return CURRENCY_CODES.get(symbol, DEFAULT_CURRENCY_CODE)


def round_half_up(value: Union[float, Decimal]) -> int:
    """Round to nearest integer, halves away from zero (0.5 -> 1, -0.5 -> -1).

    Floats are rounded from their repr, not their binary value.
    """
    if not isinstance(value, Decimal):
        value = Decimal(repr(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def ratio_to_percent(ratio: float) -> int:
    """Whole percent for a ratio (0.285 -> 29)."""
    return round_half_up(Decimal(repr(ratio)) * 100)


def format_percent(ratio: float) -> str:
    """Format a ratio as a whole-number percentage (0.7 -> '70%')."""
    return f"{ratio_to_percent(ratio)}%"


def format_number(value: float) -> str:
    """Format a plain number, dropping a trailing '.0' (28.0 -> '28')."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_currency(amount: float, currency_symbol: str, decimals: int = 0) -> str:
    """Format an amount with the caller's currency symbol.

    Args:
        amount: Value to format (negative values get a leading '-')
        currency_symbol: Symbol to prefix (e.g. '£', 'A$')
        decimals: Fraction digits to show

    Returns:
        e.g. '£1,235' or '-£50.25'
    """
    if decimals == 0:
        magnitude = f"{abs(round_half_up(amount)):,}"
    else:
        magnitude = f"{abs(amount):,.{decimals}f}"
    sign = "-" if amount < 0 and magnitude.strip("0.,") else ""
    return f"{sign}{currency_symbol}{magnitude}"
