#!/usr/bin/env python3
"""
Currency Parsing and Formatting Utilities

All balance comparisons use integer cents to avoid floating-point errors.

Currency representations:
- Frollo sends amounts as decimal strings: "-12.50", "500.00"
- PocketSmith sends and accepts JSON numbers: -12.5, 500.0
- Internal calculations use cents: 100 cents = 1.00
- Display uses plain decimal strings: "12.34"

Key Principles:
- Never compare balances as floats
- Source amounts must parse exactly or the run aborts
- Destination floats go through str() before Decimal to keep their printed value
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import AmountParseError

CENT = Decimal("0.01")


def parse_decimal_to_cents(amount_str: str) -> int:
    """
    Parse a canonical signed decimal string into integer cents.

    Args:
        amount_str: Decimal text such as "500.00", "-12.5" or "7"

    Returns:
        Amount in cents, rounded half-up when the text has sub-cent digits

    Raises:
        AmountParseError: If the value is empty, not a number, or not finite

    Examples:
        parse_decimal_to_cents("500.00") -> 50000
        parse_decimal_to_cents("-12.5") -> -1250
    """
    if not isinstance(amount_str, str):
        raise AmountParseError(f"Amount must be a string, got {type(amount_str).__name__}")

    clean = amount_str.strip()
    if not clean:
        raise AmountParseError("Amount is empty")

    try:
        value = Decimal(clean)
    except InvalidOperation as e:
        raise AmountParseError(f"Invalid amount: {amount_str!r}") from e

    if not value.is_finite():
        raise AmountParseError(f"Amount is not finite: {amount_str!r}")

    return int(value.quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def float_to_cents(value: float | int) -> int:
    """
    Convert a JSON number from PocketSmith into cents.

    Args:
        value: Amount as returned by the API (e.g. 1234.5)

    Returns:
        Amount in cents
    """
    return int(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def cents_to_decimal_str(cents: int) -> str:
    """
    Convert cents to a decimal string using integer arithmetic.

    Example:
        cents_to_decimal_str(-4599) -> "-45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    units = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{units}.{remainder:02d}"
    return f"{units}.{remainder:02d}"


def format_cents(cents: int, currency: str | None = None) -> str:
    """Format cents for display, with an optional currency code suffix."""
    text = cents_to_decimal_str(cents)
    if currency:
        return f"{text} {currency.upper()}"
    return text
