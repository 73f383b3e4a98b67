#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors when comparing Frollo and PocketSmith balances.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import cents_to_decimal_str, float_to_cents, parse_decimal_to_cents


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Currency is carried separately by the models; Money only holds the amount.
    Supports both positive (inflows) and negative (outflows) amounts.

    Examples:
        >>> balance = Money.from_decimal_string("500.00")
        >>> str(balance)
        '500.00'

        >>> spend = Money.from_decimal_string("-12.5")
        >>> spend.to_cents()
        -1250

        >>> Money.from_float(499.99) < balance
        True
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_decimal_string(cls, amount: str) -> "Money":
        """
        Parse a Frollo amount string.

        Raises:
            AmountParseError: If the string is not a canonical decimal
        """
        return cls(cents=parse_decimal_to_cents(amount))

    @classmethod
    def from_float(cls, amount: float | int | None) -> "Money":
        """Create Money from a PocketSmith JSON number (None is treated as zero)."""
        if amount is None:
            return cls(cents=0)
        return cls(cents=float_to_cents(amount))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as an exact Decimal."""
        return Decimal(self.cents) / 100

    def to_float(self) -> float:
        """Get value as a float for JSON payloads."""
        return float(self.to_decimal())

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as decimal string."""
        return cents_to_decimal_str(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
