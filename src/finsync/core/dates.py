#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable calendar date wrapper used for transaction dates and query windows.
Both Frollo and PocketSmith exchange dates as ISO "YYYY-MM-DD" strings.
"""

from dataclasses import dataclass
from datetime import date, datetime

from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object

        Raises:
            ValueError: If the string does not match the format
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def months_before(self, months: int) -> "FinancialDate":
        """
        Step back a number of calendar months.

        Day-of-month is clamped to the end of shorter months,
        so 2024-08-31 minus 6 months is 2024-02-29.
        """
        return FinancialDate(date=self.date - relativedelta(months=months))

    def __str__(self) -> str:
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"
