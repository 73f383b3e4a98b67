#!/usr/bin/env python3
"""
Frollo Domain Models

Type-safe models representing Frollo aggregation API data structures.
Snapshots are read fresh on every run and never mutated locally.
"""

from dataclasses import dataclass
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money

ACTIVE_STATUS = "active"
SUPPORTED_ACCOUNT_TYPES = frozenset({"bank_account", "savings"})


@dataclass(frozen=True)
class FrolloBalance:
    """Amount and currency as sent by Frollo (amount is decimal text)."""

    amount: str
    currency: str

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FrolloBalance":
        data = data or {}
        return cls(amount=str(data.get("amount", "")), currency=data.get("currency", ""))

    def to_money(self) -> Money:
        """
        Parse the amount.

        Raises:
            AmountParseError: If the amount is not a canonical decimal
        """
        return Money.from_decimal_string(self.amount)


@dataclass(frozen=True)
class FrolloProvider:
    """Institution that holds the account."""

    id: int | None
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FrolloProvider":
        data = data or {}
        return cls(id=data.get("id"), name=data.get("name", ""))


@dataclass(frozen=True)
class FrolloAccount:
    """
    Frollo aggregated account.

    Represents one bank account as seen through the aggregator.
    """

    id: int
    name: str
    status: str  # "active", "inactive", "closed", ...
    account_type: str  # "bank_account", "savings", "credit_card", ...
    provider: FrolloProvider
    primary_balance: FrolloBalance
    current_balance: FrolloBalance
    aggregator: str | None = None
    external_id: str | None = None
    hidden: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FrolloAccount":
        """
        Create FrolloAccount from API dict.

        Args:
            data: Dictionary from GET /aggregation/accounts[/{id}]

        Returns:
            FrolloAccount instance
        """
        attributes = data.get("account_attributes") or {}
        return cls(
            id=data["id"],
            name=data.get("account_name", ""),
            status=data.get("account_status", ""),
            account_type=attributes.get("account_type", ""),
            provider=FrolloProvider.from_dict(data.get("provider")),
            primary_balance=FrolloBalance.from_dict(data.get("primary_balance")),
            current_balance=FrolloBalance.from_dict(data.get("current_balance")),
            aggregator=data.get("aggregator"),
            external_id=data.get("external_id"),
            hidden=data.get("hidden", False),
        )

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS

    @property
    def is_supported_type(self) -> bool:
        """Only bank and savings accounts are synced."""
        return self.account_type in SUPPORTED_ACCOUNT_TYPES

    @property
    def currency(self) -> str:
        """Lower-cased primary balance currency, as PocketSmith expects it."""
        return self.primary_balance.currency.lower()


@dataclass(frozen=True)
class FrolloTransaction:
    """
    Frollo transaction.

    transaction_date is the calendar date used for ordering and duplicate
    detection; reference doubles as the PocketSmith memo.
    """

    id: int
    account_id: int
    transaction_date: FinancialDate
    post_date: FinancialDate | None
    amount: FrolloBalance
    description_original: str
    description_simple: str | None
    reference: str
    type: str
    status: str | None = None
    base_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FrolloTransaction":
        """
        Create FrolloTransaction from API dict.

        Args:
            data: One element of the GET /aggregation/transactions "data" array

        Returns:
            FrolloTransaction instance
        """
        description = data.get("description") or {}
        post_date = data.get("post_date")
        return cls(
            id=data["id"],
            account_id=data.get("account_id", 0),
            transaction_date=FinancialDate.from_string(data["transaction_date"]),
            post_date=FinancialDate.from_string(post_date) if post_date else None,
            amount=FrolloBalance.from_dict(data.get("amount")),
            description_original=description.get("original", ""),
            description_simple=description.get("simple"),
            reference=data.get("reference") or "",
            type=data.get("type") or "",
            status=data.get("status"),
            base_type=data.get("base_type"),
        )

    @property
    def is_transfer(self) -> bool:
        """Case-sensitive check for "transfer" in the type tag (e.g. "internal_transfer")."""
        return "transfer" in self.type


@dataclass(frozen=True)
class FrolloToken:
    """Bearer credential returned by the password grant. Held in memory only."""

    access_token: str
    token_type: str | None = None
    expires_in: int | None = None
    scope: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FrolloToken":
        return cls(
            access_token=data.get("access_token") or "",
            token_type=data.get("token_type"),
            expires_in=data.get("expires_in"),
            scope=data.get("scope"),
        )

    def __repr__(self) -> str:
        return f"FrolloToken(token_type={self.token_type!r}, expires_in={self.expires_in!r})"
