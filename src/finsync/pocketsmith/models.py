#!/usr/bin/env python3
"""
PocketSmith Domain Models

Type-safe models representing PocketSmith API v2 data structures.

A PocketSmith account owns one primary transaction account, which holds the
ledger balance and the transactions, and belongs to one institution.
"""

from dataclasses import dataclass
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money

ACCOUNT_TYPE_BANK = "bank"


@dataclass(frozen=True)
class PocketsmithUser:
    """The user that owns the developer key."""

    id: int
    login: str | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithUser":
        return cls(id=data["id"], login=data.get("login"), name=data.get("name"))


@dataclass(frozen=True)
class PocketsmithInstitution:
    """Bank or provider grouping for accounts."""

    id: int
    title: str
    currency_code: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithInstitution":
        return cls(id=data["id"], title=data.get("title", ""), currency_code=data.get("currency_code"))


@dataclass(frozen=True)
class PocketsmithTransactionAccount:
    """Ledger-side sub-entity that holds the balance and transactions."""

    id: int
    name: str
    currency_code: str | None
    current_balance: Money
    institution: PocketsmithInstitution | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithTransactionAccount":
        institution = data.get("institution")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            currency_code=data.get("currency_code"),
            current_balance=Money.from_float(data.get("current_balance")),
            institution=PocketsmithInstitution.from_dict(institution) if institution else None,
        )


@dataclass(frozen=True)
class PocketsmithAccount:
    """
    PocketSmith account.

    title is the join key with the Frollo account name.
    """

    id: int
    title: str
    currency_code: str | None
    type: str | None
    current_balance: Money
    primary_transaction_account: PocketsmithTransactionAccount | None
    institution: PocketsmithInstitution | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithAccount":
        """
        Create PocketsmithAccount from API dict.

        Args:
            data: One element of GET /users/{id}/accounts, or the POST response

        Returns:
            PocketsmithAccount instance
        """
        primary = data.get("primary_transaction_account")
        institution = data.get("institution")
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            currency_code=data.get("currency_code"),
            type=data.get("type"),
            current_balance=Money.from_float(data.get("current_balance")),
            primary_transaction_account=PocketsmithTransactionAccount.from_dict(primary) if primary else None,
            institution=PocketsmithInstitution.from_dict(institution) if institution else None,
        )

    @property
    def transaction_account_id(self) -> int:
        """
        ID of the primary transaction account.

        Raises:
            ValueError: If the API returned the account without one
        """
        if self.primary_transaction_account is None:
            raise ValueError(f"PocketSmith account '{self.title}' has no primary transaction account")
        return self.primary_transaction_account.id

    @property
    def institution_id(self) -> int | None:
        """Institution of the primary transaction account, falling back to the account's own."""
        primary = self.primary_transaction_account
        if primary is not None and primary.institution is not None:
            return primary.institution.id
        return self.institution.id if self.institution else None


@dataclass(frozen=True)
class PocketsmithTransaction:
    """
    PocketSmith transaction.

    Written once by the sync and never updated or deleted by it.
    """

    payee: str
    amount: Money
    date: FinancialDate
    is_transfer: bool = False
    memo: str | None = None
    id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithTransaction":
        return cls(
            id=data.get("id"),
            payee=data.get("payee") or "",
            amount=Money.from_float(data.get("amount")),
            date=FinancialDate.from_string(data["date"]),
            is_transfer=bool(data.get("is_transfer", False)),
            memo=data.get("memo"),
        )

    def to_payload(self) -> dict[str, Any]:
        """Body for POST /transaction_accounts/{id}/transactions."""
        payload: dict[str, Any] = {
            "payee": self.payee,
            "amount": self.amount.to_float(),
            "date": self.date.to_iso_string(),
            "is_transfer": self.is_transfer,
        }
        if self.memo:
            payload["memo"] = self.memo
        return payload
