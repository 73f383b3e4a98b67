#!/usr/bin/env python3
"""
PocketSmith API Client

Access to the PocketSmith API v2: the destination ledger of record.

Lookups by name return NotFoundError on a miss so callers can drive
find-or-create logic; every other failure surfaces as GatewayError.

Duplicate detection keys on date and memo. Transactions without a memo
fall back to date and amount, so two memo-less transactions for the same
amount on the same day collapse into one.
"""

import logging
from typing import Any

import requests

from ..core.config import PocketsmithConfig
from ..core.dates import FinancialDate
from ..core.errors import NotFoundError, UnauthorizedError
from ..core.http import JsonApiClient
from ..core.money import Money
from .models import (
    PocketsmithAccount,
    PocketsmithInstitution,
    PocketsmithTransaction,
    PocketsmithTransactionAccount,
    PocketsmithUser,
)

logger = logging.getLogger(__name__)


class PocketsmithClient(JsonApiClient):
    """Client for the PocketSmith API."""

    service_name = "pocketsmith"

    def __init__(self, config: PocketsmithConfig, session: requests.Session | None = None):
        super().__init__(config.base_url, timeout=config.timeout, session=session)
        self.config = config

    def _auth_headers(self) -> dict[str, str]:
        if not self.config.api_token:
            raise UnauthorizedError("No PocketSmith developer key configured", service=self.service_name)
        return {"X-Developer-Key": self.config.api_token}

    def get_current_user(self) -> PocketsmithUser:
        """Fetch the user that owns the developer key."""
        return self._decode(PocketsmithUser, self._request("GET", "me"))

    def list_accounts(self, user_id: int) -> list[PocketsmithAccount]:
        data = self._request("GET", f"users/{user_id}/accounts") or []
        return [self._decode(PocketsmithAccount, item) for item in data]

    def list_institutions(self, user_id: int) -> list[PocketsmithInstitution]:
        data = self._request("GET", f"users/{user_id}/institutions") or []
        return [self._decode(PocketsmithInstitution, item) for item in data]

    def find_account_by_name(self, user_id: int, name: str) -> PocketsmithAccount:
        """
        Find an account whose title equals name exactly.

        Raises:
            NotFoundError: If no account has that title
        """
        for account in self.list_accounts(user_id):
            if account.title == name:
                return account
        raise NotFoundError(f"No account titled '{name}'", service=self.service_name)

    def find_institution_by_name(self, user_id: int, name: str) -> PocketsmithInstitution:
        """
        Find an institution whose title equals name exactly.

        Raises:
            NotFoundError: If no institution has that title
        """
        for institution in self.list_institutions(user_id):
            if institution.title == name:
                return institution
        raise NotFoundError(f"No institution titled '{name}'", service=self.service_name)

    def create_institution(self, user_id: int, name: str, currency: str) -> PocketsmithInstitution:
        data = self._request(
            "POST",
            f"users/{user_id}/institutions",
            json={"title": name, "currency_code": currency},
        )
        return self._decode(PocketsmithInstitution, data)

    def create_account(
        self, user_id: int, institution_id: int, name: str, currency: str, kind: str
    ) -> PocketsmithAccount:
        data = self._request(
            "POST",
            f"users/{user_id}/accounts",
            json={
                "institution_id": institution_id,
                "title": name,
                "currency_code": currency,
                "type": kind,
            },
        )
        return self._decode(PocketsmithAccount, data)

    def search_transactions_by_memo(
        self, transaction_account_id: int, date: FinancialDate, memo: str, amount: Money | None = None
    ) -> list[PocketsmithTransaction]:
        """
        Find transactions on exactly this date whose memo equals memo.

        The server-side search is a substring match over several fields,
        so results are narrowed to exact date and memo equality here.

        An empty memo cannot be searched for, so the whole day is fetched
        and, when given, the amount must match as well. Memo-less
        transactions sharing a date and amount remain indistinguishable:
        only the first of them is ever imported.
        """
        day = date.to_iso_string()
        params: dict[str, Any] = {"start_date": day, "end_date": day}
        if memo:
            params["search"] = memo

        data = self._request("GET", f"transaction_accounts/{transaction_account_id}/transactions", params=params)
        transactions = [self._decode(PocketsmithTransaction, item) for item in data or []]
        matches = [t for t in transactions if t.date == date and (t.memo or "") == memo]
        if not memo and amount is not None:
            matches = [t for t in matches if t.amount == amount]
        return matches

    def add_transaction(
        self, transaction_account_id: int, transaction: PocketsmithTransaction
    ) -> PocketsmithTransaction:
        data = self._request(
            "POST",
            f"transaction_accounts/{transaction_account_id}/transactions",
            json=transaction.to_payload(),
        )
        return self._decode(PocketsmithTransaction, data)

    def update_transaction_account(
        self,
        transaction_account_id: int,
        institution_id: int | None,
        new_balance: Money,
        as_of: FinancialDate,
    ) -> PocketsmithTransactionAccount:
        """Set the transaction account's balance as of a date."""
        body: dict[str, Any] = {
            "starting_balance": new_balance.to_float(),
            "starting_balance_date": as_of.to_iso_string(),
        }
        if institution_id is not None:
            body["institution_id"] = institution_id

        data = self._request("PUT", f"transaction_accounts/{transaction_account_id}", json=body)
        return self._decode(PocketsmithTransactionAccount, data)
