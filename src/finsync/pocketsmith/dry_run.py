#!/usr/bin/env python3
"""
Dry-Run PocketSmith Client

Performs every read against PocketSmith but only logs writes, returning
placeholder records so a whole sync can be previewed without changes.

Placeholder IDs are negative. Searches against a placeholder transaction
account return nothing, since it has no transactions yet.
"""

import logging
from itertools import count

from ..core.dates import FinancialDate
from ..core.money import Money
from .client import PocketsmithClient
from .models import (
    PocketsmithAccount,
    PocketsmithInstitution,
    PocketsmithTransaction,
    PocketsmithTransactionAccount,
)

logger = logging.getLogger(__name__)


class DryRunPocketsmithClient(PocketsmithClient):
    """PocketsmithClient that never writes."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._placeholder_ids = count(-1, -1)
        self.planned_writes: list[str] = []
        self._planned_institutions: dict[str, PocketsmithInstitution] = {}
        self._planned_accounts: dict[str, PocketsmithAccount] = {}

    def _plan(self, description: str) -> None:
        self.planned_writes.append(description)
        logger.info(f"[dry run] would {description}")

    def find_account_by_name(self, user_id: int, name: str) -> PocketsmithAccount:
        if name in self._planned_accounts:
            return self._planned_accounts[name]
        return super().find_account_by_name(user_id, name)

    def find_institution_by_name(self, user_id: int, name: str) -> PocketsmithInstitution:
        if name in self._planned_institutions:
            return self._planned_institutions[name]
        return super().find_institution_by_name(user_id, name)

    def create_institution(self, user_id: int, name: str, currency: str) -> PocketsmithInstitution:
        self._plan(f"create institution '{name}' ({currency})")
        institution = PocketsmithInstitution(id=next(self._placeholder_ids), title=name, currency_code=currency)
        self._planned_institutions[name] = institution
        return institution

    def create_account(
        self, user_id: int, institution_id: int, name: str, currency: str, kind: str
    ) -> PocketsmithAccount:
        self._plan(f"create {kind} account '{name}' ({currency})")
        institution = PocketsmithInstitution(id=institution_id, title="", currency_code=currency)
        transaction_account = PocketsmithTransactionAccount(
            id=next(self._placeholder_ids),
            name=name,
            currency_code=currency,
            current_balance=Money.from_cents(0),
            institution=institution,
        )
        account = PocketsmithAccount(
            id=next(self._placeholder_ids),
            title=name,
            currency_code=currency,
            type=kind,
            current_balance=Money.from_cents(0),
            primary_transaction_account=transaction_account,
            institution=institution,
        )
        self._planned_accounts[name] = account
        return account

    def search_transactions_by_memo(
        self, transaction_account_id: int, date: FinancialDate, memo: str, amount: Money | None = None
    ) -> list[PocketsmithTransaction]:
        if transaction_account_id < 0:
            return []
        return super().search_transactions_by_memo(transaction_account_id, date, memo, amount)

    def add_transaction(
        self, transaction_account_id: int, transaction: PocketsmithTransaction
    ) -> PocketsmithTransaction:
        self._plan(f"add {transaction.date} {transaction.amount} '{transaction.payee}'")
        return transaction

    def update_transaction_account(
        self,
        transaction_account_id: int,
        institution_id: int | None,
        new_balance: Money,
        as_of: FinancialDate,
    ) -> PocketsmithTransactionAccount:
        self._plan(f"set balance of transaction account {transaction_account_id} to {new_balance} as of {as_of}")
        return PocketsmithTransactionAccount(
            id=transaction_account_id,
            name="",
            currency_code=None,
            current_balance=new_balance,
        )
