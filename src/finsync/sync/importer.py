#!/usr/bin/env python3
"""
Convergence-Aware Transaction Importer

Imports Frollo transactions into a PocketSmith transaction account,
newest first, searching PocketSmith for each one before writing it.

There is no persisted dedup index. Instead, once more than
`match_threshold` consecutive transactions are found to already exist,
the rest of the (older) history is assumed to be synced and is not
examined. This bounds API calls per run; the trade-off is that a gap
sitting behind such a run of existing transactions is never filled.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.errors import GatewayError, UnauthorizedError
from ..frollo.models import FrolloTransaction
from ..pocketsmith.models import PocketsmithTransaction

if TYPE_CHECKING:
    from ..pocketsmith.client import PocketsmithClient

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 10


@dataclass
class ImportResult:
    """Counters for one account's import pass."""

    examined: int = 0
    imported: int = 0
    already_present: int = 0
    search_failures: int = 0
    add_failures: int = 0
    converged: bool = False

    @property
    def failed(self) -> int:
        return self.search_failures + self.add_failures

    def to_dict(self) -> dict[str, int | bool]:
        return {
            "examined": self.examined,
            "imported": self.imported,
            "already_present": self.already_present,
            "search_failures": self.search_failures,
            "add_failures": self.add_failures,
            "converged": self.converged,
        }


def to_pocketsmith_transaction(transaction: FrolloTransaction) -> PocketsmithTransaction:
    """
    Map a Frollo transaction onto a new PocketSmith transaction.

    Raises:
        AmountParseError: If the amount is not a canonical decimal string
    """
    return PocketsmithTransaction(
        payee=transaction.description_original,
        amount=transaction.amount.to_money(),
        date=transaction.transaction_date,
        is_transfer=transaction.is_transfer,
        memo=transaction.reference,
    )


class TransactionImporter:
    """Write unseen transactions to one PocketSmith transaction account."""

    def __init__(self, ledger: "PocketsmithClient", match_threshold: int = DEFAULT_MATCH_THRESHOLD):
        self.ledger = ledger
        self.match_threshold = match_threshold

    def import_transactions(
        self,
        transaction_account_id: int,
        transactions: list[FrolloTransaction],
        account_name: str = "",
    ) -> ImportResult:
        """
        Import transactions, newest first.

        Args:
            transaction_account_id: PocketSmith primary transaction account
            transactions: Already sorted newest first
            account_name: Used in log messages only

        Returns:
            ImportResult with counters

        Raises:
            AmountParseError: A malformed amount aborts the whole run
            UnauthorizedError: Rejected credentials abort the whole run
        """
        result = ImportResult()
        consecutive_matches = 0

        for transaction in transactions:
            if consecutive_matches > self.match_threshold:
                logger.info(
                    f"'{account_name}': {consecutive_matches} consecutive transactions already present, "
                    "assuming older history is synced"
                )
                result.converged = True
                break

            result.examined += 1
            logger.debug(f"  {transaction.transaction_date}: {transaction.description_original}")

            new_transaction = to_pocketsmith_transaction(transaction)

            try:
                existing = self.ledger.search_transactions_by_memo(
                    transaction_account_id,
                    transaction.transaction_date,
                    transaction.reference,
                    amount=new_transaction.amount,
                )
            except UnauthorizedError:
                raise
            except GatewayError as e:
                logger.error(
                    f"'{account_name}': error searching for transaction "
                    f"{transaction.transaction_date} memo '{transaction.reference}': {e}"
                )
                result.search_failures += 1
                continue

            if existing:
                logger.debug("  already have this transaction, skipping")
                consecutive_matches += 1
                result.already_present += 1
                continue

            consecutive_matches = 0

            try:
                self.ledger.add_transaction(transaction_account_id, new_transaction)
            except UnauthorizedError:
                raise
            except GatewayError as e:
                logger.error(
                    f"'{account_name}': error adding transaction "
                    f"{transaction.transaction_date} memo '{transaction.reference}': {e}"
                )
                result.add_failures += 1
                continue

            result.imported += 1

        logger.info(
            f"'{account_name}': imported {result.imported}, already present {result.already_present}, "
            f"failed {result.failed}, examined {result.examined} of {len(transactions)}"
        )
        return result
