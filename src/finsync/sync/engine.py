#!/usr/bin/env python3
"""
Sync Engine

Orchestrates one sync run from Frollo into PocketSmith.

Per configured Frollo account, sequentially:
1. fetch the account and check eligibility (skip if inactive/unsupported)
2. fetch its full transaction history in date windows (skip if empty)
3. resolve (find or create) the PocketSmith account
4. import unseen transactions newest first
5. reconcile the balance

Error policy:
- UnauthorizedError and AmountParseError always abort the run
- other gateway failures in steps 1-3 abort the run, or with
  continue_on_error mark just that account as failed
- other failures in steps 4-5 are logged per item and never abort
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..core.dates import FinancialDate
from ..core.errors import AmountParseError, GatewayError, UnauthorizedError
from .balance import BalanceReconciler, BalanceResult
from .importer import DEFAULT_MATCH_THRESHOLD, ImportResult, TransactionImporter
from .resolver import AccountResolver
from .windows import DEFAULT_STEP_MONTHS, DEFAULT_WINDOW_MONTHS, fetch_transaction_history, sort_newest_first

if TYPE_CHECKING:
    from ..frollo.client import FrolloClient
    from ..pocketsmith.client import PocketsmithClient

logger = logging.getLogger(__name__)


class AccountStatus(Enum):
    """Final state of one account in a run."""

    SYNCED = "synced"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class AccountSyncResult:
    """What happened to one configured account."""

    account_id: str
    status: AccountStatus
    account_name: str | None = None
    reason: str | None = None
    transactions_fetched: int = 0
    pocketsmith_account_id: int | None = None
    created_account: bool = False
    created_institution: bool = False
    import_result: ImportResult | None = None
    balance_result: BalanceResult | None = None

    @property
    def imported(self) -> int:
        return self.import_result.imported if self.import_result else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "account_name": self.account_name,
            "status": self.status.value,
            "reason": self.reason,
            "transactions_fetched": self.transactions_fetched,
            "pocketsmith_account_id": self.pocketsmith_account_id,
            "created_account": self.created_account,
            "created_institution": self.created_institution,
            "import": self.import_result.to_dict() if self.import_result else None,
            "balance": self.balance_result.to_dict() if self.balance_result else None,
        }


@dataclass
class SyncReport:
    """Summary of a whole sync run."""

    started_at: datetime
    dry_run: bool = False
    refresh_triggered: bool = False
    finished_at: datetime | None = None
    accounts: list[AccountSyncResult] = field(default_factory=list)

    def _count(self, status: AccountStatus) -> int:
        return sum(1 for a in self.accounts if a.status == status)

    @property
    def synced(self) -> int:
        return self._count(AccountStatus.SYNCED)

    @property
    def skipped(self) -> int:
        return self._count(AccountStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(AccountStatus.FAILED)

    @property
    def total_imported(self) -> int:
        return sum(a.imported for a in self.accounts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": {
                "started_at": self.started_at.isoformat(),
                "finished_at": self.finished_at.isoformat() if self.finished_at else None,
                "dry_run": self.dry_run,
                "refresh_triggered": self.refresh_triggered,
            },
            "summary": {
                "accounts": len(self.accounts),
                "synced": self.synced,
                "skipped": self.skipped,
                "failed": self.failed,
                "transactions_imported": self.total_imported,
            },
            "accounts": [a.to_dict() for a in self.accounts],
        }


class SyncEngine:
    """Runs the Frollo → PocketSmith sync for a list of Frollo account ids."""

    def __init__(
        self,
        source: "FrolloClient",
        ledger: "PocketsmithClient",
        match_threshold: int = DEFAULT_MATCH_THRESHOLD,
        window_months: int = DEFAULT_WINDOW_MONTHS,
        step_months: int = DEFAULT_STEP_MONTHS,
        continue_on_error: bool = False,
        today: FinancialDate | None = None,
    ):
        self.source = source
        self.ledger = ledger
        self.window_months = window_months
        self.step_months = step_months
        self.continue_on_error = continue_on_error
        self.today = today

        self.resolver = AccountResolver(ledger)
        self.importer = TransactionImporter(ledger, match_threshold=match_threshold)
        self.reconciler = BalanceReconciler(ledger)

    def trigger_refresh(self) -> bool:
        """
        Ask Frollo to pull fresh data from the banks.

        Advisory only: the result is not needed for correctness and a
        failure (other than bad credentials) is logged and ignored.
        """
        try:
            self.source.sync_accounts()
        except UnauthorizedError:
            raise
        except GatewayError as e:
            logger.warning(f"Frollo refresh trigger failed, continuing with cached data: {e}")
            return False
        logger.info("Requested Frollo provider refresh")
        return True

    def run(self, account_ids: list[str], dry_run: bool = False) -> SyncReport:
        """
        Sync every account id in order.

        Raises:
            UnauthorizedError: Credentials rejected by either service
            AmountParseError: A transaction amount could not be parsed
            GatewayError: Resolution or fetch failure, unless continue_on_error
            ValueError: A PocketSmith account has no transaction account, unless continue_on_error
        """
        report = SyncReport(started_at=datetime.now(), dry_run=dry_run)

        user = self.ledger.get_current_user()
        logger.debug(f"PocketSmith user {user.id}")

        report.refresh_triggered = self.trigger_refresh()

        for account_id in account_ids:
            try:
                result = self.sync_account(user.id, account_id)
            except (UnauthorizedError, AmountParseError):
                raise
            except (GatewayError, ValueError) as e:
                if not self.continue_on_error:
                    raise
                logger.error(f"Account {account_id}: sync failed: {e}")
                result = AccountSyncResult(account_id=account_id, status=AccountStatus.FAILED, reason=str(e))
            report.accounts.append(result)

        report.finished_at = datetime.now()
        logger.info(
            f"Sync finished: {report.synced} synced, {report.skipped} skipped, {report.failed} failed, "
            f"{report.total_imported} transactions imported"
        )
        return report

    def sync_account(self, user_id: int, account_id: str) -> AccountSyncResult:
        """
        Sync one Frollo account.

        Raises:
            GatewayError: Failure fetching the account or its history, or resolving it
        """
        source_account = self.source.get_account(account_id)
        result = AccountSyncResult(
            account_id=str(account_id), status=AccountStatus.SKIPPED, account_name=source_account.name
        )

        eligible, reason = AccountResolver.is_eligible(source_account)
        if not eligible:
            logger.info(f"Skipping '{source_account.name}': {reason}")
            result.reason = reason
            return result

        logger.info(f"Syncing account '{source_account.name}'")

        transactions = fetch_transaction_history(
            self.source,
            account_id,
            today=self.today,
            window_months=self.window_months,
            step_months=self.step_months,
        )
        result.transactions_fetched = len(transactions)

        if not transactions:
            logger.info(f"Skipping '{source_account.name}': no transactions")
            result.reason = "no transactions"
            return result

        resolution = self.resolver.resolve(user_id, source_account)
        destination = resolution.account
        result.pocketsmith_account_id = destination.id
        result.created_account = resolution.created_account
        result.created_institution = resolution.created_institution

        logger.info(f"Account '{source_account.name}' has {len(transactions)} transactions")

        result.import_result = self.importer.import_transactions(
            destination.transaction_account_id,
            sort_newest_first(transactions),
            account_name=source_account.name,
        )
        result.balance_result = self.reconciler.reconcile(user_id, source_account, destination, today=self.today)

        result.status = AccountStatus.SYNCED
        return result
