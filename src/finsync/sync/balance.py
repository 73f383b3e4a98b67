#!/usr/bin/env python3
"""
Balance Reconciliation

Keeps the PocketSmith balance from drifting below the Frollo balance.

The correction is one-directional: a Frollo balance lower than the
PocketSmith balance is never pushed, so manual PocketSmith entries that
are still pending reconciliation are not clobbered.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.dates import FinancialDate
from ..core.errors import AmountParseError, GatewayError, UnauthorizedError
from ..core.money import Money
from ..frollo.models import FrolloAccount
from ..pocketsmith.models import PocketsmithAccount

if TYPE_CHECKING:
    from ..pocketsmith.client import PocketsmithClient

logger = logging.getLogger(__name__)


@dataclass
class BalanceResult:
    """Outcome of reconciling one account's balance."""

    updated: bool = False
    previous: Money | None = None
    target: Money | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, str | bool | None]:
        return {
            "updated": self.updated,
            "previous": str(self.previous) if self.previous is not None else None,
            "target": str(self.target) if self.target is not None else None,
            "error": self.error,
        }


class BalanceReconciler:
    """Push the Frollo current balance to PocketSmith when it is higher."""

    def __init__(self, ledger: "PocketsmithClient"):
        self.ledger = ledger

    def reconcile(
        self,
        user_id: int,
        source_account: FrolloAccount,
        destination: PocketsmithAccount,
        today: FinancialDate | None = None,
    ) -> BalanceResult:
        """
        Compare balances and update PocketSmith if it is lower.

        Gateway and parse failures are logged and reported in the result,
        except rejected credentials.

        Raises:
            UnauthorizedError: The PocketSmith key was rejected
        """
        result = BalanceResult()
        as_of = today or FinancialDate.today()

        # Re-read so the balance includes anything imported this run
        try:
            current = self.ledger.find_account_by_name(user_id, destination.title)
        except UnauthorizedError:
            raise
        except GatewayError as e:
            logger.error(f"'{destination.title}': error finding account: {e}")
            result.error = f"lookup failed: {e}"
            return result

        try:
            target = source_account.current_balance.to_money()
        except AmountParseError as e:
            logger.error(f"'{destination.title}': error converting balance: {e}")
            result.error = f"invalid source balance: {e}"
            return result

        previous = current.current_balance
        result.previous = previous
        result.target = target

        if not previous < target:
            logger.debug(f"'{destination.title}': balance {previous} ≥ {target}, nothing to do")
            return result

        logger.info(f"'{destination.title}': updating balance from {previous} to {target}")
        try:
            self.ledger.update_transaction_account(
                destination.transaction_account_id, destination.institution_id, target, as_of
            )
        except UnauthorizedError:
            raise
        except (GatewayError, ValueError) as e:
            logger.error(f"'{destination.title}': error updating balance: {e}")
            result.error = f"update failed: {e}"
            return result

        result.updated = True
        return result
