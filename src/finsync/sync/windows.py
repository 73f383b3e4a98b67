#!/usr/bin/env python3
"""
Windowed Transaction History Fetcher

Frollo has no unbounded range query we rely on, so full history is read
backwards through time in fixed-width date windows until a window comes
back empty.

Window layout with the defaults (12-month windows, 6-month step):

    [today-12m, today]
              [today-18m, today-6m]
                        [today-24m, today-12m]
                                  ...

Consecutive windows overlap by six months so no boundary day is missed.
Transactions seen in more than one window are collapsed by id.
"""

import logging
from typing import TYPE_CHECKING

from ..core.dates import FinancialDate
from ..frollo.models import FrolloTransaction

if TYPE_CHECKING:
    from ..frollo.client import FrolloClient

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 12
DEFAULT_STEP_MONTHS = 6


def fetch_transaction_history(
    source: "FrolloClient",
    account_id: str | int,
    today: FinancialDate | None = None,
    window_months: int = DEFAULT_WINDOW_MONTHS,
    step_months: int = DEFAULT_STEP_MONTHS,
) -> list[FrolloTransaction]:
    """
    Collect the complete transaction history of one account.

    Walks back from today one window at a time and stops at the first
    empty window. There is no iteration cap.

    Args:
        source: Anything with get_transactions(account_id, from_date, to_date)
        account_id: Frollo account id
        today: End of the first window (default: today)
        window_months: Width of each window
        step_months: How far each window end moves back; must not exceed
                     window_months or windows would leave gaps

    Returns:
        Transactions de-duplicated by id, in no particular order.
        Empty if the first window is empty.

    Raises:
        ValueError: If the window parameters would leave gaps or never advance
        GatewayError: Propagated from the source
    """
    if window_months <= 0 or step_months <= 0:
        raise ValueError("window_months and step_months must be positive")
    if step_months > window_months:
        raise ValueError("step_months must not exceed window_months")

    window_end = today or FinancialDate.today()
    seen: dict[int, FrolloTransaction] = {}
    windows = 0

    while True:
        window_start = window_end.months_before(window_months)
        logger.info(f"Searching account {account_id}: {window_start} → {window_end}")

        transactions = source.get_transactions(account_id, window_start, window_end)
        windows += 1

        if not transactions:
            break

        new_count = 0
        for transaction in transactions:
            if transaction.id not in seen:
                seen[transaction.id] = transaction
                new_count += 1

        logger.debug(f"Window {windows}: {len(transactions)} returned, {new_count} new")
        window_end = window_end.months_before(step_months)

    logger.info(f"Fetched {len(seen)} transactions for account {account_id} in {windows} windows")
    return list(seen.values())


def sort_newest_first(transactions: list[FrolloTransaction]) -> list[FrolloTransaction]:
    """
    Order transactions by transaction date, newest first.

    Same-day transactions are ordered by descending id so the order is a
    stable total order across runs.
    """
    return sorted(transactions, key=lambda t: (t.transaction_date.date, t.id), reverse=True)
