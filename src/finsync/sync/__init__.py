"""
Transaction Synchronization Package

The one-way Frollo → PocketSmith sync.

Key Components:
- windows: full history retrieval through overlapping date windows
- resolver: find-or-create PocketSmith institutions and accounts by name
- importer: newest-first import that stops once history has converged
- balance: one-directional balance correction
- engine: per-account orchestration and run reports
"""

from .balance import BalanceReconciler, BalanceResult
from .engine import AccountStatus, AccountSyncResult, SyncEngine, SyncReport
from .importer import ImportResult, TransactionImporter, to_pocketsmith_transaction
from .resolver import AccountResolver, Resolution
from .windows import fetch_transaction_history, sort_newest_first

__all__ = [
    "AccountResolver",
    "AccountStatus",
    "AccountSyncResult",
    "BalanceReconciler",
    "BalanceResult",
    "ImportResult",
    "Resolution",
    "SyncEngine",
    "SyncReport",
    "TransactionImporter",
    "fetch_transaction_history",
    "sort_newest_first",
    "to_pocketsmith_transaction",
]
