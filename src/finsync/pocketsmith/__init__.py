"""
PocketSmith Integration Package

Gateway to the PocketSmith personal-finance ledger, the destination of record.

Key Components:
- client: account/institution lookup and creation, duplicate search,
  transaction creation and balance updates
- dry_run: a client that reads normally but only logs writes
- models: users, institutions, accounts, transaction accounts, transactions
"""

from .client import PocketsmithClient
from .dry_run import DryRunPocketsmithClient
from .models import (
    ACCOUNT_TYPE_BANK,
    PocketsmithAccount,
    PocketsmithInstitution,
    PocketsmithTransaction,
    PocketsmithTransactionAccount,
    PocketsmithUser,
)

__all__ = [
    "ACCOUNT_TYPE_BANK",
    "DryRunPocketsmithClient",
    "PocketsmithAccount",
    "PocketsmithClient",
    "PocketsmithInstitution",
    "PocketsmithTransaction",
    "PocketsmithTransactionAccount",
    "PocketsmithUser",
]
