"""
Frollo Integration Package

Read-only gateway to the Frollo aggregation service, the authoritative
source of bank transactions and balances.

Key Components:
- client: login, account and transaction queries, provider refresh trigger
- models: immutable account/transaction snapshots parsed from the API
"""

from .client import FrolloClient
from .models import (
    SUPPORTED_ACCOUNT_TYPES,
    FrolloAccount,
    FrolloBalance,
    FrolloProvider,
    FrolloToken,
    FrolloTransaction,
)

__all__ = [
    "FrolloAccount",
    "FrolloBalance",
    "FrolloClient",
    "FrolloProvider",
    "FrolloToken",
    "FrolloTransaction",
    "SUPPORTED_ACCOUNT_TYPES",
]
