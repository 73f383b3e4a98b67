"""
finsync - One-way Frollo → PocketSmith Sync

Copies bank transactions and balances aggregated by Frollo into a
PocketSmith account, creating institutions and accounts on first sight.

Key Features:
- Full-history retrieval through overlapping date windows
- Find-or-create of PocketSmith institutions and accounts by name
- Newest-first import that stops once history has converged
- One-directional balance correction
- Dry-run mode and JSON run reports

Domain Packages:
- core: Money, dates, configuration, HTTP gateway base, errors
- frollo: Frollo aggregation API client (source)
- pocketsmith: PocketSmith API client (destination)
- sync: windows, resolver, importer, balance reconciliation, engine
- cli: Command-line interface

Example Usage:
    from finsync.frollo import FrolloClient
    from finsync.pocketsmith import PocketsmithClient
    from finsync.sync import SyncEngine
"""

__version__ = "0.1.0"
__author__ = "Karl Davis"

from .core.config import Environment, get_config
from .core.money import Money
from .sync.engine import SyncEngine, SyncReport

__all__ = [
    # Configuration
    "get_config",
    "Environment",
    # Primitives
    "Money",
    # Sync
    "SyncEngine",
    "SyncReport",
]
