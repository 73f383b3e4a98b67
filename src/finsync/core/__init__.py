"""
Core Utilities Package

Shared primitives used by both ledger integrations and the sync engine.

This package provides:
- Money and FinancialDate primitives with exact arithmetic
- Currency parsing that rejects malformed source amounts
- Gateway error hierarchy (not found vs. everything else)
- A small JSON-over-HTTP client base built on requests
- Environment-driven configuration and logging setup
"""

from .config import (
    Config,
    Environment,
    FrolloConfig,
    PocketsmithConfig,
    SyncConfig,
    get_config,
    reload_config,
)
from .currency import cents_to_decimal_str, float_to_cents, format_cents, parse_decimal_to_cents
from .dates import FinancialDate
from .errors import AmountParseError, GatewayError, NotFoundError, UnauthorizedError
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "FrolloConfig",
    "PocketsmithConfig",
    "SyncConfig",
    "get_config",
    "reload_config",
    # Primitives
    "FinancialDate",
    "Money",
    # Currency utilities
    "cents_to_decimal_str",
    "float_to_cents",
    "format_cents",
    "parse_decimal_to_cents",
    # Errors
    "AmountParseError",
    "GatewayError",
    "NotFoundError",
    "UnauthorizedError",
]
