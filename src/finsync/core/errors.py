#!/usr/bin/env python3
"""
Gateway and Parsing Errors

Exception hierarchy shared by the Frollo and PocketSmith clients.

Callers only distinguish two gateway outcomes:
- NotFoundError: a first-class result that drives find-or-create logic
- everything else (GatewayError and subclasses): fatal or logged, depending
  on where in the sync it happens

UnauthorizedError is never retried and always aborts the run.
"""


class GatewayError(Exception):
    """A request to a remote ledger service failed."""

    def __init__(self, message: str, service: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.service = service
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.service and self.status_code is not None:
            return f"{self.service} HTTP {self.status_code}: {base}"
        if self.service:
            return f"{self.service}: {base}"
        return base


class NotFoundError(GatewayError):
    """The requested record does not exist at the remote service."""


class UnauthorizedError(GatewayError):
    """Credentials were rejected, expired, or never obtained."""


class AmountParseError(ValueError):
    """A monetary field was not a canonical decimal string."""
