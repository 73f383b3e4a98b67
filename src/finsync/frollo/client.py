#!/usr/bin/env python3
"""
Frollo API Client

Read-only access to the Frollo aggregation service: login, accounts,
transactions and the provider refresh trigger.

Frollo only serves requests that look like they come from its mobile SDK,
so every authenticated call carries a fixed set of client headers.
"""

import logging
from typing import Any

import requests

from ..core.config import FrolloConfig
from ..core.dates import FinancialDate
from ..core.errors import GatewayError, UnauthorizedError
from ..core.http import JsonApiClient
from .models import FrolloAccount, FrolloToken, FrolloTransaction

logger = logging.getLogger(__name__)

TOKEN_SCOPE = "offline_access email openid"
TOKEN_DOMAIN = "api.frollo.us"

CLIENT_HEADERS = {
    "X-Api-Version": "2.26",
    "X-Bundle-Id": "us.frollo.frollosdk",
    "X-Device-Version": "Android12",
    "X-Software-Version": "SDK3.28.0-B3270|APP2.26.0-B104594",
    "User-Agent": "okhttp/4.12.0",
}


class FrolloClient(JsonApiClient):
    """Client for the Frollo aggregation API."""

    service_name = "frollo"

    def __init__(self, config: FrolloConfig, session: requests.Session | None = None):
        super().__init__(config.base_url, timeout=config.timeout, session=session)
        self.config = config
        self._access_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self._access_token)

    def _auth_headers(self) -> dict[str, str]:
        if not self._access_token:
            raise UnauthorizedError("Not logged in; call login() first", service=self.service_name)
        headers = dict(CLIENT_HEADERS)
        headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    def login(self, username: str, password: str) -> FrolloToken:
        """
        Exchange username/password for a bearer token.

        Raises:
            UnauthorizedError: If the credentials are rejected or no token is returned
        """
        payload = {
            "grant_type": "password",
            "domain": TOKEN_DOMAIN,
            "client_id": self.config.client_id,
            "username": username,
            "password": password,
            "scope": TOKEN_SCOPE,
        }

        try:
            data = self._request("POST", self.config.auth_url, authenticated=False, json=payload)
        except GatewayError as e:
            if e.status_code == 400:
                raise UnauthorizedError(
                    "Frollo login rejected", service=self.service_name, status_code=400
                ) from e
            raise

        token = self._decode(FrolloToken, data or {})
        if not token.access_token:
            raise UnauthorizedError("Frollo login returned no access token", service=self.service_name)

        self._access_token = token.access_token
        logger.info("Logged in to Frollo")
        return token

    def get_accounts(self) -> list[FrolloAccount]:
        """List every aggregated account visible to the user."""
        data = self._request("GET", "aggregation/accounts")
        if isinstance(data, dict):
            data = data.get("data", [])
        return [self._decode(FrolloAccount, item) for item in data or []]

    def get_account(self, account_id: str | int) -> FrolloAccount:
        """
        Fetch one account.

        Raises:
            NotFoundError: If no such account exists
        """
        data = self._request("GET", f"aggregation/accounts/{account_id}")
        return self._decode(FrolloAccount, data)

    def get_transactions(
        self,
        account_id: str | int,
        from_date: FinancialDate | None = None,
        to_date: FinancialDate | None = None,
    ) -> list[FrolloTransaction]:
        """
        Fetch transactions for one account within an inclusive date range.

        Only the first page is read; the paging cursors are ignored, so
        page_size must be large enough for the requested range.
        Order of the result is not guaranteed.
        """
        params: dict[str, Any] = {"account_ids": str(account_id), "size": self.config.page_size}
        if from_date is not None:
            params["from_date"] = from_date.to_iso_string()
        if to_date is not None:
            params["to_date"] = to_date.to_iso_string()

        data = self._request("GET", "aggregation/transactions", params=params) or {}
        items = data.get("data") or []

        if len(items) >= self.config.page_size:
            logger.warning(
                f"Frollo returned a full page ({len(items)}) for account {account_id} "
                f"{params.get('from_date')} → {params.get('to_date')}; older results may be truncated"
            )

        return [self._decode(FrolloTransaction, item) for item in items]

    def sync_accounts(self) -> dict[str, Any]:
        """Ask Frollo to refresh all provider accounts. Advisory only."""
        data = self._request("POST", "aggregation/provideraccounts/sync")
        return data if isinstance(data, dict) else {"result": data}
