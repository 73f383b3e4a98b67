#!/usr/bin/env python3
"""
JSON HTTP Client Base

Thin wrapper over a requests.Session shared by the Frollo and PocketSmith
clients. Maps HTTP failures onto the gateway error hierarchy:

- 401 / 403 → UnauthorizedError (never retried)
- 404 → NotFoundError
- any other non-2xx, transport failure or undecodable body → GatewayError
- a body missing fields the models need → GatewayError

Every call is attempted exactly once.
"""

import logging
from typing import Any, TypeVar

import requests

from .errors import GatewayError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonApiClient:
    """Base class for a JSON API reached through one requests.Session."""

    service_name = "api"

    def __init__(self, base_url: str, timeout: int = 30, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _auth_headers(self) -> dict[str, str]:
        """Authentication headers; subclasses supply their credential."""
        return {}

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, authenticated: bool = True, **kwargs: Any) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to base_url, or an absolute URL
            authenticated: Whether to send the client credential
            **kwargs: Passed through to requests (params, json, headers)

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            UnauthorizedError, NotFoundError, GatewayError
        """
        url = self._url(path)
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if authenticated:
            headers.update(self._auth_headers())
        headers.update(kwargs.pop("headers", {}) or {})

        logger.debug(f"{self.service_name} {method} {url} params={kwargs.get('params')}")

        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise GatewayError(f"{method} {url} failed: {e}", service=self.service_name) from e

        status = response.status_code
        if status in (401, 403):
            raise UnauthorizedError(
                f"{method} {url} was rejected: {_snippet(response)}", service=self.service_name, status_code=status
            )
        if status == 404:
            raise NotFoundError(f"{method} {url} not found", service=self.service_name, status_code=status)
        if status >= 400:
            raise GatewayError(
                f"{method} {url} failed: {_snippet(response)}", service=self.service_name, status_code=status
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(
                f"{method} {url} returned invalid JSON", service=self.service_name, status_code=status
            ) from e

    def _decode(self, model: type[T], data: Any) -> T:
        """
        Build a model from one decoded JSON object.

        Raises:
            GatewayError: If the object lacks a required field or holds a malformed value
        """
        try:
            return model.from_dict(data)  # type: ignore[attr-defined]
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise GatewayError(
                f"unexpected {model.__name__} payload: {e!r}", service=self.service_name
            ) from e

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()


def _snippet(response: requests.Response, limit: int = 200) -> str:
    """Leading part of a response body for error messages."""
    text = response.text or ""
    return text[:limit] if text else response.reason or "no body"
