"""requests-backed implementation of :class:`~jira_cli.core.protocols.JiraTransport`.

This module is the **only** place in the codebase that imports
``requests``.  All requests exceptions are caught here and re-raised as
typed :class:`~jira_cli.exceptions.JiraCliError` subclasses — nothing
raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

from jira_cli.config import DEFAULT_TIMEOUT
from jira_cli.exceptions import AuthError, RemoteError, append_login_suggestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JiraApiConfig:
    """Connection settings handed to :class:`JiraApi`."""

    url: str
    username: str
    password: str = field(repr=False)
    timeout: float = DEFAULT_TIMEOUT
    """Per-call timeout in seconds."""


class JiraApi:
    """Concrete :class:`JiraTransport` speaking JSON over HTTP basic auth.

    Usage::

        api = JiraApi(JiraApiConfig(url, username, password))
        body = api.get("/rest/auth/1/session")

    This class satisfies the :class:`~jira_cli.core.protocols.JiraTransport`
    protocol structurally — no explicit inheritance required.  No call
    is ever retried.
    """

    def __init__(
        self,
        config: JiraApiConfig,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.url.rstrip("/")
        self._session = session or requests.Session()
        self._session.auth = (config.username, config.password)
        self._session.headers.update({"Accept": "application/json"})

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._request("GET", endpoint, params=dict(params) if params else None)

    def post(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        return self._request("POST", endpoint, json=dict(body))

    # ------------------------------------------------------------------
    # Request / response handling
    # ------------------------------------------------------------------

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{endpoint}"
        logger.debug("%s %s params=%s", method, endpoint, kwargs.get("params"))
        try:
            response = self._session.request(
                method,
                url,
                timeout=self._config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            raise RemoteError(
                f"Jira did not answer within {self._config.timeout:g}s: {method} {endpoint}",
                hint="Raise the limit with --timeout or JIRA_CLI_TIMEOUT.",
            ) from exc
        except requests.RequestException as exc:
            raise RemoteError(
                f"Could not reach {self._base_url}: {exc}",
                hint="Check the Jira URL and your network connection.",
            ) from exc

        logger.debug("%s %s -> %s", method, endpoint, response.status_code)
        if response.status_code >= 400:
            self._raise_mapped(method, endpoint, response)
        return self._decode(method, endpoint, response)

    @staticmethod
    def _decode(method: str, endpoint: str, response: requests.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(
                f"Jira returned a non-JSON body for {method} {endpoint}.",
                status_code=response.status_code,
                hint="The URL may point to a login page or proxy, not Jira.",
            ) from exc

    @staticmethod
    def _raise_mapped(method: str, endpoint: str, response: requests.Response) -> None:
        """Translate an error response into a domain exception.

        Always raises.
        """
        status = response.status_code
        detail = extract_error_message(response)
        message = f"{method} {endpoint} failed with HTTP {status}"
        if detail:
            message = f"{message}: {detail}"
        if status in (401, 403):
            raise AuthError(message, status_code=status, hint=append_login_suggestion(None))
        raise RemoteError(message, status_code=status)


def extract_error_message(response: requests.Response) -> str:
    """Flatten Jira's ``errorMessages``/``errors`` payload into one line."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200].strip()
    if not isinstance(payload, dict):
        return ""
    parts: list[str] = [str(msg) for msg in payload.get("errorMessages") or []]
    errors = payload.get("errors")
    if isinstance(errors, dict):
        parts.extend(f"{name}: {msg}" for name, msg in errors.items())
    return "; ".join(parts)
