"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class JiraTransport(Protocol):
    """Contract for authenticated access to the Jira REST API.

    Any object that implements :meth:`get` and :meth:`post` with the
    correct signatures satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def get(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Issue a GET to *endpoint* (relative to the base URL).

        Returns the decoded JSON body.

        Raises
        ------
        RemoteError
            On transport failures and non-2xx responses.
        AuthError
            When the credentials are rejected.
        """
        ...  # pragma: no cover

    def post(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        """Issue a POST with a JSON *body* and return the decoded response.

        Implementations must never retry this call.

        Raises
        ------
        RemoteError
            On transport failures and non-2xx responses.
        AuthError
            When the credentials are rejected.
        """
        ...  # pragma: no cover
