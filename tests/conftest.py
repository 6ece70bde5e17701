"""Shared pytest fixtures and configuration for the jira-cli test suite.

Guidelines
----------
* No network access in any test.
* The transport is faked at the ``JiraTransport`` protocol for services;
  ``requests.Session`` is mocked for the adapter.
* The keyring is replaced by an in-memory fake.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from typing import Any

import pytest


class FakeTransport:
    """In-memory :class:`JiraTransport` keyed by endpoint.

    A route value may be a response body, an exception to raise, or a
    callable receiving the request params.
    """

    def __init__(self, routes: Mapping[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[tuple[str, str, Any]] = []
        self._lock = threading.Lock()

    def _respond(self, method: str, endpoint: str, payload: Any) -> Any:
        with self._lock:
            self.calls.append((method, endpoint, payload))
        if endpoint not in self.routes:
            raise AssertionError(f"Unexpected {method} {endpoint}")
        route = self.routes[endpoint]
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(payload)
        return route

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._respond("GET", endpoint, dict(params) if params else None)

    def post(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        return self._respond("POST", endpoint, dict(body))

    def endpoints(self, method: str = "GET") -> list[str]:
        return [endpoint for m, endpoint, _ in self.calls if m == method]


class FakeKeyring:
    """Dict-backed stand-in for the ``keyring`` module API."""

    def __init__(self) -> None:
        self.store: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, name: str) -> str | None:
        return self.store.get((service, name))

    def set_password(self, service: str, name: str, value: str) -> None:
        self.store[(service, name)] = value

    def delete_password(self, service: str, name: str) -> None:
        from keyring.errors import PasswordDeleteError

        if (service, name) not in self.store:
            raise PasswordDeleteError("not found")
        del self.store[(service, name)]


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    return FakeTransport


@pytest.fixture
def fake_keyring() -> FakeKeyring:
    return FakeKeyring()
