"""Credential storage in the OS keyring.

Holds the Jira URL, username and password plus a ``logged_in`` flag
under the ``jira-cli`` keyring service.  Setting ``JIRA_URL``,
``JIRA_USERNAME`` and ``JIRA_PASSWORD`` together bypasses the keyring
for non-interactive use.

Every keyring exception is re-raised as
:class:`~jira_cli.exceptions.CredentialsError`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from jira_cli.config import ENV_PASSWORD, ENV_URL, ENV_USERNAME, KEYRING_SERVICE
from jira_cli.exceptions import CredentialsError

logger = logging.getLogger(__name__)

_FIELDS: tuple[str, ...] = ("url", "username", "password")
_LOGGED_IN = "logged_in"


@dataclass(frozen=True, slots=True)
class StoredCredentials:
    url: str
    username: str
    password: str = field(repr=False)


class CredentialStore:
    """Read, write and clear the stored Jira credentials.

    Parameters
    ----------
    service:
        Keyring service name.
    backend:
        Object exposing ``get_password``/``set_password``/``delete_password``;
        the ``keyring`` module by default.
    env:
        Environment mapping consulted for overrides.
    """

    def __init__(
        self,
        service: str = KEYRING_SERVICE,
        *,
        backend: Any = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._service = service
        self._backend = backend if backend is not None else keyring
        self._env = os.environ if env is None else env

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def from_environment(self) -> StoredCredentials | None:
        url = self._env.get(ENV_URL)
        username = self._env.get(ENV_USERNAME)
        password = self._env.get(ENV_PASSWORD)
        if url and username and password:
            return StoredCredentials(url=url, username=username, password=password)
        return None

    def is_logged_in(self) -> bool:
        return self._read(_LOGGED_IN) == "1"

    def load(self) -> StoredCredentials | None:
        """Return the active credentials, or ``None`` when logged out."""
        from_env = self.from_environment()
        if from_env is not None:
            logger.debug("Using credentials from %s/%s/%s", ENV_URL, ENV_USERNAME, ENV_PASSWORD)
            return from_env
        if not self.is_logged_in():
            return None
        values = {name: self._read(name) for name in _FIELDS}
        if not all(values.values()):
            logger.warning("Keyring entry for %s is incomplete", self._service)
            return None
        return StoredCredentials(**values)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def save(self, credentials: StoredCredentials) -> None:
        self._write("url", credentials.url.rstrip("/"))
        self._write("username", credentials.username)
        self._write("password", credentials.password)
        self._write(_LOGGED_IN, "1")
        logger.debug("Stored credentials for %s", credentials.username)

    def clear(self) -> None:
        for name in (*_FIELDS, _LOGGED_IN):
            try:
                with suppress(PasswordDeleteError):
                    self._backend.delete_password(self._service, name)
            except KeyringError as exc:
                raise CredentialsError(f"Could not clear stored credentials: {exc}") from exc

    # ------------------------------------------------------------------
    # Keyring access (safe boundary)
    # ------------------------------------------------------------------

    def _read(self, name: str) -> str | None:
        try:
            return self._backend.get_password(self._service, name)
        except KeyringError as exc:
            raise CredentialsError(
                f"Could not read from the system keyring: {exc}",
                hint=f"Set {ENV_URL}, {ENV_USERNAME} and {ENV_PASSWORD} instead.",
            ) from exc

    def _write(self, name: str, value: str) -> None:
        try:
            self._backend.set_password(self._service, name, value)
        except KeyringError as exc:
            raise CredentialsError(
                f"Could not write to the system keyring: {exc}",
                hint=f"Set {ENV_URL}, {ENV_USERNAME} and {ENV_PASSWORD} instead.",
            ) from exc
