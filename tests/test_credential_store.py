"""Tests for the keyring-backed credential store (infra/credential_store.py).

The keyring is replaced by :class:`FakeKeyring` — the OS keyring is
never touched.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from keyring.errors import KeyringError

from jira_cli.exceptions import CredentialsError
from jira_cli.infra.credential_store import CredentialStore, StoredCredentials

CREDS = StoredCredentials(url="https://jira.example.com/", username="alice", password="s3cret")


def _store(backend: object, env: dict[str, str] | None = None) -> CredentialStore:
    return CredentialStore(backend=backend, env=env or {})


class TestRoundTrip:
    def test_logged_out_by_default(self, fake_keyring) -> None:
        store = _store(fake_keyring)
        assert store.is_logged_in() is False
        assert store.load() is None

    def test_save_then_load(self, fake_keyring) -> None:
        store = _store(fake_keyring)
        store.save(CREDS)
        assert store.is_logged_in() is True
        loaded = store.load()
        assert loaded == StoredCredentials("https://jira.example.com", "alice", "s3cret")

    def test_save_uses_service_name(self, fake_keyring) -> None:
        CredentialStore("custom", backend=fake_keyring, env={}).save(CREDS)
        assert ("custom", "username") in fake_keyring.store

    def test_clear(self, fake_keyring) -> None:
        store = _store(fake_keyring)
        store.save(CREDS)
        store.clear()
        assert fake_keyring.store == {}
        assert store.is_logged_in() is False

    def test_clear_when_empty_is_noop(self, fake_keyring) -> None:
        _store(fake_keyring).clear()
        assert fake_keyring.store == {}

    def test_incomplete_entry_treated_as_logged_out(self, fake_keyring) -> None:
        store = _store(fake_keyring)
        store.save(CREDS)
        del fake_keyring.store[("jira-cli", "password")]
        assert store.load() is None

    def test_password_not_in_repr(self) -> None:
        assert "s3cret" not in repr(CREDS)


class TestEnvironmentOverride:
    ENV = {"JIRA_URL": "https://env.example.com", "JIRA_USERNAME": "bot", "JIRA_PASSWORD": "token"}

    def test_env_wins_over_keyring(self, fake_keyring) -> None:
        store = _store(fake_keyring, self.ENV)
        store.save(CREDS)
        loaded = store.load()
        assert loaded is not None
        assert loaded.username == "bot"

    def test_env_without_login(self, fake_keyring) -> None:
        assert _store(fake_keyring, self.ENV).load() is not None

    def test_partial_env_ignored(self, fake_keyring) -> None:
        env = {"JIRA_URL": "https://env.example.com", "JIRA_USERNAME": "bot"}
        assert _store(fake_keyring, env).load() is None


class TestKeyringFailures:
    def test_read_failure_mapped(self) -> None:
        backend = MagicMock()
        backend.get_password.side_effect = KeyringError("locked")
        with pytest.raises(CredentialsError, match="locked") as exc_info:
            _store(backend).is_logged_in()
        assert exc_info.value.hint and "JIRA_URL" in exc_info.value.hint

    def test_write_failure_mapped(self) -> None:
        backend = MagicMock()
        backend.set_password.side_effect = KeyringError("no backend")
        with pytest.raises(CredentialsError):
            _store(backend).save(CREDS)

    def test_delete_failure_mapped(self) -> None:
        backend = MagicMock()
        backend.delete_password.side_effect = KeyringError("denied")
        with pytest.raises(CredentialsError, match="clear"):
            _store(backend).clear()
