"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from jira_cli import __version__
from jira_cli.cli import exit_codes
from jira_cli.cli.app import main
from jira_cli.exceptions import (
    AggregationFailure,
    AuthError,
    CredentialsError,
    EnvironmentError,
    JiraCliError,
    NotFoundError,
    RemoteError,
    ValidationError,
    append_login_suggestion,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            NotFoundError,
            ValidationError,
            RemoteError,
            AuthError,
            AggregationFailure,
            CredentialsError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[JiraCliError]
    ) -> None:
        assert issubclass(exc_class, JiraCliError)

    def test_auth_error_is_remote_error(self) -> None:
        assert issubclass(AuthError, RemoteError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(JiraCliError, Exception)

    def test_hint_is_stored(self) -> None:
        err = JiraCliError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = JiraCliError("boom")
        assert err.hint is None

    def test_remote_error_status(self) -> None:
        err = RemoteError("nope", status_code=404)
        assert err.status_code == 404
        assert RemoteError("down").status_code is None


class TestLoginSuggestion:
    def test_without_hint(self) -> None:
        assert "jira-cli login --force" in append_login_suggestion(None)

    def test_appended_once(self) -> None:
        once = append_login_suggestion("Token expired.")
        assert once.startswith("Token expired.")
        assert append_login_suggestion(once) == once


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    def test_invalid_input_is_three(self) -> None:
        assert exit_codes.INVALID_INPUT == 3

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "worklog" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize(
        ("argv", "handler"),
        [
            (["login"], "_handle_login"),
            (["logout", "--silent"], "_handle_logout"),
            (["backlog", "PROJ"], "_handle_backlog"),
            (["board", "PROJ", "--mine"], "_handle_board"),
            (["worklog", "-u", "bob"], "_handle_worklog"),
            (["log", "PROJ-1", "1h"], "_handle_log"),
        ],
    )
    def test_command_routes_to_handler(
        self,
        monkeypatch: pytest.MonkeyPatch,
        argv: list[str],
        handler: str,
    ) -> None:
        from jira_cli.cli import app as app_module

        seen: list[str] = []
        monkeypatch.setattr(
            app_module, handler, lambda args: seen.append(args.command) or exit_codes.SUCCESS,
        )
        assert main(argv) == exit_codes.SUCCESS
        assert seen == [argv[0]]

    def test_unknown_command_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["frobnicate"])
        assert exc_info.value.code == 2
