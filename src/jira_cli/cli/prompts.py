"""Interactive prompts for the CLI layer.

This module is responsible for:

* Asking for the Jira URL, username and password on ``login``.
* Asking for confirmation on ``logout``.

All interaction goes through questionary — no business logic, no
network calls, no credential storage.
"""

from __future__ import annotations

from typing import Any

from jira_cli.exceptions import CredentialsError, EnvironmentError
from jira_cli.infra.credential_store import StoredCredentials


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


# ---------------------------------------------------------------------------
# Validators (pure)
# ---------------------------------------------------------------------------

def _validate_url(value: str) -> bool | str:
    """Return ``True`` or the message questionary shows under the input."""
    stripped = value.strip()
    if not stripped:
        return "URL must not be empty."
    if not stripped.startswith(("http://", "https://")):
        return "URL must start with http:// or https://"
    return True


def _validate_required(value: str) -> bool | str:
    return True if value.strip() else "This value is required."


# ---------------------------------------------------------------------------
# Public prompt functions
# ---------------------------------------------------------------------------

def prompt_credentials() -> StoredCredentials:
    """Ask for the Jira URL, username and password.

    Raises
    ------
    CredentialsError
        If the user cancels the prompt (Esc / Ctrl+C).
    """
    questionary = _import_questionary()

    answers: dict[str, str] | None = questionary.prompt(
        [
            {
                "type": "text",
                "name": "url",
                "message": "Enter your Jira URL",
                "validate": _validate_url,
            },
            {
                "type": "text",
                "name": "username",
                "message": "Enter your Jira username",
                "validate": _validate_required,
            },
            {
                "type": "password",
                "name": "password",
                "message": "Enter your Jira password",
                "validate": _validate_required,
            },
        ]
    )

    if not answers or len(answers) < 3:
        raise CredentialsError(
            "Login cancelled.",
            hint="Run `jira-cli login` to enter your credentials.",
        )

    return StoredCredentials(
        url=answers["url"].strip(),
        username=answers["username"].strip(),
        password=answers["password"],
    )


def confirm_logout() -> bool:
    """Ask whether the stored credentials should be removed."""
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(
        "Remove the stored Jira credentials?",
        default=False,
    ).ask()  # Returns None on Ctrl+C / Esc
    return bool(answer)
