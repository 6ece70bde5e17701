"""Custom exception hierarchy for jira-cli.

All exceptions that cross layer boundaries must inherit from
:class:`JiraCliError`.  Raw third-party exceptions (e.g. from requests
or keyring) must NEVER propagate beyond the infrastructure layer — they
must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
JiraCliError
├── NotFoundError
├── ValidationError
├── RemoteError
│   └── AuthError
├── AggregationFailure
├── CredentialsError
└── EnvironmentError
"""

from __future__ import annotations


class JiraCliError(Exception):
    """Base exception for all jira-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Lookups ---------------------------------------------------------------

class NotFoundError(JiraCliError):
    """Raised when no board, sprint or user matches the query."""


# --- Local input -----------------------------------------------------------

class ValidationError(JiraCliError):
    """Raised when user input is rejected before any remote call."""


# --- Remote API ------------------------------------------------------------

class RemoteError(JiraCliError):
    """Raised for transport failures and non-2xx responses from Jira."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code
        """HTTP status of the failed response, ``None`` if none was received."""


class AuthError(RemoteError):
    """Raised when Jira rejects the stored credentials."""


class AggregationFailure(JiraCliError):
    """Raised when any branch of a parallel fetch fails.

    The first failure is attached as ``__cause__``; results of the other
    branches are discarded.
    """


# --- Local environment -----------------------------------------------------

class CredentialsError(JiraCliError):
    """Raised when credentials are missing or cannot be stored."""


class EnvironmentError(JiraCliError):
    """Raised when a required runtime dependency is not available."""


def append_login_suggestion(hint: str | None) -> str:
    """Append re-login guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Check your credentials with:"
    if not hint:
        return "\n".join((marker, "    jira-cli login --force"))
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    jira-cli login --force",
        )
    )
