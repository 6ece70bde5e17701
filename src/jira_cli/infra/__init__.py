"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Jira REST API and the OS
keyring.  Every raw third-party exception must be caught here and
re-raised as a :class:`~jira_cli.exceptions.JiraCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from jira_cli.infra.credential_store import CredentialStore, StoredCredentials
from jira_cli.infra.jira_api import JiraApi, JiraApiConfig

__all__: list[str] = [
    "CredentialStore",
    "JiraApi",
    "JiraApiConfig",
    "StoredCredentials",
]
