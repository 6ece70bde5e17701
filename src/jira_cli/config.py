"""Central configuration, constants, and environment-driven settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from jira_cli.exceptions import ValidationError

# =============================================================================
# Credential storage
# =============================================================================
KEYRING_SERVICE = "jira-cli"

# Environment variables that bypass the keyring when all three are set.
ENV_URL = "JIRA_URL"
ENV_USERNAME = "JIRA_USERNAME"
ENV_PASSWORD = "JIRA_PASSWORD"

# =============================================================================
# Transport tuning
# =============================================================================
ENV_TIMEOUT = "JIRA_CLI_TIMEOUT"
ENV_MAX_WORKERS = "JIRA_CLI_MAX_WORKERS"

DEFAULT_TIMEOUT: float = 30.0  # seconds, per HTTP call

# Jira caps the real page size server-side; asking for this much forces a
# single page for worklog histories.
MAX_RESULTS: int = 1_048_576

# =============================================================================
# Duration units
# =============================================================================
# Working-time policy: a day is 8h, a week is 5 days.
SECONDS_PER_UNIT: dict[str, int] = {
    "m": 60,
    "h": 3_600,
    "d": 28_800,
    "w": 144_000,
}

# =============================================================================
# Jira vocabulary
# =============================================================================
SPRINT_STATE_ACTIVE = "active"
SPRINT_STATE_CLOSED = "closed"
CURRENT_USER_ALIAS = "me"
ONLY_MINE_JQL = "assignee = currentUser()"


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime knobs resolved once per invocation."""

    timeout: float = DEFAULT_TIMEOUT
    max_workers: int | None = None


def _positive_number(raw: str, name: str, kind: type[float] | type[int]) -> float | int:
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ValidationError(
            f"{name} must be a number, got {raw!r}.",
        ) from exc
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {raw!r}.")
    return value


def load_settings(
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Settings:
    """Build :class:`Settings` from the environment.

    An explicit *timeout* (the ``--timeout`` option) wins over
    ``JIRA_CLI_TIMEOUT``.
    """
    env = os.environ if env is None else env

    resolved_timeout = DEFAULT_TIMEOUT
    raw_timeout = env.get(ENV_TIMEOUT)
    if raw_timeout:
        resolved_timeout = float(_positive_number(raw_timeout, ENV_TIMEOUT, float))
    if timeout is not None:
        if timeout <= 0:
            raise ValidationError(f"--timeout must be positive, got {timeout}.")
        resolved_timeout = timeout

    max_workers: int | None = None
    raw_workers = env.get(ENV_MAX_WORKERS)
    if raw_workers:
        max_workers = int(_positive_number(raw_workers, ENV_MAX_WORKERS, int))

    return Settings(timeout=resolved_timeout, max_workers=max_workers)
