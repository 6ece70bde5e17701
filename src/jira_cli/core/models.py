"""Domain models for jira-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They are rebuilt from remote state on
every invocation and are never mutated locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum


# ---------------------------------------------------------------------------
# Agile entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Board:
    """An agile board attached to a project."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Sprint:
    """A sprint of a board."""

    id: int
    name: str

    state: str
    """One of ``active``, ``closed`` or ``future``."""


@dataclass(frozen=True, slots=True)
class Issue:
    """Read-only projection of a Jira issue.

    Only ``key`` is guaranteed; searches that request a reduced field
    set leave the other attributes empty.
    """

    key: str
    """Human-readable identifier (e.g. ``PROJ-123``)."""

    summary: str = ""
    status_id: str | None = None
    status_name: str | None = None
    assignee: str | None = None


@dataclass(frozen=True, slots=True)
class Column:
    """A derived board column: a status family and the issues in it."""

    name: str
    status_ids: tuple[str, ...]
    issues: tuple[Issue, ...]


# ---------------------------------------------------------------------------
# Worklogs
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CurrentUser:
    """The identity behind the stored credentials."""

    name: str


@dataclass(frozen=True, slots=True)
class WorklogEntry:
    """One worklog entry annotated with its issue.

    ``(issue.key, start, author)`` identifies an entry for
    de-duplication and ordering.
    """

    issue: Issue
    author: str
    start: datetime
    duration_seconds: int
    comment: str = ""

    @property
    def identity(self) -> tuple[str, datetime, str]:
        return (self.issue.key, self.start, self.author)


# ---------------------------------------------------------------------------
# Time values parsed from CLI input
# ---------------------------------------------------------------------------

class DurationUnit(str, Enum):
    """Duration suffixes accepted on the command line."""

    MINUTE = "m"
    HOUR = "h"
    WORKDAY = "d"
    WORKWEEK = "w"


@dataclass(frozen=True, slots=True)
class Duration:
    """A numeric value paired with its unit (e.g. ``1.5`` hours)."""

    value: float
    unit: DurationUnit


@dataclass(frozen=True, slots=True)
class TimeOfDay:
    """Wall-clock hour and minute, without a date."""

    hour: int
    minute: int

    def on(self, day: date) -> datetime:
        """Return this time on *day* as a local, timezone-aware datetime."""
        return datetime.combine(day, time(self.hour, self.minute)).astimezone()

    def today(self) -> datetime:
        """Return this time on the current calendar day."""
        return self.on(date.today())
