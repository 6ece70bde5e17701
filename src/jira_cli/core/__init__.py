"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No direct network I/O — only through an injected transport.
* No imports from ``cli`` or ``infra``.
"""

from jira_cli.core.board_service import BoardService
from jira_cli.core.models import (
    Board,
    Column,
    CurrentUser,
    Duration,
    DurationUnit,
    Issue,
    Sprint,
    TimeOfDay,
    WorklogEntry,
)
from jira_cli.core.protocols import JiraTransport
from jira_cli.core.worklog_service import WorklogService

__all__: list[str] = [
    "Board",
    "BoardService",
    "Column",
    "CurrentUser",
    "Duration",
    "DurationUnit",
    "Issue",
    "JiraTransport",
    "Sprint",
    "TimeOfDay",
    "WorklogEntry",
    "WorklogService",
]
