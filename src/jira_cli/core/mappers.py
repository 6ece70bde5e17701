"""Raw Jira JSON → domain models.

Pure functions.  Malformed entries are skipped by :func:`response_list`
rather than failing the whole command.
"""

from __future__ import annotations

from typing import Any

from jira_cli.core.models import Board, CurrentUser, Issue, Sprint, WorklogEntry
from jira_cli.core.time_parsing import parse_jira_timestamp


def response_list(body: Any, key: str) -> list[dict[str, Any]]:
    """Safely pull a list of dicts from ``body[key]``."""
    if not isinstance(body, dict):
        return []
    raw = body.get(key)
    if not isinstance(raw, list):
        return []
    return [entry for entry in raw if isinstance(entry, dict)]


def map_board(raw: dict[str, Any]) -> Board:
    return Board(id=int(raw["id"]), name=str(raw.get("name", "")))


def map_sprint(raw: dict[str, Any]) -> Sprint:
    return Sprint(
        id=int(raw["id"]),
        name=str(raw.get("name", "")),
        state=str(raw.get("state", "")).lower(),
    )


def map_issue(raw: dict[str, Any]) -> Issue:
    """Convert a raw issue dict (any field subset) to an :class:`Issue`."""
    fields = raw.get("fields") or {}
    status = fields.get("status") or {}
    assignee = fields.get("assignee") or {}
    status_id = status.get("id")
    return Issue(
        key=str(raw.get("key", "")),
        summary=str(fields.get("summary") or ""),
        status_id=str(status_id) if status_id is not None else None,
        status_name=status.get("name"),
        assignee=assignee.get("displayName") or assignee.get("name"),
    )


def map_current_user(raw: Any) -> CurrentUser | None:
    if not isinstance(raw, dict) or not raw.get("name"):
        return None
    return CurrentUser(name=str(raw["name"]))


def map_worklog(raw: dict[str, Any], issue: Issue) -> WorklogEntry | None:
    """Build a :class:`WorklogEntry`, or ``None`` if ``started`` is unusable."""
    started = parse_jira_timestamp(str(raw.get("started", "")))
    if started is None:
        return None
    author = raw.get("author") or {}
    return WorklogEntry(
        issue=issue,
        author=str(author.get("name", "")),
        start=started,
        duration_seconds=int(raw.get("timeSpentSeconds") or 0),
        comment=str(raw.get("comment") or ""),
    )
