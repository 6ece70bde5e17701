"""Core worklog service — the per-user daily report and worklog submission.

Report pipeline (:meth:`WorklogService.get_worklog_report`):

1. **Resolve** — ``"me"`` or empty becomes the session user's name.
2. **Search** — issues the user logged work on that day (key field only).
3. **Fan out** — one worklog-history request per issue, joined all-or-nothing
   and keyed by issue key.
4. **Filter** — keep entries by that author that started on that day.
5. **Deduplicate** — on ``(issue key, start, author)``.
6. **Sort** — stable ascending sort on the start timestamp.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime, tzinfo
from typing import Any

from jira_cli.config import CURRENT_USER_ALIAS, MAX_RESULTS
from jira_cli.core.mappers import map_current_user, map_issue, map_worklog, response_list
from jira_cli.core.models import CurrentUser, Issue, WorklogEntry
from jira_cli.core.protocols import JiraTransport
from jira_cli.core.time_parsing import format_jira_timestamp
from jira_cli.exceptions import JiraCliError, NotFoundError, RemoteError, ValidationError
from jira_cli.utils.concurrency import gather_keyed

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class WorklogService:
    """Service reading and writing worklogs through a transport.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`JiraTransport` protocol.
    max_workers:
        Thread cap for the per-issue fan-out; ``None`` means one per issue.
    clock:
        Returns "now"; the default start time of new worklogs.
    """

    def __init__(
        self,
        transport: JiraTransport,
        *,
        max_workers: int | None = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._transport: JiraTransport = transport
        self._max_workers = max_workers
        self._clock = clock

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def get_worklog_report(
        self,
        user: str | None,
        day: date,
        *,
        tz: tzinfo | None = None,
    ) -> list[WorklogEntry]:
        """Return *user*'s worklog entries for *day*, oldest first.

        *tz* is the timezone *day* is expressed in; local time when
        ``None``.

        Raises
        ------
        NotFoundError
            If ``"me"`` cannot be resolved to a user name.
        AggregationFailure
            If any per-issue worklog fetch fails.
        """
        user_name = self.resolve_user_name(user)
        issues = self.get_issues_worked_on(user_name, day, fields="key")
        issues_by_key = {issue.key: issue for issue in issues}
        worklogs_by_key = gather_keyed(
            self.get_worklogs_for_issue,
            issues_by_key,
            max_workers=self._max_workers,
        )

        entries = select_entries(
            (
                (issues_by_key[key], raw)
                for key, worklogs in worklogs_by_key.items()
                for raw in worklogs
            ),
            author=user_name,
            day=day,
            tz=tz,
        )
        logger.debug(
            "Kept %d worklog(s) of %s on %s across %d issue(s)",
            len(entries), user_name, day, len(issues_by_key),
        )
        return entries

    def resolve_user_name(self, user: str | None) -> str:
        if not user or user == CURRENT_USER_ALIAS:
            return self.get_current_user().name
        return user

    def get_current_user(self) -> CurrentUser:
        current = map_current_user(self._get("/rest/auth/1/session"))
        if current is None:
            raise NotFoundError(
                "Could not resolve the current user.",
                hint="Pass the user name explicitly with --user.",
            )
        return current

    def get_issues_worked_on(
        self,
        user_name: str,
        day: date,
        fields: str | None = None,
    ) -> list[Issue]:
        escaped = user_name.replace("'", "\\'")
        params: dict[str, Any] = {
            "jql": f"worklogAuthor = '{escaped}' AND worklogDate = '{day:%Y-%m-%d}'",
            "maxResults": MAX_RESULTS,
        }
        if fields:
            params["fields"] = fields
        body = self._get("/rest/api/2/search", params)
        return [map_issue(raw) for raw in response_list(body, "issues")]

    def get_worklogs_for_issue(self, issue_key: str) -> list[dict[str, Any]]:
        body = self._get(
            f"/rest/api/2/issue/{issue_key}/worklog",
            {"maxResults": MAX_RESULTS},
        )
        return response_list(body, "worklogs")

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def add_worklog(
        self,
        issue_key: str,
        duration_seconds: int,
        start: datetime | None = None,
        comment: str | None = None,
    ) -> Any:
        """Create a worklog on *issue_key*; *start* defaults to now.

        Returns the created worklog as decoded by the transport.

        Raises
        ------
        ValidationError
            If the key is empty or the duration is not a positive integer.
        RemoteError
            If Jira rejects the worklog (e.g. the issue is closed).
        """
        if not issue_key.strip():
            raise ValidationError("Issue key must not be empty.")
        if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int):
            raise ValidationError(f"Duration must be whole seconds, got {duration_seconds!r}.")
        if duration_seconds <= 0:
            raise ValidationError(
                "Duration must be positive.",
                hint="Use a value like 30m, 1.5h, 1d or 1w.",
            )

        body: dict[str, Any] = {
            "started": format_jira_timestamp(start or self._clock()),
            "timeSpentSeconds": duration_seconds,
        }
        if comment is not None:
            body["comment"] = comment
        logger.debug("Logging %ss on %s", duration_seconds, issue_key)
        try:
            return self._transport.post(f"/rest/api/2/issue/{issue_key.strip()}/worklog", body)
        except JiraCliError:
            raise
        except Exception as exc:
            raise RemoteError(f"Unexpected transport error: {exc}") from exc

    # ------------------------------------------------------------------
    # Transport delegation (safe boundary)
    # ------------------------------------------------------------------

    def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        try:
            return self._transport.get(endpoint, params)
        except JiraCliError:
            raise
        except Exception as exc:
            raise RemoteError(f"Unexpected transport error: {exc}") from exc


# ---------------------------------------------------------------------------
# Entry selection (pure)
# ---------------------------------------------------------------------------

def select_entries(
    pairs: Iterable[tuple[Issue, dict[str, Any]]],
    *,
    author: str,
    day: date,
    tz: tzinfo | None = None,
) -> list[WorklogEntry]:
    """Filter, de-duplicate and order raw ``(issue, worklog)`` pairs."""
    seen: set[tuple[str, datetime, str]] = set()
    kept: list[WorklogEntry] = []
    for issue, raw in pairs:
        entry = map_worklog(raw, issue)
        if entry is None or entry.author != author:
            continue
        if entry.start.astimezone(tz).date() != day:
            continue
        if entry.identity in seen:
            continue
        seen.add(entry.identity)
        kept.append(entry)
    return sort_entries(kept)


def sort_entries(entries: Sequence[WorklogEntry]) -> list[WorklogEntry]:
    """Stable ascending sort on start time; ties keep fetch order."""
    return sorted(entries, key=lambda entry: entry.start)
