"""Core board service — sprints and the assembled display board.

Depends on a :class:`~jira_cli.core.protocols.JiraTransport` injected at
construction time; contains no HTTP or terminal code.

Selection rules
---------------
* **Primary board** — the first board in the API's response order.
  Jira documents no ordering guarantee for this list.
* **Active sprint** — the *last* sprint reported active.  Existing
  boards rely on last-wins when several sprints overlap.

Both rules raise :class:`~jira_cli.exceptions.NotFoundError` on an
empty collection.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from jira_cli.config import ONLY_MINE_JQL, SPRINT_STATE_ACTIVE, SPRINT_STATE_CLOSED
from jira_cli.core.mappers import map_board, map_issue, map_sprint, response_list
from jira_cli.core.models import Board, Column, Issue, Sprint
from jira_cli.core.protocols import JiraTransport
from jira_cli.exceptions import JiraCliError, NotFoundError, RemoteError
from jira_cli.utils.concurrency import run_parallel

logger = logging.getLogger(__name__)


class BoardService:
    """Stateless service composing agile endpoints into read models.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`JiraTransport` protocol.
    max_workers:
        Thread cap for parallel fetches; ``None`` means one per request.
    """

    def __init__(self, transport: JiraTransport, *, max_workers: int | None = None) -> None:
        self._transport: JiraTransport = transport
        self._max_workers = max_workers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_open_sprints(self, project_key: str) -> list[Sprint]:
        """Return every sprint of the primary board that is not closed.

        Raises
        ------
        NotFoundError
            If the project has no boards.
        """
        board = self.get_primary_board(project_key)
        sprints = self.get_sprints_for_board(board.id)
        return [sprint for sprint in sprints if sprint.state != SPRINT_STATE_CLOSED]

    def get_display_board(self, project_key: str, only_mine: bool = False) -> list[Column]:
        """Assemble the columns of the primary board's active sprint.

        Each column holds the sprint issues whose status id is in the
        column's status list, in source order.  Issues matching no column
        are left out of every column.

        Raises
        ------
        NotFoundError
            If the project has no boards or the board has no active sprint.
        AggregationFailure
            If fetching the sprints or the configuration fails.
        """
        board = self.get_primary_board(project_key)
        sprints, config = run_parallel(
            [
                lambda: self.get_sprints_for_board(board.id, state=SPRINT_STATE_ACTIVE),
                lambda: self.get_config_for_board(board.id),
            ],
            max_workers=self._max_workers,
        )
        sprint = self.select_active_sprint(sprints)
        issues = self.get_issues_for_sprint(sprint.id, only_mine=only_mine)
        return build_columns(config, issues)

    # ------------------------------------------------------------------
    # Endpoint wrappers
    # ------------------------------------------------------------------

    def get_boards_for_project(self, project_key: str) -> list[Board]:
        body = self._get("/rest/agile/1.0/board", {"projectKeyOrId": project_key})
        boards = [map_board(raw) for raw in response_list(body, "values")]
        logger.debug("Project %s has %d board(s)", project_key, len(boards))
        return boards

    def get_primary_board(self, project_key: str) -> Board:
        boards = self.get_boards_for_project(project_key)
        if not boards:
            raise NotFoundError(
                f"No board found for project {project_key}.",
                hint="Check the project key and that you can see its board.",
            )
        return boards[0]

    def get_config_for_board(self, board_id: int) -> dict[str, Any]:
        body = self._get(f"/rest/agile/1.0/board/{board_id}/configuration")
        return body if isinstance(body, dict) else {}

    def get_sprints_for_board(self, board_id: int, state: str | None = None) -> list[Sprint]:
        params = {"state": state} if state else None
        body = self._get(f"/rest/agile/1.0/board/{board_id}/sprint", params)
        return [map_sprint(raw) for raw in response_list(body, "values")]

    def get_issues_for_sprint(self, sprint_id: int, only_mine: bool = False) -> list[Issue]:
        params = {"jql": ONLY_MINE_JQL} if only_mine else None
        body = self._get(f"/rest/agile/1.0/sprint/{sprint_id}/issue", params)
        issues = [map_issue(raw) for raw in response_list(body, "issues")]
        logger.debug("Sprint %s has %d issue(s)", sprint_id, len(issues))
        return issues

    @staticmethod
    def select_active_sprint(sprints: Sequence[Sprint]) -> Sprint:
        """Return the last active sprint of *sprints*."""
        active = [sprint for sprint in sprints if sprint.state == SPRINT_STATE_ACTIVE]
        if not active:
            raise NotFoundError(
                "No active sprint found on the board.",
                hint="Use `jira-cli backlog <project>` to list open sprints.",
            )
        return active[-1]

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
# Column assembly (pure)
# ---------------------------------------------------------------------------

def build_columns(config: dict[str, Any], issues: Sequence[Issue]) -> list[Column]:
    """Partition *issues* into the board's configured columns."""
    raw_columns = (config.get("columnConfig") or {}).get("columns") or []
    columns: list[Column] = []
    for raw in raw_columns:
        status_ids = tuple(
            str(status.get("id"))
            for status in raw.get("statuses") or []
            if isinstance(status, dict)
        )
        columns.append(
            Column(
                name=str(raw.get("name", "")),
                status_ids=status_ids,
                issues=tuple(issue for issue in issues if issue.status_id in status_ids),
            )
        )
    return columns
