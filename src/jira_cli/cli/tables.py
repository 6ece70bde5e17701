"""Rich table rendering for sprints, boards and worklog reports.

``build_*`` functions return a Rich ``Table`` and do no I/O;
``show_*`` functions print it to stdout.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from jira_cli.cli.console import output
from jira_cli.cli.formatting import display_hours, display_text
from jira_cli.core.models import Column, Sprint, WorklogEntry
from jira_cli.exceptions import EnvironmentError

COMMENT_WIDTH = 60


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def _escape(text: str) -> str:
    from rich.markup import escape

    return escape(text)


# ---------------------------------------------------------------------------
# Backlog
# ---------------------------------------------------------------------------

def build_sprint_table(sprints: Sequence[Sprint]) -> Any:
    table_class = _import_rich_table()
    table = table_class(show_header=True, header_style="bold magenta", border_style="dim")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Sprint", min_width=20)
    table.add_column("State")
    for sprint in sprints:
        table.add_row(str(sprint.id), _escape(sprint.name), sprint.state)
    return table


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------

def board_rows(columns: Sequence[Column]) -> list[list[str]]:
    """Lay issues out row by row: row *i* holds the *i*-th issue of each column."""
    depth = max((len(column.issues) for column in columns), default=0)
    rows: list[list[str]] = []
    for index in range(depth):
        row = []
        for column in columns:
            if index < len(column.issues):
                issue = column.issues[index]
                row.append(f"[bold]{_escape(issue.key)}[/bold]\n{_escape(issue.summary)}")
            else:
                row.append("")
        rows.append(row)
    return rows


def build_board_table(columns: Sequence[Column]) -> Any:
    table_class = _import_rich_table()
    table = table_class(
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
        show_lines=True,
        expand=True,
    )
    for column in columns:
        table.add_column(_escape(column.name), ratio=1, overflow="fold")
    for row in board_rows(columns):
        table.add_row(*row)
    return table


# ---------------------------------------------------------------------------
# Worklog report
# ---------------------------------------------------------------------------

def build_worklog_table(entries: Sequence[WorklogEntry], user: str, day: date) -> Any:
    table_class = _import_rich_table()
    table = table_class(
        title=f"Worklog of {_escape(user)} on {day:%Y-%m-%d}",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
        show_footer=True,
    )
    total = sum(entry.duration_seconds for entry in entries)
    table.add_column("Start", footer="Total")
    table.add_column("Issue", style="bold")
    table.add_column("Time (h)", justify="right", footer=display_hours(total))
    table.add_column("Comment")
    for entry in entries:
        table.add_row(
            entry.start.astimezone().strftime("%H:%M"),
            _escape(entry.issue.key),
            display_hours(entry.duration_seconds),
            _escape(display_text(entry.comment, COMMENT_WIDTH)),
        )
    return table


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------

def show_sprints(sprints: Sequence[Sprint]) -> None:
    output.print(build_sprint_table(sprints))


def show_board(columns: Sequence[Column]) -> None:
    output.print(build_board_table(columns))


def show_worklog(entries: Sequence[WorklogEntry], user: str, day: date) -> None:
    output.print(build_worklog_table(entries, user, day))
