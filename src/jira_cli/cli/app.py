"""CLI application entry point and command routing for jira-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~jira_cli.exceptions.JiraCliError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module owns the credential lifecycle: it loads credentials, builds
  the transport and hands it to the services.
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from jira_cli.cli import exit_codes
from jira_cli.cli.console import configure_logging, console
from jira_cli.exceptions import JiraCliError, ValidationError
from jira_cli.version import __version__

if TYPE_CHECKING:
    from jira_cli.config import Settings
    from jira_cli.infra.credential_store import CredentialStore
    from jira_cli.infra.jira_api import JiraApi


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with one sub-parser per command."""
    parser = argparse.ArgumentParser(
        prog="jira-cli",
        description="Jira boards, sprints and worklogs in your terminal.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every request to stderr.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Per-request timeout (default: $JIRA_CLI_TIMEOUT or 30).",
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    login = commands.add_parser("login", help="Enter Jira credentials.")
    login.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite the current login information.",
    )

    logout = commands.add_parser("logout", help="Remove the stored Jira credentials.")
    logout.add_argument(
        "-s",
        "--silent",
        action="store_true",
        help="Proceed without asking for confirmation.",
    )

    backlog = commands.add_parser("backlog", help="List the open sprints of a project.")
    backlog.add_argument("project", help="Project key, e.g. PROJ.")

    board = commands.add_parser(
        "board",
        help="Display the active sprint of the project's primary board.",
    )
    board.add_argument("project", help="Project key, e.g. PROJ.")
    board.add_argument(
        "-m",
        "--mine",
        action="store_true",
        help="Only show issues assigned to me.",
    )

    worklog = commands.add_parser("worklog", help="Display a user's worklog for a day.")
    worklog.add_argument(
        "-u",
        "--user",
        default=None,
        help="User whose worklogs are shown (default: me).",
    )
    worklog.add_argument(
        "-d",
        "--date",
        default=None,
        help="Day to show, e.g. 'yesterday' or 2024-01-15 (default: today).",
    )

    log = commands.add_parser("log", help="Create a new worklog entry on an issue.")
    log.add_argument("issue", help="Issue key, e.g. PROJ-123.")
    log.add_argument("duration", help="Time spent, e.g. 45m, 1.5h, 1d, 1w.")
    log.add_argument("-m", "--message", default=None, help="Worklog comment.")
    log.add_argument(
        "-s",
        "--start",
        default=None,
        help="Start time today, e.g. 9:30 or 2:15pm (default: now).",
    )
    return parser


# ---------------------------------------------------------------------------
# Session wiring
# ---------------------------------------------------------------------------

def _credential_store() -> CredentialStore:
    from jira_cli.infra.credential_store import CredentialStore

    return CredentialStore()


def _connect(args: argparse.Namespace) -> tuple[JiraApi, Settings]:
    """Load (or prompt for) credentials and return ``(transport, settings)``."""
    from jira_cli.cli.prompts import prompt_credentials
    from jira_cli.config import load_settings
    from jira_cli.infra.jira_api import JiraApi, JiraApiConfig

    settings = load_settings(timeout=args.timeout)
    store = _credential_store()
    credentials = store.load()
    if credentials is None:
        console.print("[yellow]No Jira credentials stored yet.[/yellow]")
        credentials = prompt_credentials()
        store.save(credentials)

    api = JiraApi(
        JiraApiConfig(
            url=credentials.url,
            username=credentials.username,
            password=credentials.password,
            timeout=settings.timeout,
        )
    )
    return api, settings


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_login(args: argparse.Namespace) -> int:
    from jira_cli.cli.prompts import prompt_credentials

    store = _credential_store()
    if store.is_logged_in() and not args.force:
        current = store.load()
        who = f" as {current.username} on {current.url}" if current else ""
        console.print(f"Already logged in{who}.")
        console.print("[dim]Use --force to overwrite the stored credentials.[/dim]")
        return exit_codes.SUCCESS

    credentials = prompt_credentials()
    store.save(credentials)
    console.print(f"[bold green]✅ Logged in[/bold green] as {credentials.username}")
    return exit_codes.SUCCESS


def _handle_logout(args: argparse.Namespace) -> int:
    from jira_cli.cli.prompts import confirm_logout

    store = _credential_store()
    if not store.is_logged_in():
        return exit_codes.SUCCESS
    if args.silent or confirm_logout():
        store.clear()
        console.print("[bold green]✅ Logged out[/bold green]")
    return exit_codes.SUCCESS


def _handle_backlog(args: argparse.Namespace) -> int:
    from jira_cli.cli.spinner import RichSpinner
    from jira_cli.cli.tables import show_sprints
    from jira_cli.core.board_service import BoardService

    api, settings = _connect(args)
    service = BoardService(api, max_workers=settings.max_workers)
    with RichSpinner(f"Fetching sprints for {args.project}"):
        sprints = service.list_open_sprints(args.project)

    show_sprints(sprints)
    if not sprints:
        console.print("[yellow]No open sprints.[/yellow]")
    return exit_codes.SUCCESS


def _handle_board(args: argparse.Namespace) -> int:
    from jira_cli.cli.spinner import RichSpinner
    from jira_cli.cli.tables import show_board
    from jira_cli.core.board_service import BoardService

    api, settings = _connect(args)
    service = BoardService(api, max_workers=settings.max_workers)
    with RichSpinner(f"Fetching board for {args.project}"):
        columns = service.get_display_board(args.project, only_mine=args.mine)

    show_board(columns)
    return exit_codes.SUCCESS


def _handle_worklog(args: argparse.Namespace) -> int:
    from jira_cli.cli.spinner import RichSpinner
    from jira_cli.cli.tables import show_worklog
    from jira_cli.core.time_parsing import parse_report_date
    from jira_cli.core.worklog_service import WorklogService

    day = parse_report_date(args.date)
    if day is None:
        raise ValidationError(
            f"Could not parse the date: {args.date}",
            hint="Try 'today', 'yesterday' or 2024-01-15.",
        )

    api, settings = _connect(args)
    service = WorklogService(api, max_workers=settings.max_workers)
    with RichSpinner("Fetching current user" if not args.user else f"Using user {args.user}"):
        user_name = service.resolve_user_name(args.user)
    with RichSpinner(f"Fetching worklogs for {day:%Y-%m-%d}"):
        entries = service.get_worklog_report(user_name, day)

    show_worklog(entries, user_name, day)
    return exit_codes.SUCCESS


def _handle_log(args: argparse.Namespace) -> int:
    from jira_cli.cli.formatting import display_hours
    from jira_cli.cli.spinner import RichSpinner
    from jira_cli.core.time_parsing import duration_to_seconds, parse_duration, parse_time_of_day
    from jira_cli.core.worklog_service import WorklogService

    duration = parse_duration(args.duration)
    if duration is None:
        raise ValidationError(
            f"Please enter a valid duration, got {args.duration!r}.",
            hint="Use a number followed by m, h, d or w, e.g. 45m or 1.5h.",
        )
    start = None
    if args.start:
        time_of_day = parse_time_of_day(args.start)
        if time_of_day is None:
            raise ValidationError(
                f"Please enter a valid start time, got {args.start!r}.",
                hint="Use 24-hour H:MM (e.g. 13:30) or 12-hour H:MM am/pm (e.g. 1:30pm).",
            )
        start = time_of_day.today()
    seconds = duration_to_seconds(duration.value, duration.unit)

    api, settings = _connect(args)
    service = WorklogService(api, max_workers=settings.max_workers)
    with RichSpinner(f"Adding work log to {args.issue}"):
        service.add_worklog(args.issue, seconds, start, args.message)

    console.print(f"[bold green]✅ Logged {display_hours(seconds)}h[/bold green] on {args.issue}")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the jira-cli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    command: str = args.command

    if command == "login":
        return _handle_login(args)
    if command == "logout":
        return _handle_logout(args)
    if command == "backlog":
        return _handle_backlog(args)
    if command == "board":
        return _handle_board(args)
    if command == "worklog":
        return _handle_worklog(args)
    return _handle_log(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except JiraCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        if isinstance(exc, ValidationError):
            sys.exit(exit_codes.INVALID_INPUT)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
