"""Rich-based spinner shown while remote calls are in flight.

The spinner is transient: once the wrapped block finishes it is
replaced by a single ``✓ <message>`` line, or ``✗ <message>`` when the
block raised.  Exceptions are never swallowed.

Design
------
* Renders on stderr so piped stdout stays clean.
* Shutdown-safe: :meth:`RichSpinner.stop` is idempotent.
* No ``print()`` — Rich handles all rendering.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any

from jira_cli.cli.console import get_rich_console
from jira_cli.exceptions import EnvironmentError


class RichSpinner:
    """Context manager wrapping a Rich :class:`~rich.progress.Progress`.

    Usage::

        with RichSpinner("Fetching sprints"):
            sprints = service.list_open_sprints("PROJ")
    """

    def __init__(self, message: str) -> None:
        try:
            from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._message = message
        self._console: Any = get_rich_console(stderr=True)
        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichSpinner:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: TracebackType | None,
    ) -> None:
        self.stop()
        if exc_type is None:
            self._console.print(f"[green]✓[/green] {self._message}")
        elif not issubclass(exc_type, KeyboardInterrupt):
            self._console.print(f"[red]✗[/red] {self._message}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the spinner."""
        if not self._started:
            self._progress.start()
            self._progress.add_task(self._message, total=None)
            self._started = True

    def stop(self) -> None:
        """Stop the spinner (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False
