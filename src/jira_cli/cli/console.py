"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exported: :data:`console` (stderr — status, errors)
and :data:`output` (stdout — tables and command results).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from jira_cli.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*objects, file=sys.stderr if self._stderr else sys.stdout)
			return
		rich_console.print(*objects)


console = _ConsoleProxy(stderr=True)
output = _ConsoleProxy(stderr=False)


def configure_logging(verbose: bool = False) -> None:
	"""Route library logging to stderr; DEBUG when *verbose*."""
	level = logging.DEBUG if verbose else logging.WARNING
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		logging.basicConfig(level=level, stream=sys.stderr, force=True)
		return
	handler = RichHandler(
		console=get_rich_console(stderr=True),
		show_path=False,
		markup=False,
	)
	logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
