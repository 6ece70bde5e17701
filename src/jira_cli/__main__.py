"""Allow ``python -m jira_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m jira_cli`` behaves identically to the ``jira-cli``
console script.
"""

from __future__ import annotations

from jira_cli.cli.app import cli

if __name__ == "__main__":
    cli()
