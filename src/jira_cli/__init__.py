"""jira-cli — terminal client for Jira boards, sprints and worklogs.

Talks to the Jira REST API over a strict layered architecture.
"""

from jira_cli.version import __version__

__all__: list[str] = ["__version__"]
