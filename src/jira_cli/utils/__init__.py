"""Shared utilities — constants, typing helpers, and cross-cutting concerns.

Rules
-----
* No business logic.
* No terminal output.
* Importable by any layer.
"""

from jira_cli.utils.concurrency import gather_keyed, run_parallel

__all__: list[str] = ["gather_keyed", "run_parallel"]
