"""Parallel join over independent, side-effect-free calls.

Policy
------
* All calls are started, all are awaited (join, not race).
* Results come back in input order, or keyed by the caller's keys.
* If any call fails the whole join fails with
  :class:`~jira_cli.exceptions.AggregationFailure`; the first failure in
  input order is chained as ``__cause__``.  Nothing is cancelled.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TypeVar

from jira_cli.exceptions import AggregationFailure, JiraCliError

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def run_parallel(
    calls: Sequence[Callable[[], T]],
    *,
    max_workers: int | None = None,
) -> list[T]:
    """Run every zero-argument callable concurrently and join.

    ``max_workers=None`` starts one thread per call.
    """
    if not calls:
        return []
    workers = max_workers or len(calls)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures: list[Future[T]] = [pool.submit(call) for call in calls]
        # Leaving the block waits for every branch, failed or not.

    errors = [exc for exc in (f.exception() for f in futures) if exc is not None]
    if errors:
        first = errors[0]
        logger.debug("%d of %d parallel calls failed", len(errors), len(calls))
        hint = first.hint if isinstance(first, JiraCliError) else None
        raise AggregationFailure(
            f"Parallel fetch failed ({len(errors)} of {len(calls)} requests): {first}",
            hint=hint,
        ) from first

    return [f.result() for f in futures]


def gather_keyed(
    func: Callable[[K], T],
    keys: Iterable[K],
    *,
    max_workers: int | None = None,
) -> dict[K, T]:
    """Apply *func* to every key concurrently; return ``{key: result}``.

    Duplicate keys are fetched once.  The mapping preserves first-seen
    key order.
    """
    unique = list(dict.fromkeys(keys))
    results = run_parallel(
        [lambda key=key: func(key) for key in unique],
        max_workers=max_workers,
    )
    return dict(zip(unique, results))
