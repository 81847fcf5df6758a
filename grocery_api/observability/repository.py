from __future__ import annotations

from time import perf_counter
from typing import Any, Callable, TypeVar

import structlog

from grocery_api.observability.metrics import get_metrics
from grocery_api.repositories.errors import Result


T = TypeVar("T")


def instrument_repository_call(*, operation: str, fn: Callable[[], Result[T]], **context: Any) -> Result[T]:
    """Time a repository call, update metrics, and emit a structured log event.

    ``context`` (ids, ranges, sort keys) is attached to the log line so failed
    results can be traced back to the request that produced them.
    """

    logger = structlog.get_logger("repository")
    start = perf_counter()
    try:
        result = fn()
    except Exception:
        elapsed_ms = (perf_counter() - start) * 1000.0
        get_metrics().observe_repository_call(operation=operation, elapsed_ms=elapsed_ms, failed=True)
        logger.exception(
            "repository_call_crashed",
            operation=operation,
            elapsed_ms=round(elapsed_ms, 2),
            **context,
        )
        raise

    elapsed_ms = (perf_counter() - start) * 1000.0
    get_metrics().observe_repository_call(operation=operation, elapsed_ms=elapsed_ms, failed=not result.ok)
    if result.ok:
        logger.debug("repository_call", operation=operation, elapsed_ms=round(elapsed_ms, 2), **context)
    else:
        logger.warning(
            "repository_call_failed",
            operation=operation,
            error=result.error.value if result.error else None,
            messages=list(result.messages),
            elapsed_ms=round(elapsed_ms, 2),
            **context,
        )
    return result
