from __future__ import annotations

from time import perf_counter
from typing import Callable, TypeVar

import structlog

from user_service.observability.metrics import get_metrics


T = TypeVar("T")


def instrument_store_call(*, store: str, operation: str, fn: Callable[[], T]) -> T:
    """Time a store round trip, update metrics, and emit a structured log event."""

    start = perf_counter()
    try:
        result = fn()
    except Exception:
        elapsed_ms = (perf_counter() - start) * 1000.0
        get_metrics().observe_store_call(store, elapsed_ms=elapsed_ms, failed=True)
        structlog.get_logger("stores").warning(
            "store_call_failed",
            store=store,
            operation=operation,
            elapsed_ms=round(elapsed_ms, 2),
        )
        raise

    elapsed_ms = (perf_counter() - start) * 1000.0
    get_metrics().observe_store_call(store, elapsed_ms=elapsed_ms)
    structlog.get_logger("stores").debug(
        "store_call",
        store=store,
        operation=operation,
        elapsed_ms=round(elapsed_ms, 2),
    )
    return result
