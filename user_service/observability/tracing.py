"""Optional tracing hook.

The service never talks to a tracing agent directly; it only annotates the
current span through a ``Tracer``. Without an agent the no-op tracer is used.
"""

from __future__ import annotations

import random
from typing import Any, Protocol

import structlog


DATACENTERS = (
    "asia-northeast2",
    "asia-south1",
    "europe-west3",
    "us-east1",
    "us-west1",
)
DATACENTER_TAG = "custom.sdk.tags.datacenter"


class Tracer(Protocol):
    def annotate(self, key: str, value: Any) -> None: ...


class NoopTracer:
    def annotate(self, key: str, value: Any) -> None:
        return None


class ContextTracer:
    """Records span annotations as structlog context for the current request."""

    def __init__(self, agent_host: str) -> None:
        self.agent_host = agent_host

    def annotate(self, key: str, value: Any) -> None:
        structlog.contextvars.bind_contextvars(**{key: value})


_tracer: Tracer = NoopTracer()


def set_tracer(tracer: Tracer | None) -> None:
    global _tracer
    _tracer = tracer if tracer is not None else NoopTracer()


def get_tracer() -> Tracer:
    return _tracer


def configure_tracing(enabled: bool, agent_host: str) -> Tracer:
    log = structlog.get_logger("tracing")
    if enabled:
        set_tracer(ContextTracer(agent_host=agent_host))
        log.info("tracing_initialized", agent_host=agent_host)
    else:
        set_tracer(None)
        log.info("tracing_not_initialized", reason="agent unavailable")
    return get_tracer()


def annotate_request() -> None:
    get_tracer().annotate(DATACENTER_TAG, random.choice(DATACENTERS))
