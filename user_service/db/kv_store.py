from __future__ import annotations

from typing import Any

import structlog
from redis import Redis
from redis.exceptions import RedisError

from user_service.observability.stores import instrument_store_call

logger = structlog.get_logger(__name__)


class KeyValueStore:
    """Redis connection used for the anonymous counter and liveness probe."""

    def __init__(self, client: Any, url: str = "") -> None:
        self.client = client
        self.url = url

    @classmethod
    def from_url(cls, url: str, timeout_ms: int = 5000) -> "KeyValueStore":
        # redis-py waits on the kernel's TCP timeout unless both are bounded.
        timeout = timeout_ms / 1000.0
        client = Redis.from_url(url, socket_connect_timeout=timeout, socket_timeout=timeout)
        return cls(client, url=url)

    def connect(self) -> bool:
        if self.ping():
            logger.info("redis_connected", url=self.url)
            return True
        logger.error("redis_connection_error", url=self.url)
        return False

    def increment(self, key: str) -> int:
        return int(
            instrument_store_call(
                store="redis",
                operation="incr",
                fn=lambda: self.client.incr(key),
            )
        )

    def ping(self) -> bool:
        try:
            return bool(instrument_store_call(store="redis", operation="ping", fn=self.client.ping))
        except RedisError as exc:
            logger.warning("redis_ping_failed", url=self.url, error=str(exc))
            return False

    def close(self) -> None:
        self.client.close()
