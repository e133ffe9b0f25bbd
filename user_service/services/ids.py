from __future__ import annotations

from user_service.db.kv_store import KeyValueStore
from user_service.errors import store_errors

COUNTER_KEY = "anonymous-counter"


def next_anonymous_id(kv: KeyValueStore) -> str:
    with store_errors():
        value = kv.increment(COUNTER_KEY)
    return f"anonymous-{value}"
