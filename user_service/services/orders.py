from __future__ import annotations

from typing import Any

import structlog

from user_service.db.document_store import ORDERS, USERS, DocumentStore
from user_service.errors import NotFoundError, store_errors
from user_service.services.accounts import ensure_available

logger = structlog.get_logger(__name__)


def place_order(store: DocumentStore, name: str, order: Any) -> None:
    """Append ``order`` to the history of ``name``, creating the history on first use.

    The history is read, extended in memory, and written back whole. Two
    concurrent orders for one name can therefore overwrite each other.
    """

    logger.info("order", name=name)
    ensure_available(store)
    with store_errors():
        if store.find_one(USERS, {"name": name}) is None:
            raise NotFoundError("Name not found")

        existing = store.find_one(ORDERS, {"name": name})
        if existing is not None:
            history = list(existing.get("history") or [])
            history.append(order)
            store.update_one(ORDERS, {"name": name}, {"$set": {"history": history}})
        else:
            store.insert_one(ORDERS, {"name": name, "history": [order]})


def get_history(store: DocumentStore, name: str) -> dict[str, Any]:
    ensure_available(store)
    with store_errors():
        history = store.find_one(ORDERS, {"name": name})
    if history is None:
        raise NotFoundError("History not found")
    return history
