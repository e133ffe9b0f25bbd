from __future__ import annotations

from typing import Any

import structlog
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from user_service.db.status import StoreStatus
from user_service.observability.stores import instrument_store_call

USERS = "users"
ORDERS = "orders"

logger = structlog.get_logger(__name__)


class DocumentStore:
    """Thin wrapper over a MongoDB database holding the users and orders collections."""

    def __init__(
        self,
        client: Any,
        database: str = "users",
        status: StoreStatus | None = None,
    ) -> None:
        self.client = client
        self.db = client[database]
        self.status = status or StoreStatus()
        self._collections = {name: self.db[name] for name in (USERS, ORDERS)}

    @classmethod
    def from_url(cls, url: str, database: str, timeout_ms: int = 5000) -> "DocumentStore":
        # MongoClient does not touch the network until the first operation.
        client: MongoClient = MongoClient(url, serverSelectionTimeoutMS=timeout_ms)
        return cls(client, database=database)

    def connect(self) -> bool:
        try:
            self.client.admin.command("ping")
        except PyMongoError as exc:
            self.status.mark_disconnected()
            logger.error("mongodb_connection_error", error=str(exc))
            return False
        self.status.mark_connected()
        logger.info("mongodb_connected")
        return True

    @property
    def connected(self) -> bool:
        return self.status.connected

    def collection(self, name: str) -> Any:
        try:
            return self._collections[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    def find_one(self, collection: str, filter: dict[str, Any]) -> dict[str, Any] | None:
        coll = self.collection(collection)
        return instrument_store_call(
            store="mongo",
            operation=f"{collection}.find_one",
            fn=lambda: coll.find_one(filter),
        )

    def find_all(self, collection: str) -> list[dict[str, Any]]:
        coll = self.collection(collection)
        return instrument_store_call(
            store="mongo",
            operation=f"{collection}.find",
            fn=lambda: list(coll.find()),
        )

    def insert_one(self, collection: str, doc: dict[str, Any]) -> Any:
        coll = self.collection(collection)
        result = instrument_store_call(
            store="mongo",
            operation=f"{collection}.insert_one",
            fn=lambda: coll.insert_one(doc),
        )
        return result.inserted_id

    def update_one(self, collection: str, filter: dict[str, Any], update: dict[str, Any]) -> int:
        coll = self.collection(collection)
        result = instrument_store_call(
            store="mongo",
            operation=f"{collection}.update_one",
            fn=lambda: coll.update_one(filter, update),
        )
        return result.modified_count

    def close(self) -> None:
        self.client.close()
