from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from types import SimpleNamespace
from typing import Any

import bson
import pytest
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError
from redis.exceptions import ConnectionError as RedisConnectionError

from user_service.config import get_settings
from user_service.db.document_store import DocumentStore
from user_service.db.kv_store import KeyValueStore
from user_service.db.status import StoreStatus
from user_service.main import app
from user_service.observability.metrics import reset_metrics
from user_service.observability.tracing import set_tracer


def _matches(doc: dict, filter: dict) -> bool:
    return all(doc.get(key) == value for key, value in filter.items())


class MockCollection:
    """In-memory collection; writes are BSON-encoded first, as pymongo does."""

    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.calls: list[str] = []
        self.error: Exception | None = None
        # When set, ``error`` is raised only for these operations.
        self.failing_ops: set[str] | None = None

    def _record(self, op: str) -> None:
        self.calls.append(op)
        if self.error is not None and (self.failing_ops is None or op in self.failing_ops):
            raise self.error

    def find_one(self, filter: dict) -> dict | None:
        self._record("find_one")
        for row in self.rows:
            if _matches(row, filter):
                return copy.deepcopy(row)
        return None

    def find(self, filter: dict | None = None):
        self._record("find")
        return iter([copy.deepcopy(row) for row in self.rows if _matches(row, filter or {})])

    def insert_one(self, doc: dict) -> SimpleNamespace:
        self._record("insert_one")
        doc.setdefault("_id", ObjectId())
        self.rows.append(bson.decode(bson.encode(doc)))
        return SimpleNamespace(inserted_id=doc["_id"])

    def update_one(self, filter: dict, update: dict) -> SimpleNamespace:
        self._record("update_one")
        encoded = bson.decode(bson.encode(update))
        for row in self.rows:
            if _matches(row, filter):
                row.update(encoded.get("$set", {}))
                return SimpleNamespace(modified_count=1)
        return SimpleNamespace(modified_count=0)


class MockDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, MockCollection] = {}

    def __getitem__(self, name: str) -> MockCollection:
        return self.collections.setdefault(name, MockCollection())


class _MockAdmin:
    def __init__(self, client: "MockMongoClient") -> None:
        self.client = client

    def command(self, name: str) -> dict:
        if not self.client.reachable:
            raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")
        return {"ok": 1.0}


class MockMongoClient:
    def __init__(self, reachable: bool = True) -> None:
        self.reachable = reachable
        self.databases: dict[str, MockDatabase] = {}
        self.admin = _MockAdmin(self)
        self.closed = False

    def __getitem__(self, name: str) -> MockDatabase:
        return self.databases.setdefault(name, MockDatabase())

    def close(self) -> None:
        self.closed = True


class MockRedis:
    def __init__(self) -> None:
        self.values: dict[str, int] = {}
        self.down = False
        self.closed = False

    def _check(self) -> None:
        if self.down:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    def incr(self, key: str) -> int:
        self._check()
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]

    def ping(self) -> bool:
        self._check()
        return True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def mongo_client() -> MockMongoClient:
    return MockMongoClient()


@pytest.fixture
def redis_client() -> MockRedis:
    return MockRedis()


@pytest.fixture
def document_store(mongo_client: MockMongoClient) -> DocumentStore:
    return DocumentStore(mongo_client, database="users", status=StoreStatus(connected=True))


@pytest.fixture
def kv_store(redis_client: MockRedis) -> KeyValueStore:
    return KeyValueStore(redis_client, url="redis://localhost:6379")


@pytest.fixture
def users(mongo_client: MockMongoClient) -> MockCollection:
    return mongo_client["users"]["users"]


@pytest.fixture
def orders(mongo_client: MockMongoClient) -> MockCollection:
    return mongo_client["users"]["orders"]


@pytest.fixture(autouse=True)
def test_environment(
    monkeypatch: pytest.MonkeyPatch,
    document_store: DocumentStore,
    kv_store: KeyValueStore,
) -> Any:
    monkeypatch.delenv("ENABLE_METRICS_ENDPOINT", raising=False)
    get_settings.cache_clear()
    reset_metrics()
    set_tracer(None)

    app.state.document_store = document_store
    app.state.kv_store = kv_store

    yield

    set_tracer(None)
    get_settings.cache_clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def store_failure() -> PyMongoError:
    return PyMongoError("connection reset by peer")
