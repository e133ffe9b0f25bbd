from __future__ import annotations

from typing import Any

import structlog

from user_service.db.document_store import USERS, DocumentStore
from user_service.errors import (
    DatabaseUnavailableError,
    MissingFieldsError,
    NameExistsError,
    NotFoundError,
    store_errors,
)

logger = structlog.get_logger(__name__)


def _field(body: Any, name: str) -> Any:
    if not isinstance(body, dict):
        return None
    return body.get(name)


def ensure_available(store: DocumentStore) -> None:
    if not store.connected:
        raise DatabaseUnavailableError()


def user_exists(store: DocumentStore, name: str) -> bool:
    ensure_available(store)
    with store_errors():
        user = store.find_one(USERS, {"name": name})
    return user is not None


def list_users(store: DocumentStore) -> list[dict[str, Any]]:
    ensure_available(store)
    with store_errors():
        return store.find_all(USERS)


def login(store: DocumentStore, body: Any) -> dict[str, Any]:
    name = _field(body, "name")
    password = _field(body, "password")
    logger.info("login", name=name)
    if not name or not password:
        raise MissingFieldsError("Name or password not supplied")

    ensure_available(store)
    with store_errors():
        user = store.find_one(USERS, {"name": name})
    if user is None:
        raise NotFoundError("Name not found")
    # Plaintext comparison; credentials are stored as supplied.
    if user.get("password") != password:
        raise NotFoundError("Incorrect password")
    return user


def register(store: DocumentStore, body: Any) -> None:
    name = _field(body, "name")
    password = _field(body, "password")
    email = _field(body, "email")
    logger.info("register", name=name, email=email)
    if not name or not password or not email:
        raise MissingFieldsError("Insufficient data")

    ensure_available(store)
    with store_errors():
        # Check-then-insert: two concurrent registrations of one name can both pass.
        if store.find_one(USERS, {"name": name}) is not None:
            raise NameExistsError()
        inserted_id = store.insert_one(USERS, {"name": name, "password": password, "email": email})
    logger.info("user_inserted", name=name, inserted_id=str(inserted_id))
