from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from bson.errors import BSONError
from pymongo.errors import PyMongoError
from redis.exceptions import RedisError


class ServiceError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = 500
    message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class MissingFieldsError(ServiceError):
    status_code = 400
    message = "Insufficient data"


class NameExistsError(ServiceError):
    status_code = 400
    message = "Name already exists"


class NotFoundError(ServiceError):
    status_code = 404
    message = "Not found"


class DatabaseUnavailableError(ServiceError):
    status_code = 500
    message = "Database not available"


class StoreOperationError(ServiceError):
    """A store call was attempted and failed; carries the store's own message."""

    status_code = 500

    def __init__(self, cause: Exception) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause


class MalformedBodyError(ServiceError):
    status_code = 400
    message = "Malformed request body"


@contextmanager
def store_errors() -> Iterator[None]:
    """Convert exceptions raised by the store drivers into StoreOperationError.

    BSON encoding failures (unencodable values, ints wider than 8 bytes) are
    raised by pymongo outside its own exception hierarchy.
    """

    try:
        yield
    except (PyMongoError, BSONError, OverflowError, RedisError) as exc:
        raise StoreOperationError(exc) from exc
