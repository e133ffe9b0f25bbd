from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from user_service.db.document_store import DocumentStore
from user_service.db.kv_store import KeyValueStore
from user_service.errors import MalformedBodyError

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_kv_store(request: Request) -> KeyValueStore:
    return request.app.state.kv_store


async def read_body(request: Request) -> Any:
    """Parse a JSON or form-encoded body; an empty body reads as an empty object.

    Top-level JSON scalars are rejected with ``MalformedBodyError``.
    """

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError as exc:
        raise MalformedBodyError() from exc
    if not isinstance(body, (dict, list)):
        raise MalformedBodyError()
    return body
