from __future__ import annotations

from typing import Any, Literal

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel


class HealthResponse(BaseModel):
    app: str = "OK"
    mongo: bool
    redis: Literal["connected", "not connected"]


class UniqueIdResponse(BaseModel):
    uuid: str


def encode_document(doc: Any) -> Any:
    """Render stored documents as JSON, with ObjectIds as their hex strings."""

    return jsonable_encoder(doc, custom_encoder={ObjectId: str})
