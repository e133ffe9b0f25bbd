from __future__ import annotations

from fastapi import APIRouter, Depends

from user_service.db.kv_store import KeyValueStore
from user_service.models.schemas import UniqueIdResponse
from user_service.services.dependencies import get_kv_store
from user_service.services.ids import next_anonymous_id

router = APIRouter(tags=["ids"])


@router.get("/uniqueid", response_model=UniqueIdResponse)
def unique_id(kv: KeyValueStore = Depends(get_kv_store)) -> UniqueIdResponse:
    return UniqueIdResponse(uuid=next_anonymous_id(kv))
