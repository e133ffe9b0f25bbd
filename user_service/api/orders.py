from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from user_service.db.document_store import DocumentStore
from user_service.models.schemas import encode_document
from user_service.services.dependencies import get_document_store, read_body
from user_service.services.orders import get_history, place_order

router = APIRouter(tags=["orders"])


@router.post("/order/{name}", response_class=PlainTextResponse)
def create_order(
    name: str,
    order: Any = Depends(read_body),
    store: DocumentStore = Depends(get_document_store),
) -> str:
    place_order(store, name, order)
    return "OK"


@router.get("/history/{name}")
def order_history(name: str, store: DocumentStore = Depends(get_document_store)) -> JSONResponse:
    return JSONResponse(encode_document(get_history(store, name)))
