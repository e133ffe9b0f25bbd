from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from user_service.db.document_store import DocumentStore
from user_service.errors import NotFoundError
from user_service.models.schemas import encode_document
from user_service.services import accounts
from user_service.services.dependencies import get_document_store, read_body

router = APIRouter(tags=["users"])


@router.get("/check/{name}", response_class=PlainTextResponse)
def check_user(name: str, store: DocumentStore = Depends(get_document_store)) -> str:
    if not accounts.user_exists(store, name):
        raise NotFoundError("User not found")
    return "OK"


@router.get("/users")
def get_users(store: DocumentStore = Depends(get_document_store)) -> JSONResponse:
    return JSONResponse(encode_document(accounts.list_users(store)))


@router.post("/login")
def login(
    body: Any = Depends(read_body),
    store: DocumentStore = Depends(get_document_store),
) -> JSONResponse:
    user = accounts.login(store, body)
    return JSONResponse(encode_document(user))


@router.post("/register", response_class=PlainTextResponse)
def register(
    body: Any = Depends(read_body),
    store: DocumentStore = Depends(get_document_store),
) -> str:
    accounts.register(store, body)
    return "OK"
