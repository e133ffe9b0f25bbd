from __future__ import annotations

import asyncio

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from user_service.api.ids import router as ids_router
from user_service.api.metrics import router as metrics_router
from user_service.api.orders import router as orders_router
from user_service.api.users import router as users_router
from user_service.config import get_settings
from user_service.db.document_store import DocumentStore
from user_service.db.kv_store import KeyValueStore
from user_service.errors import ServiceError
from user_service.models.schemas import HealthResponse
from user_service.observability.logging import configure_logging
from user_service.observability.middleware import (
    PermissiveHeadersMiddleware,
    RequestContextMiddleware,
    TracingMiddleware,
)
from user_service.observability.tracing import configure_tracing
from user_service.services.dependencies import get_document_store, get_kv_store

logger = structlog.get_logger(__name__)

app = FastAPI(title="User Service", version="0.1.0")
# Last added runs outermost: request context wraps headers, which wrap tracing.
app.add_middleware(TracingMiddleware)
app.add_middleware(PermissiveHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)
app.include_router(ids_router)
app.include_router(users_router)
app.include_router(orders_router)
app.include_router(metrics_router)


@app.exception_handler(ServiceError)
async def _service_error(request: Request, exc: ServiceError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", status_code=exc.status_code, error=exc.message)
    else:
        logger.warning("request_rejected", status_code=exc.status_code, error=exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.on_event("startup")
async def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    configure_tracing(settings.instana_agent_available, settings.instana_agent_host)

    document_store = DocumentStore.from_url(
        settings.mongo_url,
        database=settings.mongo_database,
        timeout_ms=settings.mongo_timeout_ms,
    )
    kv_store = KeyValueStore.from_url(settings.redis_url, timeout_ms=settings.redis_timeout_ms)
    app.state.document_store = document_store
    app.state.kv_store = kv_store

    # Neither store may hold up the other or the listener.
    app.state.connect_tasks = [
        asyncio.create_task(asyncio.to_thread(document_store.connect)),
        asyncio.create_task(asyncio.to_thread(kv_store.connect)),
    ]
    logger.info("startup", port=settings.port)


@app.on_event("shutdown")
async def _shutdown() -> None:
    for task in getattr(app.state, "connect_tasks", []):
        task.cancel()
    app.state.document_store.close()
    app.state.kv_store.close()


@app.get("/health", response_model=HealthResponse)
def health(
    document_store: DocumentStore = Depends(get_document_store),
    kv_store: KeyValueStore = Depends(get_kv_store),
) -> HealthResponse:
    return HealthResponse(
        app="OK",
        mongo=document_store.connected,
        redis="connected" if kv_store.ping() else "not connected",
    )
