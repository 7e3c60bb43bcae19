"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.qm_catalog.catalog import DropCatalog
from src.qm_common.errors import AppError
from src.qm_common.redis_client import close_redis
from src.qm_common.response import error_response
from src.qm_drop.api.router import router as drop_router
from src.qm_drop.application.service import DropApplicationService
from src.qm_drop.infrastructure.store_factory import build_store
from src.qm_gateway.middleware.request_log import RequestLogMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


def load_catalog() -> DropCatalog:
    if settings.CATALOG_PATH:
        return DropCatalog.from_file(settings.CATALOG_PATH)
    return DropCatalog.default()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: load catalog, open store, seed drop states. Shutdown: close Redis."""
    # Startup
    catalog = load_catalog()
    store = await build_store(settings)
    service = DropApplicationService(
        catalog,
        store,
        lock_duration=timedelta(seconds=settings.LOCK_DURATION_SECONDS),
    )
    await service.initialize()
    app.state.drop_service = service
    logger.info("%s ready with %d drops", settings.APP_NAME, len(catalog))
    yield
    # Shutdown
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(drop_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
