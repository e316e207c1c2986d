"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError

from config.settings import settings
from src.kost_balance.api.router import router as balance_router
from src.kost_common.database import engine
from src.kost_common.errors import AppError, InternalError, ServiceUnavailableError
from src.kost_common.redis_client import close_redis, get_redis
from src.kost_common.response import error_response
from src.kost_gateway.api.router import router as auth_router
from src.kost_gateway.middleware.request_log import RequestLogMiddleware
from src.kost_payment.api.router import router as payment_router
from src.kost_room.api.router import router as room_router
from src.kost_tenant.api.router import router as tenant_router

logger = logging.getLogger("kost.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB (and Redis when the balance cache is on). Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if settings.BALANCE_CACHE_ENABLED:
        redis = await get_redis()
        await redis.ping()
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _render(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(
            "[%s] %s failed: code=%d %s", request.method, request.url.path, exc.code, exc.message
        )
        if isinstance(exc, InternalError):
            exc = InternalError()
    return _render(request, exc)


@app.exception_handler(OperationalError)
@app.exception_handler(InterfaceError)
async def database_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "[%s] %s database unavailable: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
    )
    return _render(request, ServiceUnavailableError())


# balance_router first: /tenants/balances must win over /tenants/{tenant_id}
app.include_router(auth_router, prefix="/api/v1")
app.include_router(balance_router, prefix="/api/v1")
app.include_router(tenant_router, prefix="/api/v1")
app.include_router(room_router, prefix="/api/v1")
app.include_router(payment_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
