"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000

create_app() builds everything from one Settings object: the Redis pool
(when STORAGE_BACKEND=redis), the ledger backing, and the CAPTCHA verifier.
They live on app.state; request handlers reach them through dependencies.
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from config.settings import Settings, get_settings
from src.do_admin.api.router import router as admin_router
from src.do_common.errors import AppError, InternalError, StorageUnavailableError
from src.do_common.redis_client import close_redis, create_redis, ping_redis
from src.do_common.response import error_response
from src.do_gateway.api.router import router as session_router
from src.do_gateway.auth.captcha import CaptchaVerifierProtocol, TurnstileVerifier
from src.do_gateway.middleware.request_log import RequestLogMiddleware
from src.do_ledger.api.router import router as offers_router
from src.do_ledger.api.traffic_router import router as traffic_router
from src.do_ledger.domain.repository import OfferLedgerProtocol
from src.do_ledger.infrastructure.factory import build_ledger

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _error_json(exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


def create_app(
    settings: Settings | None = None,
    *,
    ledger: OfferLedgerProtocol | None = None,
    captcha: CaptchaVerifierProtocol | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    redis_client: aioredis.Redis | None = None
    if ledger is None:
        if settings.STORAGE_BACKEND == "redis":
            redis_client = create_redis(settings.REDIS_URL)
        ledger = build_ledger(settings, redis_client)

    if captcha is None:
        captcha = TurnstileVerifier(
            settings.CAPTCHA_SECRET_KEY,
            settings.CAPTCHA_VERIFY_URL,
            settings.CAPTCHA_TIMEOUT_SECONDS,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: verify Redis connection. Shutdown: close the pool."""
        if redis_client is not None:
            await ping_redis(redis_client)
        logger.info(
            "Ledger ready: backend=%s storage=%s",
            settings.LEDGER_BACKEND, settings.STORAGE_BACKEND,
        )
        yield
        if redis_client is not None:
            await close_redis(redis_client)

    app = FastAPI(
        title=settings.APP_NAME,
        version=VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ledger = ledger
    app.state.captcha = captcha

    app.add_middleware(RequestLogMiddleware)
    if settings.CORS_ALLOW_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOW_ORIGINS,
            allow_methods=["GET", "HEAD", "POST", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
            max_age=86400,
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error_json(exc)

    @app.exception_handler(RedisError)
    async def storage_error_handler(request: Request, exc: RedisError) -> JSONResponse:
        logger.exception("Storage backend error on %s %s", request.method, request.url.path)
        return _error_json(StorageUnavailableError())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_json(InternalError())

    app.include_router(offers_router, prefix="/api")
    app.include_router(traffic_router, prefix="/api")
    app.include_router(session_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": VERSION, "backend": settings.LEDGER_BACKEND}

    return app


app = create_app()
