"""
Entry point for the E-commerce HTTP API.

This module creates the FastAPI application, wires up middleware and error
handlers, and mounts the resource routers under ``Settings.API_PREFIX``.

Intended usage:
    uvicorn --factory ecommerce_http_api.main:create_app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecommerce_http_api.config import Settings, get_settings
from ecommerce_http_api.db.session import Database
from ecommerce_http_api.errors import APIError, InputValidationError
from ecommerce_http_api.logging import configure_logging, get_logger
from ecommerce_http_api.routers import health, products, users
from ecommerce_http_api.schemas.validation import field_errors
from ecommerce_http_api.services.passwords import PasswordHasher

log = get_logger("ecommerce_http_api")

GENERIC_ERROR_MESSAGE = "Internal server error"


# ---------------------------------------------------------------------------
# Error envelope helpers
# ---------------------------------------------------------------------------


def _error_response(
    status_code: int,
    message: str,
    *,
    errors: Optional[list] = None,
    error: Optional[str] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(InputValidationError)
    async def validation_error_handler(request: Request, exc: InputValidationError):
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            exc.message,
            errors=exc.to_list(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """
        FastAPI's own body validation; reported as 400 in the same shape as
        query and path validation failures.
        """
        errors = [e.to_dict() for e in field_errors(exc.errors())]
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            InputValidationError.default_message,
            errors=errors,
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        if exc.status_code >= 500:
            log.error(
                "request_failed",
                error_type=type(exc).__name__,
                path=request.url.path,
                exc_info=exc,
            )
            if settings.is_development:
                return _error_response(exc.status_code, GENERIC_ERROR_MESSAGE, error=exc.message)
            return _error_response(exc.status_code, GENERIC_ERROR_MESSAGE)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error_response(exc.status_code, f"Route not found: {request.url.path}")
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """
        Catches everything else so stack traces never reach the client
        outside development.
        """
        log.error(
            "unhandled_exception",
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=exc,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            GENERIC_ERROR_MESSAGE,
            error=str(exc) if settings.is_development else None,
        )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(
    settings: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    password_hasher: Optional[PasswordHasher] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    ``database`` and ``password_hasher`` default to instances built from
    ``settings``; tests pass their own.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    database = database or Database.from_settings(settings)
    password_hasher = password_hasher or PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if settings.DATABASE_CREATE_ALL:
            database.create_all()
        log.info(
            "startup",
            app=settings.APP_NAME,
            version=settings.APP_VERSION,
            environment=settings.APP_ENV.value,
            api_prefix=settings.api_prefix,
            cors_origins=settings.cors_origins,
        )
        yield
        log.info("shutdown")
        database.dispose()

    docs_enabled = settings.APP_ENV.value != "production"
    app = FastAPI(
        title="E-commerce API",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.password_hasher = password_hasher

    cors_origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=cors_origins != ["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        log.info(
            "request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        response.headers["X-Request-ID"] = request_id
        return response

    _register_exception_handlers(app, settings)

    app.include_router(health.banner_router)
    app.include_router(health.router)
    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(products.router, prefix=settings.api_prefix)

    return app


# ---------------------------------------------------------------------------
# Local development entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "ecommerce_http_api.main:create_app",
        factory=True,
        host=_settings.HOST,
        port=_settings.PORT,
        reload=_settings.is_development,
    )
