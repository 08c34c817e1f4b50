# ecommerce_http_api/routers/health.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ecommerce_http_api.db.session import Database, get_database
from ecommerce_http_api.logging import get_logger

router = APIRouter(tags=["system"])

# The service banner is only served at the application root.
banner_router = APIRouter(tags=["system"])

log = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", summary="Liveness and database check")
def health(database: Database = Depends(get_database)) -> JSONResponse:
    try:
        database.ping()
    except SQLAlchemyError as exc:
        log.error("health_check_failed", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": False,
                "status": "ERROR",
                "database": "Disconnected",
                "timestamp": _now(),
            },
        )

    return JSONResponse(
        content={
            "success": True,
            "status": "OK",
            "database": "Connected",
            "timestamp": _now(),
        }
    )


@banner_router.get("/", summary="Service banner", include_in_schema=False)
def root(request: Request) -> Dict[str, Any]:
    settings = request.app.state.settings
    return {
        "success": True,
        "message": "E-commerce API is running",
        "version": settings.APP_VERSION,
        "environment": settings.APP_ENV.value,
        "timestamp": _now(),
    }
