# ecommerce_http_api/logging/config.py

"""
structlog configuration for the E-commerce HTTP API.

Emits JSON lines in production and a colored console format in development.
Standard-library loggers (uvicorn, SQLAlchemy) are pointed at the same
stream so every line ends up in one place.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, List, MutableMapping

import structlog
from opentelemetry import trace

from ecommerce_http_api.config import Settings


def add_open_telemetry_spans(
    _: Any, __: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """
    Inject the current trace and span ids so log lines can be joined with
    distributed traces. Outside a recording span both are ``None``.
    """
    span = trace.get_current_span()
    if not span.is_recording():
        event_dict["trace_id"] = None
        event_dict["span_id"] = None
        return event_dict

    ctx = span.get_span_context()
    event_dict["trace_id"] = format(ctx.trace_id, "032x")
    event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def _parse_level(value: str) -> int:
    level = logging.getLevelName((value or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog and the standard logging module.

    Safe to call more than once; the last call wins.
    """
    level = _parse_level(settings.LOG_LEVEL)

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        add_open_telemetry_spans,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    # SQL statements are only interesting when explicitly requested.
    sql_level = logging.INFO if settings.DATABASE_ECHO else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)


__all__ = ["add_open_telemetry_spans", "configure_logging"]
