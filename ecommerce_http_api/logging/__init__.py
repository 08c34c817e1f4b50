# ecommerce_http_api/logging/__init__.py

"""
Logging helpers for the E-commerce HTTP API.

API code should only ever do:

    from ecommerce_http_api.logging import get_logger

    log = get_logger(__name__)
    log.info("product_created", product_id=product.id)

and stay decoupled from how structlog is wired (see ``config.py``).
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from .config import configure_logging

DEFAULT_LOGGER_NAME = "ecommerce_http_api"


def get_logger(name: Optional[str] = None, **initial_values: Any) -> Any:
    """
    Return a structlog bound logger.

    If ``name`` is omitted the service-level default name is used.
    """
    return structlog.get_logger(name or DEFAULT_LOGGER_NAME, **initial_values)


__all__ = ["DEFAULT_LOGGER_NAME", "configure_logging", "get_logger"]
