"""
ecommerce_http_api
------------------

HTTP API for a small e-commerce catalogue: users and products backed by a
relational database.

This package exposes:

- ``create_app()``: application factory returning a FastAPI instance,
  suitable for ``uvicorn --factory ecommerce_http_api:create_app``.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("ecommerce-api")
except _metadata.PackageNotFoundError:  # When running from source tree
    __version__ = "0.0.0"

from .main import create_app

__all__ = [
    "__version__",
    "create_app",
]
