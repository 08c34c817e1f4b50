"""
ecommerce_http_api.db
=====================

Database package for the E-commerce HTTP API.

    from ecommerce_http_api.db import Base, Database, get_session
"""

from .models import Base, Product, User, UserRole
from .session import Database, get_database, get_session

__all__ = [
    "Base",
    "Database",
    "Product",
    "User",
    "UserRole",
    "get_database",
    "get_session",
]
