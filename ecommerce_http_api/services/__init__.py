"""
ecommerce_http_api.services
---------------------------

Service layer aggregation for the E-commerce HTTP API.

Routers import service classes from here instead of depending directly on
repositories:

    from ecommerce_http_api.services import ProductsService, UsersService
"""

from .passwords import PasswordHasher
from .products_service import ProductsService
from .users_service import UsersService

__all__ = [
    "PasswordHasher",
    "ProductsService",
    "UsersService",
]
