# ecommerce_http_api/repositories/__init__.py
"""
Repository layer public exports.

    from ecommerce_http_api.repositories import ProductsRepository
"""

from .base import Repository, store_errors
from .filters import FilterPredicate, build_product_filter, build_user_filter
from .pagination import Page, PaginationParams, paginate
from .products import ProductsRepository
from .users import UsersRepository

__all__ = [
    "FilterPredicate",
    "Page",
    "PaginationParams",
    "ProductsRepository",
    "Repository",
    "UsersRepository",
    "build_product_filter",
    "build_user_filter",
    "paginate",
    "store_errors",
]
