"""
Top-level export module for HTTP API schemas.
"""

from . import common, products, users, validation
from .common import (
    Envelope,
    ErrorEnvelope,
    IdParams,
    MessageEnvelope,
    PaginatedEnvelope,
    PaginationMeta,
    PaginationQuery,
)
from .products import (
    ProductCreate,
    ProductFilters,
    ProductListQuery,
    ProductRead,
    ProductUpdate,
    StockAvailability,
    StockUpdate,
)
from .users import (
    ChangePasswordRequest,
    CredentialsRequest,
    CredentialsResult,
    UserCreate,
    UserFilters,
    UserListQuery,
    UserRead,
    UserUpdate,
)
from .validation import ValidationResult, validate_input

__all__ = [
    # Submodules
    "common", "products", "users", "validation",

    # Common
    "Envelope", "ErrorEnvelope", "IdParams", "MessageEnvelope",
    "PaginatedEnvelope", "PaginationMeta", "PaginationQuery",

    # Products
    "ProductCreate", "ProductFilters", "ProductListQuery", "ProductRead",
    "ProductUpdate", "StockAvailability", "StockUpdate",

    # Users
    "ChangePasswordRequest", "CredentialsRequest", "CredentialsResult",
    "UserCreate", "UserFilters", "UserListQuery", "UserRead", "UserUpdate",

    # Validation
    "ValidationResult", "validate_input",
]
