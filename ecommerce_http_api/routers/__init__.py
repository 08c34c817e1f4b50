"""
HTTP routers for the E-commerce API, one module per resource.
"""

from . import health, products, users

__all__ = ["health", "products", "users"]
