# ecommerce_http_api/routers/deps.py

"""
Dependency factories shared by the resource routers.

Keeping them in one place makes it easy to swap implementations in tests
through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Callable, Type, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ecommerce_http_api.db.session import get_session
from ecommerce_http_api.repositories.products import ProductsRepository
from ecommerce_http_api.repositories.users import UsersRepository
from ecommerce_http_api.schemas.common import IdParams
from ecommerce_http_api.schemas.validation import validate_input
from ecommerce_http_api.services.passwords import PasswordHasher
from ecommerce_http_api.services.products_service import ProductsService
from ecommerce_http_api.services.users_service import UsersService

M = TypeVar("M", bound=BaseModel)


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_users_service(
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UsersService:
    return UsersService(UsersRepository(session), hasher)


def get_products_service(session: Session = Depends(get_session)) -> ProductsService:
    return ProductsService(ProductsRepository(session))


def validated_query(schema: Type[M]) -> Callable[[Request], M]:
    """
    Build a dependency that validates the raw query string against
    ``schema``. Failures become 400 responses through the
    ``InputValidationError`` handler.
    """

    def _dependency(request: Request) -> M:
        return validate_input(schema, request.query_params).unwrap()

    _dependency.__name__ = f"validated_{schema.__name__}"
    return _dependency


def validated_path(schema: Type[M]) -> Callable[[Request], M]:
    """
    Same as ``validated_query`` for path parameters, which arrive as
    untyped strings.
    """

    def _dependency(request: Request) -> M:
        return validate_input(schema, request.path_params).unwrap()

    _dependency.__name__ = f"validated_{schema.__name__}"
    return _dependency


def path_id(params: IdParams = Depends(validated_path(IdParams))) -> int:
    return params.id


__all__ = [
    "get_password_hasher",
    "get_products_service",
    "get_users_service",
    "path_id",
    "validated_path",
    "validated_query",
]
