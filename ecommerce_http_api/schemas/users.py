"""
ecommerce_http_api/schemas/users.py

Pydantic models for the "users" HTTP API: request bodies, the list query
string, and the public user representation (which never carries the
password hash).
"""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BeforeValidator, EmailStr, Field, StrictBool, StringConstraints

from ecommerce_http_api.db.models import UserRole

from .common import (
    APIModel,
    OptionalText,
    PaginationQuery,
    QueryModel,
    ReadModel,
    UtcDateTime,
)
from .validation import parse_query_flag

# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
NewPassword = Annotated[str, StringConstraints(min_length=6, max_length=100)]
AnyPassword = Annotated[str, StringConstraints(min_length=1)]
QueryFlag = Annotated[Optional[bool], BeforeValidator(parse_query_flag)]

USER_SORT_FIELDS = (
    "id",
    "email",
    "firstName",
    "lastName",
    "role",
    "lastLogin",
    "createdAt",
    "updatedAt",
)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class UserCreate(APIModel):
    email: EmailStr
    password: NewPassword
    first_name: PersonName
    last_name: PersonName
    role: UserRole = UserRole.USER


class UserUpdate(APIModel):
    """
    Partial update; only provided fields are applied.
    """

    email: Optional[EmailStr] = None
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None
    is_active: Optional[StrictBool] = None
    email_verified: Optional[StrictBool] = None


class ChangePasswordRequest(APIModel):
    current_password: AnyPassword
    new_password: NewPassword


class CredentialsRequest(APIModel):
    email: EmailStr
    password: AnyPassword


# ---------------------------------------------------------------------------
# Query string
# ---------------------------------------------------------------------------


class UserFilters(QueryModel):
    role: Optional[UserRole] = None
    is_active: QueryFlag = None
    email_verified: QueryFlag = None
    search: OptionalText = None


class UserListQuery(UserFilters, PaginationQuery):
    sortable_fields = USER_SORT_FIELDS


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class UserRead(ReadModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    email_verified: bool
    last_login: Optional[UtcDateTime] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime


class CredentialsResult(ReadModel):
    valid: bool = Field(True, description="Always true; failures are 401 responses.")
    user: UserRead


__all__ = [
    "USER_SORT_FIELDS",
    "UserCreate",
    "UserUpdate",
    "ChangePasswordRequest",
    "CredentialsRequest",
    "UserFilters",
    "UserListQuery",
    "UserRead",
    "CredentialsResult",
]
