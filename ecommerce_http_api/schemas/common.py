# ecommerce_http_api/schemas/common.py

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, ClassVar, Generic, List, Literal, Optional, Tuple, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .validation import blank_to_none, ensure_utc, int_or_default

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest value a 32-bit signed INTEGER column (and bound parameter) holds.
MAX_INT = 2**31 - 1


# ---------------------------------------------------------------------------
# Base / shared types
# ---------------------------------------------------------------------------


class APIModel(BaseModel):
    """
    Base model for request bodies.

    - camelCase on the wire, snake_case in Python
    - extra fields are forbidden so clients get early feedback on typos
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class QueryModel(BaseModel):
    """
    Base model for query strings and path parameters.

    Unknown keys are ignored: proxies and browsers add their own.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ReadModel(BaseModel):
    """
    Base model for response DTOs, populated from ORM objects.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


PositiveId = Annotated[int, Field(gt=0, le=MAX_INT)]

OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]

UtcDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


class PaginationQuery(QueryModel):
    """
    ``page``/``limit``/``sortBy``/``sortOrder`` query parameters.

    ``page`` and ``limit`` fall back to their defaults when they do not parse
    as integers; parsed values outside the bounds are rejected. Subclasses
    declare which ``sortBy`` values they accept.
    """

    sortable_fields: ClassVar[Tuple[str, ...]] = ("id",)

    page: Annotated[
        int, BeforeValidator(int_or_default(DEFAULT_PAGE)), Field(ge=1, le=MAX_INT)
    ] = DEFAULT_PAGE
    limit: Annotated[
        int, BeforeValidator(int_or_default(DEFAULT_LIMIT)), Field(ge=1, le=MAX_LIMIT)
    ] = DEFAULT_LIMIT
    sort_by: OptionalText = None
    sort_order: Literal["asc", "desc"] = "asc"

    @field_validator("sort_by")
    @classmethod
    def _check_sort_by(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in cls.sortable_fields:
            allowed = ", ".join(cls.sortable_fields)
            raise ValueError(f"sortBy must be one of: {allowed}")
        return value


class IdParams(QueryModel):
    id: PositiveId


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


class PaginationMeta(ReadModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class Envelope(ReadModel, Generic[T]):
    """
    ``{"success": true, "data": ..., "message": ...}``
    """

    success: bool = True
    data: T
    message: Optional[str] = None


class PaginatedEnvelope(ReadModel, Generic[T]):
    """
    ``{"success": true, "data": [...], "pagination": {...}}``
    """

    success: bool = True
    data: List[T]
    pagination: PaginationMeta


class MessageEnvelope(ReadModel):
    success: bool = True
    message: str


class FieldErrorModel(ReadModel):
    field: str
    message: str


class ErrorEnvelope(ReadModel):
    """
    Standard error envelope for all endpoints.
    """

    success: bool = False
    message: str
    errors: Optional[List[FieldErrorModel]] = None
    error: Optional[Any] = Field(
        default=None,
        description="Underlying error detail; only populated in development.",
    )


__all__ = [
    "APIModel",
    "QueryModel",
    "ReadModel",
    "PositiveId",
    "OptionalText",
    "UtcDateTime",
    "DEFAULT_PAGE",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MAX_INT",
    "PaginationQuery",
    "IdParams",
    "PaginationMeta",
    "Envelope",
    "PaginatedEnvelope",
    "MessageEnvelope",
    "FieldErrorModel",
    "ErrorEnvelope",
]
