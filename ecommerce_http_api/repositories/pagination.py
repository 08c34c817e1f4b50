# ecommerce_http_api/repositories/pagination.py

"""
Offset pagination over SQLAlchemy ``select()`` statements.

``paginate()`` runs a COUNT against the filtered statement, then fetches
one window of rows. The two queries are not isolated from concurrent
writers, so ``total`` can be slightly stale relative to ``items``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ecommerce_http_api.schemas.common import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    PaginationMeta,
    PaginationQuery,
)

from .filters import FilterPredicate

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationParams:
    """
    ``page`` is 1-based and must be at least 1; ``limit`` is clamped into
    ``[1, MAX_LIMIT]``.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: Optional[str] = None
    sort_order: str = "asc"

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.sort_order not in ("asc", "desc"):
            raise ValueError(f"sort_order must be 'asc' or 'desc', got {self.sort_order!r}")
        # frozen=True requires object.__setattr__ for the clamp
        object.__setattr__(self, "limit", max(1, min(self.limit, MAX_LIMIT)))

    @classmethod
    def from_query(cls, query: PaginationQuery) -> "PaginationParams":
        return cls(
            page=query.page,
            limit=query.limit,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """
    One window of results plus the numbers needed for navigation.
    """

    items: List[T] = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        # Nothing to go back to when the result set is empty.
        return self.total > 0 and self.page > 1

    def map(self, fn: Any) -> "Page[Any]":
        return Page(
            items=[fn(item) for item in self.items],
            page=self.page,
            limit=self.limit,
            total=self.total,
        )

    def meta(self) -> PaginationMeta:
        return PaginationMeta(
            page=self.page,
            limit=self.limit,
            total=self.total,
            total_pages=self.total_pages,
            has_next=self.has_next,
            has_prev=self.has_prev,
        )


def order_clauses(
    params: PaginationParams,
    sort_columns: Mapping[str, Any],
    default_column: Any,
) -> List[Any]:
    """
    ``ORDER BY`` for a page: the requested column (if any) followed by the
    default key so repeated calls return rows in a stable order.

    Unknown ``sort_by`` values raise ``KeyError``; the query schemas reject
    them before they get here.
    """
    direction = "desc" if params.sort_order == "desc" else "asc"
    clauses: List[Any] = []

    if params.sort_by:
        column = sort_columns[params.sort_by]
        clauses.append(getattr(column, direction)())
        if column is not default_column:
            clauses.append(default_column.asc())
    else:
        clauses.append(getattr(default_column, direction)())

    return clauses


def paginate(
    session: Session,
    stmt: Select[Any],
    params: PaginationParams,
    *,
    model: Any,
    predicate: Optional[FilterPredicate] = None,
    sort_columns: Mapping[str, Any],
    default_column: Any,
) -> Page[Any]:
    """
    Apply ``predicate`` to ``stmt``, count the matches, and fetch the
    window described by ``params``.
    """
    if predicate is not None:
        stmt = stmt.where(*predicate.to_clauses(model))

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())

    window = (
        stmt.order_by(*order_clauses(params, sort_columns, default_column))
        .offset(params.offset)
        .limit(params.limit)
    )
    items: Sequence[Any] = session.execute(window).scalars().all()

    return Page(items=list(items), page=params.page, limit=params.limit, total=total)


__all__ = ["Page", "PaginationParams", "order_clauses", "paginate"]
