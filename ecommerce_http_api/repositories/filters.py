# ecommerce_http_api/repositories/filters.py

"""
Translate validated filter fields into a store-independent predicate.

A ``FilterPredicate`` says *what* to match; it is built once per request,
never touches the database, and is compiled into SQLAlchemy ``WHERE``
clauses by the repository that consumes it. Unset fields impose no
constraint.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Type

from sqlalchemy import ColumnElement, and_, func, or_, true

from ecommerce_http_api.schemas.products import ProductFilters
from ecommerce_http_api.schemas.users import UserFilters

PRODUCT_SEARCH_FIELDS: Tuple[str, ...] = ("name", "description")
USER_SEARCH_FIELDS: Tuple[str, ...] = ("email", "first_name", "last_name")

Range = Tuple[Optional[float], Optional[float]]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _frozen(values: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType({k: v for k, v in values.items() if v is not None})


def escape_like(text: str, escape: str = "\\") -> str:
    """
    Escape LIKE wildcards so user text is matched literally.
    """
    return (
        text.replace(escape, escape * 2)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


@dataclass(frozen=True)
class FilterPredicate:
    """
    Immutable description of a query filter.

    - ``equals``: exact matches (``category``, ``brand``, ``role``)
    - ``ranges``: inclusive ``(low, high)`` bounds, ``None`` is unbounded
    - ``flags``: boolean columns; a missing key means "either"
    - ``search``: case-insensitive substring, OR-ed across ``search_fields``
      and AND-ed with everything else
    """

    equals: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    ranges: Mapping[str, Range] = field(default_factory=lambda: _EMPTY)
    flags: Mapping[str, bool] = field(default_factory=lambda: _EMPTY)
    search: Optional[str] = None
    search_fields: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        *,
        equals: Optional[Mapping[str, Any]] = None,
        ranges: Optional[Mapping[str, Range]] = None,
        flags: Optional[Mapping[str, Optional[bool]]] = None,
        search: Optional[str] = None,
        search_fields: Tuple[str, ...] = (),
    ) -> "FilterPredicate":
        """
        Build a predicate, dropping every constraint whose value is ``None``.
        """
        cleaned_ranges = {
            name: bounds
            for name, bounds in (ranges or {}).items()
            if bounds[0] is not None or bounds[1] is not None
        }
        return cls(
            equals=_frozen(equals or {}),
            ranges=MappingProxyType(cleaned_ranges),
            flags=_frozen(flags or {}),
            search=search or None,
            search_fields=tuple(search_fields),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.equals or self.ranges or self.flags or self.search)

    def with_default_flag(self, name: str, value: bool) -> "FilterPredicate":
        """
        Return a copy constraining ``name`` to ``value`` unless the caller
        already constrained it. Used for the soft-delete default.
        """
        if name in self.flags:
            return self
        flags = dict(self.flags)
        flags[name] = value
        return replace(self, flags=MappingProxyType(flags))

    def and_equals(self, name: str, value: Any) -> "FilterPredicate":
        equals = dict(self.equals)
        equals[name] = value
        return replace(self, equals=MappingProxyType(equals))

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def to_clauses(self, model: Type[Any]) -> List[ColumnElement[bool]]:
        """
        Compile into a list of SQLAlchemy boolean clauses against ``model``.
        The clauses are meant to be AND-ed (``stmt.where(*clauses)``).
        """
        clauses: List[ColumnElement[bool]] = []

        for name, value in self.equals.items():
            clauses.append(getattr(model, name) == value)

        for name, (low, high) in self.ranges.items():
            column = getattr(model, name)
            if low is not None:
                clauses.append(column >= low)
            if high is not None:
                clauses.append(column <= high)

        for name, value in self.flags.items():
            clauses.append(getattr(model, name).is_(value))

        if self.search and self.search_fields:
            pattern = f"%{escape_like(self.search.lower())}%"
            clauses.append(
                or_(
                    *(
                        func.lower(getattr(model, name)).like(pattern, escape="\\")
                        for name in self.search_fields
                    )
                )
            )

        return clauses

    def to_clause(self, model: Type[Any]) -> ColumnElement[bool]:
        return and_(true(), *self.to_clauses(model))


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_product_filter(filters: ProductFilters) -> FilterPredicate:
    return FilterPredicate.build(
        equals={"category": filters.category, "brand": filters.brand},
        ranges={"price": (filters.min_price, filters.max_price)},
        flags={"is_active": filters.is_active, "is_featured": filters.is_featured},
        search=filters.search,
        search_fields=PRODUCT_SEARCH_FIELDS,
    )


def build_user_filter(filters: UserFilters) -> FilterPredicate:
    return FilterPredicate.build(
        equals={"role": filters.role},
        flags={"is_active": filters.is_active, "email_verified": filters.email_verified},
        search=filters.search,
        search_fields=USER_SEARCH_FIELDS,
    )


__all__ = [
    "FilterPredicate",
    "PRODUCT_SEARCH_FIELDS",
    "USER_SEARCH_FIELDS",
    "build_product_filter",
    "build_user_filter",
    "escape_like",
]
