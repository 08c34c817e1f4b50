# tests/core/test_filters.py

from types import MappingProxyType

import pytest
from sqlalchemy import select

from ecommerce_http_api.db.models import Product, User, UserRole
from ecommerce_http_api.repositories.filters import (
    FilterPredicate,
    PRODUCT_SEARCH_FIELDS,
    build_product_filter,
    build_user_filter,
    escape_like,
)
from ecommerce_http_api.schemas.products import ProductFilters
from ecommerce_http_api.schemas.users import UserFilters


def _names(session, predicate):
    stmt = select(Product.name).where(*predicate.to_clauses(Product)).order_by(Product.id)
    return list(session.execute(stmt).scalars())


# ---------------------------------------------------------------------------
# Building predicates
# ---------------------------------------------------------------------------


def test_unset_filters_build_an_empty_predicate():
    predicate = build_product_filter(ProductFilters())
    assert predicate.is_empty
    assert predicate.to_clauses(Product) == []


def test_product_filter_maps_each_field():
    filters = ProductFilters(
        category="Audio",
        brand="Sony",
        min_price=100,
        is_featured=False,
        search="noise",
    )
    predicate = build_product_filter(filters)

    assert dict(predicate.equals) == {"category": "Audio", "brand": "Sony"}
    assert dict(predicate.ranges) == {"price": (100, None)}
    assert dict(predicate.flags) == {"is_featured": False}
    assert predicate.search == "noise"
    assert predicate.search_fields == PRODUCT_SEARCH_FIELDS


def test_user_filter_maps_role_and_flags():
    predicate = build_user_filter(UserFilters(role=UserRole.ADMIN, email_verified=True))
    assert dict(predicate.equals) == {"role": UserRole.ADMIN}
    assert dict(predicate.flags) == {"email_verified": True}
    assert predicate.search is None


def test_predicate_is_immutable():
    predicate = FilterPredicate.build(equals={"category": "Audio"})
    assert isinstance(predicate.equals, MappingProxyType)
    with pytest.raises(Exception):
        predicate.search = "x"


def test_default_flag_does_not_override_explicit_value():
    explicit = FilterPredicate.build(flags={"is_active": False})
    assert explicit.with_default_flag("is_active", True).flags["is_active"] is False

    implicit = FilterPredicate.build()
    defaulted = implicit.with_default_flag("is_active", True)
    assert defaulted.flags["is_active"] is True
    assert "is_active" not in implicit.flags


@pytest.mark.parametrize(
    "raw, escaped",
    [("50%", "50\\%"), ("a_b", "a\\_b"), ("c:\\tmp", "c:\\\\tmp"), ("plain", "plain")],
)
def test_escape_like(raw, escaped):
    assert escape_like(raw) == escaped


# ---------------------------------------------------------------------------
# Matching against seeded rows
# ---------------------------------------------------------------------------


def test_equality_filter(session):
    predicate = FilterPredicate.build(equals={"category": "Electrónicos"})
    assert _names(session, predicate) == ["iPhone 15 Pro", "Samsung Galaxy S24"]


def test_price_range_is_inclusive(session):
    predicate = FilterPredicate.build(ranges={"price": (349.99, 999.99)})
    assert _names(session, predicate) == [
        "iPhone 15 Pro",
        "Samsung Galaxy S24",
        "Sony WH-1000XM5",
    ]


def test_search_is_case_insensitive_across_fields(session):
    by_description = FilterPredicate.build(search="LAPTOP", search_fields=PRODUCT_SEARCH_FIELDS)
    assert _names(session, by_description) == ["MacBook Air M2"]

    by_name = FilterPredicate.build(search="galaxy", search_fields=PRODUCT_SEARCH_FIELDS)
    assert _names(session, by_name) == ["Samsung Galaxy S24"]


def test_search_folds_non_ascii_case(session):
    session.add(
        Product(name="ÓPTICA Pro", price=59.9, stock=3, sku="OPTICA-PRO-001", category="Ópticas")
    )
    session.commit()

    for needle in ("óptica", "ÓPTICA"):
        predicate = FilterPredicate.build(search=needle, search_fields=PRODUCT_SEARCH_FIELDS)
        assert _names(session, predicate) == ["ÓPTICA Pro"]


def test_search_wildcards_match_literally(session):
    predicate = FilterPredicate.build(search="%", search_fields=PRODUCT_SEARCH_FIELDS)
    assert _names(session, predicate) == []


def test_search_is_combined_with_other_constraints(session):
    predicate = FilterPredicate.build(
        equals={"brand": "Apple"},
        flags={"is_featured": True},
        search="chip",
        search_fields=PRODUCT_SEARCH_FIELDS,
    )
    assert _names(session, predicate) == ["MacBook Air M2"]


def test_user_search_covers_email_and_names(session):
    predicate = build_user_filter(UserFilters(search="admin"))
    emails = session.execute(
        select(User.email).where(predicate.to_clause(User))
    ).scalars().all()
    assert emails == ["admin@ecommerce.com"]
