# tests/core/test_pagination.py

import pytest
from sqlalchemy import select

from ecommerce_http_api.db.models import Product
from ecommerce_http_api.repositories.filters import FilterPredicate
from ecommerce_http_api.repositories.pagination import (
    Page,
    PaginationParams,
    order_clauses,
    paginate,
)
from ecommerce_http_api.repositories.products import SORT_COLUMNS


def _page(session, params, predicate=None):
    return paginate(
        session,
        select(Product),
        params,
        model=Product,
        predicate=predicate,
        sort_columns=SORT_COLUMNS,
        default_column=Product.id,
    )


# ---------------------------------------------------------------------------
# PaginationParams
# ---------------------------------------------------------------------------


def test_params_defaults_and_offset():
    params = PaginationParams()
    assert (params.page, params.limit, params.offset) == (1, 10, 0)
    assert PaginationParams(page=3, limit=20).offset == 40


@pytest.mark.parametrize("limit, clamped", [(0, 1), (-5, 1), (100, 100), (500, 100)])
def test_params_clamp_limit(limit, clamped):
    assert PaginationParams(limit=limit).limit == clamped


def test_params_reject_page_below_one():
    with pytest.raises(ValueError):
        PaginationParams(page=0)


def test_params_reject_unknown_sort_order():
    with pytest.raises(ValueError):
        PaginationParams(sort_order="random")


# ---------------------------------------------------------------------------
# Page metadata
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "page, limit, total, total_pages, has_next, has_prev",
    [
        (1, 10, 0, 0, False, False),
        (2, 10, 0, 0, False, False),
        (1, 10, 10, 1, False, False),
        (1, 10, 11, 2, True, False),
        (2, 10, 11, 2, False, True),
        (5, 10, 11, 2, False, True),
    ],
)
def test_page_navigation(page, limit, total, total_pages, has_next, has_prev):
    result = Page(items=[], page=page, limit=limit, total=total)
    assert result.total_pages == total_pages
    assert result.has_next is has_next
    assert result.has_prev is has_prev


def test_page_meta_serializes_camel_case():
    meta = Page(items=[1, 2], page=1, limit=2, total=5).meta()
    assert meta.model_dump(by_alias=True) == {
        "page": 1,
        "limit": 2,
        "total": 5,
        "totalPages": 3,
        "hasNext": True,
        "hasPrev": False,
    }


def test_page_map_keeps_metadata():
    mapped = Page(items=[1, 2], page=2, limit=2, total=6).map(str)
    assert mapped.items == ["1", "2"]
    assert (mapped.page, mapped.limit, mapped.total) == (2, 2, 6)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def test_default_order_is_by_id():
    [clause] = order_clauses(PaginationParams(), SORT_COLUMNS, Product.id)
    assert str(clause) == str(Product.id.asc())


def test_sort_column_gets_id_tie_breaker():
    clauses = order_clauses(
        PaginationParams(sort_by="price", sort_order="desc"), SORT_COLUMNS, Product.id
    )
    assert [str(c) for c in clauses] == [str(Product.price.desc()), str(Product.id.asc())]


# ---------------------------------------------------------------------------
# paginate() against seeded rows
# ---------------------------------------------------------------------------


def test_paginate_counts_before_windowing(session):
    result = _page(session, PaginationParams(page=2, limit=2))
    assert result.total == 5
    assert result.total_pages == 3
    assert [p.name for p in result.items] == ["Samsung Galaxy S24", "Sony WH-1000XM5"]


def test_paginate_page_past_the_end_is_empty(session):
    result = _page(session, PaginationParams(page=9, limit=2))
    assert result.items == []
    assert result.total == 5
    assert result.has_next is False
    assert result.has_prev is True


def test_paginate_sorts_by_requested_column(session):
    result = _page(session, PaginationParams(sort_by="price", sort_order="desc"))
    assert [p.price for p in result.items] == [1199.99, 999.99, 899.99, 349.99, 129.99]


def test_paginate_applies_predicate_to_count(session):
    predicate = FilterPredicate.build(equals={"brand": "Apple"})
    result = _page(session, PaginationParams(limit=1), predicate)
    assert result.total == 2
    assert len(result.items) == 1
    assert result.has_next is True


def test_pages_do_not_overlap(session):
    seen = []
    for page in (1, 2, 3):
        seen.extend(p.id for p in _page(session, PaginationParams(page=page, limit=2)).items)
    assert len(seen) == len(set(seen)) == 5


def test_adding_constraints_never_increases_total(session):
    predicates = [
        FilterPredicate.build(),
        FilterPredicate.build(equals={"brand": "Apple"}),
        FilterPredicate.build(equals={"brand": "Apple"}, flags={"is_featured": True}),
        FilterPredicate.build(
            equals={"brand": "Apple"},
            flags={"is_featured": True},
            ranges={"price": (1000, None)},
        ),
    ]
    totals = [_page(session, PaginationParams(), p).total for p in predicates]
    assert totals == sorted(totals, reverse=True)
    assert totals == [5, 2, 2, 1]
