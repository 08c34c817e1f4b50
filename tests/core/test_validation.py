# tests/core/test_validation.py

from datetime import datetime, timedelta, timezone

import pytest

from ecommerce_http_api.errors import FieldError, InputValidationError
from ecommerce_http_api.schemas.common import IdParams
from ecommerce_http_api.schemas.products import (
    ProductCreate,
    ProductListQuery,
    StockUpdate,
)
from ecommerce_http_api.schemas.users import UserCreate, UserListQuery
from ecommerce_http_api.schemas.validation import (
    ensure_utc,
    field_errors,
    int_or_default,
    parse_query_flag,
    validate_input,
)


def _fields(result):
    return {e.field for e in result.errors}


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("false", False), ("TRUE", False), ("1", False), ("maybe", False)],
)
def test_query_flag_is_true_only_for_literal_true(raw, expected):
    assert parse_query_flag(raw) is expected


def test_int_or_default_reads_leading_integer():
    coerce = int_or_default(10)
    assert coerce(None) == 10
    assert coerce("abc") == 10
    assert coerce("2.5") == 2
    assert coerce("10abc") == 10
    assert coerce(" 7 ") == 7
    assert coerce("-3") == -3


def test_list_query_defaults():
    result = validate_input(ProductListQuery, {})
    assert result.ok
    query = result.value
    assert (query.page, query.limit, query.sort_by, query.sort_order) == (1, 10, None, "asc")
    assert query.is_active is None
    assert query.is_featured is None


def test_non_numeric_limit_uses_default():
    result = validate_input(ProductListQuery, {"limit": "abc", "page": "xyz"})
    assert result.ok
    assert result.value.limit == 10
    assert result.value.page == 1


@pytest.mark.parametrize("raw", [{"limit": "500"}, {"limit": "0"}, {"page": "0"}, {"page": "-2"}])
def test_out_of_range_pagination_is_rejected(raw):
    result = validate_input(ProductListQuery, raw)
    assert not result.ok
    assert _fields(result) == set(raw)


def test_unknown_sort_field_lists_allowed_fields():
    result = validate_input(UserListQuery, {"sortBy": "password"})
    assert not result.ok
    [error] = result.errors
    assert error.field == "sortBy"
    assert error.message.startswith("sortBy must be one of: ")
    assert "email" in error.message
    assert "password" not in error.message.split(": ", 1)[1]


def test_sort_fields_are_per_resource():
    assert validate_input(ProductListQuery, {"sortBy": "price"}).ok
    assert not validate_input(UserListQuery, {"sortBy": "price"}).ok


def test_invalid_sort_order_is_rejected():
    result = validate_input(ProductListQuery, {"sortOrder": "sideways"})
    assert _fields(result) == {"sortOrder"}


def test_inverted_price_range_is_rejected_on_max_price():
    result = validate_input(ProductListQuery, {"minPrice": "500", "maxPrice": "100"})
    assert not result.ok
    assert result.errors == [
        FieldError("maxPrice", "maxPrice must be greater than or equal to minPrice")
    ]


def test_equal_price_bounds_are_accepted():
    assert validate_input(ProductListQuery, {"minPrice": "100", "maxPrice": "100"}).ok


def test_blank_text_filters_are_treated_as_absent():
    query = validate_input(ProductListQuery, {"category": "  ", "search": ""}).unwrap()
    assert query.category is None
    assert query.search is None


def test_unknown_query_keys_are_ignored():
    assert validate_input(ProductListQuery, {"utm_source": "mail"}).ok


def test_body_rejects_unknown_fields():
    result = validate_input(
        ProductCreate,
        {"name": "Cable", "price": 5, "stock": 1, "sku": "C-1", "category": "Audio", "color": "red"},
    )
    assert _fields(result) == {"color"}


def test_product_body_reports_every_failing_field():
    result = validate_input(ProductCreate, {"name": "", "price": 0, "stock": -1})
    assert _fields(result) >= {"name", "price", "stock", "sku", "category"}


def test_stock_must_be_an_integer():
    assert not validate_input(StockUpdate, {"quantity": "5"}).ok
    assert not validate_input(StockUpdate, {"quantity": 5, "operation": "multiply"}).ok
    assert validate_input(StockUpdate, {"quantity": 5}).value.operation == "set"


def test_user_body_rules():
    result = validate_input(
        UserCreate,
        {"email": "not-an-email", "password": "123", "firstName": "A", "lastName": "Valid"},
    )
    assert _fields(result) == {"email", "password", "firstName"}


def test_unwrap_raises_input_validation_error():
    result = validate_input(UserCreate, {})
    with pytest.raises(InputValidationError) as info:
        result.unwrap()
    assert info.value.status_code == 400
    assert {e["field"] for e in info.value.to_list()} == {
        "email",
        "password",
        "firstName",
        "lastName",
    }


def test_field_errors_strip_location_and_validator_prefix():
    errors = field_errors(
        [
            {"loc": ("body", "price"), "msg": "Input should be greater than 0"},
            {"loc": ("query", "maxPrice"), "msg": "Value error, too low"},
            {"loc": ("body",), "msg": "Field required"},
        ]
    )
    assert errors == [
        FieldError("price", "Input should be greater than 0"),
        FieldError("maxPrice", "too low"),
        FieldError("request", "Field required"),
    ]


@pytest.mark.parametrize("raw", [{"page": str(2**31)}, {"page": "99999999999999999999"}])
def test_page_beyond_integer_range_is_rejected(raw):
    result = validate_input(ProductListQuery, raw)
    assert _fields(result) == {"page"}


def test_ids_beyond_integer_range_are_rejected():
    assert validate_input(IdParams, {"id": str(2**31 - 1)}).ok
    result = validate_input(IdParams, {"id": "99999999999999999999"})
    assert _fields(result) == {"id"}


def test_stock_level_beyond_integer_range_is_rejected():
    result = validate_input(StockUpdate, {"quantity": 2**31})
    assert _fields(result) == {"quantity"}


def test_naive_timestamps_are_read_as_utc():
    naive = datetime(2026, 10, 19, 6, 44, 48, 444490)
    aware = ensure_utc(naive)
    assert aware.tzinfo is timezone.utc
    assert aware.replace(tzinfo=None) == naive

    offset = datetime(2026, 10, 19, 8, 44, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(offset) == datetime(2026, 10, 19, 6, 44, tzinfo=timezone.utc)
    assert ensure_utc(offset).tzinfo is timezone.utc
