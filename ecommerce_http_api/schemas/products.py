"""
ecommerce_http_api/schemas/products.py

Pydantic models for the "products" HTTP API.

Prices are plain floats with two decimals of precision in the store.
``dimensions`` is an optional nested object; on the way out it is always
either ``null`` or an object with all three keys present.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import (
    BeforeValidator,
    Field,
    StrictBool,
    StringConstraints,
    ValidationInfo,
    field_validator,
)

from .common import (
    MAX_INT,
    APIModel,
    OptionalText,
    PaginationQuery,
    PositiveId,
    QueryModel,
    ReadModel,
    UtcDateTime,
)
from .validation import parse_query_flag

# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=2000)]
Sku = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Label = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Price = Annotated[float, Field(gt=0)]
StockLevel = Annotated[int, Field(strict=True, ge=0, le=MAX_INT)]
Measure = Annotated[float, Field(gt=0)]
QueryFlag = Annotated[Optional[bool], BeforeValidator(parse_query_flag)]

PRODUCT_SORT_FIELDS = (
    "id",
    "name",
    "price",
    "stock",
    "sku",
    "category",
    "brand",
    "createdAt",
    "updatedAt",
)


class Dimensions(APIModel):
    length: Optional[Measure] = None
    width: Optional[Measure] = None
    height: Optional[Measure] = None


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class ProductCreate(APIModel):
    name: ProductName
    description: Optional[Description] = None
    price: Price
    stock: StockLevel
    sku: Sku
    category: Label
    brand: Optional[Label] = None
    images: List[str] = Field(default_factory=list)
    is_featured: StrictBool = False
    weight: Optional[Measure] = None
    dimensions: Optional[Dimensions] = None
    tags: List[str] = Field(default_factory=list)


class ProductUpdate(APIModel):
    """
    Partial update; only provided fields are applied.
    """

    name: Optional[ProductName] = None
    description: Optional[Description] = None
    price: Optional[Price] = None
    stock: Optional[StockLevel] = None
    sku: Optional[Sku] = None
    category: Optional[Label] = None
    brand: Optional[Label] = None
    images: Optional[List[str]] = None
    is_active: Optional[StrictBool] = None
    is_featured: Optional[StrictBool] = None
    weight: Optional[Measure] = None
    dimensions: Optional[Dimensions] = None
    tags: Optional[List[str]] = None


class StockUpdate(APIModel):
    quantity: StockLevel
    operation: Literal["set", "increment", "decrement"] = "set"


# ---------------------------------------------------------------------------
# Query string / path parameters
# ---------------------------------------------------------------------------


class ProductFilters(QueryModel):
    category: OptionalText = None
    brand: OptionalText = None
    min_price: Optional[Annotated[float, Field(ge=0)]] = None
    max_price: Optional[Annotated[float, Field(ge=0)]] = None
    is_active: QueryFlag = None
    is_featured: QueryFlag = None
    search: OptionalText = None

    @field_validator("max_price")
    @classmethod
    def _check_price_range(
        cls, value: Optional[float], info: ValidationInfo
    ) -> Optional[float]:
        min_price = info.data.get("min_price")
        if value is not None and min_price is not None and min_price > value:
            raise ValueError("maxPrice must be greater than or equal to minPrice")
        return value


class ProductListQuery(ProductFilters, PaginationQuery):
    sortable_fields = PRODUCT_SORT_FIELDS


class CategoryPageQuery(PaginationQuery):
    sortable_fields = PRODUCT_SORT_FIELDS


class FeaturedQuery(QueryModel):
    limit: Optional[Annotated[int, Field(ge=1, le=100)]] = None


class SkuParams(QueryModel):
    sku: Sku


class CategoryParams(QueryModel):
    category: Label


class StockCheckParams(QueryModel):
    id: PositiveId
    quantity: Annotated[int, Field(gt=0, le=MAX_INT)]


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


def normalize_dimensions(value: Any) -> Optional[Dict[str, Optional[float]]]:
    """
    Stored dimensions may be missing, empty, or partial; expose either
    ``None`` or an object carrying all three keys.
    """
    if not value or not isinstance(value, dict):
        return None
    normalized = {key: value.get(key) for key in ("length", "width", "height")}
    if all(v is None for v in normalized.values()):
        return None
    return normalized


class DimensionsRead(ReadModel):
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None


class ProductRead(ReadModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    sku: str
    category: str
    brand: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    is_active: bool
    is_featured: bool
    weight: Optional[float] = None
    dimensions: Annotated[Optional[DimensionsRead], BeforeValidator(normalize_dimensions)] = None
    tags: List[str] = Field(default_factory=list)
    created_at: UtcDateTime
    updated_at: UtcDateTime


class StockAvailability(ReadModel):
    product_id: int
    sku: str
    requested: int
    available: int
    in_stock: bool


__all__ = [
    "PRODUCT_SORT_FIELDS",
    "Dimensions",
    "ProductCreate",
    "ProductUpdate",
    "StockUpdate",
    "ProductFilters",
    "ProductListQuery",
    "CategoryPageQuery",
    "FeaturedQuery",
    "SkuParams",
    "CategoryParams",
    "StockCheckParams",
    "normalize_dimensions",
    "DimensionsRead",
    "ProductRead",
    "StockAvailability",
]
