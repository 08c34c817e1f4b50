# ecommerce_http_api/routers/products.py

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ecommerce_http_api.schemas.common import (
    Envelope,
    ErrorEnvelope,
    MessageEnvelope,
    PaginatedEnvelope,
)
from ecommerce_http_api.schemas.products import (
    CategoryPageQuery,
    CategoryParams,
    FeaturedQuery,
    ProductCreate,
    ProductListQuery,
    ProductRead,
    ProductUpdate,
    SkuParams,
    StockAvailability,
    StockCheckParams,
    StockUpdate,
)
from ecommerce_http_api.services.products_service import ProductsService

from .deps import get_products_service, path_id, validated_path, validated_query

router = APIRouter(
    prefix="/products",
    tags=["products"],
    responses={
        400: {"model": ErrorEnvelope, "description": "Validation failed"},
        500: {"model": ErrorEnvelope, "description": "Unexpected failure"},
    },
)

_NOT_FOUND = {404: {"model": ErrorEnvelope, "description": "Product not found"}}
_CONFLICT = {409: {"model": ErrorEnvelope, "description": "SKU already in use"}}

# Static segments (featured, categories, brands, sku, category) must be
# registered before "/{id}" so they are not captured as ids.


@router.post(
    "",
    response_model=Envelope[ProductRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    description="Access: private (admin).",
    responses=_CONFLICT,
)
def create_product(
    payload: ProductCreate,
    service: ProductsService = Depends(get_products_service),
) -> Envelope[ProductRead]:
    product = service.create_product(payload)
    return Envelope(data=product, message="Product created successfully")


@router.get(
    "/featured",
    response_model=Envelope[List[ProductRead]],
    summary="Featured products",
    description="Active products flagged as featured. Access: public.",
)
def featured_products(
    query: FeaturedQuery = Depends(validated_query(FeaturedQuery)),
    service: ProductsService = Depends(get_products_service),
) -> Envelope[List[ProductRead]]:
    return Envelope(data=service.featured(limit=query.limit))


@router.get(
    "/categories",
    response_model=Envelope[List[str]],
    summary="Product categories",
    description="Distinct categories of active products. Access: public.",
)
def categories(
    service: ProductsService = Depends(get_products_service),
) -> Envelope[List[str]]:
    return Envelope(data=service.categories())


@router.get(
    "/brands",
    response_model=Envelope[List[str]],
    summary="Product brands",
    description="Distinct brands of active products. Access: public.",
)
def brands(
    service: ProductsService = Depends(get_products_service),
) -> Envelope[List[str]]:
    return Envelope(data=service.brands())


@router.get(
    "/sku/{sku}",
    response_model=Envelope[ProductRead],
    summary="Get a product by SKU",
    description="Access: public.",
    responses=_NOT_FOUND,
)
def get_by_sku(
    params: SkuParams = Depends(validated_path(SkuParams)),
    service: ProductsService = Depends(get_products_service),
) -> Envelope[ProductRead]:
    return Envelope(data=service.get_by_sku(params.sku))


@router.get(
    "/category/{category}",
    response_model=PaginatedEnvelope[ProductRead],
    summary="List products in a category",
    description="Paginated active products of one category. Access: public.",
)
def list_by_category(
    params: CategoryParams = Depends(validated_path(CategoryParams)),
    query: CategoryPageQuery = Depends(validated_query(CategoryPageQuery)),
    service: ProductsService = Depends(get_products_service),
) -> PaginatedEnvelope[ProductRead]:
    page = service.list_by_category(params.category, query)
    return PaginatedEnvelope(data=page.items, pagination=page.meta())


@router.get(
    "/{id}/stock/{quantity}",
    response_model=Envelope[StockAvailability],
    summary="Check stock availability",
    description="Whether `quantity` units can be served. Access: public.",
    responses=_NOT_FOUND,
)
def check_stock(
    params: StockCheckParams = Depends(validated_path(StockCheckParams)),
    service: ProductsService = Depends(get_products_service),
) -> Envelope[StockAvailability]:
    return Envelope(data=service.check_stock(params.id, params.quantity))


@router.get(
    "/{id}",
    response_model=Envelope[ProductRead],
    summary="Get a product",
    description="Access: public.",
    responses=_NOT_FOUND,
)
def get_product(
    product_id: int = Depends(path_id),
    service: ProductsService = Depends(get_products_service),
) -> Envelope[ProductRead]:
    return Envelope(data=service.get_product(product_id))


@router.get(
    "",
    response_model=PaginatedEnvelope[ProductRead],
    summary="List products",
    description=(
        "Filter by category, brand, price range, isActive, isFeatured and a "
        "free-text search over name and description. Inactive products are "
        "hidden unless isActive=false is requested. Access: public."
    ),
)
def list_products(
    query: ProductListQuery = Depends(validated_query(ProductListQuery)),
    service: ProductsService = Depends(get_products_service),
) -> PaginatedEnvelope[ProductRead]:
    page = service.list_products(query)
    return PaginatedEnvelope(data=page.items, pagination=page.meta())


@router.put(
    "/{id}",
    response_model=Envelope[ProductRead],
    summary="Update a product",
    description="Partial update. Access: private (admin).",
    responses={**_NOT_FOUND, **_CONFLICT},
)
def update_product(
    payload: ProductUpdate,
    product_id: int = Depends(path_id),
    service: ProductsService = Depends(get_products_service),
) -> Envelope[ProductRead]:
    product = service.update_product(product_id, payload)
    return Envelope(data=product, message="Product updated successfully")


@router.patch(
    "/{id}/stock",
    response_model=Envelope[ProductRead],
    summary="Update stock",
    description="Set, increment or decrement the stock level. Access: private (admin).",
    responses=_NOT_FOUND,
)
def update_stock(
    payload: StockUpdate,
    product_id: int = Depends(path_id),
    service: ProductsService = Depends(get_products_service),
) -> Envelope[ProductRead]:
    product = service.update_stock(product_id, payload)
    return Envelope(data=product, message="Stock updated successfully")


@router.delete(
    "/{id}",
    response_model=MessageEnvelope,
    summary="Deactivate a product",
    description="Soft delete: the product is flagged inactive. Access: private (admin).",
    responses=_NOT_FOUND,
)
def delete_product(
    product_id: int = Depends(path_id),
    service: ProductsService = Depends(get_products_service),
) -> MessageEnvelope:
    service.delete_product(product_id)
    return MessageEnvelope(message="Product deleted successfully")
