# ecommerce_http_api/services/products_service.py

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ecommerce_http_api.db.models import Product
from ecommerce_http_api.errors import InputValidationError, NotFoundError
from ecommerce_http_api.logging import get_logger
from ecommerce_http_api.repositories.filters import FilterPredicate, build_product_filter
from ecommerce_http_api.repositories.pagination import Page, PaginationParams
from ecommerce_http_api.repositories.products import DUPLICATE_SKU, ProductsRepository
from ecommerce_http_api.schemas.common import MAX_INT
from ecommerce_http_api.schemas.products import (
    CategoryPageQuery,
    ProductCreate,
    ProductListQuery,
    ProductRead,
    ProductUpdate,
    StockAvailability,
    StockUpdate,
)

log = get_logger(__name__)

# Columns that accept an explicit ``null`` in an update payload.
_CLEARABLE_FIELDS = {"description", "brand", "weight", "dimensions"}


class ProductsService:
    """
    High-level service for the product catalogue.

    Responsibilities:
    - Turn validated filters into a ``FilterPredicate`` (with the
      soft-delete default) and hand it to the repository for pagination.
    - Keep stock non-negative.
    - Convert ORM rows to ``ProductRead``.
    """

    def __init__(self, repo: ProductsRepository) -> None:
        self._repo = repo

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def to_read(product: Product) -> ProductRead:
        return ProductRead.model_validate(product)

    def _require(self, product_id: int) -> Product:
        product = self._repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with id={product_id} not found")
        return product

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_products(self, query: ProductListQuery) -> Page[ProductRead]:
        predicate = build_product_filter(query).with_default_flag("is_active", True)
        page = self._repo.list_products(predicate, PaginationParams.from_query(query))
        return page.map(self.to_read)

    def list_by_category(self, category: str, query: CategoryPageQuery) -> Page[ProductRead]:
        predicate = FilterPredicate.build(
            equals={"category": category},
            flags={"is_active": True},
        )
        page = self._repo.list_products(predicate, PaginationParams.from_query(query))
        return page.map(self.to_read)

    def get_product(self, product_id: int) -> ProductRead:
        return self.to_read(self._require(product_id))

    def get_by_sku(self, sku: str) -> ProductRead:
        product = self._repo.get_by_sku(sku)
        if product is None:
            raise NotFoundError(f"Product with sku='{sku}' not found")
        return self.to_read(product)

    def featured(self, *, limit: Optional[int] = None) -> List[ProductRead]:
        return [self.to_read(p) for p in self._repo.list_featured(limit=limit)]

    def categories(self) -> List[str]:
        return self._repo.distinct_categories()

    def brands(self) -> List[str]:
        return self._repo.distinct_brands()

    def check_stock(self, product_id: int, quantity: int) -> StockAvailability:
        product = self._require(product_id)
        return StockAvailability(
            product_id=product.id,
            sku=product.sku,
            requested=quantity,
            available=product.stock,
            in_stock=product.is_active and product.stock >= quantity,
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_product(self, payload: ProductCreate) -> ProductRead:
        fields = payload.model_dump()
        product = self._repo.create(**fields)
        self._repo.commit(conflict_message=DUPLICATE_SKU)
        log.info("product_created", product_id=product.id, sku=product.sku)
        return self.to_read(product)

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductRead:
        product = self._require(product_id)

        updates: Dict[str, Any] = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or key in _CLEARABLE_FIELDS
        }

        if updates:
            self._repo.update(product, updates)
            self._repo.commit(conflict_message=DUPLICATE_SKU)
            log.info("product_updated", product_id=product.id, fields=sorted(updates))

        return self.to_read(product)

    def update_stock(self, product_id: int, payload: StockUpdate) -> ProductRead:
        product = self._require(product_id)

        if payload.operation == "increment":
            new_stock = product.stock + payload.quantity
        elif payload.operation == "decrement":
            new_stock = product.stock - payload.quantity
        else:
            new_stock = payload.quantity

        if new_stock < 0:
            raise InputValidationError.for_field(
                "quantity",
                f"Insufficient stock: {product.stock} available",
            )
        if new_stock > MAX_INT:
            raise InputValidationError.for_field(
                "quantity",
                f"Stock cannot exceed {MAX_INT}",
            )

        self._repo.update(product, {"stock": new_stock})
        self._repo.commit()
        log.info(
            "product_stock_updated",
            product_id=product.id,
            operation=payload.operation,
            stock=new_stock,
        )
        return self.to_read(product)

    def delete_product(self, product_id: int) -> None:
        """
        Soft delete: the row stays, ``is_active`` becomes False.
        """
        product = self._require(product_id)
        self._repo.soft_delete(product)
        self._repo.commit()
        log.info("product_deactivated", product_id=product.id)


__all__ = ["ProductsService"]
