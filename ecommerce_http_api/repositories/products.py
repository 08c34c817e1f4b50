# ecommerce_http_api/repositories/products.py

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import select

from ecommerce_http_api.db.models import Product

from .base import Repository, store_errors
from .filters import FilterPredicate
from .pagination import Page, PaginationParams, paginate

DUPLICATE_SKU = "A product with this SKU already exists"

SORT_COLUMNS: Dict[str, Any] = {
    "id": Product.id,
    "name": Product.name,
    "price": Product.price,
    "stock": Product.stock,
    "sku": Product.sku,
    "category": Product.category,
    "brand": Product.brand,
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
}


class ProductsRepository(Repository):
    """
    Thin data-access layer around the Product model.
    """

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_by_id(self, product_id: int) -> Optional[Product]:
        with store_errors(self.session):
            return self.session.get(Product, product_id)

    def get_by_sku(self, sku: str, *, active_only: bool = True) -> Optional[Product]:
        stmt = select(Product).where(Product.sku == sku)
        if active_only:
            stmt = stmt.where(Product.is_active.is_(True))
        with store_errors(self.session):
            return self.session.execute(stmt).scalar_one_or_none()

    def list_products(
        self,
        predicate: FilterPredicate,
        params: PaginationParams,
    ) -> Page[Product]:
        with store_errors(self.session):
            return paginate(
                self.session,
                select(Product),
                params,
                model=Product,
                predicate=predicate,
                sort_columns=SORT_COLUMNS,
                default_column=Product.id,
            )

    def list_featured(self, *, limit: Optional[int] = None) -> List[Product]:
        stmt = (
            select(Product)
            .where(Product.is_active.is_(True), Product.is_featured.is_(True))
            .order_by(Product.id.asc())
        )
        if limit:
            stmt = stmt.limit(limit)
        with store_errors(self.session):
            return list(self.session.execute(stmt).scalars().all())

    def distinct_categories(self) -> List[str]:
        stmt = (
            select(Product.category)
            .where(Product.is_active.is_(True))
            .distinct()
            .order_by(Product.category.asc())
        )
        with store_errors(self.session):
            return list(self.session.execute(stmt).scalars().all())

    def distinct_brands(self) -> List[str]:
        stmt = (
            select(Product.brand)
            .where(Product.is_active.is_(True), Product.brand.is_not(None))
            .distinct()
            .order_by(Product.brand.asc())
        )
        with store_errors(self.session):
            return list(self.session.execute(stmt).scalars().all())

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(self, **fields: Any) -> Product:
        product = Product(**fields)
        with store_errors(self.session, conflict_message=DUPLICATE_SKU):
            self.session.add(product)
            self.session.flush()
        return product

    def update(self, product: Product, fields: Dict[str, Any]) -> Product:
        """
        Apply ``fields`` (snake_case attribute names) and flush.
        """
        for key, value in fields.items():
            setattr(product, key, value)
        with store_errors(self.session, conflict_message=DUPLICATE_SKU):
            self.session.flush()
        return product

    def soft_delete(self, product: Product) -> Product:
        return self.update(product, {"is_active": False})


__all__ = ["ProductsRepository", "DUPLICATE_SKU"]
