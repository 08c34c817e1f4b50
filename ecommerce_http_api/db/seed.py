# ecommerce_http_api/db/seed.py

"""
Idempotent demo data: three users and five products.

Run against the configured database with:

    python -m ecommerce_http_api.db.seed

Rows are matched on their natural keys (email, SKU); existing rows are left
untouched.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ecommerce_http_api.config import get_settings
from ecommerce_http_api.logging import configure_logging, get_logger
from ecommerce_http_api.services.passwords import PasswordHasher

from .models import Product, User, UserRole
from .session import Database

log = get_logger(__name__)

SEED_PASSWORD = "password123"

SEED_USERS: List[Dict[str, Any]] = [
    {
        "email": "admin@ecommerce.com",
        "first_name": "Admin",
        "last_name": "User",
        "role": UserRole.ADMIN,
        "is_active": True,
        "email_verified": True,
    },
    {
        "email": "user@ecommerce.com",
        "first_name": "Regular",
        "last_name": "User",
        "role": UserRole.USER,
        "is_active": True,
        "email_verified": True,
    },
    {
        "email": "test@ecommerce.com",
        "first_name": "Test",
        "last_name": "User",
        "role": UserRole.USER,
        "is_active": True,
        "email_verified": False,
    },
]

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "iPhone 15 Pro",
        "description": "El último iPhone con características avanzadas de cámara y rendimiento excepcional.",
        "price": 999.99,
        "stock": 50,
        "sku": "IPHONE-15-PRO-001",
        "category": "Electrónicos",
        "brand": "Apple",
        "images": ["iphone15pro-1.jpg", "iphone15pro-2.jpg"],
        "is_active": True,
        "is_featured": True,
        "weight": 187.0,
        "dimensions": {"length": 159.9, "width": 76.7, "height": 8.25},
        "tags": ["smartphone", "apple", "5g", "camera"],
    },
    {
        "name": "MacBook Air M2",
        "description": "Laptop ultraligera con chip M2 para máxima eficiencia y rendimiento.",
        "price": 1199.99,
        "stock": 30,
        "sku": "MACBOOK-AIR-M2-001",
        "category": "Computadoras",
        "brand": "Apple",
        "images": ["macbook-air-m2-1.jpg", "macbook-air-m2-2.jpg"],
        "is_active": True,
        "is_featured": True,
        "weight": 1250.0,
        "dimensions": {"length": 304.1, "width": 215.0, "height": 11.3},
        "tags": ["laptop", "apple", "m2", "ultralight"],
    },
    {
        "name": "Samsung Galaxy S24",
        "description": "Flagship Android con IA integrada y cámara profesional.",
        "price": 899.99,
        "stock": 40,
        "sku": "SAMSUNG-S24-001",
        "category": "Electrónicos",
        "brand": "Samsung",
        "images": ["samsung-s24-1.jpg", "samsung-s24-2.jpg"],
        "is_active": True,
        "is_featured": False,
        "weight": 167.0,
        "dimensions": {"length": 147.0, "width": 70.6, "height": 7.6},
        "tags": ["smartphone", "android", "samsung", "ai"],
    },
    {
        "name": "Sony WH-1000XM5",
        "description": "Auriculares inalámbricos con cancelación de ruido líder en la industria.",
        "price": 349.99,
        "stock": 25,
        "sku": "SONY-WH1000XM5-001",
        "category": "Audio",
        "brand": "Sony",
        "images": ["sony-wh1000xm5-1.jpg", "sony-wh1000xm5-2.jpg"],
        "is_active": True,
        "is_featured": False,
        "weight": 250.0,
        "dimensions": {"length": 167.0, "width": 185.0, "height": 71.0},
        "tags": ["headphones", "wireless", "noise-cancelling", "sony"],
    },
    {
        "name": "Nike Air Max 270",
        "description": "Zapatillas deportivas con tecnología Air Max para máxima comodidad.",
        "price": 129.99,
        "stock": 100,
        "sku": "NIKE-AIRMAX-270-001",
        "category": "Calzado",
        "brand": "Nike",
        "images": ["nike-airmax-270-1.jpg", "nike-airmax-270-2.jpg"],
        "is_active": True,
        "is_featured": False,
        "weight": 320.0,
        "dimensions": {"length": 28.0, "width": 10.0, "height": 12.0},
        "tags": ["shoes", "sports", "nike", "airmax"],
    },
]


def seed(session: Session, hasher: PasswordHasher) -> Dict[str, int]:
    """
    Insert any missing seed rows; returns how many of each were created.
    """
    created = {"users": 0, "products": 0}
    password_hash: Optional[str] = None

    for row in SEED_USERS:
        exists = session.execute(
            select(User.id).where(User.email == row["email"])
        ).first()
        if exists:
            continue
        if password_hash is None:
            password_hash = hasher.hash(SEED_PASSWORD)
        session.add(User(password=password_hash, **row))
        created["users"] += 1

    for row in SEED_PRODUCTS:
        exists = session.execute(
            select(Product.id).where(Product.sku == row["sku"])
        ).first()
        if exists:
            continue
        session.add(Product(**row))
        created["products"] += 1

    session.flush()
    return created


def main() -> None:
    settings = get_settings()
    configure_logging(settings)

    database = Database.from_settings(settings)
    database.create_all()
    try:
        with database.session() as session:
            created = seed(session, PasswordHasher(rounds=settings.BCRYPT_ROUNDS))
        log.info("seed_completed", **created)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
