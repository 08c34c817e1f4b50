# tests/core/test_seed.py

from sqlalchemy import func, select

from ecommerce_http_api.db.models import Product, User, UserRole
from ecommerce_http_api.db.seed import SEED_PASSWORD, seed
from ecommerce_http_api.services.passwords import PasswordHasher


def test_seed_is_idempotent(seeded, hasher):
    with seeded.session() as session:
        assert seed(session, hasher) == {"users": 0, "products": 0}
        assert session.scalar(select(func.count()).select_from(User)) == 3
        assert session.scalar(select(func.count()).select_from(Product)) == 5


def test_seed_users_share_the_demo_password(session, hasher):
    users = session.execute(select(User).order_by(User.id)).scalars().all()
    assert [u.role for u in users] == [UserRole.ADMIN, UserRole.USER, UserRole.USER]
    assert all(hasher.verify(SEED_PASSWORD, u.password) for u in users)


def test_hasher_round_trip_and_mismatch():
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash("password123")
    assert hashed != "password123"
    assert hasher.verify("password123", hashed)
    assert not hasher.verify("password124", hashed)


def test_hasher_rejects_malformed_hash():
    assert PasswordHasher(rounds=4).verify("password123", "not-a-bcrypt-hash") is False
