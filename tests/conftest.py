# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from ecommerce_http_api.config import AppEnv, Settings
from ecommerce_http_api.db.seed import seed
from ecommerce_http_api.db.session import Database
from ecommerce_http_api.main import create_app
from ecommerce_http_api.services.passwords import PasswordHasher


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated, in-memory test run (no .env lookup)."""
    return Settings(
        _env_file=None,
        APP_ENV=AppEnv.TESTING,
        DATABASE_URL="sqlite://",
        DATABASE_CREATE_ALL=True,
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="console",
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    # The minimum cost bcrypt accepts keeps the suite fast.
    return PasswordHasher(rounds=4)


@pytest.fixture
def database(settings):
    """A fresh in-memory database with the schema and seed data loaded."""
    db = Database(settings.DATABASE_URL)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def seeded(database, hasher) -> Database:
    with database.session() as session:
        seed(session, hasher)
    return database


@pytest.fixture
def session(seeded) -> Session:
    db = seeded.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app(settings, seeded, hasher):
    return create_app(settings, database=seeded, password_hasher=hasher)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
