# ecommerce_http_api/db/session.py

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from fastapi import Request
from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ecommerce_http_api.config import Settings

from .models import Base


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite's built-in lower() only folds ASCII.
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


class Database:
    """
    Owns the engine (and therefore the connection pool) plus the session
    factory for one application instance.

    ``create_app()`` builds exactly one of these and stores it on
    ``app.state.database``; request handlers receive sessions through the
    ``get_session`` dependency rather than through a module global.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url

        engine_kwargs: Dict[str, Any] = {"echo": echo}
        # SQLite needs a special flag when used in a multi-threaded web app.
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory databases live and die with a single connection.
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                engine_kwargs["poolclass"] = StaticPool

        self.engine: Engine = create_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _register_sqlite_functions)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            class_=Session,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(self.engine)

    def ping(self) -> bool:
        """
        Run a trivial query; used by the health endpoints.
        """
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Transactional scope for non-request usage (seed script, tests).

            with database.session() as db:
                ...
        """
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


def get_database(request: Request) -> Database:
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database has not been initialized on app.state")
    return database


def get_session(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a session bound to the application's
    engine and ensures it is closed afterwards. Services commit explicitly.

        @router.get("/products")
        def list_products(db: Session = Depends(get_session)):
            ...
    """
    db = get_database(request).session_factory()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Database", "get_database", "get_session"]
