# ecommerce_http_api/repositories/base.py

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ecommerce_http_api.errors import ConflictError, StoreError


@contextmanager
def store_errors(
    session: Session,
    *,
    conflict_message: Optional[str] = None,
) -> Generator[None, None, None]:
    """
    Map SQLAlchemy failures onto the API error taxonomy.

    Unique-constraint violations become ``ConflictError``; anything else the
    driver raises becomes ``StoreError``. The session is rolled back either
    way so it can be closed cleanly.
    """
    try:
        yield
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(conflict_message) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreError(str(exc)) from exc


class Repository:
    """
    Common plumbing for the concrete repositories.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def commit(self, *, conflict_message: Optional[str] = None) -> None:
        with store_errors(self._session, conflict_message=conflict_message):
            self._session.commit()

    def refresh(self, instance: object) -> None:
        with store_errors(self._session):
            self._session.refresh(instance)


__all__ = ["Repository", "store_errors"]
