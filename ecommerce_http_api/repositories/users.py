# ecommerce_http_api/repositories/users.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import select

from ecommerce_http_api.db.models import User

from .base import Repository, store_errors
from .filters import FilterPredicate
from .pagination import Page, PaginationParams, paginate

DUPLICATE_EMAIL = "A user with this email already exists"

SORT_COLUMNS: Dict[str, Any] = {
    "id": User.id,
    "email": User.email,
    "firstName": User.first_name,
    "lastName": User.last_name,
    "role": User.role,
    "lastLogin": User.last_login,
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
}


class UsersRepository(Repository):
    """
    Thin data-access layer around the User model.
    """

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_by_id(self, user_id: int) -> Optional[User]:
        with store_errors(self.session):
            return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        with store_errors(self.session):
            return self.session.execute(stmt).scalar_one_or_none()

    def list_users(
        self,
        predicate: FilterPredicate,
        params: PaginationParams,
    ) -> Page[User]:
        with store_errors(self.session):
            return paginate(
                self.session,
                select(User),
                params,
                model=User,
                predicate=predicate,
                sort_columns=SORT_COLUMNS,
                default_column=User.id,
            )

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(self, **fields: Any) -> User:
        user = User(**fields)
        with store_errors(self.session, conflict_message=DUPLICATE_EMAIL):
            self.session.add(user)
            self.session.flush()
        return user

    def update(self, user: User, fields: Dict[str, Any]) -> User:
        """
        Apply ``fields`` (snake_case attribute names) and flush.
        """
        for key, value in fields.items():
            setattr(user, key, value)
        with store_errors(self.session, conflict_message=DUPLICATE_EMAIL):
            self.session.flush()
        return user

    def set_password(self, user: User, password_hash: str) -> User:
        return self.update(user, {"password": password_hash})

    def touch_last_login(self, user: User) -> User:
        return self.update(user, {"last_login": datetime.now(timezone.utc)})

    def soft_delete(self, user: User) -> User:
        return self.update(user, {"is_active": False})


__all__ = ["UsersRepository", "DUPLICATE_EMAIL"]
