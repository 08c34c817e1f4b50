# ecommerce_http_api/services/users_service.py

from __future__ import annotations

from typing import Any, Dict

from ecommerce_http_api.db.models import User
from ecommerce_http_api.errors import InvalidCredentialsError, NotFoundError
from ecommerce_http_api.logging import get_logger
from ecommerce_http_api.repositories.filters import build_user_filter
from ecommerce_http_api.repositories.pagination import Page, PaginationParams
from ecommerce_http_api.repositories.users import DUPLICATE_EMAIL, UsersRepository
from ecommerce_http_api.schemas.users import (
    ChangePasswordRequest,
    CredentialsRequest,
    CredentialsResult,
    UserCreate,
    UserListQuery,
    UserRead,
    UserUpdate,
)

from .passwords import PasswordHasher

log = get_logger(__name__)


class UsersService:
    """
    High-level service for user accounts.

    Responsibilities:
    - Hash and verify passwords; the hash never leaves this class.
    - Apply the soft-delete default to list queries.
    - Delegate persistence to ``UsersRepository`` and convert ORM rows to
      ``UserRead``.
    """

    def __init__(self, repo: UsersRepository, hasher: PasswordHasher) -> None:
        self._repo = repo
        self._hasher = hasher

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def to_read(user: User) -> UserRead:
        return UserRead.model_validate(user)

    def _require(self, user_id: int) -> User:
        user = self._repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id={user_id} not found")
        return user

    # -------------------------------------------------------------------------
    # Core CRUD operations
    # -------------------------------------------------------------------------

    def create_user(self, payload: UserCreate) -> UserRead:
        user = self._repo.create(
            email=str(payload.email).lower(),
            password=self._hasher.hash(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            role=payload.role,
        )
        self._repo.commit(conflict_message=DUPLICATE_EMAIL)
        log.info("user_created", user_id=user.id, role=user.role.value)
        return self.to_read(user)

    def get_user(self, user_id: int) -> UserRead:
        return self.to_read(self._require(user_id))

    def list_users(self, query: UserListQuery) -> Page[UserRead]:
        """
        Filtered, paginated listing. Users that were soft-deleted are only
        included when the caller asks for ``isActive=false`` explicitly.
        """
        predicate = build_user_filter(query).with_default_flag("is_active", True)
        page = self._repo.list_users(predicate, PaginationParams.from_query(query))
        return page.map(self.to_read)

    def update_user(self, user_id: int, payload: UserUpdate) -> UserRead:
        user = self._require(user_id)

        updates: Dict[str, Any] = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in updates:
            updates["email"] = str(updates["email"]).lower()

        if updates:
            self._repo.update(user, updates)
            self._repo.commit(conflict_message=DUPLICATE_EMAIL)
            log.info("user_updated", user_id=user.id, fields=sorted(updates))

        return self.to_read(user)

    def delete_user(self, user_id: int) -> None:
        """
        Soft delete: the row stays, ``is_active`` becomes False.
        """
        user = self._require(user_id)
        self._repo.soft_delete(user)
        self._repo.commit()
        log.info("user_deactivated", user_id=user.id)

    # -------------------------------------------------------------------------
    # Credentials
    # -------------------------------------------------------------------------

    def change_password(self, user_id: int, payload: ChangePasswordRequest) -> None:
        user = self._require(user_id)
        if not self._hasher.verify(payload.current_password, user.password):
            log.info("password_change_rejected", user_id=user.id)
            raise InvalidCredentialsError("Current password is incorrect")

        self._repo.set_password(user, self._hasher.hash(payload.new_password))
        self._repo.commit()
        log.info("password_changed", user_id=user.id)

    def verify_credentials(self, payload: CredentialsRequest) -> CredentialsResult:
        """
        Check an email/password pair for an active user and stamp
        ``last_login``. Unknown email, inactive account and wrong password
        all produce the same error.
        """
        user = self._repo.get_by_email(str(payload.email).lower())
        if (
            user is None
            or not user.is_active
            or not self._hasher.verify(payload.password, user.password)
        ):
            raise InvalidCredentialsError("Invalid email or password")

        self._repo.touch_last_login(user)
        self._repo.commit()
        log.info("credentials_verified", user_id=user.id)
        return CredentialsResult(user=self.to_read(user))


__all__ = ["UsersService"]
