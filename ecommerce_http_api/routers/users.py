# ecommerce_http_api/routers/users.py

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ecommerce_http_api.schemas.common import (
    Envelope,
    ErrorEnvelope,
    MessageEnvelope,
    PaginatedEnvelope,
)
from ecommerce_http_api.schemas.users import (
    ChangePasswordRequest,
    CredentialsRequest,
    CredentialsResult,
    UserCreate,
    UserListQuery,
    UserRead,
    UserUpdate,
)
from ecommerce_http_api.services.users_service import UsersService

from .deps import get_users_service, path_id, validated_query

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        400: {"model": ErrorEnvelope, "description": "Validation failed"},
        500: {"model": ErrorEnvelope, "description": "Unexpected failure"},
    },
)

_NOT_FOUND = {404: {"model": ErrorEnvelope, "description": "User not found"}}
_CONFLICT = {409: {"model": ErrorEnvelope, "description": "Email already registered"}}
_UNAUTHORIZED = {401: {"model": ErrorEnvelope, "description": "Invalid credentials"}}


@router.post(
    "",
    response_model=Envelope[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="Register a new user account. Access: public.",
    responses=_CONFLICT,
)
def create_user(
    payload: UserCreate,
    service: UsersService = Depends(get_users_service),
) -> Envelope[UserRead]:
    user = service.create_user(payload)
    return Envelope(data=user, message="User created successfully")


@router.post(
    "/verify-credentials",
    response_model=Envelope[CredentialsResult],
    summary="Verify credentials",
    description="Check an email/password pair and record the login. Access: public.",
    responses=_UNAUTHORIZED,
)
def verify_credentials(
    payload: CredentialsRequest,
    service: UsersService = Depends(get_users_service),
) -> Envelope[CredentialsResult]:
    result = service.verify_credentials(payload)
    return Envelope(data=result, message="Credentials are valid")


@router.get(
    "",
    response_model=PaginatedEnvelope[UserRead],
    summary="List users",
    description=(
        "Filter by role, isActive, emailVerified and a free-text search over "
        "email, first name and last name. Deactivated users are hidden unless "
        "isActive=false is requested. Access: private (admin)."
    ),
)
def list_users(
    query: UserListQuery = Depends(validated_query(UserListQuery)),
    service: UsersService = Depends(get_users_service),
) -> PaginatedEnvelope[UserRead]:
    page = service.list_users(query)
    return PaginatedEnvelope(data=page.items, pagination=page.meta())


@router.get(
    "/{id}",
    response_model=Envelope[UserRead],
    summary="Get a user",
    description="Access: private.",
    responses=_NOT_FOUND,
)
def get_user(
    user_id: int = Depends(path_id),
    service: UsersService = Depends(get_users_service),
) -> Envelope[UserRead]:
    return Envelope(data=service.get_user(user_id))


@router.put(
    "/{id}",
    response_model=Envelope[UserRead],
    summary="Update a user",
    description="Partial update of profile fields and flags. Access: private.",
    responses={**_NOT_FOUND, **_CONFLICT},
)
def update_user(
    payload: UserUpdate,
    user_id: int = Depends(path_id),
    service: UsersService = Depends(get_users_service),
) -> Envelope[UserRead]:
    user = service.update_user(user_id, payload)
    return Envelope(data=user, message="User updated successfully")


@router.delete(
    "/{id}",
    response_model=MessageEnvelope,
    summary="Deactivate a user",
    description="Soft delete: the account is flagged inactive. Access: private (admin).",
    responses=_NOT_FOUND,
)
def delete_user(
    user_id: int = Depends(path_id),
    service: UsersService = Depends(get_users_service),
) -> MessageEnvelope:
    service.delete_user(user_id)
    return MessageEnvelope(message="User deleted successfully")


@router.post(
    "/{id}/change-password",
    response_model=MessageEnvelope,
    summary="Change a user's password",
    description="Requires the current password. Access: private.",
    responses={**_NOT_FOUND, **_UNAUTHORIZED},
)
def change_password(
    payload: ChangePasswordRequest,
    user_id: int = Depends(path_id),
    service: UsersService = Depends(get_users_service),
) -> MessageEnvelope:
    service.change_password(user_id, payload)
    return MessageEnvelope(message="Password changed successfully")
