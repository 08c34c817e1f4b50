# ecommerce_http_api/errors.py

"""
Error taxonomy shared by services, repositories and the HTTP layer.

Every error the API deliberately reports derives from ``APIError`` and knows
its HTTP status. The exception handlers registered in ``main.py`` turn them
into the standard JSON envelope.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class APIError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class FieldError:
    """A single ``field -> message`` validation failure."""

    __slots__ = ("field", "message")

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        return (self.field, self.message) == (other.field, other.message)

    def __repr__(self) -> str:
        return f"FieldError(field={self.field!r}, message={self.message!r})"


class InputValidationError(APIError):
    """Request data failed schema validation (400)."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        errors: Sequence[FieldError],
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.errors: List[FieldError] = list(errors)

    @classmethod
    def for_field(cls, field: str, message: str) -> "InputValidationError":
        return cls([FieldError(field, message)])

    def to_list(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.errors]


class InvalidCredentialsError(APIError):
    """Email/password (or current password) did not match (401)."""

    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(APIError):
    """The addressed resource does not exist (404)."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(APIError):
    """A unique constraint of the store was violated (409)."""

    status_code = 409
    default_message = "Resource already exists"


class StoreError(APIError):
    """Any other persistence failure (500)."""

    status_code = 500
    default_message = "Database error"


class InternalError(APIError):
    """Unexpected failure inside the service (500)."""

    status_code = 500


__all__ = [
    "APIError",
    "FieldError",
    "InputValidationError",
    "InvalidCredentialsError",
    "NotFoundError",
    "ConflictError",
    "StoreError",
    "InternalError",
]
