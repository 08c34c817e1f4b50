# ecommerce_http_api/schemas/validation.py

"""
Declarative input validation helpers.

Request schemas are plain pydantic models built from small, composable
field rules (``Annotated`` types with constraints and ``BeforeValidator``
coercers). This module adds the pieces pydantic does not give us directly:

- coercers for the query-string quirks of the API (exact-match booleans,
  integers that fall back to a default when they do not parse),
- ``validate_input()``, which runs a schema against a raw mapping and
  returns a ``ValidationResult`` instead of raising,
- conversion of pydantic error lists into ``field -> message`` pairs.

Malformed input is an ordinary outcome here, not an exception::

    result = validate_input(ProductListQuery, request.query_params)
    if not result.ok:
        return bad_request(result.errors)
    query = result.value
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
)

from pydantic import BaseModel, ValidationError

from ecommerce_http_api.errors import FieldError, InputValidationError

M = TypeVar("M", bound=BaseModel)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Location prefixes FastAPI puts in front of the real field name.
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


# ---------------------------------------------------------------------------
# Coercers
# ---------------------------------------------------------------------------


def parse_query_flag(value: Any) -> Any:
    """
    Boolean query flag: only the literal ``"true"`` is true.

    Any other string (``"false"``, ``"1"``, ``"maybe"``) is ``False``; it is
    never a validation error.
    """
    if isinstance(value, str):
        return value == "true"
    return value


def int_or_default(default: int) -> Callable[[Any], Any]:
    """
    Build a coercer that reads the leading integer of the raw value
    (``"2.5"`` is 2, ``"10abc"`` is 10) and falls back to ``default`` when
    there is none.

    Only the parse falls back; bounds declared on the field still apply to
    whatever was parsed, so ``"-3"`` is rejected while ``"abc"`` is not.
    """

    def _coerce(value: Any) -> Any:
        if value is None:
            return default
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            match = _LEADING_INT.match(value)
            return int(match.group(1)) if match else default
        return default

    return _coerce


def blank_to_none(value: Any) -> Any:
    """
    Strip strings and treat blank ones as absent.
    """
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes (SQLite drops the offset on the way
    back) and convert aware ones to UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ---------------------------------------------------------------------------
# Error conversion
# ---------------------------------------------------------------------------


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "request"


def _clean_message(msg: str) -> str:
    # pydantic prefixes messages raised from custom validators.
    for prefix in ("Value error, ", "Assertion failed, "):
        if msg.startswith(prefix):
            return msg[len(prefix):]
    return msg


def field_errors(errors: Iterable[Mapping[str, Any]]) -> List[FieldError]:
    """
    Convert pydantic / FastAPI error dicts into ``FieldError`` objects.
    """
    return [
        FieldError(_field_name(err.get("loc", ())), _clean_message(str(err.get("msg", ""))))
        for err in errors
    ]


# ---------------------------------------------------------------------------
# Running a schema
# ---------------------------------------------------------------------------


@dataclass
class ValidationResult(Generic[M]):
    """
    Outcome of ``validate_input``: either ``value`` or a non-empty ``errors``.
    """

    value: Optional[M] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> M:
        """
        Return the validated value or raise ``InputValidationError``.

        Used at the HTTP boundary, where the error handler turns the
        exception into a 400 response.
        """
        if self.errors or self.value is None:
            raise InputValidationError(self.errors)
        return self.value


def validate_input(schema: Type[M], raw: Mapping[str, Any]) -> ValidationResult[M]:
    """
    Validate ``raw`` against ``schema`` without raising.
    """
    try:
        value = schema.model_validate(dict(raw))
    except ValidationError as exc:
        return ValidationResult(errors=field_errors(exc.errors()))
    return ValidationResult(value=value)


__all__ = [
    "ValidationResult",
    "blank_to_none",
    "ensure_utc",
    "field_errors",
    "int_or_default",
    "parse_query_flag",
    "validate_input",
]
