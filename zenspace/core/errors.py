"""Application error taxonomy rendered by the JSON error handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """Base for errors that map onto a client-facing JSON response."""

    status_code = 500
    code = "unexpected_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.code, "message": self.message}


class ValidationFailure(AppError):
    status_code = 400
    code = "validation_error"
    default_message = "Validation failed"

    def __init__(self, errors: Iterable[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors) or None)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["details"] = [e.as_dict() for e in self.errors]
        return body


class Unauthenticated(AppError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Authentication required"


class InvalidCredentials(AppError):
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid username or password"


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    default_message = "You do not have access to this resource"


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class Conflict(AppError):
    status_code = 400
    code = "conflict"
    default_message = "Resource already exists"


class DuplicateUsername(Conflict):
    code = "username_taken"
    default_message = "Username already exists"


class InvalidRange(AppError):
    status_code = 400
    code = "invalid_range"
    default_message = "Invalid date format"


class StorageFailure(AppError):
    status_code = 500
    code = "storage_error"
    default_message = "Internal server error"


__all__ = [
    "AppError",
    "Conflict",
    "DuplicateUsername",
    "FieldError",
    "Forbidden",
    "InvalidCredentials",
    "InvalidRange",
    "NotFound",
    "StorageFailure",
    "Unauthenticated",
    "ValidationFailure",
]
