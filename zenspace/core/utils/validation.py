"""Input validation helpers."""

from __future__ import annotations

from typing import Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from zenspace.core.errors import FieldError, ValidationFailure

M = TypeVar("M", bound=BaseModel)


def field_errors(
    exc: ValidationError,
    required_messages: Optional[Mapping[str, str]] = None,
) -> list[FieldError]:
    """Flatten a pydantic ValidationError into (field, message) pairs."""
    required_messages = required_messages or {}
    errors: list[FieldError] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc) if loc else "__root__"
        if err.get("type") == "missing" and field in required_messages:
            message = required_messages[field]
        elif err.get("type") == "value_error" and "error" in (err.get("ctx") or {}):
            # pydantic prefixes custom ValueErrors with "Value error, "
            message = str(err["ctx"]["error"])
        else:
            message = err.get("msg", "Invalid value")
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_payload(
    model: Type[M],
    payload: object,
    required_messages: Optional[Mapping[str, str]] = None,
) -> M:
    """Validate ``payload`` against ``model`` or raise ValidationFailure with every violation."""
    if not isinstance(payload, Mapping):
        raise ValidationFailure([FieldError(field="body", message="Expected a JSON object")])
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise ValidationFailure(field_errors(exc, required_messages)) from exc
