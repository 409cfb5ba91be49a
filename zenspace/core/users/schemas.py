"""Typed schemas for user IO."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from zenspace.core.users.models import User


class UserResponse(BaseModel):
    # Public fields only; the password hash never leaves the server.
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


def serialize_user(user: "User") -> dict:
    return UserResponse.model_validate(user).model_dump()
