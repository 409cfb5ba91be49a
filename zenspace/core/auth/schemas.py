"""Schemas for credential flows (register, login)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

USERNAME_MIN, USERNAME_MAX = 3, 50
PASSWORD_MIN, PASSWORD_MAX = 6, 100

REQUIRED_MESSAGES = {
    "username": "Username is required",
    "password": "Password is required",
    "confirmPassword": "Please confirm your password",
}


def _check_length(value: str, label: str, low: int, high: int) -> str:
    if len(value) < low:
        raise ValueError(f"{label} must be at least {low} characters")
    if len(value) > high:
        raise ValueError(f"{label} too long")
    return value


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    username: str
    password: str
    confirm_password: str = Field(alias="confirmPassword")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _check_length(v, "Username", USERNAME_MIN, USERNAME_MAX)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_length(v, "Password", PASSWORD_MIN, PASSWORD_MAX)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        # Exact comparison, done before any hashing happens.
        if "password" in info.data and v != info.data["password"]:
            raise ValueError("Passwords do not match")
        return v


class LoginRequest(BaseModel):
    """Shape-only check; length rules apply at registration, not login."""

    model_config = ConfigDict(extra="ignore")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
