"""Password hashing helpers."""

from flask import current_app

from zenspace.extensions import bcrypt

MIN_BCRYPT_ROUNDS = 10


def hash_password(plain_password: str) -> str:
    """Hash a plaintext password using salted bcrypt."""
    rounds = max(int(current_app.config.get("BCRYPT_LOG_ROUNDS", MIN_BCRYPT_ROUNDS)), MIN_BCRYPT_ROUNDS)
    return bcrypt.generate_password_hash(plain_password, rounds).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Validate a plaintext password against a stored hash (constant-time compare)."""
    return bcrypt.check_password_hash(hashed_password, plain_password)
