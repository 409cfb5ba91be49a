"""Authentication service layer."""

from __future__ import annotations

import logging
import secrets
from typing import Optional, Tuple

from zenspace.core.auth.password import hash_password, verify_password
from zenspace.core.auth.schemas import REQUIRED_MESSAGES, LoginRequest, RegisterRequest
from zenspace.core.auth.session_repository import SessionRepository
from zenspace.core.errors import Conflict, DuplicateUsername, InvalidCredentials, Unauthenticated
from zenspace.core.storage.base import StorageGateway
from zenspace.core.users.models import User
from zenspace.core.utils.validation import validate_payload

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks plus the server-side session lifecycle."""

    def __init__(self, storage: StorageGateway, sessions: SessionRepository):
        self.storage = storage
        self.sessions = sessions
        self._dummy_hash: Optional[str] = None

    def register(self, payload: object) -> Tuple[User, str]:
        """Create an account and open a session for it. Returns (user, session token)."""
        data = validate_payload(RegisterRequest, payload, REQUIRED_MESSAGES)
        if self.storage.get_user_by_username(data.username):
            raise DuplicateUsername()
        try:
            user = self.storage.create_user(data.username, hash_password(data.password))
        except Conflict as exc:
            # Lost a race with a concurrent registration of the same name.
            raise DuplicateUsername() from exc
        logger.info("Registered user %s", user.id)
        return user, self.sessions.create(user.id)

    def login(self, payload: object) -> Tuple[User, str]:
        data = validate_payload(LoginRequest, payload, REQUIRED_MESSAGES)
        user = self.storage.get_user_by_username(data.username)
        # Same error and the same bcrypt work for unknown user and wrong password.
        if user is None:
            verify_password(data.password, self._unknown_user_hash())
            raise InvalidCredentials()
        if not verify_password(data.password, user.password_hash):
            raise InvalidCredentials()
        return user, self.sessions.create(user.id)

    def _unknown_user_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = hash_password(secrets.token_urlsafe(16))
        return self._dummy_hash

    def logout(self, token: Optional[str]) -> None:
        self.sessions.destroy(token)

    def current_user(self, token: Optional[str]) -> User:
        user_id = self.sessions.resolve(token)
        if user_id is None:
            raise Unauthenticated()
        user = self.storage.get_user(user_id)
        if user is None:
            raise Unauthenticated()
        return user


__all__ = ["AuthService"]
