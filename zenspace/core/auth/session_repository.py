"""Persistence for server-side login sessions keyed by an opaque token."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from hashlib import sha256
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from zenspace.core.auth.models import AuthSession
from zenspace.core.errors import StorageFailure
from zenspace.core.utils.dates import utcnow

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=30)


def hash_token(raw: str) -> str:
    return sha256(raw.encode("utf-8")).hexdigest()


class SessionRepository:
    """Session store. Every method commits its own single-row change."""

    def __init__(self, db, ttl: timedelta = DEFAULT_SESSION_TTL):
        self._db = db
        self.ttl = ttl

    @property
    def _session(self):
        return self._db.session

    def create(self, user_id: int, ttl: Optional[timedelta] = None) -> str:
        """Persist a new session for ``user_id`` and return the raw token."""
        raw = secrets.token_urlsafe(32)
        record = AuthSession(
            session_id=hash_token(raw),
            user_id=user_id,
            expires_at=utcnow() + (ttl or self.ttl),
        )
        self._commit("create session", lambda: self._session.add(record), user_id=user_id)
        return raw

    def resolve(self, token: Optional[str]) -> Optional[int]:
        """Return the user id for a live token; expired rows are removed on sight."""
        if not token:
            return None
        try:
            record = self._session.query(AuthSession).filter_by(session_id=hash_token(token)).first()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.exception("Session lookup failed")
            raise StorageFailure() from exc
        if record is None:
            return None
        if record.expires_at <= utcnow():
            self._commit("expire session", lambda: self._session.delete(record), user_id=record.user_id)
            return None
        return record.user_id

    def destroy(self, token: Optional[str]) -> bool:
        if not token:
            return False

        def _delete() -> int:
            return (
                self._session.query(AuthSession)
                .filter_by(session_id=hash_token(token))
                .delete()
            )

        return bool(self._commit("destroy session", _delete))

    def prune_expired(self, now: Optional[datetime] = None) -> int:
        cutoff = now or utcnow()

        def _prune() -> int:
            return (
                self._session.query(AuthSession)
                .filter(AuthSession.expires_at <= cutoff)
                .delete()
            )

        return int(self._commit("prune sessions", _prune) or 0)

    def _commit(self, action: str, work, **context):
        try:
            result = work()
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.exception("Session store failure during %s %s", action, context)
            raise StorageFailure() from exc
        return result


__all__ = ["SessionRepository", "hash_token", "DEFAULT_SESSION_TTL"]
