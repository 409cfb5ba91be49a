"""Server-side session records."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from zenspace.core.users.models import TimestampMixin
from zenspace.extensions import db


class AuthSession(db.Model, TimestampMixin):
    __tablename__ = "auth_session"
    __table_args__ = (
        db.UniqueConstraint("session_id", name="uq_auth_session_session_id"),
        db.Index("ix_auth_session_user", "user_id"),
        db.Index("ix_auth_session_expires_at", "expires_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    # sha256 of the opaque cookie token; the raw token is never stored.
    session_id: Mapped[str] = mapped_column(db.String(128), nullable=False)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(nullable=False)
