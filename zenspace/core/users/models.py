"""User account model."""

from __future__ import annotations

from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import Mapped, mapped_column

from zenspace.core.utils.dates import utcnow
from zenspace.extensions import db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)


class User(db.Model, TimestampMixin, UserMixin):
    __tablename__ = "user"
    __table_args__ = (db.UniqueConstraint("username", name="uq_user_username"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(db.String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User {self.id} {self.username!r}>"
