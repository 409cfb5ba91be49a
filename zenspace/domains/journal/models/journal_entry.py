"""Personal journal entry."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from zenspace.core.users.models import TimestampMixin
from zenspace.core.utils.dates import utcnow
from zenspace.extensions import db


class JournalEntry(db.Model, TimestampMixin):
    __tablename__ = "journal_entry"
    __table_args__ = (db.Index("ix_journal_entry_user_date", "user_id", "date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), nullable=False)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    mood: Mapped[str] = mapped_column(db.String(50), nullable=False)
    date: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<JournalEntry {self.id} user={self.user_id} mood={self.mood}>"
