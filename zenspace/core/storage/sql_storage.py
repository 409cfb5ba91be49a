"""SQLAlchemy-backed storage gateway."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Mapping, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from zenspace.core.errors import Conflict, InvalidRange, StorageFailure
from zenspace.core.storage.base import UPDATABLE_ENTRY_FIELDS, RangeBound, StorageGateway
from zenspace.core.users.models import User
from zenspace.core.utils.dates import end_of_day, is_date_only, parse_timestamp, utcnow
from zenspace.domains.journal.models import JournalEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_range_bound(value: RangeBound, *, upper: bool = False) -> datetime:
    """Parse a range bound; a date-only upper bound covers that whole day."""
    try:
        parsed = parse_timestamp(value)
    except ValueError as exc:
        raise InvalidRange() from exc
    if upper and is_date_only(value):
        return end_of_day(parsed)
    return parsed


class SQLAlchemyStorage(StorageGateway):
    """Gateway over a Flask-SQLAlchemy handle; each call is its own transaction."""

    def __init__(self, db):
        self._db = db

    @property
    def _session(self):
        return self._db.session

    # --- users ---

    def get_user(self, user_id: int) -> Optional[User]:
        return self._read("get_user", lambda: self._session.get(User, user_id), user_id=user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._read(
            "get_user_by_username",
            lambda: self._session.query(User).filter_by(username=username).first(),
            username=username,
        )

    def create_user(self, username: str, password_hash: str) -> User:
        user = User(username=username, password_hash=password_hash)
        try:
            self._session.add(user)
            self._session.commit()
        except IntegrityError as exc:
            # The unique constraint is the arbiter when two registrations race.
            self._session.rollback()
            logger.info("Username %r already taken", username)
            raise Conflict("Username already exists") from exc
        except SQLAlchemyError as exc:
            self._fail("create_user", exc, username=username)
        return user

    # --- journal entries ---

    def create_journal_entry(
        self,
        *,
        user_id: int,
        title: str,
        content: str,
        mood: str,
        date: Optional[datetime] = None,
    ) -> JournalEntry:
        entry = JournalEntry(
            user_id=user_id,
            title=title,
            content=content,
            mood=mood,
            date=date or utcnow(),
        )

        def _insert() -> JournalEntry:
            self._session.add(entry)
            return entry

        return self._write("create_journal_entry", _insert, user_id=user_id)

    def get_journal_entry(self, entry_id: int) -> Optional[JournalEntry]:
        return self._read(
            "get_journal_entry",
            lambda: self._session.get(JournalEntry, entry_id),
            entry_id=entry_id,
        )

    def list_journal_entries_for_user(self, user_id: int) -> List[JournalEntry]:
        return self._read(
            "list_journal_entries_for_user",
            lambda: self._ordered(self._session.query(JournalEntry).filter_by(user_id=user_id)).all(),
            user_id=user_id,
        )

    def list_journal_entries_for_user_in_range(
        self, user_id: int, start: RangeBound, end: RangeBound
    ) -> List[JournalEntry]:
        start_at = parse_range_bound(start)
        end_at = parse_range_bound(end, upper=True)
        if start_at > end_at:
            return []

        def _query() -> List[JournalEntry]:
            query = self._session.query(JournalEntry).filter(
                JournalEntry.user_id == user_id,
                JournalEntry.date >= start_at,
                JournalEntry.date <= end_at,
            )
            return self._ordered(query).all()

        return self._read("list_journal_entries_for_user_in_range", _query, user_id=user_id)

    def update_journal_entry(self, entry_id: int, fields: Mapping[str, object]) -> Optional[JournalEntry]:
        def _update() -> Optional[JournalEntry]:
            entry = self._session.get(JournalEntry, entry_id)
            if entry is None:
                return None
            for key in UPDATABLE_ENTRY_FIELDS:
                if key in fields:
                    setattr(entry, key, fields[key])
            return entry

        return self._write("update_journal_entry", _update, entry_id=entry_id)

    def delete_journal_entry(self, entry_id: int) -> bool:
        def _delete() -> bool:
            entry = self._session.get(JournalEntry, entry_id)
            if entry is None:
                return False
            self._session.delete(entry)
            return True

        return self._write("delete_journal_entry", _delete, entry_id=entry_id)

    # --- helpers ---

    @staticmethod
    def _ordered(query):
        return query.order_by(JournalEntry.date.desc(), JournalEntry.id.desc())

    def _read(self, action: str, work: Callable[[], T], **context) -> T:
        try:
            return work()
        except SQLAlchemyError as exc:
            self._fail(action, exc, **context)

    def _write(self, action: str, work: Callable[[], T], **context) -> T:
        try:
            result = work()
            self._session.commit()
        except SQLAlchemyError as exc:
            self._fail(action, exc, **context)
        return result

    def _fail(self, action: str, exc: SQLAlchemyError, **context):
        self._session.rollback()
        logger.exception("Storage failure during %s %s", action, context)
        raise StorageFailure() from exc


__all__ = ["SQLAlchemyStorage", "parse_range_bound"]
