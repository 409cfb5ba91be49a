"""Persistence gateway contract.

Everything above this layer (auth service, journal service, controllers)
talks to a ``StorageGateway`` and never to the ORM session directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Mapping, Optional, Sequence, Union

if TYPE_CHECKING:
    from zenspace.core.users.models import User
    from zenspace.domains.journal.models import JournalEntry

RangeBound = Union[str, datetime]

# Columns a partial update is allowed to touch; ownership is never among them.
UPDATABLE_ENTRY_FIELDS = ("title", "content", "mood", "date")


class StorageGateway(ABC):
    # --- users ---

    @abstractmethod
    def get_user(self, user_id: int) -> Optional["User"]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional["User"]:
        ...

    @abstractmethod
    def create_user(self, username: str, password_hash: str) -> "User":
        """Insert a user; raises Conflict when the username is already taken."""

    # --- journal entries ---

    @abstractmethod
    def create_journal_entry(
        self,
        *,
        user_id: int,
        title: str,
        content: str,
        mood: str,
        date: Optional[datetime] = None,
    ) -> "JournalEntry":
        ...

    @abstractmethod
    def get_journal_entry(self, entry_id: int) -> Optional["JournalEntry"]:
        ...

    @abstractmethod
    def list_journal_entries_for_user(self, user_id: int) -> Sequence["JournalEntry"]:
        """Entries newest first, ties broken by id (newest first)."""

    @abstractmethod
    def list_journal_entries_for_user_in_range(
        self, user_id: int, start: RangeBound, end: RangeBound
    ) -> Sequence["JournalEntry"]:
        """Inclusive range query; raises InvalidRange when a bound does not parse."""

    @abstractmethod
    def update_journal_entry(
        self, entry_id: int, fields: Mapping[str, object]
    ) -> Optional["JournalEntry"]:
        ...

    @abstractmethod
    def delete_journal_entry(self, entry_id: int) -> bool:
        ...
