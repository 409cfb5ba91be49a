"""Journal services: validated, owner-scoped CRUD over the storage gateway."""

from __future__ import annotations

import logging
from typing import List

from zenspace.core.storage.base import RangeBound, StorageGateway
from zenspace.domains.journal import policy
from zenspace.domains.journal.models import JournalEntry
from zenspace.domains.journal.schemas import validate_entry

logger = logging.getLogger(__name__)


class JournalService:
    def __init__(self, storage: StorageGateway):
        self.storage = storage

    def create_entry(self, caller_id: int, payload: object) -> JournalEntry:
        data = validate_entry(payload)
        entry = self.storage.create_journal_entry(
            user_id=policy.owner_for_new_entry(caller_id),
            title=data.title,
            content=data.content,
            mood=data.mood,
            date=data.date,
        )
        logger.debug("Created journal entry %s for user %s", entry.id, caller_id)
        return entry

    def get_entry(self, caller_id: int, entry_id: int) -> JournalEntry:
        return policy.load_owned_entry(self.storage, caller_id, entry_id, "read")

    def list_entries(self, caller_id: int) -> List[JournalEntry]:
        return list(self.storage.list_journal_entries_for_user(caller_id))

    def list_entries_in_range(self, caller_id: int, start: RangeBound, end: RangeBound) -> List[JournalEntry]:
        return list(self.storage.list_journal_entries_for_user_in_range(caller_id, start, end))

    def update_entry(self, caller_id: int, entry_id: int, payload: object) -> JournalEntry:
        entry = policy.load_owned_entry(self.storage, caller_id, entry_id, "update")
        changes = validate_entry(payload, partial=True).changes()
        if not changes:
            return entry
        updated = self.storage.update_journal_entry(entry_id, changes)
        # Deleted between the ownership check and the write.
        return policy.authorize(updated, caller_id, "update")

    def delete_entry(self, caller_id: int, entry_id: int) -> None:
        policy.load_owned_entry(self.storage, caller_id, entry_id, "delete")
        if not self.storage.delete_journal_entry(entry_id):
            policy.authorize(None, caller_id, "delete")
        logger.debug("Deleted journal entry %s for user %s", entry_id, caller_id)
