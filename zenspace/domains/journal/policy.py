"""Ownership rules for journal entries.

Existence is checked before ownership so a caller can tell "no such entry"
(404) from "not yours" (403); neither response says who the owner is.
"""

from __future__ import annotations

from typing import Optional

from zenspace.core.errors import Forbidden, NotFound
from zenspace.core.storage.base import StorageGateway
from zenspace.domains.journal.models import JournalEntry

ACTION_MESSAGES = {
    "read": "Unauthorized access to this journal entry",
    "update": "Unauthorized to update this journal entry",
    "delete": "Unauthorized to delete this journal entry",
}


def authorize(entry: Optional[JournalEntry], caller_id: int, action: str = "read") -> JournalEntry:
    if entry is None:
        raise NotFound("Journal entry not found")
    if entry.user_id != caller_id:
        raise Forbidden(ACTION_MESSAGES.get(action, ACTION_MESSAGES["read"]))
    return entry


def load_owned_entry(storage: StorageGateway, caller_id: int, entry_id: int, action: str = "read") -> JournalEntry:
    """Fetch an entry and enforce that ``caller_id`` owns it."""
    return authorize(storage.get_journal_entry(entry_id), caller_id, action)


def owner_for_new_entry(caller_id: int) -> int:
    # Creation never trusts an owner from the payload.
    return caller_id
