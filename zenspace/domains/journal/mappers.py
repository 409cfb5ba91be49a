"""Journal mappers for DTO responses."""

from __future__ import annotations

from zenspace.domains.journal.models import JournalEntry
from zenspace.domains.journal.schemas import JournalEntryResponse


def map_entry(entry: JournalEntry) -> dict:
    return JournalEntryResponse.model_validate(entry).model_dump(by_alias=True)
