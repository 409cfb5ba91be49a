from zenspace.domains.journal.schemas.journal_schemas import (
    MOOD_VALUES,
    JournalEntryCreate,
    JournalEntryResponse,
    JournalEntryUpdate,
    Mood,
    validate_entry,
)

__all__ = [
    "MOOD_VALUES",
    "JournalEntryCreate",
    "JournalEntryResponse",
    "JournalEntryUpdate",
    "Mood",
    "validate_entry",
]
