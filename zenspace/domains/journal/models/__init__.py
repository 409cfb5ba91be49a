from zenspace.domains.journal.models.journal_entry import JournalEntry

__all__ = ["JournalEntry"]
