from zenspace.domains.journal.services.journal_service import JournalService

__all__ = ["JournalService"]
