"""Accessors for the service objects create_app attaches to ``app.extensions``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app

if TYPE_CHECKING:
    from zenspace.core.auth.auth_service import AuthService
    from zenspace.core.auth.session_repository import SessionRepository
    from zenspace.core.storage.base import StorageGateway
    from zenspace.domains.journal.services import JournalService

STORAGE_KEY = "zenspace.storage"
AUTH_SERVICE_KEY = "zenspace.auth_service"
JOURNAL_SERVICE_KEY = "zenspace.journal_service"
SESSION_REPOSITORY_KEY = "zenspace.session_repository"


def get_storage() -> "StorageGateway":
    return current_app.extensions[STORAGE_KEY]


def get_auth_service() -> "AuthService":
    return current_app.extensions[AUTH_SERVICE_KEY]


def get_journal_service() -> "JournalService":
    return current_app.extensions[JOURNAL_SERVICE_KEY]


def get_session_repository() -> "SessionRepository":
    return current_app.extensions[SESSION_REPOSITORY_KEY]
