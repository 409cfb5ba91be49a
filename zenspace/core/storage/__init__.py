"""Persistence gateway: the only layer that talks to the database."""

from zenspace.core.storage.base import StorageGateway
from zenspace.core.storage.sql_storage import SQLAlchemyStorage

__all__ = ["StorageGateway", "SQLAlchemyStorage"]
