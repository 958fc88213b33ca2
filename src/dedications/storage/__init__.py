"""SQLite storage layer for dedications.

Provides persistent storage for dedication entries.
DB file: ./data/dedications.db unless configured otherwise (auto-created on startup).
"""

from dedications.storage.db import Database
from dedications.storage.repositories import EntryRepository

__all__ = ["Database", "EntryRepository"]
