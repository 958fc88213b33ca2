"""Repository for CRUD operations on the entries table.

Every write is a single committed statement. Read operations return
typed dataclass records.
"""

from typing import Any

from dedications.model.entry import DedicationType, Status
from dedications.storage.db import Database
from dedications.storage.models import EntryRecord, NewEntry


_UNSET = object()


class EntryRepository:
    """CRUD operations for the entries table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create(self, entry: NewEntry, *, timestamp: str) -> int:
        """Insert a new entry with status=pending. Returns the new entry ID."""
        cursor = self.db.execute(
            """INSERT INTO entries
                   (sponsor_name, email, phone, dedication_type, dedication_name,
                    occasion, message, preferred_date, amount, status,
                    created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                entry.sponsor_name,
                entry.email,
                entry.phone,
                entry.dedication_type.value,
                entry.dedication_name,
                entry.occasion,
                entry.message,
                entry.preferred_date,
                entry.amount,
                Status.PENDING.value,
                timestamp,
                timestamp,
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_all(self, status: Status | None = None) -> list[EntryRecord]:
        """Return entries (optionally with one status), most recent first."""
        query = "SELECT * FROM entries"
        params: list[Any] = []
        if status is not None:
            query += " WHERE status = ?"
            params.append(status.value)
        query += " ORDER BY created_at DESC, id DESC"
        rows = self.db.fetch_all(query, params)
        return [self._row_to_record(row) for row in rows]

    def get_by_id(self, entry_id: int) -> EntryRecord | None:
        """Return an entry by ID, or None if not found."""
        row = self.db.fetch_one("SELECT * FROM entries WHERE id = ?", (entry_id,))
        return self._row_to_record(row) if row else None

    def update(
        self,
        entry_id: int,
        *,
        updated_at: str,
        status: Any = _UNSET,
        assigned_date: Any = _UNSET,
    ) -> bool:
        """Update status and/or assigned_date. Returns True if a row was updated.

        Notes:
            - Passing assigned_date=None clears the stored date.
            - updated_at is always written when at least one field is given.
        """
        updates: list[str] = []
        params: list[Any] = []

        if status is not _UNSET:
            updates.append("status = ?")
            params.append(status.value)
        if assigned_date is not _UNSET:
            updates.append("assigned_date = ?")
            params.append(assigned_date)

        if not updates:
            return False

        updates.append("updated_at = ?")
        params.append(updated_at)
        params.append(entry_id)
        cursor = self.db.execute(
            f"UPDATE entries SET {', '.join(updates)} WHERE id = ?",
            params,
        )
        return cursor.rowcount > 0

    def delete(self, entry_id: int) -> bool:
        """Delete an entry by ID. Returns True if a row was deleted."""
        cursor = self.db.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_record(row: Any) -> EntryRecord:
        return EntryRecord(
            id=row["id"],
            sponsor_name=row["sponsor_name"],
            email=row["email"],
            phone=row["phone"],
            dedication_type=DedicationType(row["dedication_type"]),
            dedication_name=row["dedication_name"],
            occasion=row["occasion"],
            message=row["message"],
            preferred_date=row["preferred_date"],
            assigned_date=row["assigned_date"],
            amount=row["amount"],
            status=Status(row["status"]),
            created_at=row["created_at"] or "",
            updated_at=row["updated_at"] or "",
        )
