"""Data models and schema DDL for the storage layer.

Provides the record dataclass for the entries table and the DDL constant
used by db.py to initialize the database.
"""

from dataclasses import dataclass
from typing import Any

from dedications.model.entry import DedicationType, Status


# ─── Schema DDL ────────────────────────────────────────────────────────────────

SCHEMA_ENTRIES = """
CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    sponsor_name TEXT NOT NULL,
    email TEXT NOT NULL,
    phone TEXT,
    dedication_type TEXT NOT NULL DEFAULT 'In Honor Of'
        CHECK (dedication_type IN ('In Honor Of', 'In Memory Of')),
    dedication_name TEXT NOT NULL,
    occasion TEXT,
    message TEXT,
    preferred_date TEXT,
    assigned_date TEXT,
    amount INTEGER NOT NULL CHECK (amount >= 1800),
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'approved', 'scheduled', 'completed', 'cancelled')),
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

ALL_SCHEMAS = [SCHEMA_ENTRIES]

MIN_AMOUNT_CENTS = 1800

# Largest value an SQLite INTEGER column can hold.
MAX_SQLITE_INTEGER = 2**63 - 1


# ─── Record Dataclasses ───────────────────────────────────────────────────────


@dataclass
class NewEntry:
    """A validated entry ready to be inserted."""

    sponsor_name: str
    email: str
    dedication_name: str
    amount: int
    dedication_type: DedicationType = DedicationType.IN_HONOR_OF
    phone: str | None = None
    occasion: str | None = None
    message: str | None = None
    preferred_date: str | None = None


@dataclass
class EntryRecord:
    """A stored dedication entry."""

    id: int
    sponsor_name: str
    email: str
    dedication_name: str
    amount: int
    dedication_type: DedicationType = DedicationType.IN_HONOR_OF
    status: Status = Status.PENDING
    phone: str | None = None
    occasion: str | None = None
    message: str | None = None
    preferred_date: str | None = None
    assigned_date: str | None = None
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sponsor_name": self.sponsor_name,
            "email": self.email,
            "phone": self.phone,
            "dedication_type": self.dedication_type.value,
            "dedication_name": self.dedication_name,
            "occasion": self.occasion,
            "message": self.message,
            "preferred_date": self.preferred_date,
            "assigned_date": self.assigned_date,
            "amount": self.amount,
            "status": self.status.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
