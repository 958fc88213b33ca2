"""
Entry business logic.

Validation happens here, before any write. The repository only ever sees
normalized values and closed enum members.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Callable

from dedications.errors import InvalidArgument, NotFound
from dedications.model.entry import DedicationType, Status
from dedications.schemas import CreateEntryInput, UpdateEntryInput
from dedications.storage.models import (
    MAX_SQLITE_INTEGER,
    MIN_AMOUNT_CENTS,
    EntryRecord,
    NewEntry,
)
from dedications.storage.repositories import EntryRepository

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _required_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{field} is required")
    return value.strip()


def _optional_text(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgument(f"{field} must be a string")
    return value.strip() or None


def _optional_date(value: Any, field: str) -> str | None:
    # Dates are free-form; only the type is checked.
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidArgument(f"{field} must be a string")
    return value


def parse_amount(value: Any) -> int:
    """Parse an amount the way a leading-integer parse would.

    ``"2000abc"`` -> 2000, ``1800.9`` -> 1800. Booleans, non-finite floats,
    strings without leading ASCII digits and values too large for an SQLite
    INTEGER are rejected.
    """
    message = f"amount must be a number >= {MIN_AMOUNT_CENTS} (in cents, minimum $18)"
    if isinstance(value, bool):
        raise InvalidArgument(message)
    if isinstance(value, int):
        amount = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidArgument(message)
        amount = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            raise InvalidArgument(message)
        amount = int(match.group(1))
    else:
        raise InvalidArgument(message)

    if not MIN_AMOUNT_CENTS <= amount <= MAX_SQLITE_INTEGER:
        raise InvalidArgument(message)
    return amount


def validate_new_entry(payload: CreateEntryInput) -> NewEntry:
    """Check a create request in order and build the entry to insert.

    The first failing check wins: sponsor_name, email, email format,
    dedication_name, dedication_type, amount.
    """
    sponsor_name = _required_text(payload.sponsor_name, "sponsor_name")
    email = _required_text(payload.email, "email")
    if not EMAIL_PATTERN.match(email):
        raise InvalidArgument("Invalid email address")
    dedication_name = _required_text(payload.dedication_name, "dedication_name")

    dedication_type = DedicationType.IN_HONOR_OF
    if payload.dedication_type:
        dedication_type = DedicationType.parse(payload.dedication_type)

    if payload.amount is None:
        raise InvalidArgument("amount is required")
    amount = parse_amount(payload.amount)

    return NewEntry(
        sponsor_name=sponsor_name,
        email=email.lower(),
        dedication_name=dedication_name,
        amount=amount,
        dedication_type=dedication_type,
        phone=_optional_text(payload.phone, "phone"),
        occasion=_optional_text(payload.occasion, "occasion"),
        message=_optional_text(payload.message, "message"),
        preferred_date=_optional_date(payload.preferred_date, "preferred_date"),
    )


class EntryService:
    """List, fetch, create, patch and delete dedication entries."""

    def __init__(
        self,
        repository: EntryRepository,
        clock: Callable[[], str] = utc_now,
    ) -> None:
        self.repository = repository
        self.clock = clock

    def list_entries(self, status: Any = None) -> list[EntryRecord]:
        status_filter = None
        if status is not None and status != "":
            status_filter = Status.parse(status)
        return self.repository.get_all(status=status_filter)

    def get_entry(self, entry_id: int) -> EntryRecord:
        # Ids outside the INTEGER range cannot be bound, let alone stored.
        if not 0 < entry_id <= MAX_SQLITE_INTEGER:
            raise NotFound("Entry not found")
        entry = self.repository.get_by_id(entry_id)
        if entry is None:
            raise NotFound("Entry not found")
        return entry

    def create_entry(self, payload: CreateEntryInput) -> EntryRecord:
        try:
            new_entry = validate_new_entry(payload)
        except InvalidArgument as exc:
            logger.debug("Rejected new entry: %s", exc.message)
            raise

        entry_id = self.repository.create(new_entry, timestamp=self.clock())
        logger.info("Created entry %s (%s cents)", entry_id, new_entry.amount)
        return self.get_entry(entry_id)

    def update_entry(self, entry_id: int, payload: UpdateEntryInput) -> EntryRecord:
        self.get_entry(entry_id)

        fields_set = payload.model_fields_set
        changes: dict[str, Any] = {}
        if "status" in fields_set:
            changes["status"] = Status.parse(payload.status)
        if "assigned_date" in fields_set:
            if payload.assigned_date is not None and not isinstance(payload.assigned_date, str):
                raise InvalidArgument("assigned_date must be a string")
            changes["assigned_date"] = payload.assigned_date

        if not changes:
            raise InvalidArgument("No valid fields to update. Allowed: status, assigned_date")

        if not self.repository.update(entry_id, updated_at=self.clock(), **changes):
            raise NotFound("Entry not found")
        logger.info("Updated entry %s: %s", entry_id, ", ".join(sorted(changes)))
        return self.get_entry(entry_id)

    def delete_entry(self, entry_id: int) -> None:
        self.get_entry(entry_id)
        if not self.repository.delete(entry_id):
            raise NotFound("Entry not found")
        logger.info("Deleted entry %s", entry_id)
