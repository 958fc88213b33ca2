"""Closed enumerations for entry status and dedication type."""

from enum import Enum
from typing import Any

from dedications.errors import InvalidArgument


class Status(Enum):
    """Lifecycle stage of an entry.

    pending -> approved -> scheduled -> completed, or cancelled at any point.
    """

    PENDING = "pending"
    APPROVED = "approved"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Any) -> "Status":
        """Return the member for ``value`` or raise InvalidArgument."""
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidArgument(
            f"Invalid status. Must be one of: {', '.join(cls.choices())}"
        )


class DedicationType(Enum):
    """Whether the entry honors a living or a deceased person."""

    IN_HONOR_OF = "In Honor Of"
    IN_MEMORY_OF = "In Memory Of"

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Any) -> "DedicationType":
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidArgument(
            f"Invalid dedication_type. Must be one of: {', '.join(cls.choices())}"
        )
