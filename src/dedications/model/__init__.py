"""Domain types for dedication entries."""

from dedications.model.entry import DedicationType, Status

__all__ = ["DedicationType", "Status"]
