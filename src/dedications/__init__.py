"""dedications - CRUD backend for charitable dedication entries."""

__version__ = "1.0.0"
