"""User-facing error kinds raised by the entry service.

The web layer maps these onto HTTP responses:
    InvalidArgument -> 400
    NotFound        -> 404
Anything else (e.g. sqlite3.Error) is unexpected and propagates.
"""


class DedicationsError(Exception):
    """Base class for errors reported back to the caller."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(DedicationsError):
    """Input failed validation. The message names the offending field."""

    status_code = 400


class NotFound(DedicationsError):
    """The requested entry does not exist."""

    status_code = 404
