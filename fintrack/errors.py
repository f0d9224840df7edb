"""
Domain exceptions. The API layer turns these into {"message": ...} responses.
"""
from __future__ import annotations


class FintrackError(Exception):
    """Base class for errors raised by the ledger."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownUserError(FintrackError):
    """A record was created for a user id the store does not know."""

    status_code = 404


class ImportFileError(FintrackError):
    """The uploaded file as a whole cannot be imported (type, size, encoding)."""
