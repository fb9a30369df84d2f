"""ShiftSheet exception hierarchy."""

from __future__ import annotations


class ShiftSheetError(Exception):
    """Base exception for all ShiftSheet errors."""


class ConfigurationError(ShiftSheetError):
    """A setting required to build a production collaborator is missing."""


class InvalidDateRangeError(ShiftSheetError):
    """Export or search date bounds are missing, malformed, or inverted."""


class CollaboratorError(ShiftSheetError):
    """An external collaborator (search index or spreadsheet) call failed."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class QueryError(CollaboratorError):
    """Search index request failed or returned an unexpected body."""


class StorageError(CollaboratorError):
    """Spreadsheet read or write failed."""


class AuthenticationError(ShiftSheetError):
    """HTTP basic auth credentials missing or rejected."""
