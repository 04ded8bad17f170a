# src/nburate/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and domain errors.
"""
from typing import Iterable


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class DateParseError(DomainError, ValueError):
    """Raised when a value cannot be read as a calendar date."""

    def __init__(self, value, reason: str = "unrecognized date"):
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot parse date {value!r}: {reason}")


class InvalidRateError(DomainError):
    """Raised when a rate value is invalid (e.g., negative or zero)."""
    pass


class ProviderUnavailableError(DomainError):
    """Raised when the rate API cannot be reached or returns a malformed body."""
    pass


class MissingColumnsError(DomainError):
    """Raised when a rate table lacks one or more required header columns."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__("Missing columns: " + ", ".join(self.missing))


class StorageError(DomainError):
    """Raised when the persisted key-value store cannot be written."""
    pass


class SheetNotFoundError(DomainError):
    """Raised when a named worksheet does not exist in a workbook."""
    pass


class WorkbookError(DomainError):
    """Raised when a workbook cannot be opened or saved, or a cell reference is invalid."""
    pass
