# src/nburate/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from nburate.domain.models import CacheEntry, RatePair
from nburate.domain.errors import (
    DateParseError,
    DomainError,
    InvalidRateError,
    MissingColumnsError,
    ProviderUnavailableError,
    SheetNotFoundError,
    StorageError,
    WorkbookError,
)

__all__ = [
    "RatePair",
    "CacheEntry",
    "DomainError",
    "DateParseError",
    "InvalidRateError",
    "MissingColumnsError",
    "ProviderUnavailableError",
    "SheetNotFoundError",
    "StorageError",
    "WorkbookError",
]
