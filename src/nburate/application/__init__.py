# src/nburate/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic:
single-date lookups through the cache and batch filling of date tables.
"""

from nburate.application.rates_service import (
    FetchResult,
    FetchStatus,
    RatesService,
    build_rates_service,
)
from nburate.application.batch_service import BatchReport, BatchResolver, check_columns

__all__ = [
    "FetchResult",
    "FetchStatus",
    "RatesService",
    "build_rates_service",
    "BatchReport",
    "BatchResolver",
    "check_columns",
]
