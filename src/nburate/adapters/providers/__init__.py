# src/nburate/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for external exchange rate APIs.
All providers implement the RateProvider interface.
"""

from nburate.adapters.providers.base import RateProvider
from nburate.adapters.providers.nbu import NBUProvider

__all__ = [
    "RateProvider",
    "NBUProvider",
]
