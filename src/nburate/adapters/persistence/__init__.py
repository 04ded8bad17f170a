# src/nburate/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- Key-value stores (JSON file, in-memory)
- The expiring rate cache built on top of them
"""

from nburate.adapters.persistence.kv_store import InMemoryStore, JsonFileStore, KeyValueStore
from nburate.adapters.persistence.rate_cache import RateCache

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "RateCache",
]
