# src/nburate/adapters/persistence/rate_cache.py
"""
Rate Cache - Expiring Per-Day Rate Storage

Keeps the last fetched rate pair for each date key in a KeyValueStore so
the NBU API is called at most once per day of interest. Entries live under
a dedicated key prefix (``<prefix>YYYYMMDD``) and expire 90 days after they
were fetched. Expired or unreadable entries are removed when they are
encountered; they are never reported as errors.

Files that USE this module:
- nburate.application.rates_service (RatesService consults and fills the cache)
- nburate.app (cache cleanup / clear commands)

Files that this module USES:
- nburate.adapters.persistence.kv_store (KeyValueStore interface)
- nburate.domain.models (RatePair, CacheEntry)
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from nburate.adapters.persistence.kv_store import KeyValueStore
from nburate.domain.models import CacheEntry, RatePair
from nburate.shared.validators import validate_key_prefix

log = logging.getLogger(__name__)

DEFAULT_PREFIX = "nbu_rate_"
DEFAULT_EXPIRY = timedelta(days=90)


def now_epoch_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class RateCache:
    """Expiring cache of RatePair values keyed by ``YYYYMMDD`` date keys."""

    def __init__(
        self,
        store: KeyValueStore,
        prefix: str = DEFAULT_PREFIX,
        expiry: timedelta = DEFAULT_EXPIRY,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize the cache.

        Args:
            store: Backing key-value store (shared with other components)
            prefix: Key namespace owned by this cache
            expiry: Maximum entry age
            clock: Returns the current time in epoch milliseconds

        Raises:
            ValueError: If the prefix is empty or malformed
        """
        if not validate_key_prefix(prefix):
            raise ValueError(f"Invalid cache key prefix: {prefix!r}")
        self.store = store
        self.prefix = prefix
        self.expiry_ms = int(expiry.total_seconds() * 1000)
        self._clock = clock or now_epoch_ms

    def key_for(self, date_key: str) -> str:
        return f"{self.prefix}{date_key}"

    def _read(self, key: str) -> Optional[CacheEntry]:
        raw = self.store.get(key)
        if raw is None:
            return None
        return CacheEntry.from_json(json.loads(raw))

    def _is_expired(self, entry: CacheEntry, now_ms: int) -> bool:
        return entry.age_ms(now_ms) > self.expiry_ms

    def get(self, date_key: str) -> Optional[RatePair]:
        """
        Return the cached pair for ``date_key``.

        Expired and malformed entries are deleted and reported as absent.
        """
        key = self.key_for(date_key)
        try:
            entry = self._read(key)
        except (ValueError, KeyError, TypeError) as e:
            log.warning("Dropping unreadable cache entry %s: %s", key, e)
            self.store.delete(key)
            return None

        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            log.info("Cache entry %s expired, removing", key)
            self.store.delete(key)
            return None

        log.debug("Cache hit for %s", date_key)
        return entry.rates

    def put(self, date_key: str, rates: RatePair) -> None:
        """Store ``rates`` for ``date_key`` stamped with the current time."""
        entry = CacheEntry(rates=rates, timestamp=self._clock())
        self.store.put(self.key_for(date_key), json.dumps(entry.to_json()))
        log.debug("Cached rates for %s", date_key)

    def cleanup_expired(self) -> int:
        """
        Delete every expired or malformed entry.

        Returns:
            Number of entries removed
        """
        now_ms = self._clock()
        removed = 0
        for key in self.store.scan_prefix(self.prefix):
            try:
                entry = self._read(key)
                stale = entry is not None and self._is_expired(entry, now_ms)
            except (ValueError, KeyError, TypeError):
                stale = True
            if stale and self.store.delete(key):
                removed += 1
        log.info("Cache cleanup removed %d entries", removed)
        return removed

    def clear_all(self) -> int:
        """
        Delete every entry under this cache's prefix.

        Returns:
            Number of entries removed
        """
        removed = 0
        for key in self.store.scan_prefix(self.prefix):
            if self.store.delete(key):
                removed += 1
        log.info("Cache cleared, %d entries removed", removed)
        return removed
