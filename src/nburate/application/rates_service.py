# src/nburate/application/rates_service.py
"""
Rates Service - Cache-backed Rate Retrieval

This module contains the core lookup: a date key is answered from the rate
cache when possible, otherwise with a single provider call whose successful
result is written back to the cache.

Failures never escape ``RatesService.fetch``; they come back as a
FetchResult with status NOT_FOUND or NETWORK_ERROR so the caller decides how
to present them. Neither outcome is cached and nothing is retried. A cache
that cannot be written does not turn a successful lookup into a failure.

Files that USE this module:
- nburate.app (single-date commands and batch filling)
- nburate.application.batch_service (BatchResolver consumes FetchResult)
- tests.test_rates_service (unit tests)

Files that this module USES:
- nburate.adapters.persistence (RateCache, JsonFileStore)
- nburate.adapters.providers (RateProvider, NBUProvider)
- nburate.shared.dates (normalize, to_api_key)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from nburate.adapters.persistence.kv_store import JsonFileStore
from nburate.adapters.persistence.rate_cache import RateCache
from nburate.adapters.providers.base import RateProvider
from nburate.adapters.providers.nbu import NBUProvider
from nburate.domain.errors import InvalidRateError, ProviderUnavailableError, StorageError
from nburate.domain.models import RatePair
from nburate.shared.dates import DateInput, normalize, to_api_key

log = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of one rate lookup.

    Attributes:
        date_key: ``YYYYMMDD`` key that was looked up
        status: OK, NOT_FOUND or NETWORK_ERROR
        rates: Rate pair when status is OK
        from_cache: True when answered without a network call
        message: Human-readable failure detail
    """
    date_key: str
    status: FetchStatus
    rates: Optional[RatePair] = None
    from_cache: bool = False
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK


class RatesService:
    """Answers rate lookups from the cache first and the provider second."""

    def __init__(self, provider: RateProvider, cache: RateCache):
        """
        Initialize rates service.

        Args:
            provider: Source of rates on a cache miss (typically NBUProvider)
            cache: Rate cache consulted before the provider
        """
        self.provider = provider
        self.cache = cache

    def fetch(self, date_key: str) -> FetchResult:
        """
        Look up the rate pair for a date key.

        Args:
            date_key: ``YYYYMMDD`` key

        Returns:
            FetchResult; never raises for provider failures
        """
        try:
            cached = self.cache.get(date_key)
        except StorageError as e:
            log.warning("Rate cache unreadable, looking up %s directly: %s", date_key, e)
            cached = None
        if cached is not None:
            return FetchResult(date_key, FetchStatus.OK, rates=cached, from_cache=True)

        try:
            rates = self.provider.get_rate_pair(date_key)
        except (ProviderUnavailableError, InvalidRateError) as e:
            log.warning("Rate lookup for %s failed: %s", date_key, e)
            return FetchResult(date_key, FetchStatus.NETWORK_ERROR, message=str(e))

        if rates is None:
            log.info("No USD/EUR rates published for %s", date_key)
            return FetchResult(
                date_key,
                FetchStatus.NOT_FOUND,
                message=f"USD/EUR rates not found for {date_key}",
            )

        try:
            self.cache.put(date_key, rates)
        except StorageError as e:
            # Rates are still valid; only the next lookup pays for a network call
            log.warning("Could not cache rates for %s: %s", date_key, e)
        return FetchResult(date_key, FetchStatus.OK, rates=rates)

    def fetch_date(self, value: DateInput) -> FetchResult:
        """
        Look up rates for any accepted date representation.

        Raises:
            DateParseError: If ``value`` is not a valid date
        """
        return self.fetch(to_api_key(normalize(value)))


def build_rates_service(cfg=None) -> RatesService:
    """
    Wire a RatesService from settings: JSON file cache + NBU provider.

    Args:
        cfg: Settings instance (defaults to the global settings)
    """
    if cfg is None:
        from nburate.config import settings as cfg

    cache = RateCache(
        JsonFileStore(cfg.rate_cache_file),
        prefix=cfg.rate_cache_prefix,
        expiry=cfg.cache_expiry,
    )
    provider = NBUProvider(base_url=cfg.nbu_api_url, timeout=cfg.http_timeout_seconds)
    return RatesService(provider=provider, cache=cache)
