"""
Shared Test Fixtures

Fake provider, controllable clock and pre-wired cache/service objects used
across the test modules.
"""
from typing import List, Optional

import pytest

from nburate.adapters.persistence.kv_store import InMemoryStore
from nburate.adapters.persistence.rate_cache import RateCache
from nburate.adapters.providers.base import RateProvider
from nburate.application.rates_service import RatesService
from nburate.domain.models import RatePair

DAY_MS = 24 * 60 * 60 * 1000
T0 = 1_686_787_200_000  # 2023-06-15T00:00:00Z


class FakeClock:
    def __init__(self, now_ms: int = T0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance_days(self, days: float) -> None:
        self.now_ms += int(days * DAY_MS)


class FakeProvider(RateProvider):
    """Provider returning a fixed answer and recording every call."""

    def __init__(self, rates: Optional[RatePair] = None, error: Optional[Exception] = None):
        self.rates = rates
        self.error = error
        self.calls: List[str] = []

    def get_rate_pair(self, date_key: str) -> Optional[RatePair]:
        self.calls.append(date_key)
        if self.error is not None:
            raise self.error
        return self.rates


@pytest.fixture
def pair() -> RatePair:
    return RatePair(usd=36.5686, eur=39.6178)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def cache(store, clock) -> RateCache:
    return RateCache(store, prefix="nbu_rate_", clock=clock)


@pytest.fixture
def provider(pair) -> FakeProvider:
    return FakeProvider(rates=pair)


@pytest.fixture
def service(provider, cache) -> RatesService:
    return RatesService(provider=provider, cache=cache)
