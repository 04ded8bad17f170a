"""
Domain Model Tests - RatePair and CacheEntry
"""
import pytest

from nburate.domain.errors import InvalidRateError
from nburate.domain.models import CacheEntry, RatePair


class TestRatePair:
    def test_numeric_strings_converted(self):
        pair = RatePair(usd="36.5686", eur=39)
        assert pair.usd == 36.5686
        assert isinstance(pair.eur, float)

    @pytest.mark.parametrize("usd,eur", [
        (0, 40.0),
        (-1, 40.0),
        (36.5, None),
        (36.5, "abc"),
        (float("nan"), 40.0),
        (float("inf"), 40.0),
        (True, 40.0),
    ])
    def test_invalid_values(self, usd, eur):
        with pytest.raises(InvalidRateError):
            RatePair(usd=usd, eur=eur)

    def test_frozen(self):
        pair = RatePair(usd=36.5, eur=40.0)
        with pytest.raises(AttributeError):
            pair.usd = 1.0


class TestCacheEntry:
    def test_json_round_trip(self):
        entry = CacheEntry(rates=RatePair(usd=36.5, eur=40.0), timestamp=1_686_787_200_000)
        assert CacheEntry.from_json(entry.to_json()) == entry

    def test_age(self):
        entry = CacheEntry(rates=RatePair(usd=36.5, eur=40.0), timestamp=1000)
        assert entry.age_ms(4000) == 3000

    @pytest.mark.parametrize("payload,error", [
        ({"timestamp": 1}, KeyError),
        ({"rates": {"usd": 1.0, "eur": 1.0}}, KeyError),
        ({"rates": {"usd": 0, "eur": 1.0}, "timestamp": 1}, ValueError),
        ({"rates": {"usd": 1.0, "eur": 1.0}, "timestamp": None}, TypeError),
        ({"rates": {"usd": 1.0, "eur": 1.0}, "timestamp": float("inf")}, ValueError),
        ({"rates": {"usd": 1.0, "eur": 1.0}, "timestamp": float("nan")}, ValueError),
    ])
    def test_malformed(self, payload, error):
        with pytest.raises(error):
            CacheEntry.from_json(payload)
