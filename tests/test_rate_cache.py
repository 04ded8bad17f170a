"""
Rate Cache Tests - Expiry, Self-healing and Namespace Isolation

Covers put/get round trips, the 90-day expiry, deletion of malformed
payloads, cleanup_expired and clear_all counts.
"""
import json
from datetime import timedelta

import pytest

from nburate.adapters.persistence.kv_store import InMemoryStore
from nburate.adapters.persistence.rate_cache import RateCache
from nburate.domain.models import RatePair

from conftest import DAY_MS, T0, FakeClock


class TestGetPut:
    def test_round_trip(self, cache, pair):
        cache.put("20230615", pair)
        assert cache.get("20230615") == pair

    def test_missing_key(self, cache):
        assert cache.get("20230615") is None

    def test_put_overwrites(self, cache, pair, clock):
        cache.put("20230615", pair)
        clock.advance_days(10)
        newer = RatePair(usd=37.0, eur=40.0)
        cache.put("20230615", newer)
        assert cache.get("20230615") == newer

    def test_stored_payload_format(self, cache, store, pair):
        cache.put("20230615", pair)
        payload = json.loads(store.get("nbu_rate_20230615"))
        assert payload == {"rates": {"usd": 36.5686, "eur": 39.6178}, "timestamp": T0}

    def test_entry_at_exact_expiry_is_kept(self, cache, pair, clock):
        cache.put("20230615", pair)
        clock.advance_days(90)
        assert cache.get("20230615") == pair

    def test_expired_entry_absent_and_removed(self, cache, store, pair, clock):
        cache.put("20230615", pair)
        clock.now_ms += 90 * DAY_MS + 1
        assert cache.get("20230615") is None
        assert store.get("nbu_rate_20230615") is None

    @pytest.mark.parametrize("payload", [
        "{not json",
        "null",
        "[]",
        json.dumps({"rates": {"usd": 36.5}, "timestamp": T0}),
        json.dumps({"rates": {"usd": -1, "eur": 40}, "timestamp": T0}),
        json.dumps({"rates": {"usd": 36.5, "eur": 40}, "timestamp": "yesterday"}),
        '{"rates": {"usd": 1, "eur": 2}, "timestamp": Infinity}',
        '{"rates": {"usd": 1, "eur": 2}, "timestamp": 1e400}',
        '{"rates": {"usd": 1, "eur": 2}, "timestamp": NaN}',
    ])
    def test_malformed_entry_absent_and_removed(self, cache, store, payload):
        store.put("nbu_rate_20230615", payload)
        assert cache.get("20230615") is None
        assert store.get("nbu_rate_20230615") is None

    def test_custom_expiry(self, store, pair):
        clock = FakeClock()
        cache = RateCache(store, expiry=timedelta(days=1), clock=clock)
        cache.put("20230615", pair)
        clock.advance_days(2)
        assert cache.get("20230615") is None


class TestCleanupExpired:
    def test_removes_expired_and_malformed_only(self, cache, store, pair, clock):
        cache.put("20230101", pair)
        clock.advance_days(60)
        cache.put("20230301", pair)
        store.put("nbu_rate_20230401", "garbage")
        store.put("settings_theme", "dark")
        clock.advance_days(40)

        assert cache.cleanup_expired() == 2
        assert store.scan_prefix("nbu_rate_") == ["nbu_rate_20230301"]
        assert store.get("settings_theme") == "dark"

    @pytest.mark.parametrize("timestamp", ["Infinity", "-Infinity", "1e400", "NaN"])
    def test_non_finite_timestamp_removed(self, cache, store, pair, timestamp):
        cache.put("20230615", pair)
        store.put("nbu_rate_20230616", '{"rates": {"usd": 1, "eur": 2}, "timestamp": ' + timestamp + "}")

        assert cache.cleanup_expired() == 1
        assert store.scan_prefix("nbu_rate_") == ["nbu_rate_20230615"]

    def test_nothing_to_remove(self, cache, pair):
        cache.put("20230615", pair)
        assert cache.cleanup_expired() == 0


class TestClearAll:
    def test_only_own_namespace_removed(self, cache, store, pair):
        cache.put("20230614", pair)
        cache.put("20230615", pair)
        store.put("user_config", "{}")
        store.put("other_20230615", "x")

        assert cache.clear_all() == 2
        assert cache.clear_all() == 0
        assert store.get("user_config") == "{}"
        assert store.get("other_20230615") == "x"

    def test_clears_malformed_entries_too(self, cache, store):
        store.put("nbu_rate_20230615", "garbage")
        assert cache.clear_all() == 1


class TestConstruction:
    @pytest.mark.parametrize("prefix", ["", "bad prefix"])
    def test_invalid_prefix_rejected(self, prefix):
        with pytest.raises(ValueError):
            RateCache(InMemoryStore(), prefix=prefix)

    def test_key_for(self, cache):
        assert cache.key_for("20230615") == "nbu_rate_20230615"
