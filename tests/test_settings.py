"""
Settings Tests - Defaults, Environment Overrides and Validation
"""
from pathlib import Path

import pytest
from pydantic import ValidationError

from nburate.config.settings import Settings
from nburate.shared.validators import validate_http_url, validate_key_prefix


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ["NBU_API_URL", "RATE_CACHE_PREFIX", "RATE_CACHE_EXPIRY_DAYS", "BATCH_DELAY_MS"]:
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.nbu_api_url == "https://bank.gov.ua/NBUStatService/v1/statdirectory/exchange"
        assert s.rate_cache_file == Path("./data/rate_cache.json")
        assert s.rate_cache_prefix == "nbu_rate_"
        assert s.cache_expiry.days == 90
        assert s.batch_delay_seconds == 0.5

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("RATE_CACHE_PREFIX", "fx:")
        monkeypatch.setenv("BATCH_DELAY_MS", "0")
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "30")
        s = Settings(_env_file=None)
        assert s.rate_cache_prefix == "fx:"
        assert s.batch_delay_seconds == 0
        assert s.http_timeout_seconds == 30

    @pytest.mark.parametrize("name,value", [
        ("NBU_API_URL", "ftp://bank.gov.ua/"),
        ("RATE_CACHE_PREFIX", ""),
        ("HTTP_TIMEOUT_SECONDS", "0"),
        ("RATE_CACHE_EXPIRY_DAYS", "0"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestValidators:
    @pytest.mark.parametrize("url,expected", [
        ("https://bank.gov.ua/x", True),
        ("http://localhost:8080", True),
        ("bank.gov.ua", False),
        ("", False),
        ("   ", False),
    ])
    def test_validate_http_url(self, url, expected):
        assert validate_http_url(url) is expected

    @pytest.mark.parametrize("prefix,expected", [
        ("nbu_rate_", True),
        ("fx:", True),
        ("", False),
        ("has space", False),
    ])
    def test_validate_key_prefix(self, prefix, expected):
        assert validate_key_prefix(prefix) is expected
