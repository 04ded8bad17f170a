# src/nburate/adapters/providers/nbu.py
"""
NBU API Provider for Official Exchange Rates

This module implements the client for the National Bank of Ukraine
statistics endpoint:

    GET <base_url>?date=YYYYMMDD&json

which answers with a JSON array of currency records such as
``{"r030": 840, "txt": "...", "rate": 36.5686, "cc": "USD", "exchangedate": "15.06.2023"}``.
Only the USD and EUR records are used; any other currency is ignored.

Files that USE this module:
- nburate.application.rates_service (build_rates_service wires NBUProvider)
- tests.test_providers (unit tests)

Files that this module USES:
- nburate.config (settings for API URL and HTTP timeout)
- nburate.domain.models (RatePair)
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from nburate.adapters.providers.base import RateProvider
from nburate.config import settings
from nburate.domain.errors import InvalidRateError, ProviderUnavailableError
from nburate.domain.models import RatePair

log = logging.getLogger(__name__)


def _find_record(records: Iterable[Any], code: str) -> Optional[Dict[str, Any]]:
    for record in records:
        if isinstance(record, dict) and record.get("cc") == code:
            return record
    return None


def extract_rate_pair(records: List[Any]) -> Optional[RatePair]:
    """
    Pick the USD and EUR rates out of an NBU response.

    Args:
        records: Parsed JSON array returned by the exchange endpoint

    Returns:
        RatePair, or None if either currency is missing

    Raises:
        ProviderUnavailableError: If a USD/EUR record carries an unusable rate
    """
    usd = _find_record(records, "USD")
    eur = _find_record(records, "EUR")
    if usd is None or eur is None:
        return None

    try:
        return RatePair(usd=usd.get("rate"), eur=eur.get("rate"))
    except InvalidRateError as e:
        raise ProviderUnavailableError(f"NBU returned an invalid rate: {e}") from e


class NBUProvider(RateProvider):
    """Client for the NBU ``statdirectory/exchange`` endpoint."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize the NBU provider.

        Args:
            base_url: Optional custom endpoint (defaults to settings.nbu_api_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
        """
        self.url = base_url or settings.nbu_api_url
        self.timeout = timeout or settings.http_timeout_seconds

    def get_exchange_raw(self, date_key: str) -> List[Any]:
        """
        Fetch the raw currency records for one day.

        Args:
            date_key: ``YYYYMMDD`` date key

        Returns:
            List of currency records

        Raises:
            ProviderUnavailableError: On transport errors, HTTP errors,
                invalid JSON or a non-list body
        """
        # "json" is a bare flag in the NBU query string
        params = f"date={date_key}&json"
        try:
            log.info("Fetching NBU rates for %s", date_key)
            resp = requests.get(self.url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.Timeout:
            log.error("NBU API timeout after %d seconds", self.timeout)
            raise ProviderUnavailableError(f"NBU API timeout after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            log.error("NBU API request failed: %s", e)
            raise ProviderUnavailableError(f"NBU API request failed: {e}")
        except ValueError as e:
            log.error("NBU API returned invalid JSON: %s", e)
            raise ProviderUnavailableError(f"NBU API returned invalid JSON: {e}")

        if not isinstance(data, list):
            log.error("NBU unexpected response type: %r", type(data))
            raise ProviderUnavailableError("NBU returned non-list JSON")

        log.debug("NBU returned %d records for %s", len(data), date_key)
        return data

    def get_rate_pair(self, date_key: str) -> Optional[RatePair]:
        return extract_rate_pair(self.get_exchange_raw(date_key))
