# src/nburate/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- The USD/EUR rate pair for one day
- Cache entries holding a rate pair and the time it was fetched

Files that USE this module:
- nburate.application.* (services pass RatePair around)
- nburate.adapters.* (adapters create and persist domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- nburate.domain.errors (InvalidRateError)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math
from dataclasses import dataclass  # Decorator for creating data classes

from nburate.domain.errors import InvalidRateError


def _positive(name: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidRateError(f"{name} rate must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRateError(f"{name} rate must be a number, got {value!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidRateError(f"{name} rate must be positive, got {value!r}")
    return number


@dataclass(frozen=True)
class RatePair:
    """
    Official rates for one day.

    Attributes:
        usd: UAH per 1 USD
        eur: UAH per 1 EUR
    """
    usd: float
    eur: float

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "usd", _positive("USD", self.usd))
        object.__setattr__(self, "eur", _positive("EUR", self.eur))


@dataclass(frozen=True)
class CacheEntry:
    """
    Persisted rate pair.

    Attributes:
        rates: Cached rate pair
        timestamp: Fetch time in epoch milliseconds
    """
    rates: RatePair
    timestamp: int

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp

    def to_json(self) -> dict:
        """
        Convert the entry to a JSON-serializable dictionary.

        Returns:
            ``{"rates": {"usd": ..., "eur": ...}, "timestamp": ...}``
        """
        return {
            "rates": {"usd": self.rates.usd, "eur": self.rates.eur},
            "timestamp": self.timestamp,
        }

    @staticmethod
    def from_json(data: dict) -> "CacheEntry":
        """
        Create a CacheEntry from its JSON dictionary.

        Raises:
            KeyError, TypeError, ValueError: If the payload is malformed
                (InvalidRateError is a DomainError, re-raised as ValueError)
        """
        rates = data["rates"]
        timestamp = data["timestamp"]
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise TypeError(f"timestamp must be a number, got {timestamp!r}")
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            raise ValueError(f"timestamp must be finite, got {timestamp!r}")
        try:
            pair = RatePair(usd=rates["usd"], eur=rates["eur"])
        except InvalidRateError as e:
            raise ValueError(str(e)) from e
        return CacheEntry(rates=pair, timestamp=int(timestamp))
