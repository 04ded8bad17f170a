# src/nburate/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Providers

This module defines the abstract base class for exchange rate providers.

Files that USE this module:
- nburate.adapters.providers.nbu (NBUProvider implements RateProvider)
- nburate.application.rates_service (RatesService depends on RateProvider)
- tests (fake providers)

Files that this module USES:
- nburate.domain.models (RatePair)
"""
from abc import ABC, abstractmethod
from typing import Optional

from nburate.domain.models import RatePair


class RateProvider(ABC):
    @abstractmethod
    def get_rate_pair(self, date_key: str) -> Optional[RatePair]:
        """
        Return the USD/EUR pair for a ``YYYYMMDD`` date key.

        Returns None when the source answered without both currencies and
        raises ProviderUnavailableError when it could not be reached or its
        answer could not be read.
        """
        raise NotImplementedError
