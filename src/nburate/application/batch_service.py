# src/nburate/application/batch_service.py
"""
Batch Service - Filling Many Date-keyed Rows

Resolves rates for a table whose rows carry a ``Date`` column and receive
``USD NBU`` / ``EURO NBU`` values. Within one batch, each date is looked up
once: a batch-local map is consulted before the fetch function (and so
before the persisted cache). Rows with an empty or unparsable date are
skipped; rows whose lookup fails are counted and left untouched.

Files that USE this module:
- nburate.adapters.spreadsheet.workbook (fill_rate_table)
- nburate.app (fill command)
- tests.test_batch_service (unit tests)

Files that this module USES:
- nburate.application.rates_service (FetchResult)
- nburate.shared.dates (normalize, to_api_key)
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, MutableMapping

from nburate.application.rates_service import FetchResult
from nburate.domain.errors import DateParseError, MissingColumnsError
from nburate.domain.models import RatePair
from nburate.shared.dates import normalize, to_api_key

log = logging.getLogger(__name__)

DATE_COLUMN = "Date"
USD_COLUMN = "USD NBU"
EUR_COLUMN = "EURO NBU"
REQUIRED_COLUMNS = (DATE_COLUMN, USD_COLUMN, EUR_COLUMN)


def check_columns(headers: Iterable) -> None:
    """
    Ensure every required column header is present (exact, case-sensitive).

    Raises:
        MissingColumnsError: Listing the absent column names
    """
    present = set(h for h in headers if isinstance(h, str))
    missing = [name for name in REQUIRED_COLUMNS if name not in present]
    if missing:
        raise MissingColumnsError(missing)


@dataclass
class BatchReport:
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    fetched: int = 0  # lookups that reached the fetch function

    @property
    def has_updates(self) -> bool:
        return self.updated > 0


class BatchResolver:
    """Fills rate columns of many rows with at most one lookup per date."""

    def __init__(
        self,
        fetch: Callable[[str], FetchResult],
        delay_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            fetch: Lookup for one ``YYYYMMDD`` key (usually RatesService.fetch)
            delay_seconds: Pause after each lookup that was not a cache hit
            sleep: Sleep function, replaceable in tests
        """
        self.fetch = fetch
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    def resolve(self, rows: Iterable[MutableMapping]) -> BatchReport:
        """
        Fill ``USD NBU`` and ``EURO NBU`` in place for every resolvable row.

        Returns:
            BatchReport with per-outcome counts
        """
        report = BatchReport()
        resolved: Dict[str, RatePair] = {}

        for row in rows:
            raw = row.get(DATE_COLUMN)
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                report.skipped += 1
                continue
            try:
                date_key = to_api_key(normalize(raw))
            except DateParseError as e:
                log.debug("Skipping row: %s", e)
                report.skipped += 1
                continue

            rates = resolved.get(date_key)
            if rates is None:
                result = self.fetch(date_key)
                report.fetched += 1
                if not result.from_cache and self.delay_seconds > 0:
                    self.sleep(self.delay_seconds)
                if not result.ok:
                    log.warning("No rates for %s: %s", date_key, result.message or result.status.value)
                    report.failed += 1
                    continue
                rates = result.rates
                resolved[date_key] = rates

            row[USD_COLUMN] = rates.usd
            row[EUR_COLUMN] = rates.eur
            report.updated += 1

        log.info(
            "Batch finished: %d updated, %d skipped, %d failed",
            report.updated, report.skipped, report.failed,
        )
        return report
