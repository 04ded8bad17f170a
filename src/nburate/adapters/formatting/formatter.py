# src/nburate/adapters/formatting/formatter.py
"""
Message Formatter - Text Formatting and Presentation

This module turns rate lookups and batch outcomes into the text shown to
the user, and builds the Date / currency rows of the summary block written
to workbooks.

Files that USE this module:
- nburate.app (console output for every command)
- nburate.adapters.spreadsheet.workbook (summary_rows)
- tests.test_formatter (unit tests)

Files that this module USES:
- nburate.domain.models (RatePair)
- nburate.shared.dates (to_display_string)
"""
from __future__ import annotations

from datetime import date
from typing import List, Tuple, Union

from nburate.application.batch_service import BatchReport
from nburate.application.rates_service import FetchResult, FetchStatus
from nburate.domain.models import RatePair
from nburate.shared.dates import to_display_string


def summary_rows(rate_date: date, rates: RatePair) -> List[Tuple[str, Union[str, float]]]:
    """
    Build the two-column summary block.

    Returns:
        ``[("Date", "YYYY-MM-DD"), ("USD", usd), ("EUR", eur)]``
    """
    return [
        ("Date", to_display_string(rate_date)),
        ("USD", rates.usd),
        ("EUR", rates.eur),
    ]


def format_rates(rate_date: date, rates: RatePair, from_cache: bool = False, decimals: int = 4) -> str:
    """
    Format a rate pair as a plain text message.

    Args:
        rate_date: Day the rates apply to
        rates: Rate pair
        from_cache: Mark the message as served from the cache
        decimals: Number of decimal places (default: 4)
    """
    title = f"NBU rates for {to_display_string(rate_date)}"
    if from_cache:
        title += " (cached)"
    return (
        f"{title}\n"
        f"— USD: {rates.usd:.{decimals}f} UAH\n"
        f"— EUR: {rates.eur:.{decimals}f} UAH"
    )


def format_fetch_failure(result: FetchResult) -> str:
    if result.status is FetchStatus.NOT_FOUND:
        return f"NBU has no USD/EUR rates for {result.date_key}."
    detail = f": {result.message}" if result.message else ""
    return f"Could not reach the NBU API for {result.date_key}{detail}"


def format_batch_report(report: BatchReport) -> str:
    """
    Summarize a batch run.

    A run that updated nothing gets a diagnostic message instead of a count,
    since it usually means bad date cells or an unavailable API.
    """
    if not report.has_updates:
        return (
            "No rows were updated. Check that the Date column holds valid dates "
            "(DD.MM.YYYY, DD/MM/YYYY or YYYY-MM-DD) and that the NBU API is "
            "reachable and not rate-limiting requests."
        )
    lines = [f"Updated {report.updated} row(s)."]
    if report.skipped:
        lines.append(f"Skipped {report.skipped} row(s) with an empty or invalid date.")
    if report.failed:
        lines.append(f"Failed to get rates for {report.failed} row(s).")
    return "\n".join(lines)
