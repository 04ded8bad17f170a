# src/nburate/app.py
"""
Application Entry Point - Command Line Interface

This module serves as the composition root for nburate. It wires settings,
logging, the rate cache and the NBU provider, and exposes the commands:

    nburate today [--workbook PATH] [--sheet NAME]
    nburate date VALUE [--workbook PATH] [--sheet NAME]
    nburate fill WORKBOOK [--sheet NAME]
    nburate cache cleanup | clear

Every user-facing error (bad date, missing rates, unreachable API, missing
table columns) is reported as a message with exit code 1.

``nburate today`` is the entry point meant for a daily cron job.

Files that USE this module:
- python -m nburate (module entry point)
- the ``nburate`` console script

Files that this module USES:
- nburate.shared.logging_conf (setup_logging)
- nburate.config (settings)
- nburate.application (RatesService, BatchResolver)
- nburate.adapters.spreadsheet (workbook output)
- nburate.adapters.formatting (console messages)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import argparse
import logging
import sys
from datetime import date
from typing import Optional, Sequence

from nburate.adapters.formatting.formatter import (
    format_batch_report,
    format_fetch_failure,
    format_rates,
)
from nburate.adapters.spreadsheet.workbook import fill_rate_table, write_summary
from nburate.application.batch_service import BatchResolver
from nburate.application.rates_service import RatesService, build_rates_service
from nburate.domain.errors import DomainError
from nburate.shared.dates import normalize, to_api_key, today
from nburate.shared.logging_conf import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="nburate",
        description="Fetch official NBU USD/EUR exchange rates and write them to spreadsheets.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    today_cmd = sub.add_parser("today", help="Fetch today's rates")
    date_cmd = sub.add_parser("date", help="Fetch rates for a date")
    date_cmd.add_argument("value", help="DD.MM.YYYY, DD/MM/YYYY or YYYY-MM-DD")
    for cmd in (today_cmd, date_cmd):
        cmd.add_argument("--workbook", help="Also write a summary block into this xlsx file")
        cmd.add_argument("--sheet", help="Worksheet for the summary block")
        cmd.add_argument("--anchor", default="A1", help="Top-left cell of the summary block")

    fill_cmd = sub.add_parser("fill", help="Fill the USD NBU / EURO NBU columns of a rate table")
    fill_cmd.add_argument("workbook", help="xlsx file with Date, USD NBU and EURO NBU headers")
    fill_cmd.add_argument("--sheet", help="Worksheet holding the table")

    cache_cmd = sub.add_parser("cache", help="Cache maintenance")
    cache_cmd.add_argument("action", choices=["cleanup", "clear"])
    return parser.parse_args(argv)


def _show_rates(service: RatesService, rate_date: date, args: argparse.Namespace) -> int:
    result = service.fetch(to_api_key(rate_date))
    if not result.ok:
        print(format_fetch_failure(result))
        return 1

    print(format_rates(rate_date, result.rates, from_cache=result.from_cache))
    if args.workbook:
        write_summary(args.workbook, rate_date, result.rates, sheet_name=args.sheet, anchor=args.anchor)
        print(f"Summary written to {args.workbook}")
    return 0


def _fill(service: RatesService, args: argparse.Namespace) -> int:
    from nburate.config import settings

    resolver = BatchResolver(service.fetch, delay_seconds=settings.batch_delay_seconds)
    report = fill_rate_table(args.workbook, resolver, sheet_name=args.sheet)
    print(format_batch_report(report))
    return 0 if report.has_updates else 1


def _cache(service: RatesService, action: str) -> int:
    if action == "cleanup":
        removed = service.cache.cleanup_expired()
        print(f"Removed {removed} expired cache entr{'y' if removed == 1 else 'ies'}.")
    else:
        removed = service.cache.clear_all()
        print(f"Cleared {removed} cache entr{'y' if removed == 1 else 'ies'}.")
    return 0


def execute(args: argparse.Namespace, service: Optional[RatesService] = None) -> int:
    """
    Execute one parsed command.

    Args:
        args: Namespace from parse_args
        service: Pre-built RatesService (built from settings when None)

    Returns:
        Process exit code
    """
    if service is None:
        service = build_rates_service()

    try:
        if args.command == "today":
            return _show_rates(service, today(), args)
        if args.command == "date":
            return _show_rates(service, normalize(args.value), args)
        if args.command == "fill":
            return _fill(service, args)
        return _cache(service, args.action)
    except (DomainError, FileNotFoundError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1


def run(argv: Optional[Sequence[str]] = None, service: Optional[RatesService] = None) -> int:
    """Parse ``argv`` (defaults to sys.argv[1:]) and execute the command."""
    return execute(parse_args(argv), service=service)


def main() -> None:
    """
    Configure logging from settings and run the command line.
    """
    from nburate.config import settings

    args = parse_args()
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_stdout=settings.log_stdout,
    )
    sys.exit(execute(args))


if __name__ == "__main__":
    main()
