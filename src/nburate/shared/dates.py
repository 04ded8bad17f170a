# src/nburate/shared/dates.py
"""
Date Normalization - Canonical Calendar Days and API Date Keys

Turns the date representations found in spreadsheets and on the command
line into a plain ``datetime.date`` and derives the ``YYYYMMDD`` key used
both as the NBU API query parameter and as the cache key.

Accepted inputs:
- ``DD/MM/YYYY`` and ``DD.MM.YYYY`` (day and month may be one digit)
- ``YYYY-MM-DD`` and the ``YYYYMMDD`` date key itself
- ``datetime.date`` / ``datetime.datetime`` values (time and offset dropped)
- any other string understood by pydantic's datetime/date parsing
  (ISO-8601 date-times); bare numbers such as spreadsheet serials are
  rejected rather than read as Unix timestamps

Files that USE this module:
- nburate.application.rates_service (fetch_date normalizes user input)
- nburate.application.batch_service (row dates)
- nburate.app (today's date, display strings)

Files that this module USES:
- nburate.domain.errors (DateParseError)
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Union

from pydantic import TypeAdapter, ValidationError

from nburate.domain.errors import DateParseError

DateInput = Union[str, date, datetime]

_DAY_FIRST_RE = re.compile(r"^(\d{1,2})([./])(\d{1,2})\2(\d{4})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_KEY_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_NUMBER_RE = re.compile(r"^[+-]?\d+(\.\d*)?$")

_DATETIME_ADAPTER = TypeAdapter(datetime)
_DATE_ADAPTER = TypeAdapter(date)


def _build(value: str, year: int, month: int, day: int) -> date:
    # date() rejects 31.02 instead of rolling over into March
    try:
        return date(year, month, day)
    except ValueError as e:
        raise DateParseError(value, str(e)) from None


def _parse_generic(text: str) -> date:
    """Fallback for free-form strings."""
    try:
        return _DATETIME_ADAPTER.validate_python(text).date()
    except ValidationError:
        pass
    try:
        return _DATE_ADAPTER.validate_python(text)
    except ValidationError:
        raise DateParseError(text) from None


def normalize(value: DateInput) -> date:
    """
    Convert a supported date representation to a calendar date.

    Args:
        value: Date string or native date/datetime value

    Returns:
        The calendar day as a naive ``date``

    Raises:
        DateParseError: If the value is empty, of an unsupported type, or
            does not denote an existing calendar day
    """
    if isinstance(value, datetime):
        # Calendar components as written; the offset is not applied
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    if not isinstance(value, str):
        raise DateParseError(value, f"unsupported type {type(value).__name__}")

    text = value.strip()
    if not text:
        raise DateParseError(value, "empty value")

    m = _DAY_FIRST_RE.match(text)
    if m:
        day, _, month, year = m.groups()
        return _build(value, int(year), int(month), int(day))

    m = _ISO_RE.match(text)
    if m:
        year, month, day = m.groups()
        return _build(value, int(year), int(month), int(day))

    m = _KEY_RE.match(text)
    if m:
        year, month, day = m.groups()
        return _build(value, int(year), int(month), int(day))

    # pydantic would read these as Unix timestamps
    if _NUMBER_RE.match(text):
        raise DateParseError(value, "bare number is not a date")

    return _parse_generic(text)


def to_api_key(d: date) -> str:
    """Format a date as the ``YYYYMMDD`` API and cache key."""
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"


def to_display_string(d: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def is_valid_display_format(text: str) -> bool:
    """Check that ``text`` has the ``YYYY-MM-DD`` shape (no calendar check)."""
    return isinstance(text, str) and bool(_ISO_RE.match(text))


def today() -> date:
    """Current UTC calendar day."""
    return datetime.now(timezone.utc).date()
