# src/nburate/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Presentation

This package contains formatters for console messages and summary rows.
"""

from nburate.adapters.formatting.formatter import (
    format_batch_report,
    format_fetch_failure,
    format_rates,
    summary_rows,
)

__all__ = [
    "format_rates",
    "format_fetch_failure",
    "format_batch_report",
    "summary_rows",
]
