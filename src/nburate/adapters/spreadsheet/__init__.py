# src/nburate/adapters/spreadsheet/__init__.py
"""
Spreadsheet Adapters - xlsx Output

This package writes rate summaries and fills rate tables in xlsx workbooks.
"""

from nburate.adapters.spreadsheet.workbook import fill_rate_table, write_summary

__all__ = ["write_summary", "fill_rate_table"]
