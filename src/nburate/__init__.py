# src/nburate/__init__.py
"""
NBU Rate - Daily Exchange Rates for Spreadsheets

Fetches the official USD and EUR rates of the National Bank of Ukraine for
a given day, keeps them in a durable 90-day cache and writes them into
spreadsheet workbooks, either as a summary block or by filling a table of
dates.
"""

__version__ = "1.0.0"
