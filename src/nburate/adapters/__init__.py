# src/nburate/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (NBU API)
- Persistence (key-value store and rate cache)
- Spreadsheet (xlsx workbooks)
- Formatting (console output)
"""

__all__ = []
