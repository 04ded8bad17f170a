# src/nburate/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Date normalization
- Validation
- Logging configuration
"""

from nburate.shared.dates import (
    is_valid_display_format,
    normalize,
    to_api_key,
    to_display_string,
    today,
)
from nburate.shared.validators import validate_http_url, validate_key_prefix

__all__ = [
    "normalize",
    "to_api_key",
    "to_display_string",
    "is_valid_display_format",
    "today",
    "validate_http_url",
    "validate_key_prefix",
]
