# src/nburate/shared/validators.py
"""
Input Validation Utilities - Configuration Validation

This module provides small validation functions used by the settings layer
to reject malformed configuration before any network or disk access.

Files that USE this module:
- nburate.config.settings (uses validation functions in Settings field validators)

Files that this module USES:
- None (pure utility functions)
"""
import re
from urllib.parse import urlparse


def validate_http_url(url: str) -> bool:
    """
    Validate an HTTP(S) URL.

    Args:
        url: URL to validate

    Returns:
        True if the URL has an http/https scheme and a host, False otherwise
    """
    if not url or url.isspace():
        return False

    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_key_prefix(prefix: str) -> bool:
    """
    Validate a key namespace prefix for the persisted store.

    An empty prefix would match every key in the store, so it is rejected.

    Args:
        prefix: Prefix to validate

    Returns:
        True if valid, False otherwise
    """
    if not prefix:
        return False
    return bool(re.match(r'^[A-Za-z0-9_.:-]+$', prefix))
