"""
Extractors — Pure functions for parsing API payloads.

No HTTP, no logging. Just transform input → output.
Easily testable with fixtures.
"""

from .content import decode_body
from .discovery import parse_discovery_document, list_method_ids
from .errors import normalize_error, normalize_error_content, from_http_error

__all__ = [
    "decode_body",
    "parse_discovery_document",
    "list_method_ids",
    "normalize_error",
    "normalize_error_content",
    "from_http_error",
]
