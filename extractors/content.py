"""
Content Extractor — Decode raw HTTP response bodies.

Receives bytes plus the response content type, returns parsed JSON,
text, or None. No HTTP, no logging.
"""

import json
from typing import Any

JSON_CONTENT_TYPES = ("application/json", "text/json")


def is_json_content_type(content_type: str | None) -> bool:
    """True for application/json and friends, ignoring parameters like charset."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in JSON_CONTENT_TYPES or media_type.endswith("+json")


def decode_body(content: bytes | str | None, content_type: str | None = None) -> Any:
    """
    Decode a response body.

    - Empty body → None
    - JSON content type → parsed JSON (falls back to text if it doesn't parse)
    - No content type → parsed JSON if it parses, else text
    - Anything else → text
    """
    if content is None:
        return None
    if isinstance(content, bytes):
        text = content.decode("utf-8", errors="replace")
    else:
        text = content
    if not text.strip():
        return None

    if is_json_content_type(content_type) or not content_type:
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text
