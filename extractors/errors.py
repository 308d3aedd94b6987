"""
Errors Extractor — Turn non-2xx response bodies into ApiError.

Google endpoints answer failures in several shapes:

    {"error": {"code": 400, "message": "Error!"}}                  # structured
    {"error": "invalid_grant", "error_description": "..."}         # OAuth flat
    "There was an error!"                                          # bare text
    {"error": {"errors": [{"domain", "reason", "message"}],
               "code": 500, "message": "..."}}                     # backend

All of them come out as one ApiError with `message` and `code`, where
`code` is the HTTP status that was received, except for backend-style
bodies (with an `errors` list), where an integer `error.code` wins.

Pure functions. No HTTP, no logging.
"""

import json
from http import HTTPStatus
from typing import Any

from models import ApiError, ErrorDetail, ErrorResponse
from .content import decode_body


def _reason_phrase(status: int) -> str:
    """Standard reason phrase for a status code, or 'HTTP <code>'."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"HTTP {status}"


def parse_error_details(raw_errors: Any) -> list[ErrorDetail]:
    """Parse the `error.errors` list, skipping entries that aren't objects."""
    if not isinstance(raw_errors, list):
        return []
    details = []
    for item in raw_errors:
        if not isinstance(item, dict):
            continue
        details.append(ErrorDetail(
            domain=item.get("domain"),
            reason=item.get("reason"),
            message=item.get("message"),
            location=item.get("location"),
            location_type=item.get("locationType"),
        ))
    return details


def _raw_text(body: Any) -> str:
    if isinstance(body, str):
        return body
    return json.dumps(body)


def normalize_error(
    status: int,
    body: Any,
    headers: dict[str, str] | None = None,
    request: Any = None,
) -> ApiError:
    """
    Build the single ApiError for a non-2xx response.

    Args:
        status: HTTP status received
        body: Decoded body (dict/list from JSON, str, or None)
        headers: Response headers, kept on the error for inspection
        request: The Request that produced the response, if known

    Returns:
        ApiError with message, code, and any sub-errors
    """
    response = ErrorResponse(
        status=status,
        headers=dict(headers or {}),
        body=body,
        request=request,
    )

    if body is None or body == "":
        return ApiError(_reason_phrase(status), status, response=response)

    if not isinstance(body, dict) or "error" not in body:
        return ApiError(_raw_text(body), status, response=response)

    error = body["error"]

    # OAuth-style: the error member is the machine-readable code itself
    if isinstance(error, str):
        description = body.get("error_description")
        return ApiError(
            error,
            status,
            description=description if isinstance(description, str) else None,
            response=response,
        )

    if isinstance(error, dict):
        details = parse_error_details(error.get("errors"))
        message = error.get("message")
        if not isinstance(message, str) or not message:
            message = next(
                (d.message for d in details if d.message),
                _reason_phrase(status),
            )
        # Backend-style bodies (with an errors list) carry an authoritative code
        code = status
        body_code = error.get("code")
        if isinstance(error.get("errors"), list) and isinstance(body_code, int) \
                and not isinstance(body_code, bool):
            code = body_code
        return ApiError(message, code, errors=details, response=response)

    return ApiError(_raw_text(body), status, response=response)


def normalize_error_content(
    status: int,
    content: bytes | str | None,
    content_type: str | None = None,
    headers: dict[str, str] | None = None,
    request: Any = None,
) -> ApiError:
    """normalize_error() for a raw, undecoded body."""
    return normalize_error(
        status,
        decode_body(content, content_type),
        headers=headers,
        request=request,
    )


def from_http_error(exception: Any) -> ApiError:
    """
    Convert a googleapiclient.errors.HttpError into an ApiError.

    Lets code that still goes through googleapiclient get the same
    normalized shape. Works with anything carrying .resp.status and .content.
    """
    if isinstance(exception, ApiError):
        return exception

    resp = exception.resp
    # httplib2.Response is a dict of lowercased headers
    headers = dict(resp) if isinstance(resp, dict) else {}
    return normalize_error_content(
        int(resp.status),
        getattr(exception, "content", None),
        content_type=headers.get("content-type"),
        headers=headers,
    )
