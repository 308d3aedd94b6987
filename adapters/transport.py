"""
HTTP transport — turn calls into Requests and responses into results.

Header/body policy:
- Caller `headers` are merged verbatim over the defaults
- A JSON body sets content-type: application/json; charset=UTF-8
- GET/DELETE/HEAD never carry a body or a content-type

Every 2xx becomes a Response; everything else becomes exactly one ApiError
(see extractors/errors.py). Network failures propagate as raised by httplib2.

All HTTP objects use a 60-second timeout by default to prevent indefinite
hangs when Google APIs are slow or network connections stall.
"""

import json
from typing import Any, Protocol

import google_auth_httplib2
import httplib2
from google.auth.credentials import Credentials

from api_config import API_CLIENT_HEADER, API_TIMEOUT, USER_AGENT
from extractors.content import decode_body
from extractors.discovery import BODYLESS_METHODS
from extractors.errors import normalize_error
from logging_config import logger, log_api_call, log_api_error, log_api_result
from models import Request, Response

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"

DEFAULT_HEADERS = {
    "accept": "application/json",
    "accept-encoding": "gzip, deflate",
    "user-agent": USER_AGENT,
    "x-goog-api-client": API_CLIENT_HEADER,
}

# httplib2 folds these into the response dict; they aren't real headers
_PSEUDO_HEADERS = frozenset({"status", "-content-encoding", "content-location"})


class HttpLike(Protocol):
    """Anything with httplib2.Http's request() signature (AuthorizedHttp, HttpMock...)."""

    def request(
        self,
        uri: str,
        method: str = ...,
        body: Any = ...,
        headers: Any = ...,
        **kwargs: Any,
    ) -> tuple[Any, bytes]: ...


def build_http(
    credentials: Credentials | None = None,
    timeout: int = API_TIMEOUT,
) -> HttpLike:
    """Create an HTTP object with timeout, authorized when credentials are given."""
    http = httplib2.Http(timeout=timeout)
    if credentials is None:
        return http
    return google_auth_httplib2.AuthorizedHttp(credentials, http=http)


def _find_header(headers: dict[str, str], name: str) -> str | None:
    """Case-insensitive header lookup returning the key as stored."""
    lowered = name.lower()
    for key in headers:
        if key.lower() == lowered:
            return key
    return None


class Transport:
    """
    Sends Requests over an httplib2-compatible HTTP object.

    One Transport is shared by every client bound from the same GoogleApis,
    static or discovered.
    """

    def __init__(
        self,
        http: HttpLike | None = None,
        credentials: Credentials | None = None,
        timeout: int = API_TIMEOUT,
    ):
        self._credentials = credentials
        self._timeout = timeout
        self._owns_http = http is None
        self.http = http if http is not None else build_http(credentials, timeout)

    def fork(self) -> "Transport":
        """
        Transport with its own connection, for use from another thread.

        Shared httplib2 connections corrupt SSL state under concurrency.
        An injected http object is reused as-is.
        """
        if not self._owns_http:
            return self
        return Transport(credentials=self._credentials, timeout=self._timeout)

    def build_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> Request:
        """
        Apply the header/body policy.

        Args:
            method: HTTP verb
            url: Fully expanded URL, query included
            headers: Caller headers, merged verbatim over the defaults
            body: JSON-serializable payload, or None

        Returns:
            The Request that will be sent
        """
        method = method.upper()
        merged: dict[str, str] = dict(DEFAULT_HEADERS)
        for key, value in (headers or {}).items():
            existing = _find_header(merged, key)
            if existing is not None and existing != key:
                del merged[existing]
            merged[key] = value

        if method in BODYLESS_METHODS:
            if body is not None:
                logger.warning(f"Dropping request body for {method} {url}")
            content_type_key = _find_header(merged, "content-type")
            if content_type_key is not None:
                logger.warning(f"Dropping content-type header for {method} {url}")
                del merged[content_type_key]
            return Request(method=method, url=url, headers=merged, body=None)

        encoded: str | None = None
        if body is not None:
            encoded = json.dumps(body)
            if _find_header(merged, "content-type") is None:
                merged["content-type"] = JSON_CONTENT_TYPE

        return Request(method=method, url=url, headers=merged, body=encoded)

    def send(self, request: Request) -> Response:
        """
        Send a Request.

        Returns:
            Response for any 2xx status

        Raises:
            ApiError: For any other status, normalized from the body
        """
        log_api_call(request.method, request.url)
        resp, content = self.http.request(
            request.url,
            method=request.method,
            body=request.body,
            headers=request.headers,
        )
        status = int(resp.status)
        headers = {k: v for k, v in dict(resp).items() if k not in _PSEUDO_HEADERS}
        data = decode_body(content, headers.get("content-type"))

        if 200 <= status < 300:
            log_api_result(request.method, request.url, status)
            return Response(status=status, headers=headers, data=data, request=request)

        error = normalize_error(status, data, headers=headers, request=request)
        log_api_error(request.method, request.url, error.code, error.message)
        raise error

    def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> Response:
        """build_request() then send()."""
        return self.send(self.build_request(method, url, headers=headers, body=body))
