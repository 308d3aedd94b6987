"""
Type definitions for gapi-transport.

Dataclasses defining the contracts between layers:
- Extractors parse discovery documents and error bodies into these structures
- Adapters send Requests and produce Responses or ApiErrors
- Tools bind everything into a callable client surface

These types make the adapter→extractor contract explicit and IDE-checkable.
"""

from dataclasses import dataclass, field
from typing import Any


# ============================================================================
# HTTP TYPES
# ============================================================================

@dataclass
class Request:
    """An outgoing HTTP request, exactly as handed to the HTTP object."""
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass
class Response:
    """
    A successful (2xx) HTTP response.

    Keeps the Request that produced it so callers can check what was sent.
    """
    status: int
    headers: dict[str, str]
    data: Any
    request: Request


# ============================================================================
# ERROR TYPES
# ============================================================================

@dataclass
class ErrorDetail:
    """One entry of the `error.errors` list in a Google API error body."""
    domain: str | None = None
    reason: str | None = None
    message: str | None = None
    location: str | None = None
    location_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in {
            "domain": self.domain,
            "reason": self.reason,
            "message": self.message,
            "location": self.location,
            "locationType": self.location_type,
        }.items() if v is not None}


class ApiError(Exception):
    """
    Normalized error for every non-2xx response.

    Whatever shape the upstream error body had, callers see one `message`
    and one numeric `code` (the HTTP status). Sub-errors from backend-style
    bodies are preserved in `errors`.

    Inherits from Exception so it can be raised.
    """

    def __init__(
        self,
        message: str,
        code: int,
        errors: list[ErrorDetail] | None = None,
        description: str | None = None,
        response: "ErrorResponse | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors = errors or []
        self.description = description
        self.response = response

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {
            "error": True,
            "code": self.code,
            "message": self.message,
        }
        if self.description:
            result["description"] = self.description
        if self.errors:
            result["errors"] = [e.to_dict() for e in self.errors]
        return result


@dataclass
class ErrorResponse:
    """The raw non-2xx response an ApiError was built from."""
    status: int
    headers: dict[str, str]
    body: Any
    request: Request | None = None


# ============================================================================
# DISCOVERY TYPES
# ============================================================================

@dataclass
class ParameterSpec:
    """A single method (or API-wide) parameter from a discovery document."""
    name: str
    location: str  # "path" or "query"
    type: str = "string"
    required: bool = False
    repeated: bool = False
    pattern: str | None = None
    enum: list[str] = field(default_factory=list)


@dataclass
class MethodSpec:
    """
    One callable method, e.g. drive.files.list.

    `path` is relative to the service URL and may contain RFC 6570
    expressions such as `files/{fileId}/comments`.
    """
    id: str
    name: str
    http_method: str
    path: str
    parameters: dict[str, ParameterSpec] = field(default_factory=dict)
    parameter_order: list[str] = field(default_factory=list)
    accepts_body: bool = False
    description: str | None = None


@dataclass
class ResourceSpec:
    """A resource collection (files, comments, url) and its nested resources."""
    name: str
    methods: dict[str, MethodSpec] = field(default_factory=dict)
    resources: dict[str, "ResourceSpec"] = field(default_factory=dict)


@dataclass
class ApiDescription:
    """
    Parsed discovery document.

    Top-level methods (oauth2.tokeninfo) live in `methods`; everything else
    hangs off `resources`.
    """
    name: str
    version: str
    root_url: str
    service_path: str
    parameters: dict[str, ParameterSpec] = field(default_factory=dict)
    methods: dict[str, MethodSpec] = field(default_factory=dict)
    resources: dict[str, ResourceSpec] = field(default_factory=dict)
    title: str | None = None

    @property
    def base_url(self) -> str:
        return self.root_url + self.service_path
