"""
Client binding — resource-shaped methods over a Transport.

    google = GoogleApis()
    drive = google.drive("v2")                 # static: bundled document
    drive = google.discover("drive", "v2")     # dynamic: discovery service

    drive.files.list(q="hello").execute()
    drive.comments.insert(fileId="a", body={"content": "hi"}).execute()

Both bindings go through the same Transport, so headers, bodies and errors
behave identically whichever way the client was built.
"""

from typing import Any, Callable

from google.auth.credentials import Credentials

from adapters.services import (
    fetch_discovery_document,
    fetch_discovery_documents,
    load_bundled_document,
)
from adapters.transport import HttpLike, Transport
from api_config import DEFAULT_ROOT_URL, ROOT_URL
from extractors.discovery import list_method_ids, parse_discovery_document
from logging_config import logger
from models import ApiDescription, ApiError, MethodSpec, Request, ResourceSpec, Response
from validation import BODY_PARAMS, HEADERS_PARAM, build_url, validate_params

# callback(error, response): exactly one of the two is set
Callback = Callable[[ApiError | None, Response | None], Any]


class ApiRequest:
    """
    A fully built request, ready to execute.

    `request` is available before sending, for inspection.
    """

    def __init__(self, transport: Transport, request: Request):
        self.transport = transport
        self.request = request

    def execute(self, callback: Callback | None = None) -> Response | None:
        """
        Send the request.

        Without a callback: returns the Response, raises ApiError on failure.
        With a callback: calls callback(error, response) and returns None;
        HTTP failures arrive as `error`, never raised.
        """
        if callback is None:
            return self.transport.send(self.request)

        try:
            response = self.transport.send(self.request)
        except ApiError as e:
            callback(e, None)
            return None
        callback(None, response)
        return None


class BoundMethod:
    """A callable API method, e.g. drive.files.list."""

    def __init__(self, client: "ApiClient", spec: MethodSpec):
        self._client = client
        self.spec = spec
        self.__doc__ = spec.description

    def __call__(self, **params: Any) -> ApiRequest:
        """
        Build an ApiRequest from keyword parameters.

        Reserved parameters:
            headers: extra request headers, sent verbatim
            body (or resource): JSON payload for methods that take one

        Raises:
            TypeError: Unknown or missing required parameters
            ValueError: Values outside the declared enum/pattern
        """
        api = self._client.description
        validate_params(self.spec, api.parameters, params)

        body = None
        for name in BODY_PARAMS:
            if params.get(name) is not None:
                body = params[name]
                break
        if body is not None and not self.spec.accepts_body:
            logger.warning(f"Dropping request body for {self.spec.id}: method takes none")
            body = None

        url = build_url(api.base_url, self.spec, api.parameters, params)
        request = self._client.transport.build_request(
            self.spec.http_method,
            url,
            headers=params.get(HEADERS_PARAM),
            body=body,
        )
        return ApiRequest(self._client.transport, request)

    def __repr__(self) -> str:
        return f"<BoundMethod {self.spec.id}>"


class BoundResource:
    """A resource collection exposing its methods and nested resources as attributes."""

    def __init__(self, client: "ApiClient", spec: ResourceSpec):
        self._client = client
        self.spec = spec

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        spec = self.__dict__["spec"]
        if name in spec.methods:
            return BoundMethod(self._client, spec.methods[name])
        if name in spec.resources:
            return BoundResource(self._client, spec.resources[name])
        raise AttributeError(f"Resource '{spec.name}' has no method or resource '{name}'")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self.spec.methods) | set(self.spec.resources))


class ApiClient(BoundResource):
    """
    Root of a bound API.

    Top-level methods (oauth2.tokeninfo) and resources (drive.files) are both
    attributes.
    """

    def __init__(self, transport: Transport, description: ApiDescription):
        self.transport = transport
        self.description = description
        root = ResourceSpec(
            name=description.name,
            methods=description.methods,
            resources=description.resources,
        )
        super().__init__(self, root)

    def method_ids(self) -> list[str]:
        return list_method_ids(self.description)

    def __repr__(self) -> str:
        return f"<ApiClient {self.description.name} {self.description.version}>"


class GoogleApis:
    """
    Entry point: binds API clients that share one Transport.

    Args:
        http: httplib2-compatible HTTP object (default: a new httplib2.Http)
        credentials: google-auth credentials to authorize requests with
        root_url: Overrides every document's rootUrl and the discovery host
            (default: GAPI_ROOT_URL env)
    """

    def __init__(
        self,
        http: HttpLike | None = None,
        credentials: Credentials | None = None,
        root_url: str | None = None,
    ):
        self.transport = Transport(http=http, credentials=credentials)
        if root_url is None and ROOT_URL != DEFAULT_ROOT_URL:
            root_url = ROOT_URL
        self.root_url = root_url

    def from_document(self, document: dict[str, Any]) -> ApiClient:
        """Bind a client from an already-loaded discovery document."""
        return ApiClient(self.transport, parse_discovery_document(document, self.root_url))

    # --- static binding ---

    def api(self, name: str, version: str) -> ApiClient:
        """
        Bind from a bundled discovery document.

        Raises:
            ApiError: code 404 if the API isn't bundled
        """
        return self.from_document(load_bundled_document(name, version))

    def drive(self, version: str = "v2") -> ApiClient:
        return self.api("drive", version)

    def oauth2(self, version: str = "v2") -> ApiClient:
        return self.api("oauth2", version)

    def urlshortener(self, version: str = "v1") -> ApiClient:
        return self.api("urlshortener", version)

    # --- dynamic binding ---

    def discover(self, name: str, version: str) -> ApiClient:
        """
        Bind from a document fetched from the discovery service.

        Raises:
            ApiError: If the discovery service answers with an error
        """
        document = fetch_discovery_document(
            self.transport, name, version, root_url=self.root_url,
        )
        return self.from_document(document)

    def discover_all(self, apis: list[tuple[str, str]]) -> list[ApiClient]:
        """
        Discover several APIs in parallel.

        Returns clients in input order. If any discovery fails, raises that
        error and binds nothing.
        """
        documents = fetch_discovery_documents(self.transport, apis, root_url=self.root_url)
        return [self.from_document(document) for document in documents]
