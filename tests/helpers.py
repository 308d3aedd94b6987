"""
Shared test helpers for gapi-transport.

Centralizes discovery serving and client bundles used across test files.
"""

from __future__ import annotations

from dataclasses import dataclass

from adapters.services import load_bundled_document
from tests.mock_utils import InterceptingHttp
from tools.client import ApiClient

# APIs the transport scenarios run against
SCENARIO_APIS = [("drive", "v2"), ("oauth2", "v2"), ("urlshortener", "v1")]


def discovery_path(name: str, version: str) -> str:
    """Path the discovery service serves name/version from."""
    return f"/discovery/v1/apis/{name}/{version}/rest"


def expect_discovery(http: InterceptingHttp, name: str, version: str, times: int = 1) -> None:
    """Serve the bundled document for name/version from the discovery path."""
    http.expect(
        "GET",
        discovery_path(name, version),
        200,
        load_bundled_document(name, version),
        times=times,
    )


@dataclass
class Clients:
    """One client per scenario API, all from the same binding."""
    binding: str
    drive: ApiClient
    oauth2: ApiClient
    urlshortener: ApiClient
