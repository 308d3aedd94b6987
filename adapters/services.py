"""
Discovery document loading.

Two sources, same result:
1. Bundled documents under discovery_cache/documents (static binding)
2. The discovery service, fetched through a Transport (dynamic binding)

Bundled documents are read once and cached with lru_cache (thread-safe).
"""

import json
from concurrent.futures import Future, ThreadPoolExecutor
from functools import lru_cache
from typing import Any

import uritemplate

__all__ = [
    "load_bundled_document",
    "discovery_uri",
    "list_bundled_apis",
    "fetch_discovery_document",
    "fetch_discovery_documents",
    "clear_document_cache",
]

from adapters.transport import Transport
from api_config import DEFAULT_ROOT_URL, DISCOVERY_URI, DOCUMENTS_DIR, MAX_DISCOVERY_WORKERS
from logging_config import logger
from models import ApiError


def list_bundled_apis() -> list[tuple[str, str]]:
    """(name, version) pairs available for static binding."""
    apis = []
    for path in sorted(DOCUMENTS_DIR.glob("*.json")):
        name, _, version = path.stem.partition(".")
        if version:
            apis.append((name, version))
    return apis


@lru_cache(maxsize=None)
def _read_bundled(name: str, version: str) -> str:
    path = DOCUMENTS_DIR / f"{name}.{version}.json"
    if not path.exists():
        raise ApiError(f"No bundled discovery document for {name} {version}", 404)
    return path.read_text(encoding="utf-8")


def load_bundled_document(name: str, version: str) -> dict[str, Any]:
    """
    Load a bundled discovery document.

    Returns a fresh dict on every call; the cached part is the file text.

    Raises:
        ApiError: code 404 if no document is bundled for name/version
    """
    return json.loads(_read_bundled(name, version))


def discovery_uri(root_url: str | None = None) -> str:
    """The discovery URI template, rebased onto root_url when one is given."""
    if not root_url or not DISCOVERY_URI.startswith(DEFAULT_ROOT_URL):
        return DISCOVERY_URI
    if not root_url.endswith("/"):
        root_url += "/"
    return root_url + DISCOVERY_URI[len(DEFAULT_ROOT_URL):]


def fetch_discovery_document(
    transport: Transport,
    name: str,
    version: str,
    root_url: str | None = None,
) -> dict[str, Any]:
    """
    Fetch a discovery document from the discovery service.

    root_url moves the request off www.googleapis.com (e.g. to a local fake).

    Raises:
        ApiError: On any non-2xx answer, or a body that isn't a JSON object
    """
    url = uritemplate.expand(discovery_uri(root_url), {"api": name, "apiVersion": version})
    logger.info(f"Discovering {name} {version}")
    response = transport.request("GET", url)
    if not isinstance(response.data, dict):
        raise ApiError(
            f"Discovery document for {name} {version} is not a JSON object",
            response.status,
        )
    return response.data


def fetch_discovery_documents(
    transport: Transport,
    apis: list[tuple[str, str]],
    root_url: str | None = None,
) -> list[dict[str, Any]]:
    """
    Fetch several discovery documents in parallel.

    Results come back in input order. If any fetch fails, the whole call
    fails with that error (the first failure in input order).
    """
    if not apis:
        return []

    futures: list[Future[dict[str, Any]]] = []
    with ThreadPoolExecutor(max_workers=min(len(apis), MAX_DISCOVERY_WORKERS)) as executor:
        for name, version in apis:
            futures.append(
                executor.submit(
                    fetch_discovery_document, transport.fork(), name, version, root_url,
                )
            )

    # Executor has joined: every future is done
    return [future.result() for future in futures]


def clear_document_cache() -> None:
    """Clear cached bundled documents. Useful for testing."""
    _read_bundled.cache_clear()
