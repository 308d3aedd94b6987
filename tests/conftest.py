"""
Shared pytest fixtures for gapi-transport tests.

Every `clients` fixture instance is parametrized over both bindings:
- "static": bound from the bundled discovery document
- "discovered": bound from a document served by the intercepting HTTP object

so each scenario runs against both and must behave identically.
"""

from typing import Generator

import pytest

from adapters.services import clear_document_cache
from tests.helpers import SCENARIO_APIS, Clients, expect_discovery
from tests.mock_utils import InterceptingHttp
from tools.client import GoogleApis

BINDINGS = ["static", "discovered"]


@pytest.fixture
def http() -> Generator[InterceptingHttp, None, None]:
    """Intercepting HTTP object; cleaned after each test so nothing leaks."""
    interceptor = InterceptingHttp()
    yield interceptor
    interceptor.clean_all()


@pytest.fixture
def google(http: InterceptingHttp) -> GoogleApis:
    """GoogleApis wired to the intercepting HTTP object."""
    return GoogleApis(http=http)


@pytest.fixture(autouse=True)
def _fresh_document_cache() -> Generator[None, None, None]:
    clear_document_cache()
    yield
    clear_document_cache()


@pytest.fixture(params=BINDINGS)
def clients(request: pytest.FixtureRequest, http: InterceptingHttp, google: GoogleApis) -> Clients:
    """
    Clients bound statically or by parallel discovery.

    Discovery expectations are consumed before the test body runs, so a
    test's own expectations start from a clean slate.
    """
    if request.param == "static":
        drive, oauth2, urlshortener = (google.api(n, v) for n, v in SCENARIO_APIS)
    else:
        for name, version in SCENARIO_APIS:
            expect_discovery(http, name, version)
        drive, oauth2, urlshortener = google.discover_all(SCENARIO_APIS)
        http.done()
        http.clean_all()
    return Clients(binding=request.param, drive=drive, oauth2=oauth2, urlshortener=urlshortener)
