"""
Transport behavior across static and discovered clients.

Each test runs once per binding (see the `clients` fixture) and covers:
- Headers from params reach the request unchanged
- POST with a body gets a JSON content-type
- GET/DELETE never carry a body or content-type
- Error bodies of every shape become one ApiError with message + code
"""

import pytest

from models import ApiError, Response
from tests.helpers import Clients, expect_discovery
from tests.mock_utils import InterceptingHttp
from tools.client import GoogleApis


class TestHeadersAndBody:
    """Header/body policy on outgoing requests."""

    def test_adds_headers_from_params(self, clients: Clients, http: InterceptingHttp) -> None:
        """headers param is merged into the request verbatim."""
        http.expect("POST", "/drive/v2/files/a/comments", 200)

        res = clients.drive.comments.insert(
            fileId="a", headers={"If-None-Match": "12345"}
        ).execute()

        assert res.request.headers["If-None-Match"] == "12345"
        http.done()

    def test_adds_json_content_type_for_post(self, clients: Clients, http: InterceptingHttp) -> None:
        """POST with a body gets content-type application/json."""
        http.expect("POST", "/drive/v2/files/a/comments", 200)

        res = clients.drive.comments.insert(
            fileId="a", body={"content": "hello "}
        ).execute()

        assert res.request.headers["content-type"].startswith("application/json")
        assert res.request.body == '{"content": "hello "}'
        http.done()

    def test_resource_is_accepted_as_body(self, clients: Clients, http: InterceptingHttp) -> None:
        """`resource` works as an alias for `body`."""
        http.expect("POST", "/drive/v2/files/a/comments", 200)

        res = clients.drive.comments.insert(
            fileId="a", resource={"content": "hello "}
        ).execute()

        assert res.request.headers["content-type"].startswith("application/json")
        assert res.request.body == '{"content": "hello "}'

    def test_no_body_for_get(self, clients: Clients, http: InterceptingHttp) -> None:
        """GET requests have no body and no content-type."""
        http.expect("GET", "/drive/v2/files", 200)

        res = clients.drive.files.list().execute()

        assert "content-type" not in res.request.headers
        assert res.request.body is None
        assert http.requests[-1].body is None
        http.done()

    def test_no_body_for_delete(self, clients: Clients, http: InterceptingHttp) -> None:
        """DELETE requests have no body and no content-type."""
        http.expect("DELETE", "/drive/v2/files/test", 200)

        res = clients.drive.files.delete(fileId="test").execute()

        assert "content-type" not in res.request.headers
        assert res.request.body is None
        http.done()

    def test_body_dropped_for_get_even_if_supplied(self, clients: Clients, http: InterceptingHttp) -> None:
        """A body passed to a GET method is never sent."""
        http.expect("GET", "/drive/v2/files", 200)

        res = clients.drive.files.list(body={"oops": True}).execute()

        assert "content-type" not in res.request.headers
        assert res.request.body is None

    def test_body_dropped_for_post_without_request_schema(
        self, clients: Clients, http: InterceptingHttp, caplog: pytest.LogCaptureFixture
    ) -> None:
        """oauth2.tokeninfo is a POST that takes no payload; a supplied body is not sent."""
        http.expect("POST", "/oauth2/v2/tokeninfo?access_token=hello", 200, {"audience": "x"})

        with caplog.at_level("WARNING", logger="gapi"):
            res = clients.oauth2.tokeninfo(access_token="hello", body={"a": 1}).execute()

        assert res.request.body is None
        assert "content-type" not in res.request.headers
        assert http.requests[-1].body is None
        assert "Dropping request body for oauth2.tokeninfo" in caplog.text
        http.done()

    def test_success_has_response_data(self, clients: Clients, http: InterceptingHttp) -> None:
        """2xx responses come back as Response with decoded JSON."""
        http.expect("GET", "/drive/v2/files?q=hello", 200, {"items": [{"id": "f1"}]})

        res = clients.drive.files.list(q="hello").execute()

        assert isinstance(res, Response)
        assert res.status == 200
        assert res.data == {"items": [{"id": "f1"}]}


class TestErrorNormalization:
    """Error bodies of every shape become ApiError(message, code)."""

    def test_structured_error_in_body(self, clients: Clients, http: InterceptingHttp) -> None:
        """{error: {code, message}} → message from body, code from status."""
        http.expect(
            "GET", "/drive/v2/files?q=hello", 400,
            {"error": {"code": 400, "message": "Error!"}},
        )

        with pytest.raises(ApiError) as exc_info:
            clients.drive.files.list(q="hello").execute()

        assert isinstance(exc_info.value, Exception)
        assert exc_info.value.message == "Error!"
        assert exc_info.value.code == 400
        http.done()

    def test_error_that_is_not_an_object(self, clients: Clients, http: InterceptingHttp) -> None:
        """OAuth-style {error: 'invalid_grant'} → message is the error string."""
        http.expect(
            "POST", "/oauth2/v2/tokeninfo?access_token=hello", 400,
            {"error": "invalid_grant", "error_description": "Code was already redeemed."},
        )

        with pytest.raises(ApiError) as exc_info:
            clients.oauth2.tokeninfo(access_token="hello").execute()

        assert exc_info.value.message == "invalid_grant"
        assert exc_info.value.code == 400
        assert exc_info.value.description == "Code was already redeemed."
        http.done()

    def test_5xx_bare_string(self, clients: Clients, http: InterceptingHttp) -> None:
        """A non-JSON 500 body becomes the message as-is."""
        http.expect("POST", "/urlshortener/v1/url", 500, "There was an error!")

        with pytest.raises(ApiError) as exc_info:
            clients.urlshortener.url.insert(body={"longUrl": "http://google.com/"}).execute()

        assert exc_info.value.code == 500
        assert exc_info.value.message == "There was an error!"
        http.done()

    def test_5xx_with_error_object(self, clients: Clients, http: InterceptingHttp) -> None:
        """{error: {message}} on a 500 → message from body, code from status."""
        http.expect("POST", "/urlshortener/v1/url", 500, {"error": {"message": "There was an error!"}})

        with pytest.raises(ApiError) as exc_info:
            clients.urlshortener.url.insert(body={"longUrl": "http://google.com/"}).execute()

        assert exc_info.value.code == 500
        assert exc_info.value.message == "There was an error!"
        http.done()

    def test_backend_error(self, clients: Clients, http: InterceptingHttp) -> None:
        """Backend errors keep their sub-errors; the callback gets no result."""
        http.expect("POST", "/urlshortener/v1/url", 500, {
            "error": {
                "errors": [{
                    "domain": "global",
                    "reason": "backendError",
                    "message": "There was an error!",
                }],
                "code": 500,
                "message": "There was an error!",
            }
        })
        seen: list[tuple[ApiError | None, Response | None]] = []

        returned = clients.urlshortener.url.insert(
            body={"longUrl": "http://google.com/"}
        ).execute(callback=lambda err, result: seen.append((err, result)))

        assert returned is None
        assert len(seen) == 1
        err, result = seen[0]
        assert isinstance(err, ApiError)
        assert err.code == 500
        assert err.message == "There was an error!"
        assert [e.reason for e in err.errors] == ["backendError"]
        assert err.errors[0].domain == "global"
        assert result is None
        http.done()


class TestCallbackDelivery:
    """execute(callback=...) delivers exactly one of error/result."""

    def test_success_goes_to_result(self, clients: Clients, http: InterceptingHttp) -> None:
        http.expect("GET", "/drive/v2/files", 200, {"items": []})
        seen: list[tuple[ApiError | None, Response | None]] = []

        clients.drive.files.list().execute(callback=lambda err, res: seen.append((err, res)))

        assert len(seen) == 1
        err, res = seen[0]
        assert err is None
        assert res is not None and res.data == {"items": []}

    def test_error_never_raises_with_callback(self, clients: Clients, http: InterceptingHttp) -> None:
        http.expect("GET", "/drive/v2/files?q=hello", 400, {"error": {"code": 400, "message": "Error!"}})
        seen: list[tuple[ApiError | None, Response | None]] = []

        clients.drive.files.list(q="hello").execute(callback=lambda err, res: seen.append((err, res)))

        assert len(seen) == 1
        assert seen[0][0] is not None and seen[0][0].code == 400
        assert seen[0][1] is None


class TestBindingsAgree:
    """Static and discovered clients build the same requests."""

    def test_same_request_from_both_bindings(self, google: GoogleApis, http: InterceptingHttp) -> None:
        expect_discovery(http, "drive", "v2")
        static = google.drive("v2")
        discovered = google.discover("drive", "v2")

        static_req = static.comments.insert(fileId="a", body={"content": "x"}).request
        discovered_req = discovered.comments.insert(fileId="a", body={"content": "x"}).request

        assert static_req == discovered_req

    def test_both_bindings_share_one_interceptor(self, google: GoogleApis, http: InterceptingHttp) -> None:
        """Same expectation consumed twice, once per binding."""
        expect_discovery(http, "drive", "v2")
        remote = google.discover("drive", "v2")
        local = google.drive("v2")
        http.expect(
            "GET", "/drive/v2/files?q=hello", 400,
            {"error": {"code": 400, "message": "Error!"}}, times=2,
        )

        for client in (local, remote):
            with pytest.raises(ApiError) as exc_info:
                client.files.list(q="hello").execute()
            assert exc_info.value.message == "Error!"

        http.done()
