"""Tests for wren.http.request: Request built from an Event."""

import pytest

from wren.http.event import Event
from wren.http.request import Request, is_json_content_type


def _request(
    method: str = "GET",
    url: str = "/",
    *,
    body: bytes = b"",
    content_type: str | None = None,
) -> Request:
    headers = (("Content-Type", content_type),) if content_type else ()
    return Request.from_event(Event(method=method, url=url, headers=headers, body=body))


class TestRequestFromEvent:
    def test_basic_fields(self) -> None:
        req = _request("get", "/users/42?tab=posts")
        assert req.method == "GET"
        assert req.path == "/users/42"
        assert req.url == "/users/42?tab=posts"
        assert req.query["tab"] == "posts"
        assert req.params == {}

    def test_params_passed_through(self) -> None:
        req = Request.from_event(Event(method="GET", url="/u/1"), params={"id": "1"})
        assert req.params == {"id": "1"}

    def test_headers_case_insensitive(self) -> None:
        req = _request(content_type="text/plain")
        assert req.headers["content-type"] == "text/plain"
        assert req.content_type == "text/plain"

    def test_state_is_per_request(self) -> None:
        a = _request()
        b = _request()
        a.state["user"] = "alice"
        assert b.state == {}


class TestRequestBody:
    def test_json_body_parsed(self) -> None:
        req = _request("POST", body=b'{"a":1}', content_type="application/json")
        assert req.body == {"a": 1}

    def test_malformed_json_falls_back_to_text(self) -> None:
        req = _request("POST", body=b"not-json", content_type="application/json")
        assert req.body == "not-json"

    def test_empty_json_body_is_empty_string(self) -> None:
        req = _request("PUT", content_type="application/json")
        assert req.body == ""

    def test_json_with_charset_and_suffix(self) -> None:
        req = _request("PATCH", body=b"[1, 2]", content_type="application/merge-patch+json")
        assert req.body == [1, 2]
        req = _request("POST", body=b"{}", content_type="application/json; charset=utf-8")
        assert req.body == {}

    def test_non_json_content_type_keeps_text(self) -> None:
        req = _request("POST", body=b'{"a":1}', content_type="text/plain")
        assert req.body == '{"a":1}'

    def test_missing_content_type_keeps_text(self) -> None:
        req = _request("POST", body=b"a=1&b=2")
        assert req.body == "a=1&b=2"

    @pytest.mark.parametrize("method", ["GET", "DELETE", "HEAD", "OPTIONS"])
    def test_no_body_for_other_methods(self, method: str) -> None:
        req = _request(method, body=b'{"a":1}', content_type="application/json")
        assert req.body is None

    def test_invalid_utf8_is_replaced(self) -> None:
        req = _request("POST", body=b"caf\xe9")
        assert req.body == "caf\ufffd"


class TestIsJsonContentType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("application/json", True),
            ("Application/JSON; charset=utf-8", True),
            ("application/vnd.api+json", True),
            ("text/json-ish", False),
            ("text/plain", False),
            (None, False),
            ("", False),
        ],
    )
    def test_detection(self, value: str | None, expected: bool) -> None:
        assert is_json_content_type(value) is expected
