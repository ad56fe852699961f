"""Tests for wren.http.response: Response builder and WireResponse."""

import base64

import pytest

from wren.http.response import Response, WireResponse


class TestResponseBuilder:
    def test_defaults(self) -> None:
        r = Response()
        assert r.status == 204
        assert r.headers == {}
        assert r.body is None

    def test_header_lookup_case_insensitive(self) -> None:
        r = Response(headers={"X-Trace": "1"})
        assert r.header("x-trace") == "1"
        assert r.header("missing") is None
        assert r.has_header("X-TRACE")

    def test_set_default_header(self) -> None:
        r = Response(headers={"content-type": "text/plain"})
        assert r.set_default_header("Content-Type", "application/json") is False
        assert r.set_default_header("X-New", "1") is True
        assert r.headers == {"content-type": "text/plain", "X-New": "1"}

    def test_instances_do_not_share_headers(self) -> None:
        a = Response()
        a.headers["X"] = "1"
        assert Response().headers == {}


class TestFinalize:
    def test_no_body(self) -> None:
        wire = Response(status=404).finalize()
        assert wire.status == 404
        assert wire.body == b""
        assert wire.headers == ()

    def test_string_body(self) -> None:
        wire = Response(status=200, body="ok").finalize()
        assert wire.body == b"ok"
        assert wire.text == "ok"
        assert wire.header("content-type") is None

    def test_bytes_body(self) -> None:
        wire = Response(status=200, body=b"\x00\x01").finalize()
        assert wire.body == b"\x00\x01"

    def test_object_body_json_encoded(self) -> None:
        wire = Response(status=200, body={"a": 1}).finalize()
        assert wire.json() == {"a": 1}
        assert wire.header("Content-Type") == "application/json; charset=utf-8"

    def test_list_body_json_encoded(self) -> None:
        wire = Response(status=200, body=[1, 2]).finalize(json_content_type="application/json")
        assert wire.json() == [1, 2]
        assert wire.header("content-type") == "application/json"

    def test_explicit_content_type_kept(self) -> None:
        r = Response(headers={"content-type": "application/vnd.api+json"}, body={"a": 1})
        wire = r.finalize()
        assert wire.header("Content-Type") == "application/vnd.api+json"
        assert len(wire.headers) == 1

    def test_unserializable_body_raises(self) -> None:
        with pytest.raises(TypeError):
            Response(body={"when": object()}).finalize()


class TestWireResponse:
    def test_to_mapping_text(self) -> None:
        wire = WireResponse(status=200, headers=(("X-A", "1"),), body=b"hi")
        assert wire.to_mapping() == {
            "statusCode": 200,
            "headers": {"X-A": "1"},
            "body": "hi",
            "isBase64Encoded": False,
        }

    def test_to_mapping_binary(self) -> None:
        wire = WireResponse(status=200, body=b"\xff\xfe")
        mapped = wire.to_mapping()
        assert mapped["isBase64Encoded"] is True
        assert base64.b64decode(mapped["body"]) == b"\xff\xfe"
