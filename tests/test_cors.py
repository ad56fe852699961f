"""Tests for CORS handling."""

from wren.cors import CORSConfig, CORSPolicy
from wren.http.response import Response
from wren.router import Router
from wren.testing import TestClient


def _make_cors_router(config: CORSConfig | None = None) -> tuple[Router, dict[str, int]]:
    """Helper: create a router with CORS and a route that counts its calls."""
    calls = {"n": 0}
    router = Router()

    async def data(request, response, next):
        calls["n"] += 1
        response.status = 200
        response.body = {"message": "hello"}

    router.get("/api/data", data)
    router.options("/api/data", data)
    router.cors(config)
    return router, calls


class TestCORSConfig:
    def test_defaults(self) -> None:
        cfg = CORSConfig()
        assert cfg.allow_origin == "*"
        assert cfg.allow_methods == "*"
        assert cfg.allow_headers == "*"
        assert cfg.max_age == 86400
        assert cfg.options_success_status == 204

    def test_fields_default_independently(self) -> None:
        cfg = CORSConfig(allow_origin="https://example.com")
        assert cfg.allow_origin == "https://example.com"
        assert cfg.allow_methods == "*"
        assert cfg.max_age == 86400


class TestCORSPolicy:
    def test_preflight(self) -> None:
        response = CORSPolicy().preflight()
        assert response.status == 204
        assert response.body is None
        assert response.headers == {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "*",
            "Access-Control-Allow-Headers": "*",
            "Access-Control-Max-Age": "86400",
        }

    def test_apply_does_not_overwrite(self) -> None:
        response = Response(headers={"access-control-allow-origin": "https://a.example"})
        CORSPolicy().apply(response)
        assert response.header("Access-Control-Allow-Origin") == "https://a.example"
        assert response.header("Access-Control-Allow-Methods") == "*"
        assert not response.has_header("Access-Control-Max-Age")


class TestCORSPreflightRequests:
    async def test_preflight_defaults(self) -> None:
        router, calls = _make_cors_router()
        async with TestClient(router) as client:
            response = await client.options("/api/data")
        assert response.status == 204
        assert response.header("Access-Control-Allow-Origin") == "*"
        assert response.header("Access-Control-Max-Age") == "86400"
        assert response.body == b""
        assert calls["n"] == 0

    async def test_preflight_needs_no_matching_route(self) -> None:
        router, calls = _make_cors_router()
        async with TestClient(router) as client:
            response = await client.options("/nowhere/at/all")
        assert response.status == 204
        assert response.header("Access-Control-Allow-Headers") == "*"
        assert calls["n"] == 0

    async def test_preflight_custom_config(self) -> None:
        router, _ = _make_cors_router(
            CORSConfig(
                allow_origin="https://example.com",
                allow_methods="GET, POST",
                allow_headers="Content-Type",
                max_age=600,
                options_success_status=200,
            )
        )
        async with TestClient(router) as client:
            response = await client.options("/api/data")
        assert response.status == 200
        assert response.header("Access-Control-Allow-Origin") == "https://example.com"
        assert response.header("Access-Control-Allow-Methods") == "GET, POST"
        assert response.header("Access-Control-Allow-Headers") == "Content-Type"
        assert response.header("Access-Control-Max-Age") == "600"

    async def test_options_route_runs_without_cors(self) -> None:
        router = Router()

        async def allow(request, response, next):
            response.headers["Allow"] = "GET"

        router.options("/api/data", allow)
        async with TestClient(router) as client:
            response = await client.options("/api/data")
        assert response.status == 204
        assert response.header("Allow") == "GET"
        assert response.header("Access-Control-Allow-Origin") is None


class TestCORSActualRequests:
    async def test_headers_merged(self) -> None:
        router, calls = _make_cors_router()
        async with TestClient(router) as client:
            response = await client.get("/api/data")
        assert calls["n"] == 1
        assert response.status == 200
        assert response.header("Access-Control-Allow-Origin") == "*"
        assert response.header("Access-Control-Allow-Methods") == "*"
        assert response.header("Access-Control-Allow-Headers") == "*"
        assert response.header("Access-Control-Max-Age") is None

    async def test_handler_headers_win(self) -> None:
        router = Router().cors()

        async def narrow(request, response, next):
            response.headers["Access-Control-Allow-Origin"] = "https://only.example"
            response.status = 200

        router.get("/x", narrow)
        async with TestClient(router) as client:
            response = await client.get("/x")
        assert response.header("Access-Control-Allow-Origin") == "https://only.example"
        origins = [v for k, v in response.headers if k.lower() == "access-control-allow-origin"]
        assert origins == ["https://only.example"]

    async def test_applies_to_routes_registered_later(self) -> None:
        router = Router().cors(CORSConfig(allow_origin="https://late.example"))

        async def ok(request, response, next):
            response.status = 200

        router.get("/late", ok)
        async with TestClient(router) as client:
            response = await client.get("/late")
        assert response.header("Access-Control-Allow-Origin") == "https://late.example"

    async def test_not_found_has_no_cors_headers(self) -> None:
        router, _ = _make_cors_router()
        async with TestClient(router) as client:
            response = await client.get("/missing")
        assert response.status == 404
        assert response.header("Access-Control-Allow-Origin") is None

    async def test_internal_error_keeps_cors_headers(self) -> None:
        router = Router().cors()

        async def boom(request, response, next):
            raise RuntimeError("boom")

        router.get("/boom", boom)
        async with TestClient(router) as client:
            response = await client.get("/boom")
        assert response.status == 500
        assert response.header("Access-Control-Allow-Origin") == "*"

    async def test_no_cors_headers_when_disabled(self) -> None:
        router = Router()

        async def ok(request, response, next):
            response.status = 200

        router.get("/x", ok)
        async with TestClient(router) as client:
            response = await client.get("/x")
        assert response.header("Access-Control-Allow-Origin") is None


class TestRouterCorsConfig:
    def test_disabled_by_default(self) -> None:
        assert Router().cors_config is None

    def test_enable_with_defaults(self) -> None:
        assert Router().cors().cors_config == CORSConfig()

    def test_second_call_replaces(self) -> None:
        router = Router().cors(CORSConfig(max_age=1)).cors(CORSConfig(max_age=2))
        assert router.cors_config == CORSConfig(max_age=2)
