"""Async test client for wren routers.

Builds ``Event`` objects and feeds them straight to ``Router.handle``,
returning the same ``WireResponse`` a host would get. No HTTP involved.
"""

from __future__ import annotations

import json as json_module
from typing import Any
from urllib.parse import urlencode

from wren.http.event import Event
from wren.http.response import WireResponse
from wren.router import Router


class TestClient:
    """Async test client for wren routers.

    Usage::

        async with TestClient(router) as client:
            response = await client.get("/users/42")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __aenter__(self) -> TestClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
        body: str | bytes | None = None,
        json: Any = None,
    ) -> WireResponse:
        """Send a request with any method.

        ``json`` encodes its value and sets ``Content-Type:
        application/json`` unless *headers* already has one.
        """
        header_pairs = dict(headers or {})
        if json is not None:
            body = json_module.dumps(json)
            if not any(name.lower() == "content-type" for name in header_pairs):
                header_pairs["Content-Type"] = "application/json"

        url = f"{path}?{urlencode(query)}" if query else path
        if isinstance(body, str):
            body = body.encode("utf-8")

        event = Event(
            method=method,
            url=url,
            headers=tuple(header_pairs.items()),
            body=body or b"",
        )
        return await self.router.handle(event)

    async def get(self, path: str, **kwargs: Any) -> WireResponse:
        """Send a GET request."""
        return await self.request("GET", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> WireResponse:
        return await self.request("HEAD", path, **kwargs)

    async def options(self, path: str, **kwargs: Any) -> WireResponse:
        return await self.request("OPTIONS", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> WireResponse:
        """Send a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> WireResponse:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> WireResponse:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> WireResponse:
        return await self.request("DELETE", path, **kwargs)
