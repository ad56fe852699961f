"""Normalized HTTP request.

Built once per dispatch from an ``Event``. Metadata is frozen; the body
is decoded eagerly because the whole event is already in memory.
"""

from __future__ import annotations

import json as json_module
import logging
from dataclasses import dataclass, field
from typing import Any

from wren.http.event import Event
from wren.http.headers import Headers
from wren.http.query import QueryParams

logger = logging.getLogger("wren.server")

# Methods whose body is exposed on the request
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def is_json_content_type(content_type: str | None) -> bool:
    """True for ``application/json`` and any ``+json`` media type."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


@dataclass(frozen=True, slots=True)
class Request:
    """An inbound request as handlers see it.

    ``params`` holds the path parameters of the matched route,
    ``query`` the query string, ``headers`` the case-insensitive headers.
    ``body`` is only set for POST, PUT and PATCH: the parsed JSON value
    when the content type is JSON and the text parses, else the raw text.

    ``state`` is a per-request scratch dict for handlers that want to
    pass values down the chain (an authenticated user, a timer, ...).
    """

    method: str
    path: str
    url: str
    headers: Headers
    query: QueryParams
    params: dict[str, str] = field(default_factory=dict)
    body: Any = None
    state: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def is_json(self) -> bool:
        return is_json_content_type(self.content_type)

    @classmethod
    def from_event(cls, event: Event, params: dict[str, str] | None = None) -> Request:
        """Create a Request from a normalized host event."""
        method = event.method.upper()
        headers = Headers(event.headers)
        return cls(
            method=method,
            path=event.path,
            url=event.url,
            headers=headers,
            query=QueryParams(event.query_string),
            params=params or {},
            body=_decode_body(method, headers.get("content-type"), event.body),
        )


def _decode_body(method: str, content_type: str | None, raw: bytes) -> Any:
    if method not in BODY_METHODS:
        return None
    text = raw.decode("utf-8", errors="replace")
    if not is_json_content_type(content_type):
        return text
    try:
        return json_module.loads(text)
    except ValueError:
        logger.debug("%s body is not valid JSON; passing raw text through", method)
        return text
