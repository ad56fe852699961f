"""Host event normalization.

Every host hands the router a request in its own shape: an ASGI scope
plus receive callable, an API-gateway style dict, or some request
object with ``method``/``url``/``headers``/``body``. This module is the
one place that knows about those shapes. Everything past ``to_event``
works on the canonical ``Event``.
"""

import base64
import json as json_module
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode, urlsplit

from wren._internal.asgi import Receive, Scope
from wren.errors import EventError

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*://")


@dataclass(frozen=True, slots=True)
class Event:
    """A raw inbound request, independent of the host that delivered it.

    ``url`` may be absolute (``https://host/a?b=1``) or just the path
    with an optional query string (``/a?b=1``).
    """

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    @property
    def path(self) -> str:
        """The URL path, exactly as sent (not percent-decoded)."""
        return _split_url(self.url)[0] or "/"

    @property
    def query_string(self) -> str:
        return _split_url(self.url)[1]

    # -- Adapters --

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Event":
        """Build an Event from a dict-shaped host event.

        Understands a plain ``{"method", "url", "headers", "body"}`` dict
        as well as API-gateway proxy events (``httpMethod``/``path`` and
        the ``requestContext.http``/``rawPath`` form), including
        ``isBase64Encoded`` bodies.
        """
        http_context = (data.get("requestContext") or {}).get("http") or {}
        method = data.get("method") or data.get("httpMethod") or http_context.get("method")
        if not method:
            msg = "Event has no request method."
            raise EventError(msg)

        url = data.get("url")
        if url is None:
            path = data.get("rawPath") or data.get("path") or http_context.get("path") or "/"
            query = data.get("rawQueryString")
            if query is None:
                params = data.get("queryStringParameters") or {}
                query = urlencode({k: "" if v is None else v for k, v in params.items()})
            url = f"{path}?{query}" if query else path

        raw_headers = data.get("headers") or {}
        if isinstance(raw_headers, Mapping):
            headers = tuple((str(k), str(v)) for k, v in raw_headers.items())
        else:
            headers = tuple((str(k), str(v)) for k, v in raw_headers)

        return cls(
            method=str(method),
            url=str(url),
            headers=headers,
            body=_body_bytes(data.get("body"), base64_encoded=bool(data.get("isBase64Encoded"))),
        )

    @classmethod
    async def from_asgi(cls, scope: Scope, receive: Receive) -> "Event":
        """Build an Event from an ASGI HTTP scope, reading the whole body."""
        raw_path = scope.get("raw_path")
        path = raw_path.decode("latin-1") if raw_path else scope["path"]
        query = scope.get("query_string", b"").decode("latin-1")

        chunks: list[bytes] = []
        while True:
            message = await receive()
            chunk = message.get("body", b"")
            if chunk:
                chunks.append(chunk)
            if not message.get("more_body", False):
                break

        return cls(
            method=scope["method"],
            url=f"{path}?{query}" if query else path,
            headers=tuple(
                (name.decode("latin-1"), value.decode("latin-1"))
                for name, value in scope.get("headers", ())
            ),
            body=b"".join(chunks),
        )


def to_event(source: Any) -> Event:
    """Normalize any supported host event into an ``Event``.

    Raises ``EventError`` if *source* has no recognizable shape.
    """
    if isinstance(source, Event):
        return source
    if isinstance(source, Mapping):
        return Event.from_mapping(source)

    method = getattr(source, "method", None)
    url = getattr(source, "url", None)
    if method is None or url is None:
        msg = f"Cannot build a request from {type(source).__name__!r}: need method and url."
        raise EventError(msg)

    headers = getattr(source, "headers", None) or {}
    pairs = headers.items() if hasattr(headers, "items") else headers
    body = getattr(source, "body", None)
    if body is None:
        body = getattr(source, "content", None)
    return Event(
        method=str(method),
        url=str(url),
        headers=tuple((str(k), str(v)) for k, v in pairs),
        body=_body_bytes(body),
    )


def _split_url(url: str) -> tuple[str, str]:
    """Split *url* into its raw path and query string.

    Only absolute URLs go through ``urlsplit``. A relative URL is taken
    literally, so a path like ``//users`` is not read as a host.
    """
    if _SCHEME.match(url):
        parts = urlsplit(url)
        return parts.path, parts.query
    path, _, query = url.partition("#")[0].partition("?")
    return path, query


def _body_bytes(body: Any, *, base64_encoded: bool = False) -> bytes:
    if body is None:
        return b""
    if base64_encoded and isinstance(body, (bytes, str)):
        try:
            return base64.b64decode(body, validate=True)
        except ValueError as exc:
            msg = "Event body is flagged isBase64Encoded but is not valid base64."
            raise EventError(msg) from exc
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    # Some hosts hand over an already-parsed JSON body
    return json_module.dumps(body).encode("utf-8")
