"""HTTP responses.

``Response`` is the mutable scratch object handlers write into while the
chain runs. Once the chain is done the dispatcher freezes it into a
``WireResponse``: status, header pairs, and body bytes, ready to hand
back to the host.
"""

from __future__ import annotations

import base64
import json as json_module
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Response:
    """The response a handler chain builds up.

    Handlers set ``status``, write into ``headers``, and assign ``body``::

        async def show(request, response, next):
            response.status = 200
            response.body = {"id": request.params["id"]}

    ``body`` may be a ``str`` (sent as-is), ``bytes`` (sent as-is),
    ``None`` (no body), or anything JSON-serializable (sent as JSON).
    """

    headers: dict[str, str] = field(default_factory=dict)
    status: int = 204
    body: Any = None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        name_lower = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name_lower:
                return value
        return None

    def has_header(self, name: str) -> bool:
        name_lower = name.lower()
        return any(key.lower() == name_lower for key in self.headers)

    def set_default_header(self, name: str, value: str) -> bool:
        """Set *name* unless a header of that name (any case) exists.

        Returns True if the header was set.
        """
        if self.has_header(name):
            return False
        self.headers[name] = value
        return True

    def finalize(
        self, *, json_content_type: str = "application/json; charset=utf-8"
    ) -> WireResponse:
        """Serialize into a ``WireResponse``.

        Strings are UTF-8 encoded, bytes pass through, ``None`` means no
        body, and anything else is JSON-encoded with *json_content_type*
        (unless a Content-Type header was already set).
        """
        body = self.body
        if body is None:
            payload = b""
        elif isinstance(body, bytes):
            payload = body
        elif isinstance(body, str):
            payload = body.encode("utf-8")
        else:
            payload = json_module.dumps(body).encode("utf-8")
            self.set_default_header("Content-Type", json_content_type)

        return WireResponse(
            status=self.status,
            headers=tuple((str(k), str(v)) for k, v in self.headers.items()),
            body=payload,
        )


@dataclass(frozen=True, slots=True)
class WireResponse:
    """A finished response, as returned by ``Router.handle``."""

    status: int = 204
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        name_lower = name.lower()
        for key, value in self.headers:
            if key.lower() == name_lower:
                return value
        return None

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body)

    def to_mapping(self) -> dict[str, Any]:
        """Render as an API-gateway proxy result.

        Bodies that are not valid UTF-8 are base64-encoded and flagged
        with ``isBase64Encoded``.
        """
        try:
            body = self.body.decode("utf-8")
            encoded = False
        except UnicodeDecodeError:
            body = base64.b64encode(self.body).decode("ascii")
            encoded = True
        return {
            "statusCode": self.status,
            "headers": dict(self.headers),
            "body": body,
            "isBase64Encoded": encoded,
        }
