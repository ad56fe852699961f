"""CORS policy.

When enabled on a router, OPTIONS requests are answered as preflights
before any route is matched, and every routed response gets the
``Access-Control-Allow-*`` headers unless a handler already set them.
"""

from dataclasses import dataclass

from wren.http.response import Response


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    Every field is optional; the defaults allow everything::

        router.cors(CORSConfig(allow_origin="https://example.com", max_age=600))
    """

    allow_origin: str = "*"
    allow_methods: str = "*"
    allow_headers: str = "*"
    max_age: int = 86400  # 1 day
    options_success_status: int = 204


class CORSPolicy:
    """Applies a ``CORSConfig`` to responses.

    Handles:
    - Preflight ``OPTIONS`` requests (status from config, no body)
    - Routed responses (adds the allow headers, never overwrites)
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def allow_headers(self) -> dict[str, str]:
        """The headers added to every routed response."""
        cfg = self.config
        return {
            "Access-Control-Allow-Origin": cfg.allow_origin,
            "Access-Control-Allow-Methods": cfg.allow_methods,
            "Access-Control-Allow-Headers": cfg.allow_headers,
        }

    def preflight(self) -> Response:
        """Build the response to an OPTIONS request."""
        headers = self.allow_headers()
        headers["Access-Control-Max-Age"] = str(self.config.max_age)
        return Response(headers=headers, status=self.config.options_success_status)

    def apply(self, response: Response) -> Response:
        """Merge the allow headers into *response* in place.

        Header names are compared case-insensitively, so a handler that
        set ``access-control-allow-origin`` keeps its value.
        """
        for name, value in self.allow_headers().items():
            response.set_default_header(name, value)
        return response
