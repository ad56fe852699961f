"""Error responses for the dispatcher.

Maps "no route" and unexpected handler failures to ``Response`` objects
instead of letting them reach the host.
"""

import logging
import traceback

from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.server")


def not_found(request: Request) -> Response:
    """404 with an empty body. Not a fault, just nothing registered."""
    logger.debug("404 %s %s", request.method, request.path)
    return Response(status=404)


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(
            headers={"Content-Type": "text/plain; charset=utf-8"},
            status=500,
            body=body,
        )

    return Response(
        headers={"Content-Type": "text/plain; charset=utf-8"},
        status=500,
        body="Internal Server Error",
    )
