"""Request dispatch: one host event in, one ``WireResponse`` out.

The pipeline, each step a possible exit:

1. Normalize the host event and build the ``Request``.
2. CORS preflight (OPTIONS with CORS enabled): answer without routing.
3. Match a route; 404 when nothing matches.
4. Run the route's handler chain on a fresh ``Response``; 500 on fault.
5. Merge CORS headers.
6. Serialize.
"""

import logging
from dataclasses import replace
from typing import Any

from wren.chain import run_chain
from wren.config import RouterConfig
from wren.cors import CORSPolicy
from wren.http.event import to_event
from wren.http.request import Request
from wren.http.response import Response, WireResponse
from wren.routing.table import RouteTable
from wren.server.errors import handle_internal_error, not_found

logger = logging.getLogger("wren.server")


async def dispatch(
    source: Any,
    *,
    table: RouteTable,
    cors: CORSPolicy | None,
    config: RouterConfig,
) -> WireResponse:
    """Process a single host event through the full pipeline."""
    request = Request.from_event(to_event(source))

    if cors is not None and request.method == "OPTIONS":
        logger.debug("preflight %s", request.path)
        return _serialize(cors.preflight(), request, cors=None, config=config)

    match = table.match(request.method, request.path)
    if match is None:
        return _serialize(not_found(request), request, cors=None, config=config)

    request = replace(request, params=match.params)
    try:
        response = await run_chain(match.route.handlers, request, Response())
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=config.debug)

    return _serialize(response, request, cors=cors, config=config)


def _serialize(
    response: Response,
    request: Request,
    *,
    cors: CORSPolicy | None,
    config: RouterConfig,
) -> WireResponse:
    if cors is not None:
        cors.apply(response)
    try:
        return response.finalize(json_content_type=config.json_content_type)
    except (TypeError, ValueError) as exc:
        # Body was not JSON-serializable
        fallback = handle_internal_error(exc, request, debug=config.debug)
        if cors is not None:
            cors.apply(fallback)
        return fallback.finalize(json_content_type=config.json_content_type)
