"""Wren: a minimal request router for single-event hosts.

Matches one request against an ordered route table, runs the matched
route's handler chain, and optionally answers CORS preflights. Built for
hosts that hand over one event and want one response back: serverless
functions, edge workers, or any ASGI server.

Basic usage::

    from wren import Router

    router = Router().cors()

    async def hello(request, response, next):
        response.status = 200
        response.body = {"hello": request.params["name"]}

    router.get("/hello/:name", hello)

    response = await router.handle(event)
"""

__version__ = "0.1.0"
__all__ = [
    "CORSConfig",
    "Chain",
    "ChainOutcome",
    "ConfigurationError",
    "Event",
    "EventError",
    "Handler",
    "Next",
    "Request",
    "Response",
    "Router",
    "RouterConfig",
    "WireResponse",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from wren.router import Router

        return Router

    if name == "RouterConfig":
        from wren.config import RouterConfig

        return RouterConfig

    if name == "CORSConfig":
        from wren.cors import CORSConfig

        return CORSConfig

    if name == "Event":
        from wren.http.event import Event

        return Event

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name in ("Response", "WireResponse"):
        from wren.http import response as _resp

        return getattr(_resp, name)

    if name in ("Chain", "ChainOutcome", "Handler", "Next"):
        from wren import chain as _chain

        return getattr(_chain, name)

    if name in ("ConfigurationError", "EventError", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
