"""The wren router.

Mutable during setup (route registration, CORS). Read-only while
serving: ``handle`` never touches the route table or the CORS config,
so one router can serve any number of concurrent calls.
"""

from __future__ import annotations

import re
import warnings
from collections.abc import Callable
from typing import Any

import anyio

from wren._internal.asgi import Receive, Scope, Send
from wren.chain import Handler
from wren.config import RouterConfig
from wren.cors import CORSConfig, CORSPolicy
from wren.errors import ConfigurationError
from wren.http.event import Event
from wren.http.response import WireResponse
from wren.routing.pattern import pattern_problems
from wren.routing.route import ANY_METHOD, Route
from wren.routing.table import RouteTable
from wren.server.dispatch import dispatch
from wren.server.sender import send_response

_METHOD_TOKEN = re.compile(r"[A-Za-z]+")


class Router:
    """Request router for single-event hosts.

    Usage::

        router = Router()
        router.cors()

        async def show_user(request, response, next):
            response.status = 200
            response.body = {"id": request.params["id"]}

        router.get("/users/:id", require_token, show_user)

        # Per event, in the host's entry point:
        response = await router.handle(event)

    Registration calls return the router, so they chain::

        router.get("/", index).post("/items", create_item)
    """

    __slots__ = ("_cors", "_table", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._table = RouteTable()
        self._cors: CORSPolicy | None = None

    # -- Route registration --

    def register(self, method: str, pattern: str, *handlers: Handler) -> Router:
        """Append a route for *method* (or ``"ANY"``) and *pattern*.

        Handlers run in the order given. Earlier registrations win when
        several routes match the same request. Malformed patterns are
        accepted and never match, unless the router is strict.
        """
        if self.config.strict:
            _validate(method, pattern, handlers)
        self._table.add(method, pattern, *handlers)
        return self

    def connect(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("CONNECT", pattern, *handlers)

    def delete(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("DELETE", pattern, *handlers)

    def get(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("GET", pattern, *handlers)

    def head(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("HEAD", pattern, *handlers)

    def options(self, pattern: str, *handlers: Handler) -> Router:
        """Register an OPTIONS route.

        Never reached while CORS is enabled: OPTIONS requests are then
        answered as preflights before routing.
        """
        return self.register("OPTIONS", pattern, *handlers)

    def patch(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("PATCH", pattern, *handlers)

    def post(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("POST", pattern, *handlers)

    def put(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("PUT", pattern, *handlers)

    def trace(self, pattern: str, *handlers: Handler) -> Router:
        return self.register("TRACE", pattern, *handlers)

    def any(self, pattern: str, *handlers: Handler) -> Router:
        """Register a route that matches every HTTP method."""
        return self.register(ANY_METHOD, pattern, *handlers)

    def all(self, pattern: str, *handlers: Handler) -> Router:
        """Deprecated alias of ``any``."""
        warnings.warn(
            "Router.all() is deprecated, use Router.any() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.any(pattern, *handlers)

    def route(self, method: str, pattern: str) -> Callable[[Handler], Handler]:
        """Register a single-handler route via decorator.

        Usage::

            @router.route("GET", "/health")
            def health(request, response, next):
                response.status = 200
                response.body = "ok"
        """

        def decorator(func: Handler) -> Handler:
            self.register(method, pattern, func)
            return func

        return decorator

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in match-priority order."""
        return self._table.routes

    # -- CORS --

    def cors(self, config: CORSConfig | None = None) -> Router:
        """Enable CORS for every route, registered or yet to be.

        Calling it again replaces the previous configuration.
        """
        self._cors = CORSPolicy(config)
        return self

    @property
    def cors_config(self) -> CORSConfig | None:
        """The active CORS configuration, or None when CORS is off."""
        return self._cors.config if self._cors is not None else None

    # -- Dispatch --

    async def handle(self, event: Event | Any) -> WireResponse:
        """Dispatch one host event and return the finished response.

        *event* may be an ``Event``, a dict-shaped host event, or any
        object with ``method``, ``url``, ``headers`` and ``body``.
        Handler failures come back as a 500 response, not an exception.
        """
        return await dispatch(event, table=self._table, cors=self._cors, config=self.config)

    def handle_sync(self, event: Event | Any) -> WireResponse:
        """Dispatch one event from synchronous host code.

        Runs ``handle`` on a fresh event loop, so it must not be called
        from inside a running loop::

            def lambda_handler(event, context):
                return router.handle_sync(event).to_mapping()
        """
        return anyio.run(self.handle, event)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Acknowledges lifespan scopes and serves HTTP scopes through
        ``handle``. Other scope types are ignored.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        event = await Event.from_asgi(scope, receive)
        response = await self.handle(event)
        await send_response(response, send, head=scope["method"].upper() == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol. Nothing to set up or tear down."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def _validate(method: str, pattern: str, handlers: tuple[Handler, ...]) -> None:
    """Strict-mode registration checks."""
    if not _METHOD_TOKEN.fullmatch(method):
        msg = f"Invalid HTTP method {method!r} for route {pattern!r}."
        raise ConfigurationError(msg)

    problems = pattern_problems(pattern)
    if problems:
        msg = f"Invalid route pattern {pattern!r}: {'; '.join(problems)}."
        raise ConfigurationError(msg)

    if not handlers:
        msg = f"Route {method.upper()} {pattern!r} has no handlers."
        raise ConfigurationError(msg)

    for handler in handlers:
        if not callable(handler):
            msg = f"Route {method.upper()} {pattern!r}: handler {handler!r} is not callable."
            raise ConfigurationError(msg)
