"""Handler chain execution.

A route's handlers run one after another, each called as::

    async def handler(request: Request, response: Response, next: Next) -> None: ...

Calling ``next()`` returns an awaitable that runs the rest of the chain
and resolves to the response. A handler that never calls ``next()``
ends the chain with whatever it wrote. Handlers may be ``def`` or
``async def``; a sync handler may call ``next()`` without awaiting it
and the rest of the chain runs as soon as the handler returns.

The rest of the chain runs at most once per ``next``: awaiting it a
second time just returns the response. ``next()`` past the last
handler resolves immediately.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator, Sequence
from enum import Enum
from typing import Any, Protocol, TypeAlias

from wren._internal.invoke import invoke
from wren.http.request import Request
from wren.http.response import Response

# What a handler receives as ``next``
Next: TypeAlias = Callable[[], Awaitable[Response]]


class Handler(Protocol):
    """Protocol for route handlers.

    Accepts both functions and callable objects::

        # Function handler
        async def require_token(request, response, next):
            if "authorization" not in request.headers:
                response.status = 401
                return
            await next()

        # Class handler
        class Timer:
            async def __call__(self, request, response, next):
                ...
    """

    def __call__(self, request: Request, response: Response, next: Next) -> Any: ...


class ChainOutcome(Enum):
    """How a chain run ended."""

    PENDING = "pending"
    # next() was called past the last handler
    COMPLETED = "completed"
    # A handler returned without calling next()
    STOPPED = "stopped"
    # A handler raised
    FAULTED = "faulted"


class _Continuation:
    """The ``next`` passed to one handler; calling it yields an awaitable."""

    __slots__ = ("_chain", "_index", "called", "started")

    def __init__(self, chain: Chain, index: int) -> None:
        self._chain = chain
        self._index = index
        self.called = False
        self.started = False

    def __call__(self) -> _Continuation:
        self.called = True
        return self

    def __await__(self) -> Generator[Any, None, Response]:
        return self._resume().__await__()

    async def _resume(self) -> Response:
        if not self.started:
            self.started = True
            await self._chain._step(self._index)
        return self._chain.response


class Chain:
    """One run of a handler list against one request.

    Usage::

        chain = Chain(route.handlers, request, Response())
        response = await chain.run()
        chain.outcome   # ChainOutcome.STOPPED
        chain.ran       # number of handlers that were entered
    """

    __slots__ = ("error", "handlers", "outcome", "ran", "request", "response")

    def __init__(
        self,
        handlers: Sequence[Callable[..., Any]],
        request: Request,
        response: Response,
    ) -> None:
        self.handlers = tuple(handlers)
        self.request = request
        self.response = response
        self.outcome = ChainOutcome.PENDING
        self.ran = 0
        self.error: Exception | None = None

    async def run(self) -> Response:
        """Run the chain from the first handler.

        A handler exception is recorded (``outcome`` becomes ``FAULTED``)
        and re-raised; no further handlers run.
        """
        try:
            await self._step(0)
        except Exception as exc:
            self.outcome = ChainOutcome.FAULTED
            self.error = exc
            raise
        if self.outcome is ChainOutcome.PENDING:
            # A later handler raised and an earlier one caught it
            self.outcome = ChainOutcome.STOPPED
        return self.response

    async def _step(self, index: int) -> None:
        if index >= len(self.handlers):
            self.outcome = ChainOutcome.COMPLETED
            return

        self.ran = index + 1
        next_ = _Continuation(self, index + 1)
        await invoke(self.handlers[index], self.request, self.response, next_)

        if not next_.called:
            self.outcome = ChainOutcome.STOPPED
        elif not next_.started:
            # Sync handler called next() but did not await it
            await next_


async def run_chain(
    handlers: Sequence[Callable[..., Any]],
    request: Request,
    response: Response,
) -> Response:
    """Run *handlers* in order against *request*, writing into *response*."""
    return await Chain(handlers, request, response).run()
