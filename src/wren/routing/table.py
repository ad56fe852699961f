"""Ordered route table with first-match-wins lookup.

Routes are appended during setup and scanned in registration order at
dispatch time. Nothing is deduplicated: when two routes match the same
request, the one registered first is returned.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from wren.routing.pattern import match_path, parse_pattern
from wren.routing.route import Route, RouteMatch

logger = logging.getLogger("wren.routing")


class RouteTable:
    """Append-only sequence of routes.

    Usage::

        table = RouteTable()
        table.add("GET", "/users/:id", show_user)
        match = table.match("GET", "/users/42")
        # match.route.pattern == "/users/:id", match.params == {"id": "42"}
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def add(self, method: str, pattern: str, *handlers: Callable[..., Any]) -> Route:
        """Append a route and return it."""
        route = Route(
            method=method.upper(),
            pattern=pattern,
            handlers=handlers,
            segments=parse_pattern(pattern),
        )
        self._routes.append(route)
        logger.debug("registered %s %s (%d handlers)", route.method, pattern, len(handlers))
        return route

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route accepting *method* whose pattern matches *path*."""
        for route in self._routes:
            if not route.allows(method):
                continue
            params = match_path(route.segments, path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    @property
    def routes(self) -> tuple[Route, ...]:
        """All routes in registration (priority) order."""
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
