"""Route, PathSegment and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Pseudo-method that matches every HTTP method
ANY_METHOD = "ANY"

# Params key under which a trailing ``*`` stores the rest of the path
WILDCARD_KEY = "*"


class SegmentKind(Enum):
    """What a pattern segment matches."""

    LITERAL = "literal"
    PARAM = "param"
    WILDCARD = "wildcard"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed ``/``-delimited segment of a route pattern.

    Literal:  ``users``   (kind=LITERAL, matches exactly ``users``)
    Param:    ``:id``     (kind=PARAM, name="id", matches any non-empty value)
    Wildcard: ``*``       (kind=WILDCARD, final segment only, matches the rest)
    Invalid:  ``:``, ``:9x``  (kind=INVALID, never matches)
    """

    value: str
    kind: SegmentKind = SegmentKind.LITERAL
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    Created once per registration call and never mutated. ``segments``
    is the parsed form of ``pattern``, computed at registration.
    """

    method: str
    pattern: str
    handlers: tuple[Callable[..., Any], ...]
    segments: tuple[PathSegment, ...] = field(default=(), repr=False, compare=False)

    def allows(self, method: str) -> bool:
        """Whether this route accepts requests with *method*."""
        return self.method == ANY_METHOD or self.method == method.upper()


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]
