"""Route pattern parsing and matching.

Patterns are ``/``-delimited templates: literal segments, ``:name``
parameters, and an optional trailing ``*`` wildcard::

    "/users"           -> literal "", literal "users"
    "/users/:id"       -> literal "", literal "users", param "id"
    "/files/*"         -> literal "", literal "files", wildcard

Matching is a pure function of (segments, path). Both sides are split
on ``/`` without normalization, so repeated and trailing slashes are
significant: ``//`` yields an empty segment, which a ``:name`` segment
never matches.
"""

import re
from urllib.parse import unquote

from wren.routing.route import WILDCARD_KEY, PathSegment, SegmentKind

_PARAM_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    Malformed parameter segments (``:`` or ``:9x``) become ``INVALID``
    segments rather than errors; a route containing one never matches.
    A ``*`` anywhere but the last segment is a literal ``*``.
    """
    parts = pattern.split("/")
    last = len(parts) - 1
    segments: list[PathSegment] = []
    for i, part in enumerate(parts):
        if part.startswith(":"):
            name = part[1:]
            if _PARAM_NAME.fullmatch(name):
                segments.append(PathSegment(part, SegmentKind.PARAM, name))
            else:
                segments.append(PathSegment(part, SegmentKind.INVALID))
        elif part == "*" and i == last:
            segments.append(PathSegment(part, SegmentKind.WILDCARD))
        else:
            segments.append(PathSegment(part))
    return tuple(segments)


def pattern_problems(pattern: str) -> list[str]:
    """Describe what is wrong with *pattern*, if anything.

    Used by strict routers to fail at registration. An empty list means
    the pattern is well formed.
    """
    problems: list[str] = []
    if not pattern.startswith("/"):
        problems.append("pattern must start with '/'")

    seen: set[str] = set()
    segments = parse_pattern(pattern)
    for i, seg in enumerate(segments):
        if seg.kind is SegmentKind.INVALID:
            problems.append(f"invalid parameter segment {seg.value!r}")
        elif seg.kind is SegmentKind.PARAM:
            if seg.name in seen:
                problems.append(f"duplicate parameter {seg.name!r}")
            seen.add(seg.name or "")
        elif seg.value == "*" and i != len(segments) - 1:
            problems.append("'*' is only allowed as the last segment")
    return problems


def match_path(segments: tuple[PathSegment, ...], path: str) -> dict[str, str] | None:
    """Match *path* against parsed *segments*.

    Returns the extracted params on success (percent-decoded), or
    ``None``. Without a trailing wildcard the segment counts must be
    equal; with one, the path may have any number of extra segments,
    which are re-joined under ``"*"``.
    """
    parts = path.split("/")
    wildcard = bool(segments) and segments[-1].kind is SegmentKind.WILDCARD
    fixed = segments[:-1] if wildcard else segments

    if wildcard:
        if len(parts) < len(segments):
            return None
    elif len(parts) != len(segments):
        return None

    params: dict[str, str] = {}
    for seg, part in zip(fixed, parts):
        if seg.kind is SegmentKind.LITERAL:
            if seg.value != part:
                return None
        elif seg.kind is SegmentKind.PARAM:
            if not part:
                return None
            params[seg.name or ""] = unquote(part)
        else:
            return None

    if wildcard:
        params[WILDCARD_KEY] = unquote("/".join(parts[len(fixed) :]))
    return params
