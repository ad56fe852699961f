"""Routing: ordered route table with first-match-wins lookup.

Routes are registered during setup and scanned in registration order
for every request.
"""

from wren.routing.pattern import match_path, parse_pattern, pattern_problems
from wren.routing.route import ANY_METHOD, WILDCARD_KEY, PathSegment, Route, RouteMatch, SegmentKind
from wren.routing.table import RouteTable

__all__ = [
    "ANY_METHOD",
    "WILDCARD_KEY",
    "PathSegment",
    "Route",
    "RouteMatch",
    "RouteTable",
    "SegmentKind",
    "match_path",
    "parse_pattern",
    "pattern_problems",
]
