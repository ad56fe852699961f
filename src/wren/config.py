"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        router = Router(RouterConfig(strict=True))
    """

    # Validate route patterns at registration instead of letting them fail soft
    strict: bool = False

    # Put the traceback in 500 response bodies
    debug: bool = False

    # Content-Type used when an object body is serialized to JSON
    json_content_type: str = "application/json; charset=utf-8"
