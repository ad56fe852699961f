"""Wren exception hierarchy.

Shared across the router, the dispatcher, and the host adapters so every
module raises and catches the same types.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when router setup is invalid.

    Only raised in strict mode (``RouterConfig(strict=True)``). The default
    router accepts any pattern and lets malformed ones simply never match.
    """


class EventError(WrenError):
    """Raised when a host event cannot be normalized into a request.

    This is a bug in the host integration, not a bad request, so it is
    raised to the caller instead of being turned into a response.
    """
