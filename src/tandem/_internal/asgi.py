"""Typed ASGI definitions.

Raw ASGI aliases shared by every handler, plus a helper for building a
derived scope without mutating the one the server handed in.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

# Raw ASGI types
Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]

# Any ASGI application: servers, routers, static sites, middleware
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]


def is_http(scope: Scope) -> bool:
    """True for HTTP request scopes (not lifespan or websocket)."""
    return scope.get("type") == "http"


def replace_path(
    scope: Scope,
    path: str,
    *,
    raw_path: bytes | None = None,
    root_path: str | None = None,
) -> Scope:
    """Return a shallow copy of *scope* with a new ``path``.

    ``raw_path`` is dropped from the copy unless a replacement is given,
    since the old one no longer describes the new path.
    """
    child = dict(scope)
    child["path"] = path
    if raw_path is None:
        child.pop("raw_path", None)
    else:
        child["raw_path"] = raw_path
    if root_path is not None:
        child["root_path"] = root_path
    return child
