"""Endpoint table: path templates compiled to regular expressions.

Each template is matched against the whole request path::

    "/users/{id:int}"     ->  /users/(?P<id>\d+)
    "/files/{rest:path}"  ->  /files/(?P<rest>.+)

Templates are tried in the order their path was first registered.  The
first template whose path matches and which has a handler for the
request method wins, so register ``/users/me`` before ``/users/{name}``.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from tandem.errors import ConfigurationError, MethodNotAllowed, NotFound
from tandem.routing.params import CONVERTERS

_PLACEHOLDER = re.compile(r"\{([^{}:]*)(?::([^{}]*))?\}")
_ANGLE_PLACEHOLDER = re.compile(r"<[^<>/]+>")


def compile_path(path: str) -> re.Pattern[str]:
    """Compile a path template into a regex with one named group per parameter.

    Raises:
        ConfigurationError: If the template is not rooted, uses ``<param>``
            placeholders, repeats a parameter name, or names an unknown
            converter.
    """
    if not path.startswith("/"):
        msg = f"Route {path!r} should start with a slash."
        raise ConfigurationError(msg)
    if _ANGLE_PLACEHOLDER.search(path):
        msg = f"Route {path!r} uses <param> placeholders; write {{param}} instead."
        raise ConfigurationError(msg)

    parts: list[str] = []
    names: set[str] = set()
    end = 0
    for placeholder in _PLACEHOLDER.finditer(path):
        name, kind = placeholder.group(1), placeholder.group(2) or "str"
        if not name.isidentifier() or name in names:
            msg = f"Route {path!r} has an empty, invalid or repeated parameter name {name!r}."
            raise ConfigurationError(msg)
        if kind not in CONVERTERS:
            msg = f"Route {path!r} uses unknown converter {kind!r}."
            raise ConfigurationError(msg)
        names.add(name)
        parts.append(re.escape(path[end : placeholder.start()]))
        parts.append(f"(?P<{name}>{CONVERTERS[kind]})")
        end = placeholder.end()
    parts.append(re.escape(path[end:]))
    return re.compile("".join(parts))


@dataclass(slots=True)
class _Template:
    regex: re.Pattern[str]
    handlers: dict[str, Callable[..., Any]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class EndpointMatch:
    """The handler chosen for a request and the parameters its path carried."""

    handler: Callable[..., Any]
    path_params: dict[str, str]


class EndpointTable:
    """Handlers keyed by path template and HTTP method.

    Usage::

        table = EndpointTable()
        table.add("/users/{id:int}", "GET", get_user)
        match = table.match("GET", "/users/42")
        match.path_params  # {"id": "42"}
    """

    __slots__ = ("_templates",)

    def __init__(self) -> None:
        self._templates: dict[str, _Template] = {}

    def add(self, path: str, method: str, handler: Callable[..., Any]) -> None:
        """Register *handler* for *method* on *path*; re-registering replaces it."""
        template = self._templates.get(path)
        if template is None:
            template = self._templates[path] = _Template(compile_path(path))
        template.handlers[method.upper()] = handler

    def match(self, method: str, path: str) -> EndpointMatch:
        """Find the handler for *method* and *path*.

        ``HEAD`` is answered by a ``GET`` handler when the template has
        no ``HEAD`` one.  An empty path is matched as ``/``.

        Raises:
            NotFound: If no template matches *path*.
            MethodNotAllowed: If templates match *path* but none accepts
                *method*; ``Allow`` lists what they do accept.
        """
        allowed: set[str] = set()
        for template in self._templates.values():
            found = template.regex.fullmatch(path or "/")
            if found is None:
                continue
            handler = template.handlers.get(method)
            if handler is None and method == "HEAD":
                handler = template.handlers.get("GET")
            if handler is not None:
                return EndpointMatch(handler=handler, path_params=found.groupdict())
            allowed.update(template.handlers)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No endpoint matches {method} {path!r}")
