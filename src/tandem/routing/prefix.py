"""Prefix router: one entry point for a website and a backend API.

Requests whose path starts with the configured prefix go to the API
handler with the prefix stripped; everything else goes to the website
handler untouched::

    router = PrefixRouter(PrefixRouterConfig(
        path_prefix="/api",
        handler_with_prefix=api,         # sees "/users" for "/api/users"
        handler_without_prefix=site,     # sees "/about" for "/about"
    ))

The match is a plain string-prefix test, not segment-aware: a prefix of
``/api`` also claims ``/apiextra`` (the API then sees ``extra``).
"""

from dataclasses import dataclass
from urllib.parse import quote

from tandem._internal.asgi import ASGIApp, Receive, Scope, Send, replace_path
from tandem.errors import ConfigurationError
from tandem.http.response import not_found_response
from tandem.server.sender import send_response


@dataclass(frozen=True, slots=True)
class PrefixRouterConfig:
    """Prefix and the two handlers a ``PrefixRouter`` chooses between."""

    path_prefix: str
    handler_with_prefix: ASGIApp | None
    handler_without_prefix: ASGIApp | None

    def validate(self) -> None:
        """Raise ``ConfigurationError`` describing the first invalid field."""
        if self.handler_without_prefix is None:
            raise ConfigurationError("website handler is nil")
        if self.handler_with_prefix is None:
            raise ConfigurationError("backend handler is nil")
        if not self.path_prefix:
            raise ConfigurationError("backend path prefix is empty")
        if not self.path_prefix.startswith("/"):
            raise ConfigurationError("backend path prefix should start with a slash")
        if len(self.path_prefix) < 2:
            raise ConfigurationError("backend path prefix should include a character after the slash")


def strip_prefix(prefix: str, app: ASGIApp) -> ASGIApp:
    """Wrap *app* so it sees request paths with *prefix* removed.

    The stripped prefix is appended to ``root_path`` so the wrapped app
    can still build absolute URLs.  Requests whose path does not start
    with *prefix* get a plain 404 without reaching *app*.
    """
    # raw_path is percent-encoded by most servers; some pass ASCII through as is.
    raw_prefixes = {quote(prefix).encode("ascii")}
    if prefix.isascii():
        raw_prefixes.add(prefix.encode("ascii"))

    async def stripped(scope: Scope, receive: Receive, send: Send) -> None:
        path: str = scope["path"]
        if not path.startswith(prefix):
            await send_response(not_found_response(), send)
            return
        raw_path = scope.get("raw_path")
        new_raw = None
        if isinstance(raw_path, bytes):
            for raw_prefix in raw_prefixes:
                if raw_path.startswith(raw_prefix):
                    new_raw = raw_path[len(raw_prefix) :]
                    break
        child = replace_path(
            scope,
            path[len(prefix) :],
            raw_path=new_raw,
            root_path=scope.get("root_path", "") + prefix,
        )
        await app(child, receive, send)

    return stripped


class PrefixRouter:
    """ASGI app splitting traffic between an API and a website by path prefix.

    Configuration is validated once here; a bad config raises
    ``ConfigurationError`` at startup rather than failing requests.
    Holds no per-request state, so one instance serves concurrent
    requests safely.

    ``lifespan`` scopes carry no path and go to the prefixed (API)
    handler, which is the one that usually owns startup/shutdown work.
    """

    __slots__ = ("_backend", "_config", "_website", "_with_prefix")

    def __init__(self, config: PrefixRouterConfig) -> None:
        try:
            config.validate()
        except ConfigurationError as exc:
            msg = f"invalid configuration: {exc}"
            raise ConfigurationError(msg) from exc

        backend, website = config.handler_with_prefix, config.handler_without_prefix
        assert backend is not None and website is not None
        self._config = config
        self._backend: ASGIApp = backend
        self._website: ASGIApp = website
        self._with_prefix = strip_prefix(config.path_prefix, backend)

    @property
    def config(self) -> PrefixRouterConfig:
        return self._config

    def matches(self, path: str) -> bool:
        """Whether *path* belongs to the prefixed handler."""
        return path.startswith(self._config.path_prefix)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._backend(scope, receive, send)
            return

        if self.matches(scope["path"]):
            await self._with_prefix(scope, receive, send)
            return

        await self._website(scope, receive, send)
