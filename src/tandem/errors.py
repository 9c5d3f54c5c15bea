"""Tandem exception hierarchy.

Shared across routers, static serving, and sitemap generation so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class TandemError(Exception):
    """Base for all tandem-specific errors."""


class ConfigurationError(TandemError):
    """Raised when a handler configuration is invalid.

    Always raised at construction time, never while serving a request.
    """


class SitemapError(TandemError):
    """Raised when a sitemap cannot be built from a file system."""


@dataclass(frozen=True, slots=True)
class HTTPError(TandemError):
    """An error that maps directly to an HTTP status code.

    Raised by the route matcher. ``Router`` catches these and turns them
    into plain-text responses before anything leaves the handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Carries an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )

    @property
    def allowed(self) -> str:
        """The ``Allow`` header value."""
        return self.headers[0][1]
