"""Static website handler with a single fallback page.

Wraps ``StaticFileServer`` so that every unknown path answers with the
same configured 404 document instead of the file server's plain-text
not-found body.

The file server has no "would you find this?" query, so each request is
served twice when the file exists: once into a ``ResponseRecorder`` to
see the status, once into the real ``send``.  A missing file costs one
probe and then the cached fallback bytes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tandem._internal.asgi import Receive, Scope, Send, is_http
from tandem.errors import ConfigurationError
from tandem.fs import FileSystem, sub_fs
from tandem.http import constants
from tandem.http.response import Response
from tandem.server.recorder import probe
from tandem.server.sender import send_response
from tandem.static.server import StaticFileServer

logger = logging.getLogger("tandem.static")


@dataclass(frozen=True, slots=True)
class StaticSiteConfig:
    """Where a static website lives and which page answers 404s.

    Usage::

        StaticSiteConfig(
            fs=DirectoryFS("./build"),
            sub_dir=".",              # "." for the root of fs
            fallback_page="404.html",
        )
    """

    fs: FileSystem | None
    sub_dir: str = "."
    fallback_page: str = "404.html"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` describing the first invalid field."""
        if self.fs is None:
            raise ConfigurationError("no file system was provided")
        if not self.sub_dir:
            raise ConfigurationError("sub directory path is empty")
        if not self.fallback_page:
            raise ConfigurationError("fallback page path is empty")


class StaticSite:
    """ASGI app serving a static website with a fallback 404 page.

    Build it with ``StaticSite.from_config()``; the fallback page is
    read once there and never re-read, so later edits to the file
    system do not change it.
    """

    __slots__ = ("_fallback", "_file_server")

    def __init__(self, file_server: StaticFileServer, fallback: bytes) -> None:
        self._file_server = file_server
        self._fallback = fallback

    @classmethod
    def from_config(cls, config: StaticSiteConfig) -> StaticSite:
        """Validate *config*, open the sub tree, and load the fallback page.

        Raises:
            ConfigurationError: If any field is invalid, the sub directory
                cannot be opened, or the fallback page cannot be read.
        """
        try:
            config.validate()
        except ConfigurationError as exc:
            msg = f"invalid configuration: {exc}"
            raise ConfigurationError(msg) from exc

        assert config.fs is not None
        try:
            website_fs = sub_fs(config.fs, config.sub_dir)
        except (OSError, ValueError) as exc:
            msg = f"failed to get website sub file system {config.sub_dir!r}: {exc}"
            raise ConfigurationError(msg) from exc

        try:
            fallback = website_fs.open(config.fallback_page)
        except (OSError, ValueError) as exc:
            msg = f"failed to read fallback page {config.fallback_page!r}: {exc}"
            raise ConfigurationError(msg) from exc

        logger.debug(
            "Static site ready: %r (fallback %s, %d bytes)",
            website_fs,
            config.fallback_page,
            len(fallback),
        )
        return cls(StaticFileServer(website_fs), fallback)

    @property
    def fs(self) -> FileSystem:
        return self._file_server.fs

    @property
    def fallback(self) -> bytes:
        return self._fallback

    def mount(self) -> tuple[str, StaticSite]:
        """The ``(prefix, app)`` pair for ``Router.handle_prefix``."""
        return "/", self

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not is_http(scope):
            return

        outcome = await probe(self._file_server, scope, receive)
        if outcome.not_found:
            response = Response(
                body=self._fallback,
                status=404,
                content_type=constants.HTML,
            )
            await send_response(response, send, head=scope.get("method") == "HEAD")
            return

        await self._file_server(scope, receive, send)
