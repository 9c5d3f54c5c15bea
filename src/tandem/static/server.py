"""Static file serving from a virtual file system.

Maps the request path onto a ``FileSystem`` and serves the file it
names.  A path that names nothing produces an ordinary 404 response
(plain text ``404 page not found``); it is a result, not an error.

Directory handling:

- ``/docs`` where ``docs/index.html`` exists redirects to ``docs/``
- ``/docs/`` serves ``docs/index.html``
- ``/docs/index.html`` redirects to ``./`` so each page has one URL
- a directory without an index file is not found (no listings)
"""

import logging
import mimetypes
import posixpath
from datetime import UTC
from email.utils import format_datetime, parsedate_to_datetime

import anyio.to_thread

from tandem._internal.asgi import Receive, Scope, Send, is_http
from tandem.fs import FileInfo, FileSystem, join, valid_path
from tandem.http import constants
from tandem.http.request import Request
from tandem.http.response import Response, not_found_response, text_response
from tandem.server.sender import send_response

logger = logging.getLogger("tandem.static")


def clean_path(path: str) -> str:
    """Normalize a URL path: rooted, no ``.``/``..`` elements, no repeated slashes.

    A trailing slash on the input is kept.  ``..`` cannot climb above
    the root, so the result never names anything outside the tree.
    """
    if not path.startswith("/"):
        path = "/" + path
    cleaned = posixpath.normpath(path)
    # POSIX normpath keeps a leading "//" intact.
    cleaned = "/" + cleaned.lstrip("/")
    if path.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned


def guess_content_type(name: str) -> str:
    """Content type from the file extension, with a UTF-8 charset for text."""
    content_type, _ = mimetypes.guess_type(name)
    if content_type is None:
        return constants.OCTET_STREAM
    if content_type.startswith("text/") or content_type in (
        "application/javascript",
        "application/json",
        "image/svg+xml",
    ):
        return f"{content_type}; charset=utf-8"
    return content_type


def _redirect(location: str) -> Response:
    return Response(body="", status=301).with_header("Location", location)


def _has_mtime(info: FileInfo) -> bool:
    return info.modified.timestamp() > 0


class StaticFileServer:
    """ASGI app that serves files from a ``FileSystem``.

    Only ``GET`` and ``HEAD`` are answered; other methods get 405.
    File system access runs on a worker thread so a slow disk never
    blocks the event loop.

    Usage::

        server = StaticFileServer(DirectoryFS("./public"))
        response = await server.respond(request)
    """

    __slots__ = ("_fs", "_index")

    def __init__(self, fs: FileSystem, *, index: str = "index.html") -> None:
        self._fs = fs
        self._index = index

    @property
    def fs(self) -> FileSystem:
        return self._fs

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not is_http(scope):
            return
        request = Request.from_asgi(scope, receive)
        response = await self.respond(request)
        await send_response(response, send, head=request.method == "HEAD")

    async def respond(self, request: Request) -> Response:
        """Build the response for *request* without sending it."""
        if request.method not in constants.READ_METHODS:
            return text_response("405 method not allowed\n", status=405).with_header(
                "Allow", "GET, HEAD"
            )
        return await anyio.to_thread.run_sync(self._serve, request)

    # ------------------------------------------------------------------
    # Helpers (run on a worker thread)
    # ------------------------------------------------------------------

    def _serve(self, request: Request) -> Response:
        url_path = clean_path(request.path)

        if url_path.endswith("/" + self._index):
            return _redirect("./")

        name = url_path.strip("/") or "."
        if not valid_path(name):
            return not_found_response()

        try:
            info = self._fs.stat(name)
            if info.is_dir:
                if not url_path.endswith("/"):
                    index_name = join(name, self._index)
                    if self._is_file(index_name):
                        return _redirect(posixpath.basename(url_path) + "/")
                    return not_found_response()
                name = join(name, self._index)
                info = self._fs.stat(name)
                if info.is_dir:
                    return not_found_response()
            elif url_path.endswith("/"):
                return _redirect("../" + posixpath.basename(url_path.rstrip("/")))

            if self._not_modified(request, info):
                return Response(body="", status=304, content_type=guess_content_type(name))

            data = self._fs.open(name)
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
            return not_found_response()
        except PermissionError:
            logger.warning("Permission denied reading %r", name)
            return text_response("403 Forbidden\n", status=403)

        response = Response(body=data, content_type=guess_content_type(name))
        if _has_mtime(info):
            response = response.with_header(
                "Last-Modified", format_datetime(info.modified.astimezone(UTC), usegmt=True)
            )
        return response

    def _is_file(self, name: str) -> bool:
        try:
            return not self._fs.stat(name).is_dir
        except (FileNotFoundError, NotADirectoryError):
            return False

    def _not_modified(self, request: Request, info: FileInfo) -> bool:
        header = request.headers.get(constants.IF_MODIFIED_SINCE)
        if header is None or not _has_mtime(info):
            return False
        try:
            since = parsedate_to_datetime(header)
        except (TypeError, ValueError):
            return False
        if since.tzinfo is None:
            return False
        # HTTP dates have one-second resolution.
        return info.modified.replace(microsecond=0) <= since
