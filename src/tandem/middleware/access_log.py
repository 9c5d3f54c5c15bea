"""Access logging middleware.

Wraps any ASGI app and logs one line per HTTP request once the response
has been sent::

    GET /api/users 200 512B 3.1ms

Uses a pass-through ``ResponseRecorder``, so the client receives exactly
what the wrapped app sends; a failing downstream ``send`` propagates and
the request is logged as failed.
"""

import logging
import time

from tandem._internal.asgi import ASGIApp, Receive, Scope, Send, is_http
from tandem.server.recorder import ResponseRecorder


class AccessLog:
    """ASGI middleware logging method, path, status, size, and duration."""

    __slots__ = ("_app", "_logger")

    def __init__(self, app: ASGIApp, *, logger_name: str = "tandem.access") -> None:
        self._app = app
        self._logger = logging.getLogger(logger_name)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not is_http(scope):
            await self._app(scope, receive, send)
            return

        recorder = ResponseRecorder(send)
        start = time.perf_counter()
        try:
            await self._app(scope, receive, recorder)
        except Exception:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self._logger.exception(
                "%s %s failed after %.1fms",
                scope.get("method", "-"),
                scope.get("path", "-"),
                elapsed_ms,
            )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        self._logger.info(
            "%s %s %d %dB %.1fms",
            scope.get("method", "-"),
            scope.get("path", "-"),
            recorder.status,
            recorder.body_bytes,
            elapsed_ms,
        )
