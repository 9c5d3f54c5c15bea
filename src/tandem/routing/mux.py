"""Method + path router for API handlers.

A narrow routing surface over ``EndpointTable``::

    api = Router()
    api.handle_endpoint("/users/{id:int}", "GET", get_user)
    api.handle_prefix("/files", file_app)

Endpoint handlers take a ``Request`` and return a ``Response`` (sync or
async).  Prefix handlers are ASGI apps that see the full, unstripped
path.  Exact endpoints are tried first, then prefixes in registration
order.
"""

import inspect
from collections.abc import Callable
from typing import Any, TypeAlias

from tandem._internal.asgi import ASGIApp, Receive, Scope, Send, is_http
from tandem.errors import HTTPError, MethodNotAllowed, NotFound
from tandem.http.request import Request
from tandem.http.response import Response, not_found_response, text_response
from tandem.routing.endpoints import EndpointTable
from tandem.server.sender import send_response

Endpoint: TypeAlias = Callable[[Request], Response | Any]


class Router:
    """ASGI app dispatching to endpoints by method and path."""

    __slots__ = ("_endpoints", "_prefixes")

    def __init__(self) -> None:
        self._endpoints = EndpointTable()
        self._prefixes: list[tuple[str, ASGIApp]] = []

    def handle_endpoint(self, path: str, method: str, handler: Endpoint) -> None:
        """Register *handler* for requests matching *method* and *path*.

        *path* may contain ``{name}``, ``{name:int}``, ``{name:float}``
        and ``{name:path}`` parameters.
        """
        self._endpoints.add(path, method, handler)

    def route(self, path: str, *, methods: tuple[str, ...] = ("GET",)) -> Callable[[Endpoint], Endpoint]:
        """Decorator form of ``handle_endpoint``."""

        def decorator(handler: Endpoint) -> Endpoint:
            for method in methods:
                self.handle_endpoint(path, method, handler)
            return handler

        return decorator

    def handle_prefix(self, prefix: str, app: ASGIApp) -> None:
        """Register ASGI *app* for every path starting with *prefix*."""
        self._prefixes.append((prefix, app))

    @staticmethod
    def path_params(request: Request) -> dict[str, str]:
        """Parameters captured from the path of a matched request."""
        return dict(request.path_params)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not is_http(scope):
            return

        method: str = scope["method"]
        path: str = scope["path"]
        try:
            match = self._endpoints.match(method, path)
        except NotFound:
            app = self._prefix_app(path)
            if app is None:
                await send_response(not_found_response(), send, head=method == "HEAD")
                return
            await app(scope, receive, send)
            return
        except MethodNotAllowed as exc:
            response = text_response("405 method not allowed\n", status=405)
            await send_response(
                response.with_header("Allow", exc.allowed), send, head=method == "HEAD"
            )
            return

        request = Request.from_asgi(scope, receive, match.path_params)
        try:
            response = await self._invoke(match.handler, request)
        except HTTPError as exc:
            response = text_response(f"{exc.detail or exc.status}\n", status=exc.status).with_headers(
                dict(exc.headers)
            )
        await send_response(response, send, head=method == "HEAD")

    def _prefix_app(self, path: str) -> ASGIApp | None:
        for prefix, app in self._prefixes:
            if path.startswith(prefix):
                return app
        return None

    @staticmethod
    async def _invoke(handler: Endpoint, request: Request) -> Response:
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Response):
            return result
        if isinstance(result, str):
            return Response(body=result)
        msg = f"endpoint {handler!r} returned {type(result).__name__}, expected Response or str"
        raise TypeError(msg)
