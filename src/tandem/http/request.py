"""Immutable view of an ASGI HTTP request.

Handlers that work at the ASGI level keep using the raw scope; route
endpoints receive this frozen view instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

from tandem._internal.asgi import Receive, Scope
from tandem.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers) is frozen at creation. ``path``
    is the path as seen by the current handler, so behind a
    ``PrefixRouter`` it no longer carries the stripped prefix;
    ``root_path`` holds what was stripped.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    root_path: str = ""
    path_params: dict[str, str] = field(default_factory=dict)

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: mutable cache for the body
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def query(self) -> dict[str, str]:
        """Query parameters, last value wins for repeated keys."""
        return dict(parse_qsl(self.query_string.decode("latin-1"), keep_blank_values=True))

    @property
    def full_path(self) -> str:
        """The path including any prefix stripped by an outer router."""
        return f"{self.root_path}{self.path}"

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        if self._receive is not None:
            while True:
                message = await self._receive()
                chunk = message.get("body", b"")
                if chunk:
                    chunks.append(chunk)
                if not message.get("more_body", False):
                    break
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def json(self) -> Any:
        """Parse the body as JSON."""
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive | None = None,
        path_params: dict[str, str] | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        return cls(
            method=scope.get("method", "GET"),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b""),
            root_path=scope.get("root_path", ""),
            path_params=path_params if path_params is not None else dict(scope.get("path_params", {})),
            _receive=receive,
        )
