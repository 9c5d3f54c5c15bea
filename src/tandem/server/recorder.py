"""Response recording: observe what a handler sends before committing.

A ``ResponseRecorder`` stands in for the ASGI ``send`` callable.  In
capture mode nothing reaches the client, which lets a wrapping handler
run an inner handler as a probe and then decide what the real response
should be.  In pass-through mode every message is forwarded to the
downstream ``send`` and the recorder only keeps counts, which is what
access logging needs.
"""

from dataclasses import dataclass, field

from tandem._internal.asgi import ASGIApp, Message, Receive, Scope, Send
from tandem.http.headers import Headers


@dataclass(frozen=True, slots=True)
class RecordedResponse:
    """Outcome of one recorded request.

    ``status`` is 200 when the handler never started a response,
    mirroring HTTP's implicit 200.
    """

    status: int = 200
    headers: Headers = field(default_factory=Headers)
    body_bytes: int = 0

    @property
    def not_found(self) -> bool:
        return self.status == 404


class ResponseRecorder:
    """ASGI ``send`` replacement that records status and body size.

    Usage::

        recorder = ResponseRecorder()             # capture mode
        await app(scope, receive, recorder)
        if recorder.result().not_found: ...

        recorder = ResponseRecorder(send)         # pass-through mode
        await app(scope, receive, recorder)

    One recorder per request; instances are never shared.
    """

    __slots__ = ("_body_bytes", "_headers", "_send", "_status")

    def __init__(self, send: Send | None = None) -> None:
        self._send = send
        self._status: int | None = None
        self._headers: tuple[tuple[bytes, bytes], ...] = ()
        self._body_bytes = 0

    @property
    def status(self) -> int:
        return self._status if self._status is not None else 200

    @property
    def body_bytes(self) -> int:
        return self._body_bytes

    @property
    def started(self) -> bool:
        return self._status is not None

    def record_status(self, status: int, headers: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        """Record the response status.  The first call wins."""
        if self._status is not None:
            return
        self._status = status
        self._headers = headers

    def record_body(self, data: bytes) -> int:
        """Record a body chunk and return the number of bytes written."""
        self._body_bytes += len(data)
        return len(data)

    async def __call__(self, message: Message) -> None:
        kind = message["type"]
        if kind == "http.response.start":
            self.record_status(message["status"], tuple(message.get("headers", ())))
        if self._send is not None:
            await self._send(message)
        if kind == "http.response.body":
            # Reached only once the downstream send accepted the chunk.
            self.record_body(message.get("body", b""))

    def result(self) -> RecordedResponse:
        """Snapshot of what has been recorded so far."""
        return RecordedResponse(
            status=self.status,
            headers=Headers(self._headers),
            body_bytes=self._body_bytes,
        )


async def probe(app: ASGIApp, scope: Scope, receive: Receive) -> RecordedResponse:
    """Run *app* against a fresh capturing recorder and return the outcome.

    Nothing reaches the client.  The probe half of probe-then-commit:
    call the app again with the real ``send`` to commit.
    """
    recorder = ResponseRecorder()
    await app(scope, receive, recorder)
    return recorder.result()
