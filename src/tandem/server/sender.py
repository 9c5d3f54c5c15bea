"""ASGI response sending: translates tandem Response objects to ASGI messages."""

from tandem._internal.asgi import Send
from tandem.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a tandem Response into ASGI send() calls.

    ``head=True`` keeps the headers of the full response (including
    ``Content-Length``) but sends an empty body.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    has_length = False
    for name, value in response.headers:
        key = name.lower()
        if key == "content-length":
            has_length = True
        raw_headers.append((key.encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""

    if not has_length:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
