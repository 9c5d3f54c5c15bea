"""Server-side ASGI plumbing: response sending and recording."""
