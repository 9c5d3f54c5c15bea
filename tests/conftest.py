"""Shared fixtures for tandem tests."""

import pytest

from tandem.fs import MemoryFS


@pytest.fixture
def site_fs() -> MemoryFS:
    """A small website: home page, fallback page, and one nested asset."""
    return MemoryFS(
        {
            "index.html": b"<h1>Home</h1>",
            "404.html": b"<h1>404</h1>",
            "nested/app.js": b"export const c = null;",
        }
    )


@pytest.fixture
def scope_factory():
    """Build minimal valid ASGI HTTP scope dicts."""

    def make_scope(path: str = "/", method: str = "GET", **overrides: object) -> dict[str, object]:
        base: dict[str, object] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method,
            "path": path,
            "query_string": b"",
            "root_path": "",
            "headers": [],
            "server": ("localhost", 8000),
            "client": ("127.0.0.1", 54321),
        }
        if "raw_path" not in overrides:
            base["raw_path"] = path.encode("latin-1")
        base.update(overrides)
        return base

    return make_scope
