"""Tests for tandem.http.headers: immutable, case-insensitive Headers."""

import pytest

from tandem.http.headers import Headers


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


class TestHeaders:
    def test_getitem(self) -> None:
        h = _h(("Content-Type", "text/html"))
        assert h["Content-Type"] == "text/html"

    def test_case_insensitive(self) -> None:
        h = _h(("Content-Type", "text/html"))
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"

    def test_missing_key_raises(self) -> None:
        h = _h(("Accept", "*/*"))
        with pytest.raises(KeyError):
            h["X-Missing"]

    def test_contains(self) -> None:
        h = _h(("Accept", "*/*"))
        assert "accept" in h
        assert "x-missing" not in h
        assert 42 not in h  # type: ignore[operator]

    def test_len_deduplicates(self) -> None:
        h = _h(("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"))
        assert len(h) == 1

    def test_iter_yields_unique_lowercase_keys(self) -> None:
        h = _h(("Accept", "*/*"), ("Content-Type", "text/html"), ("Accept", "text/xml"))
        assert list(h) == ["accept", "content-type"]

    def test_get_with_default(self) -> None:
        h = _h(("Accept", "*/*"))
        assert h.get("accept") == "*/*"
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        h = _h(("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"))
        assert h.get_list("set-cookie") == ["a=1", "b=2"]
        assert h.get_list("X-Missing") == []

    def test_from_pairs(self) -> None:
        h = Headers.from_pairs([("Location", "./"), ("Allow", "GET, HEAD")])
        assert h.raw == ((b"location", b"./"), (b"allow", b"GET, HEAD"))

    def test_empty_headers(self) -> None:
        h = Headers()
        assert len(h) == 0
        assert list(h) == []

    def test_repr(self) -> None:
        assert repr(_h(("Accept", "*/*"))) == "Headers({'accept': '*/*'})"
