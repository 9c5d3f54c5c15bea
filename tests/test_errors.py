"""Tests for tandem.errors: exception hierarchy and HTTP errors."""

import pytest

from tandem.errors import (
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    SitemapError,
    TandemError,
)


class TestHierarchy:
    @pytest.mark.parametrize("error_type", [ConfigurationError, SitemapError, HTTPError])
    def test_all_derive_from_tandem_error(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, TandemError)

    def test_http_errors(self) -> None:
        assert issubclass(NotFound, HTTPError)
        assert issubclass(MethodNotAllowed, HTTPError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=418, detail="teapot")) == "418: teapot"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_not_found(self) -> None:
        error = NotFound()
        assert error.status == 404
        assert error.detail == "Not Found"


class TestMethodNotAllowed:
    def test_allow_header_sorted(self) -> None:
        error = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert error.status == 405
        assert error.headers == (("Allow", "GET, POST"),)
        assert error.allowed == "GET, POST"

    def test_default_detail_lists_methods(self) -> None:
        assert "GET, POST" in MethodNotAllowed(frozenset({"POST", "GET"})).detail

    def test_custom_detail(self) -> None:
        assert MethodNotAllowed(frozenset({"GET"}), "read only").detail == "read only"
