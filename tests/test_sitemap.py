"""Tests for tandem.sitemap: HTML page discovery and XML rendering."""

import xml.etree.ElementTree as ET
from datetime import UTC, datetime

import pytest

from tandem.errors import SitemapError
from tandem.fs import DirectoryFS, MemoryFS
from tandem.sitemap import SITEMAP_NAMESPACE, Sitemap, SitemapURL, build_sitemap, html_pages

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
BASE_URL = "https://example.com/"


def _website() -> MemoryFS:
    return MemoryFS(
        {
            "index.html": "<h1>Home</h1>",
            "404.html": "<h1>404</h1>",
            "about/index.html": "<h1>About</h1>",
            "blog/first.html": "<h1>First</h1>",
            "blog/404.html": "<h1>Blog 404</h1>",
            "style.css": "body {}",
        }
    )


def _ns(tag: str) -> str:
    return f"{{{SITEMAP_NAMESPACE}}}{tag}"


class TestHTMLPages:
    def test_only_html_without_not_found_pages(self) -> None:
        assert sorted(html_pages(_website())) == [
            "about/index.html",
            "blog/first.html",
            "index.html",
        ]


class TestBuildSitemap:
    def test_one_entry_per_page(self) -> None:
        sitemap = build_sitemap(BASE_URL, _website(), now=NOW)

        assert len(sitemap) == 3
        assert sorted(url.location for url in sitemap.urls) == [
            "https://example.com/about/index.html",
            "https://example.com/blog/first.html",
            "https://example.com/index.html",
        ]

    def test_entries_share_generation_time(self) -> None:
        sitemap = build_sitemap(BASE_URL, _website(), now=NOW)
        assert {url.last_modified for url in sitemap.urls} == {NOW}

    def test_defaults(self) -> None:
        sitemap = build_sitemap(BASE_URL, _website(), now=NOW)
        assert {(url.change_frequency, url.priority) for url in sitemap.urls} == {("monthly", 0.9)}

    def test_no_pages(self) -> None:
        fs = MemoryFS({"404.html": "missing", "app.js": "1"})
        with pytest.raises(SitemapError, match="no HTML page"):
            build_sitemap(BASE_URL, fs)

    def test_priority_out_of_range(self) -> None:
        with pytest.raises(SitemapError, match="priority"):
            build_sitemap(BASE_URL, _website(), priority=1.5)

    def test_symlink_loop_and_dangling_link(self, tmp_path) -> None:
        (tmp_path / "index.html").write_text("home")
        (tmp_path / "self").symlink_to(tmp_path, target_is_directory=True)
        (tmp_path / "old.html").symlink_to(tmp_path / "removed.html")

        sitemap = build_sitemap(BASE_URL, DirectoryFS(tmp_path), now=NOW)

        assert [url.location for url in sitemap.urls] == ["https://example.com/index.html"]

    def test_walk_failure(self) -> None:
        class BrokenFS(MemoryFS):
            def listdir(self, name: str) -> list[str]:
                raise PermissionError(name)

        with pytest.raises(SitemapError, match="failed to get HTML pages"):
            build_sitemap(BASE_URL, BrokenFS({"index.html": ""}))


class TestXML:
    def test_document(self) -> None:
        xml = build_sitemap(BASE_URL, MemoryFS({"index.html": ""}), now=NOW).to_xml()

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        root = ET.fromstring(xml.split("\n", 1)[1])
        assert root.tag == _ns("urlset")

        urls = root.findall(_ns("url"))
        assert len(urls) == 1
        url = urls[0]
        assert url.findtext(_ns("location")) == "https://example.com/index.html"
        assert url.findtext(_ns("lastmod")) == "2024-05-01T12:00:00+00:00"
        assert url.findtext(_ns("changefreq")) == "monthly"
        assert url.findtext(_ns("priority")) == "0.9"

    def test_empty_optional_fields_are_omitted(self) -> None:
        sitemap = Sitemap(
            urls=(SitemapURL("https://example.com/a.html", NOW, change_frequency="", priority=0.0),)
        )
        xml = sitemap.to_xml()
        assert "changefreq" not in xml
        assert "priority" not in xml

    def test_response(self) -> None:
        response = build_sitemap(BASE_URL, _website(), now=NOW).to_response()
        assert response.status == 200
        assert response.content_type == "application/xml; charset=utf-8"
        assert "<urlset" in response.text
