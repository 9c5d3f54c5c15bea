"""Sitemap generation for a static website.

Walks a ``FileSystem`` for HTML pages and renders a sitemaps.org
``urlset`` document::

    sitemap = build_sitemap("https://example.com/", DirectoryFS("./build"))
    xml = sitemap.to_xml()

Each page's location is the base URL followed by the page's path in
the file system (``https://example.com/blog/index.html``), so the base
URL should end with a slash.  Pages whose name ends in ``404.html`` are
left out.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import UTC, datetime

from tandem.errors import SitemapError
from tandem.fs import FileSystem, walk
from tandem.http import constants
from tandem.http.response import Response

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass(frozen=True, slots=True)
class SitemapURL:
    """One ``url`` entry."""

    location: str
    last_modified: datetime
    change_frequency: str = "monthly"
    priority: float = 0.9


@dataclass(frozen=True, slots=True)
class Sitemap:
    """A built sitemap; render with ``to_xml()``."""

    urls: tuple[SitemapURL, ...]

    def __len__(self) -> int:
        return len(self.urls)

    def to_xml(self) -> str:
        """Serialize to a UTF-8 sitemap XML document."""
        urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
        for entry in self.urls:
            url = ET.SubElement(urlset, "url")
            ET.SubElement(url, "location").text = entry.location
            ET.SubElement(url, "lastmod").text = entry.last_modified.isoformat()
            if entry.change_frequency:
                ET.SubElement(url, "changefreq").text = entry.change_frequency
            if entry.priority:
                ET.SubElement(url, "priority").text = format(entry.priority, "g")
        ET.indent(urlset, space="\t")
        return XML_DECLARATION + ET.tostring(urlset, encoding="unicode")

    def to_response(self) -> Response:
        """The sitemap as an ``application/xml`` response."""
        return Response(body=self.to_xml(), content_type=constants.XML)


def html_pages(fs: FileSystem, *, exclude_suffix: str = "404.html") -> list[str]:
    """Paths of all ``.html`` files in *fs*, minus the not-found page."""
    return [
        name
        for name in walk(fs)
        if name.endswith(".html") and not name.endswith(exclude_suffix)
    ]


def build_sitemap(
    base_url: str,
    fs: FileSystem,
    *,
    now: datetime | None = None,
    change_frequency: str = "monthly",
    priority: float = 0.9,
) -> Sitemap:
    """Build a sitemap listing every HTML page in *fs*.

    Every entry's ``lastmod`` is the generation time (*now*, default the
    current UTC time).

    Raises:
        SitemapError: If the file system cannot be walked or holds no
            HTML page.
    """
    if not 0.0 <= priority <= 1.0:
        msg = f"priority must be within [0, 1], got {priority}"
        raise SitemapError(msg)

    try:
        pages = html_pages(fs)
    except OSError as exc:
        msg = f"failed to get HTML pages from file system: {exc}"
        raise SitemapError(msg) from exc
    if not pages:
        raise SitemapError("no HTML page in file system")

    generated = now or datetime.now(UTC)
    return Sitemap(
        urls=tuple(
            SitemapURL(
                location=base_url + page,
                last_modified=generated,
                change_frequency=change_frequency,
                priority=priority,
            )
            for page in pages
        )
    )
