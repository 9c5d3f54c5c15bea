"""``tandem sitemap``: write a sitemap for a website directory."""

import argparse
import sys
from pathlib import Path

from tandem.errors import SitemapError
from tandem.fs import DirectoryFS
from tandem.sitemap import build_sitemap


def run_sitemap(args: argparse.Namespace) -> None:
    """Build the sitemap and write it to ``args.output`` or stdout."""
    site_dir = Path(args.site_dir)
    if not site_dir.is_dir():
        print(f"Error: {site_dir} is not a directory", file=sys.stderr)
        raise SystemExit(1)

    try:
        sitemap = build_sitemap(args.base_url, DirectoryFS(site_dir))
    except SitemapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    xml = sitemap.to_xml()
    if args.output is None:
        sys.stdout.write(xml + "\n")
        return

    Path(args.output).write_text(xml + "\n", encoding="utf-8")
    print(f"Wrote {len(sitemap)} URLs to {args.output}", file=sys.stderr)
