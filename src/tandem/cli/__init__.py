"""Tandem CLI: serve a site with its API, and generate sitemaps.

Entry point registered as ``tandem`` in ``pyproject.toml``::

    [project.scripts]
    tandem = "tandem.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tandem`` command."""
    parser = argparse.ArgumentParser(
        prog="tandem",
        description="Tandem: serve a static website and a backend API from one app.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- tandem serve -----------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a website directory and an API")
    serve_parser.add_argument("site_dir", help="Directory holding the built website")
    serve_parser.add_argument(
        "--api",
        default=None,
        help="Import string of the ASGI app for API paths (e.g. myapi:app)",
    )
    serve_parser.add_argument("--api-prefix", default="/api", help="Path prefix routed to the API")
    serve_parser.add_argument("--sub-dir", default=".", help="Sub directory of site_dir to serve")
    serve_parser.add_argument(
        "--fallback",
        default="404.html",
        help="Page served for unknown website paths",
    )
    serve_parser.add_argument(
        "--base-url",
        default="",
        help="Public URL of the site; enables /sitemap.xml",
    )
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port number")
    serve_parser.add_argument(
        "--no-access-log",
        action="store_true",
        help="Do not log one line per request",
    )
    serve_parser.add_argument("--log-level", default="info", help="Logging level")

    # -- tandem sitemap ---------------------------------------------------
    sitemap_parser = subparsers.add_parser("sitemap", help="Write a sitemap for a website directory")
    sitemap_parser.add_argument("site_dir", help="Directory holding the built website")
    sitemap_parser.add_argument("--base-url", required=True, help="Public URL of the site")
    sitemap_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (default: stdout)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from tandem.cli._serve import run_serve

        run_serve(args)
    elif args.command == "sitemap":
        from tandem.cli._sitemap import run_sitemap

        run_sitemap(args)
