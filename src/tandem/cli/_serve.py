"""``tandem serve``: run a website directory and an optional API."""

import argparse
import logging
import sys

from tandem.cli._resolve import resolve_app
from tandem.config import SiteConfig
from tandem.errors import TandemError


def configure_logging(level: str) -> None:
    """Send tandem's loggers to stderr at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_serve(args: argparse.Namespace) -> None:
    """Build the app from CLI arguments and hand it to the server."""
    config = SiteConfig(
        host=args.host,
        port=args.port,
        site_dir=args.site_dir,
        sub_dir=args.sub_dir,
        fallback_page=args.fallback,
        api_prefix=args.api_prefix,
        base_url=args.base_url,
        access_log=not args.no_access_log,
        log_level=args.log_level,
    )

    api = None
    if args.api:
        try:
            api = resolve_app(args.api)
        except (ModuleNotFoundError, AttributeError, TypeError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc

    from tandem.app import create_app

    try:
        configure_logging(config.log_level)
        app = create_app(config, api)
    except (TandemError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from tandem.server.dev import run_server

    run_server(app, config.host, config.port)
