"""Site composition: website, API, sitemap, and access log in one ASGI app.

``create_app()`` is what ``tandem serve`` runs; it is equally usable
from code::

    from tandem.app import create_app
    from tandem.config import SiteConfig

    app = create_app(SiteConfig(site_dir="./build"), api=my_api)
"""

import logging

from tandem._internal.asgi import ASGIApp
from tandem.config import SiteConfig
from tandem.fs import DirectoryFS
from tandem.middleware.access_log import AccessLog
from tandem.routing.mux import Router
from tandem.routing.prefix import PrefixRouter, PrefixRouterConfig
from tandem.sitemap import build_sitemap
from tandem.static.site import StaticSite, StaticSiteConfig

logger = logging.getLogger("tandem.server")


def create_app(config: SiteConfig, api: ASGIApp | None = None) -> ASGIApp:
    """Build the ASGI app described by *config*.

    *api* handles everything under ``config.api_prefix``; without one,
    API paths answer 404.  When ``config.base_url`` is set, the sitemap
    is built once here and served from memory.

    Raises:
        ConfigurationError: If *config* or the site directory is invalid.
        SitemapError: If a sitemap was requested and the site has no pages.
    """
    config.validate()

    site_fs = DirectoryFS(config.site_dir)
    site = StaticSite.from_config(
        StaticSiteConfig(fs=site_fs, sub_dir=config.sub_dir, fallback_page=config.fallback_page)
    )

    website: ASGIApp = site
    if config.base_url:
        sitemap = build_sitemap(config.base_url, site.fs)
        sitemap_response = sitemap.to_response()
        logger.info("Sitemap: %d pages at %s", len(sitemap), config.sitemap_path)

        router = Router()
        router.handle_endpoint(config.sitemap_path, "GET", lambda _request: sitemap_response)
        router.handle_prefix(*site.mount())
        website = router

    app: ASGIApp = PrefixRouter(
        PrefixRouterConfig(
            path_prefix=config.api_prefix,
            handler_with_prefix=api if api is not None else Router(),
            handler_without_prefix=website,
        )
    )
    if config.access_log:
        app = AccessLog(app)

    logger.info("Serving %s (API under %s)", site_fs.root, config.api_prefix)
    return app
