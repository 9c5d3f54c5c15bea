"""Tandem: serve a static website and a backend API from one ASGI app.

Requests under a path prefix go to the API, everything else goes to the
website, and unknown website paths get a single consistent 404 page.

Basic usage::

    from tandem import PrefixRouter, PrefixRouterConfig, StaticSite, StaticSiteConfig
    from tandem.fs import DirectoryFS

    site = StaticSite.from_config(StaticSiteConfig(
        fs=DirectoryFS("./build"),
        sub_dir=".",
        fallback_page="404.html",
    ))
    app = PrefixRouter(PrefixRouterConfig(
        path_prefix="/api",
        handler_with_prefix=api,
        handler_without_prefix=site,
    ))
"""

__version__ = "0.1.0"
__all__ = [
    "AccessLog",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "PrefixRouter",
    "PrefixRouterConfig",
    "Request",
    "Response",
    "ResponseRecorder",
    "Router",
    "SiteConfig",
    "Sitemap",
    "SitemapError",
    "StaticFileServer",
    "StaticSite",
    "StaticSiteConfig",
    "TandemError",
    "build_sitemap",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tandem`` fast while providing a clean top-level API.
    """
    if name in ("PrefixRouter", "PrefixRouterConfig"):
        from tandem.routing import prefix as _prefix

        return getattr(_prefix, name)

    if name == "Router":
        from tandem.routing.mux import Router

        return Router

    if name in ("StaticSite", "StaticSiteConfig"):
        from tandem.static import site as _site

        return getattr(_site, name)

    if name == "StaticFileServer":
        from tandem.static.server import StaticFileServer

        return StaticFileServer

    if name == "ResponseRecorder":
        from tandem.server.recorder import ResponseRecorder

        return ResponseRecorder

    if name == "Request":
        from tandem.http.request import Request

        return Request

    if name == "Response":
        from tandem.http.response import Response

        return Response

    if name in ("Sitemap", "build_sitemap"):
        from tandem import sitemap as _sitemap

        return getattr(_sitemap, name)

    if name == "AccessLog":
        from tandem.middleware.access_log import AccessLog

        return AccessLog

    if name == "SiteConfig":
        from tandem.config import SiteConfig

        return SiteConfig

    if name == "create_app":
        from tandem.app import create_app

        return create_app

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "SitemapError",
        "TandemError",
    ):
        from tandem import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
