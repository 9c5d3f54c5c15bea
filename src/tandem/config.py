"""Site configuration.

SiteConfig is a frozen dataclass; ``create_app()`` turns one into an ASGI app.
"""

from dataclasses import dataclass
from pathlib import Path

from tandem.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Configuration for a combined website + API app. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(site_dir="./build", api_prefix="/v1", port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Website
    site_dir: str | Path = "public"
    sub_dir: str = "."  # "." serves site_dir itself
    fallback_page: str = "404.html"

    # API
    api_prefix: str = "/api"

    # Sitemap: served at /sitemap.xml when base_url is set
    base_url: str = ""
    sitemap_path: str = "/sitemap.xml"

    # Logging
    access_log: bool = True
    log_level: str = "info"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for values no handler could accept."""
        if not 0 < self.port < 65536:
            msg = f"port must be within 1-65535, got {self.port}"
            raise ConfigurationError(msg)
        if not Path(self.site_dir).is_dir():
            msg = f"site directory {str(self.site_dir)!r} does not exist"
            raise ConfigurationError(msg)
        if self.base_url and not self.base_url.endswith("/"):
            msg = f"base_url should end with a slash, got {self.base_url!r}"
            raise ConfigurationError(msg)
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            msg = f"unknown log level {self.log_level!r}"
            raise ConfigurationError(msg)
