"""Infrastructure adapters for site export."""

from framer_export.exporter.infrastructure.browser import PlaywrightLauncher
from framer_export.exporter.infrastructure.event_tracker import LoguruEventTracker
from framer_export.exporter.infrastructure.sitemap_client import SitemapClient
from framer_export.exporter.infrastructure.zip_sink import ZipArchiveSink

__all__ = ["LoguruEventTracker", "PlaywrightLauncher", "SitemapClient", "ZipArchiveSink"]
