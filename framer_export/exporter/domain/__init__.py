"""Domain models and deterministic rules for site export."""

from framer_export.exporter.domain.errors import ExportError, InvalidSiteUrlError, SitemapFetchError
from framer_export.exporter.domain.models import ExportEntry, ExportResult, SiteUrl, Viewport
from framer_export.exporter.domain.rewriter import HtmlRewriter, build_rewriter
from framer_export.exporter.domain.rules import (
    archive_filename,
    build_path_map,
    find_filename_collisions,
    normalize_url,
    parse_site_url,
    to_filename,
    url_origin,
    url_pathname,
)

__all__ = [
    "archive_filename",
    "build_path_map",
    "build_rewriter",
    "ExportEntry",
    "ExportError",
    "ExportResult",
    "find_filename_collisions",
    "HtmlRewriter",
    "InvalidSiteUrlError",
    "normalize_url",
    "parse_site_url",
    "SitemapFetchError",
    "SiteUrl",
    "to_filename",
    "url_origin",
    "url_pathname",
    "Viewport",
]
