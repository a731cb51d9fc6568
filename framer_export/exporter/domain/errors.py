class ExportError(Exception):
    """Base class for export failures surfaced to callers."""


class InvalidSiteUrlError(ExportError):
    """The requested site URL is malformed or not http(s)."""


class SitemapFetchError(ExportError):
    """A sitemap document could not be fetched."""

    def __init__(self, url: str, status: int) -> None:
        self.url = url
        self.status = status
        super().__init__(f"Sitemap status {status} for {url}")
