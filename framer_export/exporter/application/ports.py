from typing import Any, Protocol, runtime_checkable

import aiohttp

from framer_export.exporter.domain.models import Viewport


@runtime_checkable
class SitemapReaderPort(Protocol):
    async def read_sitemap_urls(self, session: aiohttp.ClientSession, origin: str) -> list[str]: ...
    """Discover same-origin page URLs; never raises, never returns an empty list."""


@runtime_checkable
class PagePort(Protocol):
    async def goto(self, url: str, *, timeout_ms: int) -> None: ...
    """Navigate and wait until network activity is idle."""

    async def outer_html(self) -> str: ...
    """Capture the rendered document markup."""

    async def close(self) -> None: ...


@runtime_checkable
class BrowserSessionPort(Protocol):
    async def new_page(self, viewport: Viewport) -> PagePort: ...
    """Open an isolated page context; safe to call concurrently."""

    async def close(self) -> None: ...


@runtime_checkable
class BrowserLauncherPort(Protocol):
    async def launch(self) -> BrowserSessionPort: ...


@runtime_checkable
class ArchiveSinkPort(Protocol):
    def write_entry(self, filename: str, content: str) -> None: ...
    """Store one named entry; a repeated filename replaces the earlier entry."""

    def finalize(self) -> bytes: ...
    """Serialize all entries into a single package."""


@runtime_checkable
class EventTrackerPort(Protocol):
    def track(self, event_name: str, data: dict[str, Any]) -> None: ...
