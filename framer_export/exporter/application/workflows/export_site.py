import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable

import aiohttp
from tqdm import tqdm

from framer_export.config.logger_config import logger
from framer_export.exporter.application.ports import (
    ArchiveSinkPort,
    BrowserLauncherPort,
    BrowserSessionPort,
    EventTrackerPort,
    SitemapReaderPort,
)
from framer_export.exporter.domain.models import ExportEntry, ExportResult, SiteUrl, Viewport
from framer_export.exporter.domain.rewriter import build_rewriter
from framer_export.exporter.domain.rules import (
    archive_filename,
    build_path_map,
    find_filename_collisions,
    parse_site_url,
    to_filename,
    url_pathname,
)


@dataclass(frozen=True)
class ExportWorkflowConfig:
    concurrency: int = 3
    navigation_timeout_ms: int = 120_000
    settle_delay_seconds: float = 1.0
    sitemap_timeout_seconds: float = 30.0
    viewport: Viewport = field(default_factory=Viewport)
    show_progress: bool = True


class ExportSiteWorkflow:
    """Discover, render, rewrite and package every page of one site.

    Any render failure aborts the whole run; there is no partial archive.
    """

    def __init__(
        self,
        sitemap_reader: SitemapReaderPort,
        launcher: BrowserLauncherPort,
        sink_factory: Callable[[], ArchiveSinkPort],
        event_tracker: EventTrackerPort | None = None,
        config: ExportWorkflowConfig | None = None,
    ) -> None:
        self.sitemap_reader = sitemap_reader
        self.launcher = launcher
        self.sink_factory = sink_factory
        self.event_tracker = event_tracker
        self.config = config or ExportWorkflowConfig()
        self._semaphore = asyncio.Semaphore(self.config.concurrency)
        self._entries_lock = asyncio.Lock()

    async def run(self, site_url: str) -> ExportResult:
        site = parse_site_url(site_url)
        self._track("export_started", {"url": site.url, "origin": site.origin})
        try:
            result = await self._export(site)
        except Exception as exc:
            self._track(
                "export_failed",
                {"origin": site.origin, "error_type": type(exc).__name__, "message": str(exc)},
            )
            raise

        self._track(
            "export_completed",
            {
                "origin": result.origin,
                "page_count": result.page_count,
                "archive_name": result.archive_name,
                "size_bytes": len(result.content),
            },
        )
        return result

    async def _export(self, site: SiteUrl) -> ExportResult:
        timeout = aiohttp.ClientTimeout(total=self.config.sitemap_timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as http_session:
            urls = await self.sitemap_reader.read_sitemap_urls(http_session, site.origin)
        logger.info("Discovered {} pages for {}", len(urls), site.origin)
        self._track("sitemap_discovered", {"origin": site.origin, "url_count": len(urls)})

        path_to_filename = build_path_map(urls)
        for filename, pathnames in find_filename_collisions(path_to_filename).items():
            logger.warning("Pathnames {} all flatten to {}; the last rendered page wins", pathnames, filename)
        rewrite = build_rewriter(site.origin, path_to_filename)

        entries: list[ExportEntry] = []
        browser = await self.launcher.launch()
        try:
            with tqdm(
                total=len(urls),
                desc="Rendering pages",
                unit="page",
                leave=True,
                disable=not self.config.show_progress,
            ) as progress:
                await asyncio.gather(
                    *(
                        self._export_page(browser, url, path_to_filename, rewrite, entries, progress)
                        for url in urls
                    )
                )
        finally:
            await browser.close()

        # A fresh sink per run keeps earlier runs out of this archive.
        sink = self.sink_factory()
        for entry in entries:
            sink.write_entry(entry.filename, entry.content)
        content = await asyncio.to_thread(sink.finalize)
        logger.info("Packaged {} pages from {} ({} bytes)", len(entries), site.origin, len(content))

        return ExportResult(
            site_url=site.url,
            origin=site.origin,
            archive_name=archive_filename(site.hostname),
            content=content,
            filenames=tuple(dict.fromkeys(entry.filename for entry in entries)),
        )

    async def _export_page(
        self,
        browser: BrowserSessionPort,
        url: str,
        path_to_filename: dict[str, str],
        rewrite: Callable[[str], str],
        entries: list[ExportEntry],
        progress: tqdm,
    ) -> None:
        async with self._semaphore:
            pathname = url_pathname(url)
            filename = path_to_filename.get(pathname) or to_filename(pathname)
            logger.debug("Rendering {}", url)

            page = await browser.new_page(self.config.viewport)
            try:
                await page.goto(url, timeout_ms=self.config.navigation_timeout_ms)
                # Let deferred animations and hydration finish.
                await asyncio.sleep(self.config.settle_delay_seconds)
                html = await page.outer_html()
            except Exception as exc:
                logger.error("Failed rendering {} with error type {}: {}", url, type(exc).__name__, exc)
                raise
            finally:
                await page.close()

            content = rewrite(html)
            async with self._entries_lock:
                entries.append(ExportEntry(url=url, filename=filename, content=content))
            progress.update(1)
            logger.info("Exported {} as {}", url, filename)
            self._track("page_exported", {"url": url, "filename": filename})

    def _track(self, event_name: str, data: dict[str, Any]) -> None:
        if self.event_tracker is None:
            return
        try:
            self.event_tracker.track(event_name, data)
        except Exception as exc:
            logger.warning("Failed to track event {}: {}", event_name, exc)
