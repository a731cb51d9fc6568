import asyncio
from pathlib import Path

from framer_export.config.logger_config import logger
from framer_export.config.settings import ExportSettings, load_settings
from framer_export.exporter.application.ports import EventTrackerPort
from framer_export.exporter.application.workflows.export_site import ExportSiteWorkflow, ExportWorkflowConfig
from framer_export.exporter.domain.models import ExportResult
from framer_export.exporter.infrastructure.browser import PlaywrightLauncher
from framer_export.exporter.infrastructure.event_tracker import LoguruEventTracker
from framer_export.exporter.infrastructure.sitemap_client import SitemapClient
from framer_export.exporter.infrastructure.zip_sink import ZipArchiveSink


async def run_export_async(
    url: str,
    *,
    settings: ExportSettings | None = None,
    event_tracker: EventTrackerPort | None = None,
    show_progress: bool = True,
) -> ExportResult:
    settings = settings or load_settings()
    workflow = ExportSiteWorkflow(
        sitemap_reader=SitemapClient(),
        launcher=PlaywrightLauncher(headless=settings.headless),
        sink_factory=ZipArchiveSink,
        event_tracker=event_tracker or LoguruEventTracker(),
        config=ExportWorkflowConfig(
            concurrency=settings.concurrency,
            navigation_timeout_ms=settings.navigation_timeout_ms,
            settle_delay_seconds=settings.settle_delay_seconds,
            sitemap_timeout_seconds=settings.sitemap_timeout_seconds,
            show_progress=show_progress,
        ),
    )
    return await workflow.run(url)


def run_export(
    url: str,
    *,
    settings: ExportSettings | None = None,
    event_tracker: EventTrackerPort | None = None,
    show_progress: bool = True,
) -> ExportResult:
    return asyncio.run(
        run_export_async(
            url,
            settings=settings,
            event_tracker=event_tracker,
            show_progress=show_progress,
        )
    )


def write_export(
    url: str,
    output_dir: str | Path = ".",
    *,
    settings: ExportSettings | None = None,
    show_progress: bool = True,
) -> Path:
    result = run_export(url, settings=settings, show_progress=show_progress)
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    archive_path = output_path / result.archive_name
    archive_path.write_bytes(result.content)
    logger.info("Wrote {} pages to {}", result.page_count, str(archive_path))
    return archive_path
