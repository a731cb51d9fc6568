from playwright.async_api import Browser, Page, Playwright, async_playwright

from framer_export.config.logger_config import logger
from framer_export.exporter.domain.models import Viewport

# Headless server execution: no sandbox, no GPU.
CHROMIUM_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--disable-gpu",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
)


class PlaywrightPage:
    def __init__(self, page: Page) -> None:
        self._page = page

    async def goto(self, url: str, *, timeout_ms: int) -> None:
        await self._page.goto(url, wait_until="networkidle", timeout=timeout_ms)

    async def outer_html(self) -> str:
        return await self._page.evaluate("() => document.documentElement.outerHTML")

    async def close(self) -> None:
        await self._page.close()


class PlaywrightSession:
    def __init__(self, playwright: Playwright, browser: Browser) -> None:
        self._playwright = playwright
        self._browser = browser

    async def new_page(self, viewport: Viewport) -> PlaywrightPage:
        # Each page gets its own browser context.
        page = await self._browser.new_page(
            viewport={"width": viewport.width, "height": viewport.height},
            device_scale_factor=viewport.device_scale_factor,
        )
        return PlaywrightPage(page)

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()
        logger.debug("Browser session closed")


class PlaywrightLauncher:
    def __init__(self, headless: bool = True, args: tuple[str, ...] = CHROMIUM_ARGS) -> None:
        self.headless = headless
        self.args = args

    async def launch(self) -> PlaywrightSession:
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(headless=self.headless, args=list(self.args))
        except Exception:
            await playwright.stop()
            raise
        logger.info("Chromium launched ({} mode)", "headless" if self.headless else "headed")
        return PlaywrightSession(playwright, browser)
