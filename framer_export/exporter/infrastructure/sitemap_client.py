import asyncio
from urllib.parse import urljoin
from xml.etree import ElementTree as ET

import aiohttp

from framer_export.config.logger_config import logger
from framer_export.exporter.domain.errors import SitemapFetchError
from framer_export.exporter.domain.rules import normalize_url, url_origin

_DISCOVERY_ERRORS = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ET.ParseError,
    UnicodeDecodeError,
    ValueError,
    SitemapFetchError,
)


class SitemapClient:
    """Best-effort page discovery from ``/sitemap.xml``.

    Handles both urlset documents and sitemap indexes (children fetched
    concurrently). Failures only shrink the result; when nothing is found the
    bare origin is returned so callers always get one page.
    """

    def __init__(self, sitemap_path: str = "/sitemap.xml") -> None:
        self.sitemap_path = sitemap_path

    async def read_sitemap_urls(self, session: aiohttp.ClientSession, origin: str) -> list[str]:
        urls: dict[str, None] = {}
        try:
            root = await self._fetch_xml(session, origin, self.sitemap_path)
            if _local_name(root.tag) == "sitemapindex":
                child_locations: list[str] = []
                for sitemap in _children(root, "sitemap"):
                    locs = _locs(sitemap)
                    if locs:
                        child_locations.append(locs[0])
                logger.info("Sitemap index for {} lists {} child sitemaps", origin, len(child_locations))
                children = await asyncio.gather(
                    *(self._read_child_sitemap(session, origin, location) for location in child_locations)
                )
                for child in children:
                    if child is not None:
                        self._collect_urlset(child, origin, urls)
            else:
                self._collect_urlset(root, origin, urls)
        except _DISCOVERY_ERRORS as exc:
            logger.warning("Sitemap discovery failed for {} ({}): {}", origin, type(exc).__name__, exc)

        if not urls:
            logger.info("No sitemap pages found for {}, falling back to the origin", origin)
            urls[origin] = None
        return list(urls)

    async def _read_child_sitemap(
        self,
        session: aiohttp.ClientSession,
        origin: str,
        location: str,
    ) -> ET.Element | None:
        try:
            return await self._fetch_xml(session, origin, location)
        except _DISCOVERY_ERRORS as exc:
            logger.warning("Skipping child sitemap {} ({}): {}", location, type(exc).__name__, exc)
            return None

    async def _fetch_xml(self, session: aiohttp.ClientSession, origin: str, path_or_url: str) -> ET.Element:
        target = urljoin(origin + "/", path_or_url)
        async with session.get(target, headers={"Cache-Control": "no-cache"}) as resp:
            if not 200 <= resp.status < 300:
                raise SitemapFetchError(target, resp.status)
            body = await resp.read()
        return ET.fromstring(body)

    @staticmethod
    def _collect_urlset(root: ET.Element, origin: str, urls: dict[str, None]) -> None:
        if _local_name(root.tag) != "urlset":
            return
        # Malformed feeds may repeat <loc> inside one <url>; keep every value.
        for entry in _children(root, "url"):
            for candidate in _locs(entry):
                normalized = normalize_url(candidate)
                if normalized is None or url_origin(normalized) != origin:
                    continue
                urls.setdefault(normalized, None)


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _locs(element: ET.Element) -> list[str]:
    return [
        child.text.strip()
        for child in _children(element, "loc")
        if child.text and child.text.strip()
    ]
