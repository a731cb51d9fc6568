import re
from typing import Iterable
from urllib.parse import quote, urlsplit

from framer_export.exporter.domain.errors import InvalidSiteUrlError
from framer_export.exporter.domain.models import SiteUrl

_DEFAULT_PORTS = {"http": 80, "https": 443}
_EDGE_SLASHES = re.compile(r"^/+|/+$")
_SLASH_RUN = re.compile(r"/+")
_UNSAFE_CHARS = re.compile(r"/+|[^a-zA-Z0-9_-]")
# Kept as-is when percent-encoding paths. "%" is safe so existing escapes survive.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~[]|^"


def to_filename(pathname: str) -> str:
    """Flatten an origin-relative path into a single ``.html`` filename.

    ``/`` and blank paths map to ``index.html``; ``/blog/my-post/`` maps to
    ``blog-my-post.html``. Total over all strings.
    """
    if pathname == "/" or not pathname.strip():
        return "index.html"
    clean = _SLASH_RUN.sub("/", _EDGE_SLASHES.sub("", pathname), count=1)
    flattened = _UNSAFE_CHARS.sub("-", clean)
    return f"{flattened or 'index'}.html"


def parse_site_url(raw: str) -> SiteUrl:
    candidate = (raw or "").strip()
    if not candidate:
        raise InvalidSiteUrlError("Invalid URL")
    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise InvalidSiteUrlError("Invalid URL") from exc

    scheme = parts.scheme.lower()
    if not scheme:
        raise InvalidSiteUrlError("Invalid URL")
    if scheme not in _DEFAULT_PORTS:
        raise InvalidSiteUrlError("URL must start with http or https")
    if not parts.hostname:
        raise InvalidSiteUrlError("Invalid URL")

    try:
        hostname = _ascii_hostname(parts.hostname)
    except UnicodeError as exc:
        raise InvalidSiteUrlError("Invalid URL") from exc

    origin = _format_origin(scheme, hostname, port)
    return SiteUrl(
        url=_join_url(origin, _encode_path(parts.path), parts.query, parts.fragment),
        origin=origin,
        hostname=hostname,
    )


def url_origin(url: str) -> str | None:
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        return None
    try:
        hostname = _ascii_hostname(parts.hostname)
    except UnicodeError:
        return None
    return _format_origin(scheme, hostname, port)


def normalize_url(url: str) -> str | None:
    origin = url_origin(url)
    if origin is None:
        return None
    parts = urlsplit(url.strip())
    return _join_url(origin, _encode_path(parts.path), parts.query, parts.fragment)


def url_pathname(url: str) -> str:
    """Percent-encoded path of ``url``, so ``/café`` and ``/caf%C3%A9`` agree."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return "/"
    return _encode_path(path) or "/"


def build_path_map(urls: Iterable[str]) -> dict[str, str]:
    path_to_filename: dict[str, str] = {}
    for url in urls:
        pathname = url_pathname(url)
        path_to_filename[pathname] = to_filename(pathname)
    return path_to_filename


def find_filename_collisions(path_to_filename: dict[str, str]) -> dict[str, tuple[str, ...]]:
    by_filename: dict[str, list[str]] = {}
    for pathname, filename in path_to_filename.items():
        by_filename.setdefault(filename, []).append(pathname)
    return {
        filename: tuple(pathnames)
        for filename, pathnames in by_filename.items()
        if len(pathnames) > 1
    }


def archive_filename(hostname: str) -> str:
    return f"framer-export-{hostname}.zip"


def _ascii_hostname(hostname: str) -> str:
    # IDN hosts are compared and served in punycode, as sitemaps and headers carry them.
    if hostname.isascii():
        return hostname
    return hostname.encode("idna").decode("ascii")


def _encode_path(path: str) -> str:
    return quote(path, safe=_PATH_SAFE)


def _format_origin(scheme: str, hostname: str, port: int | None) -> str:
    host = f"[{hostname}]" if ":" in hostname else hostname
    if port is None or port == _DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def _join_url(origin: str, path: str, query: str, fragment: str) -> str:
    url = origin + (path or "/")
    if query:
        url += f"?{query}"
    if fragment:
        url += f"#{fragment}"
    return url
