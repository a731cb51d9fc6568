from dataclasses import dataclass


@dataclass(frozen=True)
class SiteUrl:
    url: str
    origin: str
    hostname: str


@dataclass(frozen=True)
class Viewport:
    width: int = 1440
    height: int = 1024
    device_scale_factor: float = 1.0


@dataclass(frozen=True)
class ExportEntry:
    url: str
    filename: str
    content: str


@dataclass(frozen=True)
class ExportResult:
    site_url: str
    origin: str
    archive_name: str
    content: bytes
    filenames: tuple[str, ...]

    @property
    def page_count(self) -> int:
        return len(self.filenames)
