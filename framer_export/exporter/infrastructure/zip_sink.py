import io
import zipfile

from framer_export.config.logger_config import logger


class ZipArchiveSink:
    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self.compression = compression
        self._entries: dict[str, bytes] = {}

    @property
    def filenames(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def write_entry(self, filename: str, content: str) -> None:
        if filename in self._entries:
            logger.warning("Archive entry {} already exists and will be overwritten", filename)
        self._entries[filename] = content.encode("utf-8")

    def finalize(self) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=self.compression) as archive:
            for filename, data in self._entries.items():
                archive.writestr(filename, data)
        return buffer.getvalue()
