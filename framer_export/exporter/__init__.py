"""Site export package."""

from framer_export.exporter.domain.models import ExportResult
from framer_export.exporter.export import run_export, run_export_async, write_export

__all__ = [
    "ExportResult",
    "run_export",
    "run_export_async",
    "write_export",
]
