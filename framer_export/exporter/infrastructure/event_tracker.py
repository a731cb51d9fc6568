from typing import Any

from framer_export.config.logger_config import logger


class LoguruEventTracker:
    """Event port backed by structured loguru records (``extra["event"]``)."""

    def __init__(self, level: str = "INFO") -> None:
        self.level = level

    def track(self, event_name: str, data: dict[str, Any]) -> None:
        logger.bind(event=event_name, event_data=data).log(self.level, "event {} {}", event_name, data)
