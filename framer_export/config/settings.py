# Export runtime settings, overridable through the environment or a .env file.

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from framer_export.config.logger_config import logger

load_dotenv()

ENV_PREFIX = "FRAMER_EXPORT_"


@dataclass(frozen=True)
class ExportSettings:
    concurrency: int = 3
    navigation_timeout_ms: int = 120_000
    settle_delay_seconds: float = 1.0
    sitemap_timeout_seconds: float = 30.0
    headless: bool = True


def load_settings() -> ExportSettings:
    defaults = ExportSettings()
    return ExportSettings(
        concurrency=max(1, _read_int("CONCURRENCY", defaults.concurrency)),
        navigation_timeout_ms=_read_int("NAVIGATION_TIMEOUT_MS", defaults.navigation_timeout_ms),
        settle_delay_seconds=_read_float("SETTLE_DELAY_SECONDS", defaults.settle_delay_seconds),
        sitemap_timeout_seconds=_read_float("SITEMAP_TIMEOUT_SECONDS", defaults.sitemap_timeout_seconds),
        headless=_read_bool("HEADLESS", defaults.headless),
    )


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid {}{}={!r}, using {}", ENV_PREFIX, name, raw, default)
        return default


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid {}{}={!r}, using {}", ENV_PREFIX, name, raw, default)
        return default


def _read_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")
