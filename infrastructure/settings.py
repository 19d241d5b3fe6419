"""Centralized application settings.

All runtime configuration is read here once and exposed as an immutable
:class:`AppSettings` snapshot. Modules receive the snapshot (or call
:func:`get_settings`) instead of reading ``os.environ`` themselves.
"""

from __future__ import annotations
from tracking import t

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from . import constants as scraper_constants

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Normalize environment strings such as "true"/"1" into booleans."""
    t('infrastructure.settings._to_bool')

    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: Optional[str], default: int) -> int:
    t('infrastructure.settings._to_int')
    try:
        return int(value) if value not in (None, "") else default
    except (TypeError, ValueError):
        return default


def _project_path(value: str) -> str:
    """Anchor relative paths at the project root instead of the working directory."""
    t('infrastructure.settings._project_path')
    path = Path(value).expanduser()
    return str(path if path.is_absolute() else PROJECT_ROOT / path)


def _to_float(value: Optional[str], default: float) -> float:
    t('infrastructure.settings._to_float')
    try:
        return float(value) if value not in (None, "") else default
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class AppSettings:
    """Immutable snapshot of high-level configuration values."""

    production_mode: bool
    headless: bool
    max_concurrency: int
    page_timeout_ms: int
    navigation_timeout_ms: int
    venue_timeout_seconds: float
    batch_delay_range: Tuple[float, float]
    timezone: str
    output_directory: str
    screenshot_directory: str
    save_screenshots: bool
    postcode_csv: str


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Load configuration from the environment and fall back to defaults."""
    t('infrastructure.settings.load_settings')

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    production_mode = _to_bool(env.get("PRODUCTION_MODE"), default=False)
    headless = _to_bool(env.get("HEADLESS"), default=True)

    max_concurrency = max(1, _to_int(env.get("MAX_CONCURRENCY"), scraper_constants.ScraperConfig.MAX_CONCURRENCY))
    page_timeout_ms = _to_int(env.get("PAGE_TIMEOUT_MS"), scraper_constants.BrowserTimeouts.PAGE_DEFAULT)
    navigation_timeout_ms = _to_int(env.get("NAVIGATION_TIMEOUT_MS"), scraper_constants.BrowserTimeouts.NAVIGATION)
    venue_timeout_seconds = _to_float(
        env.get("VENUE_TIMEOUT_SECONDS"),
        scraper_constants.ScraperConfig.VENUE_TIMEOUT_SECONDS,
    )

    default_min, default_max = scraper_constants.ScraperConfig.BATCH_DELAY_RANGE
    delay_min = _to_float(env.get("BATCH_DELAY_MIN"), default_min)
    delay_max = _to_float(env.get("BATCH_DELAY_MAX"), default_max)
    if delay_max < delay_min:
        delay_min, delay_max = delay_max, delay_min

    return AppSettings(
        production_mode=production_mode,
        headless=headless,
        max_concurrency=max_concurrency,
        page_timeout_ms=page_timeout_ms,
        navigation_timeout_ms=navigation_timeout_ms,
        venue_timeout_seconds=venue_timeout_seconds,
        batch_delay_range=(delay_min, delay_max),
        timezone=env.get("SCRAPER_TIMEZONE", "Australia/Sydney"),
        output_directory=env.get("OUTPUT_DIRECTORY", "data/snapshots"),
        screenshot_directory=env.get("SCREENSHOT_DIRECTORY", "screenshots"),
        save_screenshots=_to_bool(env.get("SAVE_SCREENSHOTS"), default=True),
        postcode_csv=_project_path(env.get("POSTCODE_CSV") or "data/sydneypostcodes.csv"),
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached :class:`AppSettings` instance."""
    t('infrastructure.settings.get_settings')

    return load_settings()
