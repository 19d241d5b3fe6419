"""Pure colour, label and URL heuristics applied to raw DOM cell records."""

from __future__ import annotations

import re
from typing import Optional, Tuple
from urllib.parse import urljoin

from infrastructure.constants import (
    BLANK_BACKGROUNDS,
    BLANK_BGCOLOR_ATTRIBUTES,
    CSS_ARTIFACT_MARKERS,
    MAX_COURT_LABEL_LENGTH,
    STRICT_WHITE_BACKGROUNDS,
    SURFACE_SUFFIX_PATTERNS,
    WARNING_COLOR_BAND,
)
from tracking import t

_RGB_RE = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)")
_COURT_NUMBER_RE = re.compile(r"Court\s*(\d+)", re.IGNORECASE)
_SURFACE_RES = [re.compile(pattern, re.IGNORECASE) for pattern in SURFACE_SUFFIX_PATTERNS]
_LEADING_TIME_RE = re.compile(r"^\d{1,2}:\d{2}")


def _normalize_color(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def is_blank_background(color: Optional[str]) -> bool:
    """White, transparent or unset computed background."""

    t('automation.availability.heuristics.is_blank_background')
    return _normalize_color(color) in BLANK_BACKGROUNDS


def is_strict_white(color: Optional[str]) -> bool:
    t('automation.availability.heuristics.is_strict_white')
    return _normalize_color(color) in STRICT_WHITE_BACKGROUNDS


def is_blank_bgcolor_attribute(value: Optional[str]) -> bool:
    """``bgcolor`` attribute of ``#ffffff``, ``white`` or missing."""

    t('automation.availability.heuristics.is_blank_bgcolor_attribute')
    return _normalize_color(value) in BLANK_BGCOLOR_ATTRIBUTES


def parse_rgb(color: Optional[str]) -> Optional[Tuple[int, int, int]]:
    t('automation.availability.heuristics.parse_rgb')
    match = _RGB_RE.search(color or "")
    if not match:
        return None
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def is_warning_color(color: Optional[str]) -> bool:
    """Orange booked marker: r > 220, 100 <= g <= 170, b < 50."""

    t('automation.availability.heuristics.is_warning_color')
    rgb = parse_rgb(color)
    if rgb is None:
        return False
    red, green, blue = rgb
    return (
        red > WARNING_COLOR_BAND['red_min_exclusive']
        and WARNING_COLOR_BAND['green_min'] <= green <= WARNING_COLOR_BAND['green_max']
        and blue < WARNING_COLOR_BAND['blue_max_exclusive']
    )


def clean_court_label(label: Optional[str]) -> str:
    """Strip surface suffixes: ``"Court 2 syn grass"`` -> ``"Court 2"``."""

    t('automation.availability.heuristics.clean_court_label')
    cleaned = (label or "").strip()
    for pattern in _SURFACE_RES:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()


def is_valid_court_label(label: str) -> bool:
    """Reject empty, overlong and CSS-polluted header text."""

    t('automation.availability.heuristics.is_valid_court_label')
    if not label or len(label) > MAX_COURT_LABEL_LENGTH:
        return False
    return not any(marker in label for marker in CSS_ARTIFACT_MARKERS)


def ensure_court_prefix(label: str) -> str:
    t('automation.availability.heuristics.ensure_court_prefix')
    if "court" in label.lower():
        return label
    return f"Court {label}"


def looks_like_time(text: Optional[str]) -> bool:
    t('automation.availability.heuristics.looks_like_time')
    return bool(_LEADING_TIME_RE.match((text or "").strip()))


def court_number_from_text(text: Optional[str]) -> Optional[str]:
    """Return the digits of the first ``Court N`` in ``text``."""

    t('automation.availability.heuristics.court_number_from_text')
    match = _COURT_NUMBER_RE.search(text or "")
    return match.group(1) if match else None


def absolute_url(href: Optional[str], page_url: str) -> Optional[str]:
    """Resolve ``href`` against the page URL; ``None`` when there is no link."""

    t('automation.availability.heuristics.absolute_url')
    if not href:
        return None
    href = href.strip()
    if href.lower().startswith(("javascript:", "#")):
        return None
    return urljoin(page_url, href)
