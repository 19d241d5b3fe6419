"""Ranked strategy chains that move a venue page to the requested date."""

from __future__ import annotations
from tracking import t

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Tuple

from playwright.async_api import Page

from domain.venues import BookingFamily, Venue

from . import strategies
from .strategies import build_dated_url, days_between

logger = logging.getLogger(__name__)

FAMILY_STRATEGIES: Dict[BookingFamily, Tuple[str, ...]] = {
    BookingFamily.TENNISVENUES: ("calendar", "next_day"),
    BookingFamily.INTRAC: ("date_url",),
    BookingFamily.INTRAC_SPORTS: ("date_url",),
    BookingFamily.INTRAC_CALENDAR: ("day_link",),
    BookingFamily.PARKLANDS_SPORTS: ("clickable_day", "next_day"),
}

URL_ADDRESSABLE_FAMILIES = frozenset({BookingFamily.INTRAC, BookingFamily.INTRAC_SPORTS})


@dataclass(frozen=True)
class NavigationOutcome:
    """Whether the page is believed to show the target date, and how it got there."""

    confirmed: bool
    strategy: Optional[str]
    days_diff: int


def landing_url(venue: Venue, target: date, today: date) -> str:
    """First URL to load: the dated URL for URL-addressable families, else the venue URL."""
    t('automation.navigation.engine.landing_url')
    if venue.family in URL_ADDRESSABLE_FAMILIES and days_between(today, target) > 0:
        return build_dated_url(venue.url, target)
    return venue.url


async def navigate_to_date(page: Page, venue: Venue, target: date, today: date) -> NavigationOutcome:
    """Try the family's strategies in order until one reports success.

    Running out of strategies is not an error: the caller extracts whatever
    the page shows and records that navigation was not confirmed.
    """
    t('automation.navigation.engine.navigate_to_date')
    days_diff = days_between(today, target)
    if days_diff <= 0:
        return NavigationOutcome(confirmed=True, strategy=None, days_diff=days_diff)

    chain = FAMILY_STRATEGIES.get(venue.family, ())
    for name in chain:
        strategy = strategies.STRATEGIES[name]
        try:
            if await strategy(page, venue, target, today):
                logger.info("%s: reached %s via %s", venue.key, target.isoformat(), name)
                return NavigationOutcome(confirmed=True, strategy=name, days_diff=days_diff)
        except Exception as exc:
            logger.warning("%s: %s navigation raised %s", venue.key, name, exc)
        logger.info("%s: %s navigation did not reach %s", venue.key, name, target.isoformat())

    logger.warning(
        "%s: navigation to %s unconfirmed after %s strategies",
        venue.key,
        target.isoformat(),
        len(chain),
    )
    return NavigationOutcome(confirmed=False, strategy=None, days_diff=days_diff)
