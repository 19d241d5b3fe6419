"""Date navigation strategies for booking sheets.

Every strategy is an async callable ``(page, venue, target, today) -> bool``
that tries to move the page to ``target`` and reports whether it believes it
succeeded. Candidate elements are collected in the page and tagged with
``NAV_TAG_ATTRIBUTE``; the choice of which one to click is made in Python and
the click goes through a Playwright locator.
"""

from __future__ import annotations
from tracking import t

import itertools
import logging
import re
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from playwright.async_api import Page

from automation.browser.human import human_delay
from domain.venues import Venue
from infrastructure.constants import (
    CALENDAR_DAY_SELECTORS,
    CALENDAR_WIDGET_SELECTOR,
    DISABLED_DAY_CLASSES,
    MONTH_DISPLAY_SELECTORS,
    NAV_TAG_ATTRIBUTE,
    NEXT_ARROW_TEXTS,
    NEXT_DAY_SELECTORS,
    NEXT_MONTH_SELECTORS,
    PREVIOUS_MONTH_SELECTORS,
    BrowserTimeouts,
    ScraperConfig,
)

logger = logging.getLogger(__name__)

Candidate = Dict[str, Any]

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_NEXT_DAY_TEXT_RE = re.compile(r"Next\s*Day\s*[>›]?", re.IGNORECASE)
_YEAR_RE = re.compile(r"\d{4}")
_tag_counter = itertools.count(1)

_COLLECT_CANDIDATES_SCRIPT = r"""(args) => {
    const attr = args.attribute;
    const seen = new Set();
    const records = [];
    let index = 0;
    const tag = (el) => {
        if (!el) return null;
        if (!el.hasAttribute(attr)) {
            el.setAttribute(attr, `${args.prefix}-${index++}`);
        }
        return el.getAttribute(attr);
    };
    for (const selector of args.selectors) {
        let matches = [];
        try {
            matches = Array.from(document.querySelectorAll(selector));
        } catch (e) {
            continue;
        }
        for (const el of matches) {
            if (seen.has(el)) continue;
            seen.add(el);
            const text = (el.textContent || '').trim();
            if (args.maxText && text.length > args.maxText) continue;
            const link = el.tagName === 'A' ? null : el.querySelector('a');
            const clickable = (el.tagName === 'A' || el.tagName === 'BUTTON') ? el : el.closest('a, button');
            records.push({
                id: tag(el),
                selector: selector,
                tag: el.tagName,
                text: text,
                href: el.getAttribute('href') || '',
                className: typeof el.className === 'string' ? el.className : '',
                ariaLabel: el.getAttribute('aria-label') || '',
                dataDate: el.getAttribute('data-date') || '',
                visible: el.offsetParent !== null,
                disabledAttr: el.hasAttribute('disabled') || el.getAttribute('aria-disabled') === 'true'
                    || el.hasAttribute('data-other-month'),
                linkId: link ? tag(link) : null,
                linkVisible: link ? link.offsetParent !== null : false,
                clickableId: clickable ? tag(clickable) : null,
                clickableVisible: clickable ? clickable.offsetParent !== null : false,
            });
        }
    }
    return records;
}
"""

_MONTH_HEADER_SCRIPT = r"""(selectors) => {
    for (const selector of selectors) {
        const el = document.querySelector(selector);
        if (el && el.textContent.trim()) return el.textContent.trim();
    }
    return null;
}
"""


# ----------------------------------------------------------------------
# Pure helpers
# ----------------------------------------------------------------------
def days_between(today: date, target: date) -> int:
    """Whole days from ``today`` to ``target`` (negative for the past)."""
    t('automation.navigation.strategies.days_between')
    return (target - today).days


def build_dated_url(url: str, target: date) -> str:
    """Append ``date=YYYY-MM-DD`` with ``?`` or ``&`` as appropriate."""
    t('automation.navigation.strategies.build_dated_url')
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}date={target.isoformat()}"


def parse_month_header(text: Optional[str], default_year: int) -> Optional[Tuple[int, int]]:
    """Return ``(year, month)`` from a header such as ``"November 2025"``."""
    t('automation.navigation.strategies.parse_month_header')
    if not text:
        return None
    month = next((index for index, name in enumerate(MONTH_NAMES, start=1) if name in text), None)
    if month is None:
        return None
    year_match = _YEAR_RE.search(text)
    year = int(year_match.group(0)) if year_match else default_year
    return year, month


def month_delta(current: Tuple[int, int], target: date) -> int:
    t('automation.navigation.strategies.month_delta')
    year, month = current
    return (target.year - year) * 12 + (target.month - month)


def date_markers(target: date) -> Tuple[str, str]:
    """The two full-date encodings recognised in calendar links."""
    t('automation.navigation.strategies.date_markers')
    return target.isoformat(), target.strftime("%d/%m/%Y")


def _is_disabled(candidate: Candidate) -> bool:
    classes = set((candidate.get("className") or "").split())
    return bool(candidate.get("disabledAttr")) or bool(classes & DISABLED_DAY_CLASSES)


def _click_target(candidate: Candidate) -> Optional[str]:
    if candidate.get("linkId") and candidate.get("linkVisible"):
        return candidate["linkId"]
    return candidate.get("id")


def choose_calendar_day(candidates: Iterable[Candidate], target: date) -> Optional[str]:
    """Pick the element to click for ``target`` inside a calendar widget.

    A visible, enabled link that encodes the full date wins; otherwise the
    first visible, enabled element whose text is exactly the day number (clicking
    its inner link when it has one).
    """
    t('automation.navigation.strategies.choose_calendar_day')
    candidates = list(candidates)
    markers = date_markers(target)
    for candidate in candidates:
        if not candidate.get("visible") or _is_disabled(candidate):
            continue
        encoded = (candidate.get("href") or "") + " " + (candidate.get("dataDate") or "")
        if any(marker in encoded for marker in markers):
            return _click_target(candidate)

    day_text = str(target.day)
    for candidate in candidates:
        if candidate.get("text") != day_text:
            continue
        if not candidate.get("visible") or _is_disabled(candidate):
            continue
        return _click_target(candidate)
    return None


def choose_day_link(candidates: Iterable[Candidate], day: int) -> Optional[str]:
    """Visible link with exact day text, preferring ones whose href has ``date=``/``day=``."""
    t('automation.navigation.strategies.choose_day_link')
    matches = [c for c in candidates if c.get("text") == str(day) and c.get("visible")]
    for candidate in matches:
        href = candidate.get("href") or ""
        if "date=" in href or "day=" in href:
            return candidate.get("id")
    return matches[0].get("id") if matches else None


def choose_clickable_day(candidates: Iterable[Candidate], day: int) -> Optional[str]:
    t('automation.navigation.strategies.choose_clickable_day')
    for candidate in candidates:
        if candidate.get("text") == str(day) and candidate.get("visible") and not _is_disabled(candidate):
            return candidate.get("id")
    return None


def choose_next_day_control(
    text_candidates: Iterable[Candidate],
    selector_candidates: Iterable[Candidate],
) -> Optional[str]:
    """A "Next Day" / arrow control by text first, then by known selectors."""
    t('automation.navigation.strategies.choose_next_day_control')
    for candidate in text_candidates:
        text = candidate.get("text") or ""
        if (_NEXT_DAY_TEXT_RE.search(text) or text in NEXT_ARROW_TEXTS) and candidate.get("clickableId"):
            if candidate.get("clickableVisible"):
                return candidate["clickableId"]
    for candidate in selector_candidates:
        if candidate.get("visible"):
            return candidate.get("id")
    return None


def first_visible(candidates: Iterable[Candidate]) -> Optional[str]:
    t('automation.navigation.strategies.first_visible')
    for candidate in candidates:
        if candidate.get("visible"):
            return candidate.get("id")
    return None


# ----------------------------------------------------------------------
# Page access
# ----------------------------------------------------------------------
async def collect_candidates(
    page: Page,
    selectors: Sequence[str],
    *,
    max_text: int = 0,
) -> List[Candidate]:
    """Tag and describe every element matching ``selectors`` in selector order."""
    t('automation.navigation.strategies.collect_candidates')
    prefix = f"nav{next(_tag_counter)}"
    return await page.evaluate(
        _COLLECT_CANDIDATES_SCRIPT,
        {
            "selectors": list(selectors),
            "prefix": prefix,
            "attribute": NAV_TAG_ATTRIBUTE,
            "maxText": max_text,
        },
    ) or []


async def click_candidate(page: Page, candidate_id: str) -> None:
    t('automation.navigation.strategies.click_candidate')
    await page.locator(f'[{NAV_TAG_ATTRIBUTE}="{candidate_id}"]').first.click()


async def read_month_header(page: Page) -> Optional[str]:
    t('automation.navigation.strategies.read_month_header')
    return await page.evaluate(_MONTH_HEADER_SCRIPT, list(MONTH_DISPLAY_SELECTORS))


async def _settle() -> None:
    wait = BrowserTimeouts.POST_NAV_WAIT
    await human_delay((wait, wait + 1.0))


# ----------------------------------------------------------------------
# Strategies
# ----------------------------------------------------------------------
async def calendar_strategy(page: Page, venue: Venue, target: date, today: date) -> bool:
    """Align the widget's month, then click the target day."""
    t('automation.navigation.strategies.calendar_strategy')
    try:
        await page.wait_for_selector(
            CALENDAR_WIDGET_SELECTOR,
            state="visible",
            timeout=BrowserTimeouts.CALENDAR_VISIBLE,
        )
    except Exception:
        logger.debug("%s: calendar widget not visible, continuing anyway", venue.key)

    current = parse_month_header(await read_month_header(page), today.year)
    if current is not None:
        delta = month_delta(current, target)
        if delta:
            selectors = NEXT_MONTH_SELECTORS if delta > 0 else PREVIOUS_MONTH_SELECTORS
            for step in range(min(abs(delta), ScraperConfig.MAX_MONTH_CLICKS)):
                control = first_visible(await collect_candidates(page, selectors))
                if control is None:
                    logger.debug("%s: no month control found", venue.key)
                    break
                await click_candidate(page, control)
                logger.debug("%s: month step %s/%s", venue.key, step + 1, abs(delta))
                await human_delay((0.5, 0.8))

    candidates = await collect_candidates(page, CALENDAR_DAY_SELECTORS, max_text=40)
    choice = choose_calendar_day(candidates, target)
    if choice is None:
        logger.info("%s: calendar day %s not found", venue.key, target.day)
        return False

    await click_candidate(page, choice)
    await _settle()
    return True


async def next_day_strategy(page: Page, venue: Venue, target: date, today: date) -> bool:
    """Click a "Next Day" control once per day of difference."""
    t('automation.navigation.strategies.next_day_strategy')
    days = days_between(today, target)
    for step in range(days):
        await human_delay(ScraperConfig.NEXT_DAY_DELAY_RANGE)
        text_candidates = await collect_candidates(page, ("a", "button", "span", "div"), max_text=20)
        selector_candidates = await collect_candidates(page, NEXT_DAY_SELECTORS)
        control = choose_next_day_control(text_candidates, selector_candidates)
        if control is None:
            logger.warning("%s: next-day control missing at step %s/%s", venue.key, step + 1, days)
            return False
        await click_candidate(page, control)
        await _settle()
        logger.debug("%s: advanced day %s/%s", venue.key, step + 1, days)
    return True


async def date_url_strategy(page: Page, venue: Venue, target: date, today: date) -> bool:
    """Load the venue URL with an explicit ``date`` parameter."""
    t('automation.navigation.strategies.date_url_strategy')
    dated_url = build_dated_url(venue.url, target)
    if page.url == dated_url:
        return True
    await page.goto(dated_url, wait_until="domcontentloaded")
    await human_delay(ScraperConfig.LANDING_DELAY_RANGE)
    return True


async def day_link_strategy(page: Page, venue: Venue, target: date, today: date) -> bool:
    """Click a mini-calendar link whose text is the day number."""
    t('automation.navigation.strategies.day_link_strategy')
    choice = choose_day_link(await collect_candidates(page, ("a",), max_text=2), target.day)
    if choice is None:
        logger.info("%s: no day link for %s", venue.key, target.day)
        return False
    await click_candidate(page, choice)
    await _settle()
    return True


async def clickable_day_strategy(page: Page, venue: Venue, target: date, today: date) -> bool:
    """Click any enabled link, button or handler-bearing element showing the day number."""
    t('automation.navigation.strategies.clickable_day_strategy')
    candidates = await collect_candidates(page, ("a", "button", "[onclick]"), max_text=2)
    choice = choose_clickable_day(candidates, target.day)
    if choice is None:
        logger.info("%s: no clickable day %s", venue.key, target.day)
        return False
    await click_candidate(page, choice)
    await _settle()
    return True


STRATEGIES = {
    "calendar": calendar_strategy,
    "next_day": next_day_strategy,
    "date_url": date_url_strategy,
    "day_link": day_link_strategy,
    "clickable_day": clickable_day_strategy,
}
