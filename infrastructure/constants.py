"""
Constants Module - Centralized configuration values
===================================================

PURPOSE: Single source of truth for all constants used across the scraper
PATTERN: Modular constants organized by category
SCOPE: Browser stealth, navigation selectors, extraction heuristics

Environment-driven values live in ``infrastructure.settings``; everything here
is static tuning that only changes alongside the code.
"""
from tracking import t

# Region filter sentinels
ALL_REGIONS = "All Regions"
ALL_REGIONS_ALIASES = frozenset({"all", ALL_REGIONS})
UNKNOWN_REGION = "Unknown"

# Browser stealth configuration
USER_AGENTS = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
)

VIEWPORT = {'width': 1920, 'height': 1080}
BROWSER_LOCALE = 'en-AU'

CHROMIUM_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-blink-features=AutomationControlled',
    '--disable-infobars',
    '--disable-gpu',
    '--no-first-run',
    '--disable-extensions',
    '--disable-background-networking',
    '--mute-audio',
    '--window-size=1280,720',
]

STEALTH_INIT_SCRIPT = """
    Object.defineProperty(navigator, 'webdriver', { get: () => false });
    window.chrome = { runtime: {} };
"""


class BrowserTimeouts:
    """Centralized timeout configuration for different browser operations"""
    PAGE_DEFAULT = 60000        # Default for clicks, selectors and evaluate
    NAVIGATION = 60000          # page.goto / reload
    CALENDAR_VISIBLE = 5000     # Wait for a calendar widget to render
    POST_NAV_WAIT = 2.0         # Seconds to settle after a successful navigation click


class ScraperConfig:
    """Concurrency and pacing defaults for batch scraping"""
    MAX_CONCURRENCY = 8
    BATCH_DELAY_RANGE = (2.0, 3.0)      # Between concurrency groups
    LANDING_DELAY_RANGE = (2.0, 3.0)    # After the first page load
    NEXT_DAY_DELAY_RANGE = (1.2, 1.8)   # Between sequential next-day clicks
    PRE_EXTRACT_DELAY_RANGE = (2.0, 3.0)
    MAX_MONTH_CLICKS = 3
    VENUE_TIMEOUT_SECONDS = 240.0


# Booking family ordering for list_venues (lower scrapes first)
FAMILY_PRIORITY = {
    'tennisvenues': 0,
    'intrac': 1,
    'intrac-sports': 2,
    'intrac-calendar': 3,
    'parklands-sports': 4,
}
UNRANKED_FAMILY_PRIORITY = 999

# Calendar navigation selectors
CALENDAR_WIDGET_SELECTOR = '.ui-datepicker, .calendar, [class*="calendar"], [class*="datepicker"]'

MONTH_DISPLAY_SELECTORS = [
    '.ui-datepicker-title',
    '.datepicker-title',
    '[class*="calendar"] h2',
    '[class*="month-year"]',
]

NEXT_MONTH_SELECTORS = [
    '.ui-datepicker-next',
    '[class*="next"]',
    '[class*="calendar"] button:last-child',
    'button[aria-label*="next" i]',
]

PREVIOUS_MONTH_SELECTORS = [
    '.ui-datepicker-prev',
    '[class*="prev"]',
    '[class*="calendar"] button:first-child',
    'button[aria-label*="prev" i]',
]

CALENDAR_DAY_SELECTORS = [
    'a[href*="date="]',
    'a[href*="day="]',
    'table.ui-datepicker-calendar td',
    '.calendar table td',
    '[class*="calendar"] table td',
    '[class*="datepicker"] td',
    'table td[data-handler="selectDay"]',
    '.calendar a',
    '.datepicker a',
    '[data-date]',
]

DISABLED_DAY_CLASSES = frozenset({
    'ui-state-disabled',
    'disabled',
    'unavailable',
    'ui-datepicker-other-month',
})

NEXT_DAY_SELECTORS = [
    'a[title*="next" i]',
    'button[title*="next" i]',
    'a[aria-label*="next" i]',
    'button[aria-label*="next" i]',
    '[data-action*="next" i]',
    '.next-day',
    '.nextDay',
    '.fc-next-button',
]

NEXT_ARROW_TEXTS = frozenset({'>', '→', '-->', '›'})

# Attribute used to mark elements chosen inside page.evaluate for a locator click
NAV_TAG_ATTRIBUTE = 'data-courtfinder-nav'

# Extraction heuristics
BLANK_BACKGROUNDS = frozenset({
    '',
    'white',
    'transparent',
    'rgb(255, 255, 255)',
    'rgba(255, 255, 255, 1)',
    'rgba(0, 0, 0, 0)',
})

BLANK_BGCOLOR_ATTRIBUTES = frozenset({'', '#ffffff', 'white'})

STRICT_WHITE_BACKGROUNDS = frozenset({
    'white',
    'rgb(255, 255, 255)',
    'rgba(255, 255, 255, 1)',
})

WARNING_COLOR_BAND = {
    'red_min_exclusive': 220,
    'green_min': 100,
    'green_max': 170,
    'blue_max_exclusive': 50,
}

MAX_COURT_LABEL_LENGTH = 50
MAX_GRID_CELL_TEXT_LENGTH = 30

CSS_ARTIFACT_MARKERS = ('{', '}', 'table.', 'width:', 'border-', 'padding:')

SURFACE_SUFFIX_PATTERNS = [
    r'\s+(syn|synthetic)\s+(grass|clay|court)',
    r'\s+hard\s+court',
    r'\s+grass\s+court',
    r'\s+clay\s+court',
]

TIME_LABEL_PATTERN = r'(\d{1,2}):(\d{2})\s*(am|pm)?'

# Built-in postcode -> region table used when the reference CSV is unavailable
FALLBACK_POSTCODE_REGIONS = {
    '2010': 'Inner City',
    '2015': 'Inner South',
    '2018': 'Inner South',
    '2021': 'Eastern Suburbs',
    '2022': 'Eastern Suburbs',
    '2025': 'Eastern Suburbs',
    '2026': 'Eastern Suburbs',
    '2030': 'Eastern Suburbs',
    '2031': 'Eastern Suburbs',
    '2032': 'Eastern Suburbs',
    '2033': 'Eastern Suburbs',
    '2034': 'Eastern Suburbs',
    '2035': 'Eastern Suburbs',
    '2037': 'Inner West',
}

PO_BOX_REGION = '(PO Boxes)'


def family_priority(family_value: str) -> int:
    """Return the scrape ordering rank for a booking family tag"""
    t('infrastructure.constants.family_priority')
    return FAMILY_PRIORITY.get(family_value, UNRANKED_FAMILY_PRIORITY)
