"""Date navigation for booking sheets."""

from .engine import FAMILY_STRATEGIES, NavigationOutcome, landing_url, navigate_to_date
from .strategies import STRATEGIES, build_dated_url, days_between

__all__ = [
    "FAMILY_STRATEGIES",
    "NavigationOutcome",
    "STRATEGIES",
    "build_dated_url",
    "days_between",
    "landing_url",
    "navigate_to_date",
]
