"""Time parsing helpers for availability extraction."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from infrastructure.constants import TIME_LABEL_PATTERN
from tracking import t

_TIME_RE = re.compile(TIME_LABEL_PATTERN, re.IGNORECASE)


def find_time_label(text: Optional[str]) -> Optional[Tuple[str, str]]:
    """Return ``(HH:MM, matched text)`` for the first time found in ``text``.

    ``"7:30 pm"`` becomes ``"19:30"``, ``"12:00am"`` becomes ``"00:00"`` and
    bare ``"09:00"`` is kept as is. Returns ``None`` when nothing matches.
    """

    t('automation.availability.time_utils.find_time_label')
    if not text:
        return None

    match = _TIME_RE.search(text)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    meridiem = (match.group(3) or "").lower()

    if meridiem == "pm" and hour != 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return f"{hour:02d}:{minute:02d}", match.group(0)


def is_later_than(time_str: str, reference: datetime) -> bool:
    """True when ``time_str`` is strictly after ``reference``'s hour/minute."""

    t('automation.availability.time_utils.is_later_than')
    hour, minute = _parse_time_string(time_str)
    return (hour, minute) > (reference.hour, reference.minute)


def filter_future_times_for_today(
    times: Iterable[str],
    current_time: Optional[datetime] = None,
) -> List[str]:
    """Filter out times that have already passed for the current day."""

    t('automation.availability.time_utils.filter_future_times_for_today')

    reference = current_time or datetime.now()
    future_times: List[str] = []

    for time_str in times:
        try:
            if is_later_than(time_str, reference):
                future_times.append(time_str)
        except ValueError:
            future_times.append(time_str)

    return future_times


def _parse_time_string(time_str: str) -> Tuple[int, int]:
    t('automation.availability.time_utils._parse_time_string')

    if ":" not in time_str:
        raise ValueError(f"Time string '{time_str}' missing colon separator")

    hour_str, minute_str = time_str.strip().split(":")
    hour = int(hour_str)
    minute = int(minute_str)

    if not (0 <= hour <= 23):
        raise ValueError(f"Hour {hour} out of valid range 0-23")
    if not (0 <= minute <= 59):
        raise ValueError(f"Minute {minute} out of valid range 0-59")

    return hour, minute
