"""Slot post-processing shared by every booking family."""

from __future__ import annotations
from tracking import t

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from automation.availability.time_utils import filter_future_times_for_today
from domain.results import Slot


def normalize_slots(
    slots: Iterable[Slot],
    target: date,
    now: Optional[datetime] = None,
) -> List[Slot]:
    """Filter, de-duplicate and order raw slots.

    * when ``target`` is the date of ``now``, only slots strictly later than
      ``now`` (hour and minute) are kept;
    * duplicates by ``(time, court)`` collapse to one entry that keeps the
      position of the first occurrence and the value of the last;
    * the result is stably sorted by ``time``.

    Applying the function to its own output returns the same list.
    """
    t('scraping.normalizer.normalize_slots')
    slots = list(slots)

    if now is not None and now.date() == target:
        future = set(filter_future_times_for_today({slot.time for slot in slots}, now))
        slots = [slot for slot in slots if slot.time in future]

    unique: Dict[Tuple[str, str], Slot] = {}
    for slot in slots:
        unique[slot.key] = slot

    return sorted(unique.values(), key=lambda slot: slot.time)
