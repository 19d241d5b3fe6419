"""Availability extraction for booking sheets."""

from .extractors import EXTRACTORS, extract_slots
from .time_utils import filter_future_times_for_today, find_time_label

__all__ = [
    "EXTRACTORS",
    "extract_slots",
    "filter_future_times_for_today",
    "find_time_label",
]
