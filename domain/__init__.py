"""Venue catalog, region lookup and scrape result models."""

from .venues import VENUE_CATALOG, BookingFamily, Venue, VenueCatalog
from .regions import RegionIndex, available_regions, get_region_index
from .results import Slot, Snapshot, VenueResult

__all__ = [
    "VENUE_CATALOG",
    "BookingFamily",
    "Venue",
    "VenueCatalog",
    "RegionIndex",
    "available_regions",
    "get_region_index",
    "Slot",
    "Snapshot",
    "VenueResult",
]
