"""Scrape result contracts shared by extractors, orchestrator and persistence."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from .venues import Venue


@dataclass(frozen=True)
class Slot:
    """One available (time, court) unit on a venue's booking sheet."""

    time: str
    time_display: str
    court: str
    booking_url: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.time, self.court)

    def to_record(self) -> Dict[str, object]:
        record: Dict[str, object] = {
            "time": self.time,
            "timeDisplay": self.time_display,
            "court": self.court,
        }
        if self.booking_url:
            record["bookingUrl"] = self.booking_url
        return record


@dataclass(frozen=True)
class VenueResult:
    """Outcome of scraping one venue for one date."""

    venue: Venue
    region: str
    target_date: date
    success: bool
    slots: Tuple[Slot, ...] = field(default_factory=tuple)
    error: Optional[str] = None
    navigation_confirmed: bool = True
    scraped_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def succeeded(
        cls,
        venue: Venue,
        region: str,
        target_date: date,
        slots: List[Slot],
        *,
        navigation_confirmed: bool = True,
        scraped_at: Optional[datetime] = None,
    ) -> "VenueResult":
        return cls(
            venue=venue,
            region=region,
            target_date=target_date,
            success=True,
            slots=tuple(slots),
            navigation_confirmed=navigation_confirmed,
            scraped_at=scraped_at or datetime.now(),
        )

    @classmethod
    def failed(
        cls,
        venue: Venue,
        region: str,
        target_date: date,
        error: str,
        *,
        scraped_at: Optional[datetime] = None,
    ) -> "VenueResult":
        return cls(
            venue=venue,
            region=region,
            target_date=target_date,
            success=False,
            error=error or "Unknown error",
            navigation_confirmed=False,
            scraped_at=scraped_at or datetime.now(),
        )

    def to_record(self) -> Dict[str, object]:
        """Serialize to the snapshot record consumed by the API layer."""
        record: Dict[str, object] = {
            "venueKey": self.venue.key,
            "club": self.venue.name,
            "address": self.venue.address,
            "postcode": self.venue.postcode,
            "region": self.region,
            "phone": self.venue.phone,
            "website": self.venue.url,
            "type": self.venue.family.value,
            "date": self.target_date.isoformat(),
            "totalCourts": self.venue.courts,
            "surface": self.venue.surface,
            "availableSlots": [slot.to_record() for slot in self.slots],
            "scrapedAt": self.scraped_at.isoformat(),
            "success": self.success,
            "navigationConfirmed": self.navigation_confirmed,
        }
        if self.error:
            record["error"] = self.error
        return record


@dataclass(frozen=True)
class Snapshot:
    """All venue results for one (date, region filter) scrape run."""

    target_date: date
    region: Optional[str]
    results: Tuple[VenueResult, ...]
    started_at: datetime
    finished_at: datetime

    @property
    def total_slots(self) -> int:
        return sum(len(result.slots) for result in self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    def to_records(self) -> List[Dict[str, object]]:
        return [result.to_record() for result in self.results]
