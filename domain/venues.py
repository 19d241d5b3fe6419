"""Static venue catalog and booking-family definitions."""

from __future__ import annotations
from tracking import t

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple


class BookingFamily(Enum):
    """Booking system a venue runs on; selects navigation and extraction."""

    TENNISVENUES = "tennisvenues"
    INTRAC = "intrac"
    INTRAC_SPORTS = "intrac-sports"
    INTRAC_CALENDAR = "intrac-calendar"
    PARKLANDS_SPORTS = "parklands-sports"


@dataclass(frozen=True)
class Venue:
    """Immutable catalog entry for one bookable venue."""

    key: str
    name: str
    family: BookingFamily
    url: str
    address: str
    postcode: str
    phone: str
    courts: int
    surface: str
    location: Optional[str] = None


class VenueCatalog:
    """Read-only, insertion-ordered collection of venues keyed by venue key."""

    def __init__(self, venues: Tuple[Venue, ...]) -> None:
        t('domain.venues.VenueCatalog.__init__')
        entries = {}
        for venue in venues:
            if venue.key in entries:
                raise ValueError(f"Duplicate venue key: {venue.key}")
            entries[venue.key] = venue
        self._venues: Mapping[str, Venue] = MappingProxyType(entries)

    def __getitem__(self, key: str) -> Venue:
        t('domain.venues.VenueCatalog.__getitem__')
        return self._venues[key]

    def __contains__(self, key: object) -> bool:
        return key in self._venues

    def __iter__(self) -> Iterator[Venue]:
        return iter(self._venues.values())

    def __len__(self) -> int:
        return len(self._venues)

    def keys(self) -> Tuple[str, ...]:
        t('domain.venues.VenueCatalog.keys')
        return tuple(self._venues.keys())

    def get(self, key: str) -> Optional[Venue]:
        t('domain.venues.VenueCatalog.get')
        return self._venues.get(key)


VENUES: Tuple[Venue, ...] = (
    Venue(
        key="coogeeBeach",
        name="Coogee Beach Tennis",
        family=BookingFamily.TENNISVENUES,
        url="https://www.tennisvenues.com.au/booking/eastern-suburbs-tennis-club",
        address="Cnr Bream & Brook St, Coogee NSW 2034",
        postcode="2034",
        phone="(02) 9665 7360",
        courts=5,
        surface="Synthetic Grass",
    ),
    Venue(
        key="lathamPark",
        name="Latham Park Tennis Centre",
        family=BookingFamily.TENNISVENUES,
        url="https://www.tennisvenues.com.au/booking/latham-park-tc",
        address="3 Henning Ave, South Coogee NSW 2034",
        postcode="2034",
        phone="(02) 9344 3350",
        courts=6,
        surface="Synthetic Grass/Hard",
    ),
    Venue(
        key="eastsideTennis",
        name="Eastside Tennis Centre",
        family=BookingFamily.TENNISVENUES,
        url="https://www.tennisvenues.com.au/booking/eastside-tennis-centre?mobileViewDisabled=true",
        address="1 Court Ave, Kingsford NSW 2032",
        postcode="2032",
        phone="0493 496 426",
        courts=8,
        surface="Synthetic/Hard/Clay",
    ),
    Venue(
        key="snapePark",
        name="Snape Park Tennis Club",
        family=BookingFamily.TENNISVENUES,
        url="https://www.tennisvenues.com.au/booking/snape-park-tc",
        address="15 Snape Street, Maroubra NSW 2035",
        postcode="2035",
        phone="(02) 9344 3424",
        courts=6,
        surface="Synthetic Grass/Hard",
    ),
    Venue(
        key="cooperPark",
        name="Cooper Park Tennis Club",
        family=BookingFamily.TENNISVENUES,
        url="https://www.tennisvenues.com.au/booking/cooper-park-tc",
        address="1 Bunna Place (off Suttie Road), Woollahra NSW 2025",
        postcode="2025",
        phone="(02) 9389 3100",
        courts=8,
        surface="Synthetic Grass",
    ),
    Venue(
        key="jensensPaddington",
        name="Prince Alfred Park",
        family=BookingFamily.INTRAC,
        url="https://jensenstennis.intrac.com.au/tennis/book.cfm?facility=1",
        address="Chalmers Street, Prince Alfred Park, Surry Hills NSW 2010",
        postcode="2010",
        phone="(02) 9331 3114",
        courts=4,
        surface="Synthetic Grass",
    ),
    Venue(
        key="jensensCentennial",
        name="Alexandria",
        family=BookingFamily.INTRAC,
        url="https://jensenstennis.intrac.com.au/tennis/book.cfm?facility=2",
        address="Park Road, Alexandria Park, Alexandria NSW 2015",
        postcode="2015",
        phone="(02) 9331 3114",
        courts=6,
        surface="Synthetic Grass",
    ),
    Venue(
        key="jensensCoogee",
        name="Beaconsfield",
        family=BookingFamily.INTRAC,
        url="https://jensenstennis.intrac.com.au/tennis/book.cfm?facility=3",
        address="William Street, Beaconsfield Park, Beaconsfield NSW 2015",
        postcode="2015",
        phone="(02) 9331 3114",
        courts=4,
        surface="Synthetic Grass",
    ),
    Venue(
        key="jensensRandwick",
        name="Glebe",
        family=BookingFamily.INTRAC,
        url="https://jensenstennis.intrac.com.au/tennis/book.cfm?facility=4",
        address="John Street, St James Park, Glebe NSW 2037",
        postcode="2037",
        phone="(02) 9331 3114",
        courts=4,
        surface="Synthetic Grass",
    ),
    Venue(
        key="jensensClovelly",
        name="Rosebery",
        family=BookingFamily.INTRAC,
        url="https://jensenstennis.intrac.com.au/tennis/book.cfm?location=6&court=283",
        address="Corner of Rothschild Avenue and Hayes Road, Turruwul Park, Rosebery NSW 2018",
        postcode="2018",
        phone="(02) 9331 3114",
        courts=4,
        surface="Synthetic Grass",
    ),
    Venue(
        key="trumperPark",
        name="Trumper Park",
        family=BookingFamily.INTRAC,
        url="https://wentworthtennis.intrac.com.au/tennis/book.cfm",
        address="Trumper Park, Quarry St, Paddington NSW 2021",
        postcode="2021",
        phone="(02) 9363 4955",
        courts=8,
        surface="Hard Court",
    ),
    Venue(
        key="centennialParklands",
        name="Centennial Parklands",
        family=BookingFamily.INTRAC_SPORTS,
        url="https://parklands.intrac.com.au/sports/schedule.cfm?location=55",
        address="Centennial Park, Grand Dr, Centennial Park NSW 2021",
        postcode="2021",
        phone="(02) 9662 7033",
        courts=11,
        surface="Hard Court",
        location="Centennial Parklands",
    ),
    Venue(
        key="moorePark",
        name="Moore Park Courts",
        family=BookingFamily.INTRAC_SPORTS,
        url="https://parklands.intrac.com.au/sports/schedule.cfm?location=72",
        address="Moore Park, Anzac Parade, Moore Park NSW 2021",
        postcode="2021",
        phone="(02) 9662 7033",
        courts=4,
        surface="Hard Court",
        location="Moore Park Courts",
    ),
    Venue(
        key="sydneyBoysHigh",
        name="Sydney Boys High School",
        family=BookingFamily.TENNISVENUES,
        url="https://www.tennisvenues.com.au/booking/sydney-boys-high-school",
        address="556 Cleveland St, Moore Park NSW 2021",
        postcode="2021",
        phone="0416 007 810",
        courts=6,
        surface="Hard Court",
    ),
)

VENUE_CATALOG = VenueCatalog(VENUES)
