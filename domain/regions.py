"""Postcode to region lookup built from the reference postcode table."""

from __future__ import annotations
from tracking import t

import csv
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Union

from infrastructure.constants import (
    ALL_REGIONS,
    FALLBACK_POSTCODE_REGIONS,
    PO_BOX_REGION,
    UNKNOWN_REGION,
)
from infrastructure.settings import get_settings

from .venues import Venue

logger = logging.getLogger(__name__)


class RegionIndex:
    """Read-only mapping of postcode to region name."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        t('domain.regions.RegionIndex.__init__')
        self._regions: Mapping[str, str] = MappingProxyType(dict(mapping))

    def __len__(self) -> int:
        return len(self._regions)

    def __contains__(self, postcode: object) -> bool:
        return postcode in self._regions

    def region_for(self, postcode: str) -> str:
        """Return the region for ``postcode`` or ``"Unknown"``."""
        t('domain.regions.RegionIndex.region_for')
        return self._regions.get(str(postcode).strip(), UNKNOWN_REGION)

    def regions(self) -> List[str]:
        t('domain.regions.RegionIndex.regions')
        return sorted(set(self._regions.values()))

    @classmethod
    def from_rows(cls, rows: Iterable[List[str]]) -> "RegionIndex":
        """Build an index from CSV rows (header already skipped).

        Column 1 is the postcode and column 3 the region; rows for PO box
        ranges and short rows are ignored.
        """
        t('domain.regions.RegionIndex.from_rows')
        mapping = {}
        for row in rows:
            if len(row) < 3:
                continue
            postcode = row[0].strip()
            region = row[2].strip()
            if postcode and region and region != PO_BOX_REGION:
                mapping[postcode] = region
        return cls(mapping)

    @classmethod
    def from_csv(cls, path: Union[str, Path]) -> "RegionIndex":
        t('domain.regions.RegionIndex.from_csv')
        csv_path = Path(path)
        with csv_path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            index = cls.from_rows(reader)

        logger.info(
            "Loaded %s postcodes mapping to %s regions from %s",
            len(index),
            len(index.regions()),
            csv_path,
        )
        return index

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RegionIndex":
        """Load from ``path``, falling back to the built-in table on failure."""
        t('domain.regions.RegionIndex.load')
        try:
            return cls.from_csv(path)
        except (OSError, csv.Error, UnicodeDecodeError) as exc:
            logger.warning(
                "Could not load postcode table %s (%s); using built-in regions",
                path,
                exc,
            )
            return cls(FALLBACK_POSTCODE_REGIONS)


@lru_cache(maxsize=1)
def get_region_index() -> RegionIndex:
    """Return the process-wide region index, built on first use."""
    t('domain.regions.get_region_index')
    return RegionIndex.load(get_settings().postcode_csv)


def available_regions(venues: Iterable[Venue], index: Optional[RegionIndex] = None) -> List[str]:
    """Return the selector list: ``"All Regions"`` then sorted venue regions."""
    t('domain.regions.available_regions')
    index = index or get_region_index()
    found = {index.region_for(venue.postcode) for venue in venues}
    found.discard(UNKNOWN_REGION)
    return [ALL_REGIONS, *sorted(found)]
