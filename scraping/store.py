"""Persistence helpers for availability snapshots."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from domain.results import Snapshot
from infrastructure.constants import ALL_REGIONS_ALIASES
from tracking import t

logger = logging.getLogger(__name__)


def snapshot_filename(target: date, region: Optional[str] = None) -> str:
    """``tennis-availability-2025-11-04-Eastern-Suburbs.json`` style name.

    The all-regions filter (``None``, ``"all"``, ``"All Regions"``) has no suffix.
    """
    t('scraping.store.snapshot_filename')
    suffix = ""
    if region and region not in ALL_REGIONS_ALIASES:
        suffix = "-" + "-".join(region.split())
    return f"tennis-availability-{target.isoformat()}{suffix}.json"


class SnapshotStore:
    """Read/write the latest snapshot per (date, region) as a JSON list."""

    def __init__(self, directory: Union[str, Path]) -> None:
        t('scraping.store.SnapshotStore.__init__')
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, target: date, region: Optional[str] = None) -> Path:
        t('scraping.store.SnapshotStore.path_for')
        return self._directory / snapshot_filename(target, region)

    def save(self, snapshot: Snapshot) -> Path:
        """Write ``snapshot`` atomically, replacing any previous file for its key."""

        t('scraping.store.SnapshotStore.save')
        path = self.path_for(snapshot.target_date, snapshot.region)
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=path.stem,
            suffix=".tmp",
            delete=False,
        ) as handle:
            json.dump(snapshot.to_records(), handle, indent=2, ensure_ascii=False)
            temp_name = handle.name
        os.replace(temp_name, path)
        logger.info(
            "Saved %s venue results (%s slots) to %s",
            len(snapshot.results),
            snapshot.total_slots,
            path,
        )
        return path

    def load(self, target: date, region: Optional[str] = None) -> Optional[List[dict]]:
        """Return the stored records, or ``None`` when missing or unreadable."""

        t('scraping.store.SnapshotStore.load')
        path = self.path_for(target, region)
        if not path.exists():
            logger.debug("No snapshot at %s", path)
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.error("Failed to load snapshot from %s: %s", path, exc)
            return None
        if not isinstance(payload, list):
            logger.warning(
                "Invalid snapshot format in %s; expected list, received %s",
                path,
                type(payload).__name__,
            )
            return None
        return payload
