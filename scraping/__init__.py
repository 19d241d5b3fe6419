"""Scrape orchestration, slot normalization and snapshot persistence."""

from .normalizer import normalize_slots
from .orchestrator import ScrapeOrchestrator
from .store import SnapshotStore, snapshot_filename

__all__ = [
    "ScrapeOrchestrator",
    "SnapshotStore",
    "normalize_slots",
    "snapshot_filename",
]
