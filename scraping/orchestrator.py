"""Batch scraping of venue availability.

The orchestrator selects venues for a region, scrapes them in groups of at
most ``max_concurrency`` concurrent browser sessions and collects one
:class:`VenueResult` per venue, in selection order, into a :class:`Snapshot`.
"""

from __future__ import annotations
from tracking import t

import asyncio
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

import pytz
from playwright.async_api import Page

from automation.availability.extractors import extract_slots
from automation.browser.human import human_delay
from automation.browser.session import SessionManager
from automation.errors import ScraperEnvironmentError, SessionError
from automation.navigation.engine import NavigationOutcome, landing_url, navigate_to_date
from domain.regions import RegionIndex, available_regions, get_region_index
from domain.results import Slot, Snapshot, VenueResult
from domain.venues import VENUE_CATALOG, Venue, VenueCatalog
from infrastructure.constants import ALL_REGIONS_ALIASES, ScraperConfig, family_priority
from infrastructure.settings import AppSettings, get_settings

from .normalizer import normalize_slots
from .store import SnapshotStore

logger = logging.getLogger(__name__)

Navigator = Callable[[Page, Venue, date, date], Awaitable[NavigationOutcome]]
Extractor = Callable[[Page, Venue], Awaitable[List[Slot]]]


def _is_all_regions(region: Optional[str]) -> bool:
    return region is None or region in ALL_REGIONS_ALIASES


class ScrapeOrchestrator:
    """Coordinate sessions, navigation, extraction and persistence for venues."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        *,
        catalog: VenueCatalog = VENUE_CATALOG,
        region_index: Optional[RegionIndex] = None,
        session_manager: Optional[SessionManager] = None,
        store: Optional[SnapshotStore] = None,
        navigator: Navigator = navigate_to_date,
        extractor: Extractor = extract_slots,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        t('scraping.orchestrator.ScrapeOrchestrator.__init__')
        self.settings = settings or get_settings()
        self.catalog = catalog
        self.region_index = region_index or get_region_index()
        self.session_manager = session_manager or SessionManager(self.settings)
        self.store = store or SnapshotStore(self.settings.output_directory)
        self._navigator = navigator
        self._extractor = extractor
        self._clock = clock
        self._timezone = pytz.timezone(self.settings.timezone)

    # ------------------------------------------------------------------
    # Venue selection
    # ------------------------------------------------------------------
    def now(self) -> datetime:
        """Current time in the scraper timezone."""
        t('scraping.orchestrator.ScrapeOrchestrator.now')
        if self._clock is not None:
            return self._clock()
        return datetime.now(self._timezone)

    def region_of(self, venue: Venue) -> str:
        t('scraping.orchestrator.ScrapeOrchestrator.region_of')
        return self.region_index.region_for(venue.postcode)

    def list_venues(self, region: Optional[str] = None) -> List[Venue]:
        """Venues in ``region`` (all for ``None``/``"all"``/``"All Regions"``), in scrape order."""
        t('scraping.orchestrator.ScrapeOrchestrator.list_venues')
        if _is_all_regions(region):
            selected = list(self.catalog)
        else:
            selected = [venue for venue in self.catalog if self.region_of(venue) == region]
        return sorted(selected, key=lambda venue: family_priority(venue.family.value))

    def available_regions(self) -> List[str]:
        t('scraping.orchestrator.ScrapeOrchestrator.available_regions')
        return available_regions(self.catalog, self.region_index)

    # ------------------------------------------------------------------
    # Single venue
    # ------------------------------------------------------------------
    async def scrape_venue(self, venue_key: str, target: date) -> VenueResult:
        """Scrape one venue for ``target``.

        Every failure is folded into a failed :class:`VenueResult`. Only an
        unknown ``venue_key`` raises (``KeyError``), since there is no venue
        to report on.
        """
        t('scraping.orchestrator.ScrapeOrchestrator.scrape_venue')
        result, _ = await self._run_venue(self.catalog[venue_key], target)
        return result

    async def _run_venue(self, venue: Venue, target: date) -> Tuple[VenueResult, bool]:
        """Return the venue result and whether it failed for lack of a session."""
        t('scraping.orchestrator.ScrapeOrchestrator._run_venue')
        region = self.region_of(venue)
        try:
            result = await asyncio.wait_for(
                self._scrape_pipeline(venue, region, target),
                timeout=self.settings.venue_timeout_seconds,
            )
            return result, False
        except SessionError as exc:
            logger.error("❌ %s: %s", venue.key, exc)
            return VenueResult.failed(venue, region, target, str(exc), scraped_at=self.now()), True
        except asyncio.TimeoutError:
            message = f"Timed out after {self.settings.venue_timeout_seconds:.0f}s"
            logger.error("❌ %s: %s", venue.key, message)
            return VenueResult.failed(venue, region, target, message, scraped_at=self.now()), False
        except Exception as exc:
            logger.error("❌ %s: %s", venue.key, exc, exc_info=not self.settings.production_mode)
            return VenueResult.failed(venue, region, target, str(exc), scraped_at=self.now()), False

    async def _scrape_pipeline(self, venue: Venue, region: str, target: date) -> VenueResult:
        t('scraping.orchestrator.ScrapeOrchestrator._scrape_pipeline')
        now = self.now()
        today = now.date()

        async with self.session_manager.session(venue.key) as session:
            page = session.page
            url = landing_url(venue, target, today)
            logger.info("📡 %s: loading %s", venue.key, url)
            await page.goto(url, wait_until="domcontentloaded")
            await human_delay(ScraperConfig.LANDING_DELAY_RANGE)

            outcome = await self._navigator(page, venue, target, today)
            await human_delay(ScraperConfig.PRE_EXTRACT_DELAY_RANGE)

            raw_slots = await self._extractor(page, venue)
            slots = normalize_slots(raw_slots, target, self.now())
            await self._capture_screenshot(page, venue, target)

        logger.info(
            "✅ %s: %s slots for %s%s",
            venue.key,
            len(slots),
            target.isoformat(),
            "" if outcome.confirmed else " (navigation unconfirmed)",
        )
        return VenueResult.succeeded(
            venue,
            region,
            target,
            slots,
            navigation_confirmed=outcome.confirmed,
            scraped_at=self.now(),
        )

    async def _capture_screenshot(self, page: Page, venue: Venue, target: date) -> Optional[Path]:
        """Save a full-page diagnostic screenshot; failures are only logged."""
        t('scraping.orchestrator.ScrapeOrchestrator._capture_screenshot')
        if not self.settings.save_screenshots:
            return None
        path = Path(self.settings.screenshot_directory) / f"{venue.key}-{target.isoformat()}.png"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            await page.screenshot(path=str(path), full_page=True)
        except Exception as exc:
            logger.warning("%s: screenshot failed: %s", venue.key, exc)
            return None
        logger.debug("📸 %s", path)
        return path

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------
    @staticmethod
    def _batches(venues: Sequence[Venue], size: int) -> List[Sequence[Venue]]:
        t('scraping.orchestrator.ScrapeOrchestrator._batches')
        return [venues[start:start + size] for start in range(0, len(venues), size)]

    async def scrape_all(self, target: date, region: Optional[str] = None) -> Snapshot:
        """Scrape every venue in ``region`` and persist the snapshot.

        Raises:
            ScraperEnvironmentError: no browser session could be opened for
                any selected venue.
        """
        t('scraping.orchestrator.ScrapeOrchestrator.scrape_all')
        venues = self.list_venues(region)
        region_key = None if _is_all_regions(region) else region
        started_at = self.now()
        batches = self._batches(venues, self.settings.max_concurrency)
        logger.info(
            "Scraping %s venues for %s (%s) in %s batches",
            len(venues),
            target.isoformat(),
            region_key or "all regions",
            len(batches),
        )

        results: List[VenueResult] = []
        session_failures = 0
        for index, batch in enumerate(batches):
            if index:
                waited = await human_delay(self.settings.batch_delay_range)
                logger.debug("Waited %.1fs before batch %s/%s", waited, index + 1, len(batches))

            outcomes = await asyncio.gather(
                *(self._run_venue(venue, target) for venue in batch),
                return_exceptions=True,
            )
            for venue, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    logger.error("❌ %s: unexpected failure %s", venue.key, outcome)
                    results.append(
                        VenueResult.failed(venue, self.region_of(venue), target, str(outcome), scraped_at=self.now())
                    )
                    continue
                result, session_failed = outcome
                session_failures += int(session_failed)
                results.append(result)

        if venues and session_failures == len(venues):
            raise ScraperEnvironmentError(
                f"Could not open a browser session for any of {len(venues)} venues",
                failures=session_failures,
            )

        snapshot = Snapshot(
            target_date=target,
            region=region_key,
            results=tuple(results),
            started_at=started_at,
            finished_at=self.now(),
        )
        logger.info(
            "Scrape finished: %s/%s venues succeeded, %s slots in %.1fs",
            snapshot.success_count,
            len(results),
            snapshot.total_slots,
            snapshot.duration_seconds,
        )

        try:
            self.store.save(snapshot)
        except OSError as exc:
            logger.error("Failed to persist snapshot for %s: %s", target.isoformat(), exc)
        return snapshot
