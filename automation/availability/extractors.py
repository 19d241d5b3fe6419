"""Per-family availability extractors.

Each booking family registers an async extractor in :data:`EXTRACTORS`. The
extractors collect raw cell records from the page and turn the bookable ones
into :class:`domain.results.Slot` values. :func:`extract_slots` is the only
entry point the orchestrator uses and never raises.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from playwright.async_api import Page

from automation.availability import dom_extraction
from automation.availability.heuristics import (
    absolute_url,
    clean_court_label,
    court_number_from_text,
    ensure_court_prefix,
    is_blank_background,
    is_blank_bgcolor_attribute,
    is_strict_white,
    is_valid_court_label,
    is_warning_color,
    looks_like_time,
)
from automation.availability.time_utils import find_time_label
from domain.results import Slot
from domain.venues import BookingFamily, Venue
from infrastructure.constants import MAX_GRID_CELL_TEXT_LENGTH
from tracking import t

logger = logging.getLogger(__name__)

CellRecord = Dict[str, Any]
Extractor = Callable[[Page, Venue], Awaitable[List[Slot]]]

_PARKLANDS_LOCATIONS = (
    ("Centennial Parklands", "Centennial Parklands"),
    ("Moore Park", "Moore Park Courts"),
)


def _slot_from_text(text: str, court: str, booking_url: Optional[str] = None) -> Optional[Slot]:
    found = find_time_label(text)
    if found is None:
        return None
    time_value, display = found
    return Slot(time=time_value, time_display=display, court=court, booking_url=booking_url)


def _is_clickable(record: CellRecord) -> bool:
    return bool(
        record.get("hasLink")
        or record.get("hasClickHandler")
        or record.get("tag") in {"A", "BUTTON"}
    )


def table_cell_slots(records: Iterable[CellRecord], page_url: str) -> List[Slot]:
    """Bookable cells from header-labelled tables (tennisvenues layout).

    A cell is bookable when its background is blank and it has a link or
    click handler. The court comes from the header cell of the same column.
    """

    t('automation.availability.extractors.table_cell_slots')
    slots: List[Slot] = []
    for record in records:
        column = record.get("column", -1)
        text = record.get("text") or ""
        if record.get("inHeaderRow") or column <= 0 or not text:
            continue
        if not (is_blank_background(record.get("background")) and (record.get("hasLink") or record.get("hasClickHandler"))):
            continue

        label = clean_court_label(record.get("header") or f"Court {column}")
        if not is_valid_court_label(label):
            continue
        label = ensure_court_prefix(label)
        if label == "Court 0":
            continue

        booking_url = absolute_url(record.get("href"), page_url) or page_url
        slot = _slot_from_text(text, label, booking_url)
        if slot:
            slots.append(slot)
    return slots


def block_cell_slots(records: Iterable[CellRecord], page_url: str) -> List[Slot]:
    """Bookable non-table slot blocks; court read from the block or its container."""

    t('automation.availability.extractors.block_cell_slots')
    slots: List[Slot] = []
    for record in records:
        text = record.get("text") or ""
        if not text or record.get("column", -1) >= 0:
            continue
        if not (is_blank_background(record.get("background")) and (record.get("hasLink") or record.get("hasClickHandler"))):
            continue

        number = court_number_from_text(record.get("courtContainerText")) or court_number_from_text(text) or "1"
        label = f"Court {number}"
        if label == "Court 0":
            continue

        booking_url = absolute_url(record.get("href"), page_url) or page_url
        slot = _slot_from_text(text, label, booking_url)
        if slot:
            slots.append(slot)
    return slots


def attribute_table_slots(records: Iterable[CellRecord]) -> List[Slot]:
    """Linked cells whose ``bgcolor`` attribute or computed background is blank."""

    t('automation.availability.extractors.attribute_table_slots')
    slots: List[Slot] = []
    for record in records:
        column = record.get("column", -1)
        text = record.get("text") or ""
        if column <= 0 or not text or not record.get("hasLink"):
            continue
        if not (is_blank_bgcolor_attribute(record.get("bgcolor")) or is_blank_background(record.get("background"))):
            continue

        label = f"Court {column}"
        header = (record.get("header") or "").strip()
        if header and not looks_like_time(header):
            cleaned = clean_court_label(header)
            if is_valid_court_label(cleaned):
                label = ensure_court_prefix(cleaned)

        slot = _slot_from_text(text, label)
        if slot:
            slots.append(slot)
    return slots


def grid_slots(rows: Iterable[List[CellRecord]], court_count: int) -> List[Slot]:
    """Time-by-court grid: column 0 is the time, columns 1..N are courts.

    Every court cell that is not painted the warning colour is free.
    """

    t('automation.availability.extractors.grid_slots')
    slots: List[Slot] = []
    for cells in rows:
        if not cells:
            continue
        time_cell_text = cells[0].get("text") or ""
        found = find_time_label(time_cell_text)
        if found is None:
            continue
        time_value, display = found

        for court_number in range(1, court_count + 1):
            if court_number >= len(cells):
                break
            cell = cells[court_number]
            if len(cell.get("text") or "") > MAX_GRID_CELL_TEXT_LENGTH:
                continue
            if is_warning_color(cell.get("background")):
                continue
            slots.append(Slot(time=time_value, time_display=display, court=f"Court {court_number}"))
    return slots


def white_cell_slots(records: Iterable[CellRecord]) -> List[Slot]:
    """Strictly white clickable cells; court from the cell text or table header."""

    t('automation.availability.extractors.white_cell_slots')
    slots: List[Slot] = []
    for record in records:
        text = record.get("text") or ""
        if not (is_strict_white(record.get("background")) and _is_clickable(record)):
            continue
        number = court_number_from_text(text) or court_number_from_text(record.get("firstHeader")) or "Unknown"
        slot = _slot_from_text(text, f"Court {number}")
        if slot:
            slots.append(slot)
    return slots


def location_for_record(record: CellRecord) -> str:
    t('automation.availability.extractors.location_for_record')
    haystack = (record.get("text") or "") + " " + (record.get("parentText") or "")
    for marker, location in _PARKLANDS_LOCATIONS:
        if marker in haystack:
            return location
    return ""


def location_cell_slots(records: Iterable[CellRecord], target_location: Optional[str]) -> List[Slot]:
    """White clickable cells kept when they belong to ``target_location`` or to no named location."""

    t('automation.availability.extractors.location_cell_slots')
    kept = [
        record
        for record in records
        if not location_for_record(record) or location_for_record(record) == target_location
    ]
    slots: List[Slot] = []
    for record in kept:
        text = record.get("text") or ""
        if not (is_strict_white(record.get("background")) and _is_clickable(record)):
            continue
        number = court_number_from_text(text) or "Unknown"
        slot = _slot_from_text(text, f"Court {number}")
        if slot:
            slots.append(slot)
    return slots


async def extract_color_table(page: Page, venue: Venue) -> List[Slot]:
    t('automation.availability.extractors.extract_color_table')
    page_url = page.url
    table_records = await dom_extraction.collect_cell_records(page, dom_extraction.TABLE_CELL_SELECTOR)
    block_records = await dom_extraction.collect_cell_records(page, dom_extraction.BLOCK_SLOT_SELECTOR)
    return table_cell_slots(table_records, page_url) + block_cell_slots(block_records, page_url)


async def extract_attribute_table(page: Page, venue: Venue) -> List[Slot]:
    t('automation.availability.extractors.extract_attribute_table')
    records = await dom_extraction.collect_cell_records(page, "td")
    return attribute_table_slots(records)


async def extract_threshold_grid(page: Page, venue: Venue) -> List[Slot]:
    t('automation.availability.extractors.extract_threshold_grid')
    rows = await dom_extraction.collect_grid_rows(page)
    return grid_slots(rows, venue.courts)


async def extract_white_cells(page: Page, venue: Venue) -> List[Slot]:
    t('automation.availability.extractors.extract_white_cells')
    records = await dom_extraction.collect_cell_records(page, dom_extraction.WHITE_SLOT_SELECTOR)
    return white_cell_slots(records)


async def extract_location_cells(page: Page, venue: Venue) -> List[Slot]:
    t('automation.availability.extractors.extract_location_cells')
    records = await dom_extraction.collect_cell_records(page, dom_extraction.PARKLANDS_SLOT_SELECTOR)
    return location_cell_slots(records, venue.location)


EXTRACTORS: Dict[BookingFamily, Extractor] = {
    BookingFamily.TENNISVENUES: extract_color_table,
    BookingFamily.INTRAC: extract_attribute_table,
    BookingFamily.INTRAC_SPORTS: extract_threshold_grid,
    BookingFamily.INTRAC_CALENDAR: extract_white_cells,
    BookingFamily.PARKLANDS_SPORTS: extract_location_cells,
}


async def extract_slots(page: Page, venue: Venue) -> List[Slot]:
    """Run the venue family's extractor; any failure yields an empty list."""

    t('automation.availability.extractors.extract_slots')
    extractor = EXTRACTORS.get(venue.family)
    if extractor is None:
        logger.warning("No extractor registered for %s (%s)", venue.key, venue.family.value)
        return []

    try:
        slots = await extractor(page, venue)
    except Exception as exc:
        logger.error("Extraction failed for %s: %s", venue.key, exc)
        return []

    logger.info("Extracted %s raw slots for %s", len(slots), venue.key)
    return slots
