"""DOM extraction helpers for booking sheets.

Each helper runs one ``page.evaluate`` that returns plain cell records; all
interpretation happens in Python so it can be tested without a browser.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from playwright.async_api import Page

from tracking import t

logger = logging.getLogger(__name__)

TABLE_CELL_SELECTOR = "table td"
BLOCK_SLOT_SELECTOR = 'div[class*="timeslot"], div[class*="court"], div[data-time]'
WHITE_SLOT_SELECTOR = 'td, div[class*="slot"], div[data-time]'
PARKLANDS_SLOT_SELECTOR = 'td, div[class*="slot"], div[data-time], div[class*="booking"]'

_CELL_RECORDS_SCRIPT = r"""(selector) => {
    const headerLabel = (cell) => {
        const table = cell.closest('table');
        const row = cell.parentElement;
        if (!table || !row || row.tagName !== 'TR') {
            return { column: -1, header: '', inHeaderRow: false, firstHeader: '' };
        }
        const column = Array.from(row.children).indexOf(cell);
        const headerRow = table.querySelector('thead tr, tr:first-child');
        const headerCell = headerRow ? headerRow.children[column] : null;
        const firstTh = table.querySelector('th');
        return {
            column: column,
            header: headerCell ? headerCell.textContent.trim() : '',
            inHeaderRow: headerRow === row,
            firstHeader: firstTh ? firstTh.textContent.trim() : '',
        };
    };

    return Array.from(document.querySelectorAll(selector)).map((cell) => {
        const style = window.getComputedStyle(cell);
        const link = cell.tagName === 'A' ? cell : cell.querySelector('a');
        const courtContainer = cell.closest('[class*="court"]');
        const section = cell.closest('section, div[class*="location"], div[class*="venue"]');
        const position = headerLabel(cell);
        return {
            tag: cell.tagName,
            text: (cell.textContent || '').trim(),
            background: style.backgroundColor || '',
            bgcolor: cell.getAttribute('bgcolor') || '',
            hasLink: cell.querySelector('a') !== null,
            hasClickHandler: cell.onclick !== null,
            href: link ? (link.getAttribute('href') || '') : '',
            column: position.column,
            header: position.header,
            inHeaderRow: position.inHeaderRow,
            firstHeader: position.firstHeader,
            courtContainerText: courtContainer ? (courtContainer.textContent || '').trim() : '',
            parentText: cell.parentElement ? (cell.parentElement.textContent || '') : '',
            sectionText: section ? (section.textContent || '') : '',
        };
    });
}
"""

_GRID_ROWS_SCRIPT = r"""() => {
    return Array.from(document.querySelectorAll('tr'))
        .map((row) => Array.from(row.querySelectorAll('td')).map((cell) => ({
            text: (cell.textContent || '').trim(),
            background: window.getComputedStyle(cell).backgroundColor || '',
        })))
        .filter((cells) => cells.length > 0);
}
"""


async def collect_cell_records(page: Page, selector: str) -> List[Dict[str, Any]]:
    """Return style, link and table-position metadata for every match."""

    t('automation.availability.dom_extraction.collect_cell_records')
    try:
        return await page.evaluate(_CELL_RECORDS_SCRIPT, selector) or []
    except Exception as exc:
        logger.warning("Cell collection failed for %s: %s", selector, exc)
        return []


async def collect_grid_rows(page: Page) -> List[List[Dict[str, Any]]]:
    """Return ``[[{text, background}, ...], ...]`` for each table row with cells."""

    t('automation.availability.dom_extraction.collect_grid_rows')
    try:
        return await page.evaluate(_GRID_ROWS_SCRIPT) or []
    except Exception as exc:
        logger.warning("Grid row collection failed: %s", exc)
        return []
