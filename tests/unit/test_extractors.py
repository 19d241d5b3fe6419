from tracking import t

import pytest

from automation.availability import dom_extraction, extractors
from automation.availability.extractors import (
    EXTRACTORS,
    attribute_table_slots,
    block_cell_slots,
    extract_slots,
    grid_slots,
    location_cell_slots,
    table_cell_slots,
    white_cell_slots,
)
from domain.venues import BookingFamily
from tests.helpers import DummyLogger, FakePage, make_venue

PAGE_URL = "https://www.tennisvenues.com.au/booking/latham-park-tc"
WHITE = "rgb(255, 255, 255)"
GREY = "rgb(204, 204, 204)"
ORANGE = "rgb(255, 165, 0)"


def cell(**overrides):
    t('tests.unit.test_extractors.cell')
    record = {
        "tag": "TD",
        "text": "",
        "background": WHITE,
        "bgcolor": "",
        "hasLink": True,
        "hasClickHandler": False,
        "href": "",
        "column": 1,
        "header": "Court 1",
        "inHeaderRow": False,
        "firstHeader": "",
        "courtContainerText": "",
        "parentText": "",
        "sectionText": "",
    }
    record.update(overrides)
    return record


def test_table_cell_slots_uses_header_labels_and_links():
    t('tests.unit.test_extractors.test_table_cell_slots_uses_header_labels_and_links')
    records = [
        cell(text="Time", column=0, header="", inHeaderRow=True),
        cell(text="7:00 am", column=0, header=""),
        cell(text="7:00 am", column=1, header="Court 1 syn grass", href="/book?slot=1"),
        cell(text="7:00 am", column=2, header="2", href=""),
        cell(text="7:00 am", column=3, header="Court 3", background=GREY),
        cell(text="7:00 am", column=4, header="Court 4", hasLink=False),
    ]

    slots = table_cell_slots(records, PAGE_URL)

    assert [(s.time, s.court) for s in slots] == [("07:00", "Court 1"), ("07:00", "Court 2")]
    assert slots[0].booking_url == "https://www.tennisvenues.com.au/book?slot=1"
    assert slots[1].booking_url == PAGE_URL
    assert slots[0].time_display == "7:00 am"


def test_table_cell_slots_drops_css_headers_and_court_zero():
    t('tests.unit.test_extractors.test_table_cell_slots_drops_css_headers_and_court_zero')
    records = [
        cell(text="8:00 pm", column=1, header="table.grid { width: 100% }"),
        cell(text="8:00 pm", column=2, header="0"),
        cell(text="8:00 pm", column=3, header="Court 3 hard court"),
    ]

    slots = table_cell_slots(records, PAGE_URL)

    assert [(s.time, s.court) for s in slots] == [("20:00", "Court 3")]


def test_block_cell_slots_reads_court_from_container():
    t('tests.unit.test_extractors.test_block_cell_slots_reads_court_from_container')
    records = [
        cell(tag="DIV", column=-1, text="9:30 am", courtContainerText="Court 5 9:30 am"),
        cell(tag="DIV", column=-1, text="10:00 am"),
        cell(tag="DIV", column=-1, text="11:00 am", background=GREY),
    ]

    slots = block_cell_slots(records, PAGE_URL)

    assert [(s.time, s.court) for s in slots] == [("09:30", "Court 5"), ("10:00", "Court 1")]


def test_attribute_table_slots_accepts_bgcolor_or_computed_white():
    t('tests.unit.test_extractors.test_attribute_table_slots_accepts_bgcolor_or_computed_white')
    records = [
        cell(text="6:00pm", column=1, header="1", bgcolor="#FFFFFF", background=GREY),
        cell(text="6:00pm", column=2, header="6:00pm", bgcolor="#ff9900", background=WHITE),
        cell(text="6:00pm", column=3, header="Court 3", bgcolor="#ff9900", background=ORANGE),
        cell(text="6:00pm", column=4, header="Court 4", hasLink=False),
        cell(text="6:00pm", column=0, header=""),
    ]

    slots = attribute_table_slots(records)

    assert [(s.time, s.court) for s in slots] == [("18:00", "Court 1"), ("18:00", "Court 2")]


def test_grid_slots_treats_non_orange_cells_as_free():
    t('tests.unit.test_extractors.test_grid_slots_treats_non_orange_cells_as_free')
    rows = [
        [{"text": "Court", "background": WHITE}, {"text": "1", "background": WHITE}],
        [
            {"text": "7:00am", "background": WHITE},
            {"text": "", "background": ORANGE},
            {"text": "", "background": "rgb(200, 230, 200)"},
            {"text": "x" * 31, "background": WHITE},
            {"text": "", "background": WHITE},
            {"text": "", "background": WHITE},
        ],
        [{"text": "7:30am", "background": WHITE}, {"text": "", "background": WHITE}],
    ]

    slots = grid_slots(rows, court_count=4)

    assert [(s.time, s.court) for s in slots] == [
        ("07:00", "Court 2"),
        ("07:00", "Court 4"),
        ("07:30", "Court 1"),
    ]


def test_white_cell_slots_requires_strict_white_and_clickable():
    t('tests.unit.test_extractors.test_white_cell_slots_requires_strict_white_and_clickable')
    records = [
        cell(text="Court 2 5:00 pm", hasLink=False, tag="A"),
        cell(text="5:30 pm", firstHeader="Court 6"),
        cell(text="6:00 pm", background="transparent"),
        cell(text="6:30 pm", hasLink=False),
        cell(text="7:00 pm"),
    ]

    slots = white_cell_slots(records)

    assert [(s.time, s.court) for s in slots] == [
        ("17:00", "Court 2"),
        ("17:30", "Court 6"),
        ("19:00", "Court Unknown"),
    ]


def test_location_cell_slots_filters_other_locations():
    t('tests.unit.test_extractors.test_location_cell_slots_filters_other_locations')
    records = [
        cell(text="Court 1 8:00 am", parentText="Centennial Parklands"),
        cell(text="Court 2 8:00 am", parentText="Moore Park Courts"),
        cell(text="Court 3 9:00 am"),
    ]

    slots = location_cell_slots(records, "Centennial Parklands")

    assert [(s.time, s.court) for s in slots] == [("08:00", "Court 1"), ("09:00", "Court 3")]


def test_every_family_has_an_extractor():
    t('tests.unit.test_extractors.test_every_family_has_an_extractor')
    assert set(EXTRACTORS) == set(BookingFamily)


@pytest.mark.asyncio
async def test_extract_slots_dispatches_on_family():
    t('tests.unit.test_extractors.test_extract_slots_dispatches_on_family')
    rows = [[{"text": "8:00 am", "background": WHITE}, {"text": "", "background": WHITE}]]
    page = FakePage([rows])
    venue = make_venue(family=BookingFamily.INTRAC_SPORTS, courts=1)

    slots = await extract_slots(page, venue)

    assert [(s.time, s.court) for s in slots] == [("08:00", "Court 1")]
    assert len(page.evaluate_calls) == 1


@pytest.mark.asyncio
async def test_extract_color_table_combines_table_and_block_cells():
    t('tests.unit.test_extractors.test_extract_color_table_combines_table_and_block_cells')
    table = [cell(text="7:00 am", column=1, header="Court 1")]
    blocks = [cell(tag="DIV", column=-1, text="8:00 am", courtContainerText="Court 2")]
    page = FakePage([table, blocks], url=PAGE_URL)

    slots = await extract_slots(page, make_venue())

    assert [(s.time, s.court) for s in slots] == [("07:00", "Court 1"), ("08:00", "Court 2")]


@pytest.mark.asyncio
async def test_extract_slots_returns_empty_list_on_failure(monkeypatch):
    t('tests.unit.test_extractors.test_extract_slots_returns_empty_list_on_failure')
    dummy_logger = DummyLogger()
    monkeypatch.setattr(extractors, "logger", dummy_logger)

    async def broken(page, venue):
        t('tests.unit.test_extractors.test_extract_slots_returns_empty_list_on_failure.broken')
        raise RuntimeError("layout changed")

    monkeypatch.setitem(EXTRACTORS, BookingFamily.INTRAC, broken)

    slots = await extract_slots(FakePage(), make_venue(family=BookingFamily.INTRAC))

    assert slots == []
    assert dummy_logger.messages[-1][0] == "error"
    assert "layout changed" in dummy_logger.messages[-1][1]


@pytest.mark.asyncio
async def test_failed_block_collection_is_logged_and_keeps_table_slots(monkeypatch):
    t('tests.unit.test_extractors.test_failed_block_collection_is_logged_and_keeps_table_slots')
    dummy_logger = DummyLogger()
    monkeypatch.setattr(dom_extraction, "logger", dummy_logger)
    table = [cell(text="7:00 am", column=1, header="Court 1")]
    page = FakePage([table, RuntimeError("Execution context was destroyed")], url=PAGE_URL)

    slots = await extract_slots(page, make_venue())

    assert [(s.time, s.court) for s in slots] == [("07:00", "Court 1")]
    assert dummy_logger.messages[-1][0] == "warning"
    assert "Execution context was destroyed" in dummy_logger.messages[-1][1]


@pytest.mark.asyncio
async def test_failed_grid_collection_is_logged(monkeypatch):
    t('tests.unit.test_extractors.test_failed_grid_collection_is_logged')
    dummy_logger = DummyLogger()
    monkeypatch.setattr(dom_extraction, "logger", dummy_logger)
    page = FakePage([RuntimeError("Target closed")])

    assert await dom_extraction.collect_grid_rows(page) == []
    assert dummy_logger.messages == [("warning", "Grid row collection failed: Target closed")]
