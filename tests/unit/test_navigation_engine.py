from tracking import t
from datetime import date

import pytest

from automation.navigation import engine, strategies
from automation.navigation.engine import FAMILY_STRATEGIES, landing_url, navigate_to_date
from domain.venues import BookingFamily
from tests.helpers import DummyLogger, FakePage, make_venue

TODAY = date(2025, 11, 18)
TOMORROW = date(2025, 11, 19)


def test_every_family_has_a_strategy_chain():
    t('tests.unit.test_navigation_engine.test_every_family_has_a_strategy_chain')
    assert set(FAMILY_STRATEGIES) == set(BookingFamily)
    for chain in FAMILY_STRATEGIES.values():
        assert chain
        assert all(name in strategies.STRATEGIES for name in chain)


def test_landing_url_uses_dated_url_for_url_addressable_families():
    t('tests.unit.test_navigation_engine.test_landing_url_uses_dated_url_for_url_addressable_families')
    intrac = make_venue(family=BookingFamily.INTRAC, url="https://x.intrac.com.au/tennis/book.cfm")
    grid = make_venue(family=BookingFamily.INTRAC_SPORTS, url="https://p.intrac.com.au/sports/schedule.cfm?location=55")
    tennisvenues = make_venue(url="https://www.tennisvenues.com.au/booking/club")

    assert landing_url(intrac, TOMORROW, TODAY) == "https://x.intrac.com.au/tennis/book.cfm?date=2025-11-19"
    assert landing_url(grid, TOMORROW, TODAY) == (
        "https://p.intrac.com.au/sports/schedule.cfm?location=55&date=2025-11-19"
    )
    assert landing_url(intrac, TODAY, TODAY) == "https://x.intrac.com.au/tennis/book.cfm"
    assert landing_url(tennisvenues, TOMORROW, TODAY) == "https://www.tennisvenues.com.au/booking/club"


@pytest.mark.asyncio
async def test_today_or_past_needs_no_navigation():
    t('tests.unit.test_navigation_engine.test_today_or_past_needs_no_navigation')
    page = FakePage()

    outcome = await navigate_to_date(page, make_venue(), TODAY, TODAY)
    past = await navigate_to_date(page, make_venue(), date(2025, 11, 1), TODAY)

    assert outcome.confirmed and outcome.strategy is None and outcome.days_diff == 0
    assert past.confirmed and past.days_diff < 0
    assert page.evaluate_calls == []
    assert page.clicks == []


@pytest.mark.asyncio
async def test_falls_back_to_next_strategy_after_exception(monkeypatch):
    t('tests.unit.test_navigation_engine.test_falls_back_to_next_strategy_after_exception')
    calls = []

    async def broken_calendar(page, venue, target, today):
        t('tests.unit.test_navigation_engine.test_falls_back_to_next_strategy_after_exception.broken_calendar')
        calls.append("calendar")
        raise RuntimeError("calendar widget detached")

    async def working_next_day(page, venue, target, today):
        t('tests.unit.test_navigation_engine.test_falls_back_to_next_strategy_after_exception.working_next_day')
        calls.append("next_day")
        return True

    monkeypatch.setitem(strategies.STRATEGIES, "calendar", broken_calendar)
    monkeypatch.setitem(strategies.STRATEGIES, "next_day", working_next_day)

    outcome = await navigate_to_date(FakePage(), make_venue(), TOMORROW, TODAY)

    assert calls == ["calendar", "next_day"]
    assert outcome.confirmed
    assert outcome.strategy == "next_day"
    assert outcome.days_diff == 1


@pytest.mark.asyncio
async def test_exhausted_chain_is_unconfirmed_not_an_error(monkeypatch):
    t('tests.unit.test_navigation_engine.test_exhausted_chain_is_unconfirmed_not_an_error')
    dummy_logger = DummyLogger()
    monkeypatch.setattr(engine, "logger", dummy_logger)

    async def never(page, venue, target, today):
        t('tests.unit.test_navigation_engine.test_exhausted_chain_is_unconfirmed_not_an_error.never')
        return False

    monkeypatch.setitem(strategies.STRATEGIES, "clickable_day", never)
    monkeypatch.setitem(strategies.STRATEGIES, "next_day", never)

    venue = make_venue(family=BookingFamily.PARKLANDS_SPORTS)
    outcome = await navigate_to_date(FakePage(), venue, date(2025, 11, 21), TODAY)

    assert not outcome.confirmed
    assert outcome.strategy is None
    assert outcome.days_diff == 3
    assert dummy_logger.messages[-1][0] == "warning"
    assert "unconfirmed" in dummy_logger.messages[-1][1]
