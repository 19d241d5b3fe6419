from tracking import t
from datetime import datetime

import pytest

from automation.availability.time_utils import (
    filter_future_times_for_today,
    find_time_label,
    is_later_than,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("7:30 pm", ("19:30", "7:30 pm")),
        ("7:30PM", ("19:30", "7:30PM")),
        ("12:00 pm", ("12:00", "12:00 pm")),
        ("12:15am", ("00:15", "12:15am")),
        ("9:00 am", ("09:00", "9:00 am")),
        ("18:00", ("18:00", "18:00")),
        ("Book 6:45", ("06:45", "6:45")),
    ],
)
def test_find_time_label_converts_to_24_hour(text, expected):
    t('tests.unit.test_time_utils.test_find_time_label_converts_to_24_hour')
    assert find_time_label(text) == expected


@pytest.mark.parametrize("text", [None, "", "Court 3", "25:00", "10:75"])
def test_find_time_label_rejects_non_times(text):
    t('tests.unit.test_time_utils.test_find_time_label_rejects_non_times')
    assert find_time_label(text) is None


def test_is_later_than_is_strict():
    t('tests.unit.test_time_utils.test_is_later_than_is_strict')
    now = datetime(2025, 11, 4, 14, 30)

    assert is_later_than("14:31", now)
    assert not is_later_than("14:30", now)
    assert not is_later_than("14:29", now)


def test_filter_future_times_for_today_filters_past():
    t('tests.unit.test_time_utils.test_filter_future_times_for_today_filters_past')
    current = datetime(2025, 1, 5, 10, 30)
    times = ["09:00", "10:15", "10:45", "11:00"]

    filtered = filter_future_times_for_today(times, current_time=current)

    assert filtered == ["10:45", "11:00"]


def test_filter_future_times_keeps_unparseable_entries():
    t('tests.unit.test_time_utils.test_filter_future_times_keeps_unparseable_entries')
    current = datetime(2025, 1, 5, 10, 30)

    assert filter_future_times_for_today(["soon", "08:00"], current_time=current) == ["soon"]
