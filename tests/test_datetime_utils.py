from datetime import date, time

import pytest

from checkin_etl.common.datetime_utils import (
    format_time,
    month_window,
    parse_date,
    parse_time,
    parse_weekdays,
)


@pytest.mark.parametrize("text,expected", [
    ("10:00AM", time(10, 0)),
    ("3:05 pm", time(15, 5)),
    ("12:00PM", time(12, 0)),
    ("12:15am", time(0, 15)),
    ("09:00", time(9, 0)),
    ("17:30:00", time(17, 30)),
    ("1:02:03 PM", time(13, 2, 3)),
    (540, time(9, 0)),
])
def test_parse_time(text, expected):
    assert parse_time(text) == expected


@pytest.mark.parametrize("bad", ["", "noon", "25:00", 24 * 60, True])
def test_parse_time_rejects(bad):
    with pytest.raises(ValueError):
        parse_time(bad)


def test_format_time_is_lowercase_twelve_hour():
    assert format_time(time(9, 0)) == "9:00am"
    assert format_time(time(15, 5)) == "3:05pm"
    assert format_time(time(0, 0)) == "12:00am"
    assert format_time(time(23, 59)) == "11:59pm"


def test_parse_date_formats():
    assert parse_date("2024-03-05") == date(2024, 3, 5)
    assert parse_date("3/5/2024") == date(2024, 3, 5)
    with pytest.raises(ValueError):
        parse_date("")
    with pytest.raises(ValueError):
        parse_date("not a date")


@pytest.mark.parametrize("text", ["nan", "NaT", "today", "now"])
def test_parse_date_rejects_missing_and_relative_values(text):
    with pytest.raises(ValueError, match="Unrecognized"):
        parse_date(text)


def test_month_window_handles_leap_february():
    assert month_window(date(2024, 2, 17)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_window(date(2023, 2, 1)) == (date(2023, 2, 1), date(2023, 2, 28))
    assert month_window(date(2024, 12, 31)) == (date(2024, 12, 1), date(2024, 12, 31))


def test_parse_weekdays():
    assert parse_weekdays(["Monday", " wednesday ", "SUNDAY"]) == frozenset({0, 2, 6})
    assert parse_weekdays([]) == frozenset()
    with pytest.raises(ValueError):
        parse_weekdays(["Funday"])
