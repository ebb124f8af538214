"""
Date and time helpers shared by the reader, the config layer and the reconciler
"""
import calendar
from datetime import date, datetime, time
from typing import Any, Iterable, FrozenSet, Tuple

import pandas as pd


TIME_FORMATS = [
    "%I:%M%p",
    "%I:%M %p",
    "%I:%M:%S%p",
    "%I:%M:%S %p",
    "%H:%M",
    "%H:%M:%S",
]

WEEKDAY_NAMES = [name.lower() for name in calendar.day_name]


def parse_time(value: Any) -> time:
    """
    Parse a time of day

    Accepts 12-hour strings ('10:00AM', '3:05 pm'), 24-hour strings
    ('09:00', '17:30:00'), datetime.time values, and integers holding minutes
    past midnight (how YAML 1.1 reads unquoted values like 9:00).

    Raises:
        ValueError: If the value cannot be read as a time
    """
    if isinstance(value, time):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a time of day: {value!r}")
    if isinstance(value, int):
        if not 0 <= value < 24 * 60:
            raise ValueError(f"Minutes past midnight out of range: {value}")
        return time(hour=value // 60, minute=value % 60)

    text = str(value).strip().upper()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized time format: {value!r}")


def format_time(value: time) -> str:
    """Format a time as lowercase 12-hour clock, e.g. 9:00am, 3:05pm"""
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    return f"{hour}:{value.minute:02d}{suffix}"


def parse_date(value: Any) -> date:
    """
    Parse a calendar date from a CSV cell

    Raises:
        ValueError: If the value is empty or not a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        raise ValueError("Empty date")
    # Relative words such as "today" carry no digits
    if not any(ch.isdigit() for ch in text):
        raise ValueError(f"Unrecognized date format: {value!r}")
    try:
        result = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Unrecognized date format: {value!r}") from e
    if pd.isna(result):
        raise ValueError(f"Unrecognized date format: {value!r}")
    return result.date()


def format_date(value: date) -> str:
    """Format a date as yyyy-mm-dd"""
    return value.strftime("%Y-%m-%d")


def month_window(day: date) -> Tuple[date, date]:
    """First and last day of the calendar month containing ``day``"""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last_day)


def parse_weekdays(names: Iterable[str]) -> FrozenSet[int]:
    """
    Convert weekday names to date.weekday() numbers

    Raises:
        ValueError: If a name is not an English weekday name
    """
    numbers = set()
    for name in names:
        key = str(name).strip().lower()
        if not key:
            continue
        if key not in WEEKDAY_NAMES:
            raise ValueError(f"Unknown weekday name: {name!r}")
        numbers.add(WEEKDAY_NAMES.index(key))
    return frozenset(numbers)
