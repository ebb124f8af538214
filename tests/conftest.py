import csv
import random
from datetime import date, time
from pathlib import Path

import pytest

from checkin_etl.common.models import INPUT_COLUMNS, GenerationPolicy, Quota, VisitRecord, VisitorLedgerEntry


MARCH_2024 = (date(2024, 3, 1), date(2024, 3, 31))


def make_policy(**overrides) -> GenerationPolicy:
    values = {
        'valid_window': MARCH_2024,
        'time_window': (time(9, 0), time(17, 0)),
        'allowed_weekdays': frozenset(),
        'can_repeat_days': False,
        'max_retries': 1000,
    }
    values.update(overrides)
    return GenerationPolicy(**values)


def make_entry(visits=(), quota=(1, 1), first="Jane", last="Doe") -> VisitorLedgerEntry:
    return VisitorLedgerEntry(
        account_number="000123",
        id_number="ID-9",
        first_name=first,
        last_name=last,
        program="Food Pantry",
        quota=Quota(*quota),
        visits=list(visits),
    )


def visit(day: int, hour: int = 10, minute: int = 0) -> VisitRecord:
    return VisitRecord(date=date(2024, 3, day), time=time(hour, minute))


def checkin_row(first="Jane", last="Doe", day="2024-03-05", at="10:00AM", **extra):
    row = {
        "Account Number": "000123",
        "ID Number": "ID-9",
        "First Name": first,
        "Last Name": last,
        "Program": "Food Pantry",
        "Check-In Date": day,
        "Check-In Time": at,
    }
    row.update(extra)
    return row


def write_checkins(path: Path, rows, columns=None) -> Path:
    columns = columns or list(INPUT_COLUMNS)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    return path


def read_rows(path: Path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def policy():
    return make_policy()
