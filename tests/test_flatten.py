from datetime import date, time

from checkin_etl.common.models import VisitRecord
from checkin_etl.transformers.visits.flatten import flatten, sort_visits

from conftest import make_entry, visit


def test_visits_sort_by_date_then_time_chronologically():
    entry = make_entry([
        visit(10, 10, 0),
        visit(2, 15, 30),
        visit(10, 9, 0),
        visit(2, 9, 45),
    ])
    sort_visits(entry)
    assert [(v.date.day, v.time) for v in entry.visits] == [
        (2, time(9, 45)),
        (2, time(15, 30)),
        (10, time(9, 0)),
        (10, time(10, 0)),
    ]


def test_rows_carry_identity_and_final_total():
    entry = make_entry([visit(7, 14, 5), visit(3, 9, 0)])
    rows = flatten([entry])

    assert rows == [
        {
            "Account Number": "000123",
            "ID Number": "ID-9",
            "First Name": "Jane",
            "Last Name": "Doe",
            "Program": "Food Pantry",
            "Check-In Date": "2024-03-03",
            "Check-In Time": "9:00am",
            "Total Visits": 2,
        },
        {
            "Account Number": "000123",
            "ID Number": "ID-9",
            "First Name": "Jane",
            "Last Name": "Doe",
            "Program": "Food Pantry",
            "Check-In Date": "2024-03-07",
            "Check-In Time": "2:05pm",
            "Total Visits": 2,
        },
    ]


def test_visitors_keep_iteration_order():
    jane = make_entry([visit(9)], first="Jane")
    adam = make_entry([visit(1), visit(2)], first="Adam")
    rows = flatten([jane, adam])
    assert [r["First Name"] for r in rows] == ["Jane", "Adam", "Adam"]
    assert [r["Total Visits"] for r in rows] == [1, 2, 2]


def test_noon_and_midnight_formatting():
    entry = make_entry([
        VisitRecord(date(2024, 3, 1), time(0, 30)),
        VisitRecord(date(2024, 3, 1), time(12, 0)),
    ])
    assert [r["Check-In Time"] for r in flatten([entry])] == ["12:30am", "12:00pm"]
