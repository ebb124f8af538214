"""
Sorting and flattening of ledger entries into output rows
"""
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from checkin_etl.common.datetime_utils import format_date, format_time
from checkin_etl.common.models import (
    CHECK_IN_DATE,
    CHECK_IN_TIME,
    TOTAL_VISITS,
    VisitRecord,
    VisitorLedgerEntry,
)


def sort_visits(entry: VisitorLedgerEntry) -> None:
    """Order a visitor's visits chronologically by date, then time of day"""
    entry.visits.sort(key=lambda v: v.sort_key)


def entry_rows(entry: VisitorLedgerEntry) -> Iterator[Tuple[VisitRecord, Dict[str, Any]]]:
    """Sort the entry's visits and yield each visit with its output row"""
    sort_visits(entry)
    total = entry.final_count
    for visit in entry.visits:
        row = entry.identity()
        row[CHECK_IN_DATE] = format_date(visit.date)
        row[CHECK_IN_TIME] = format_time(visit.time)
        row[TOTAL_VISITS] = total
        yield visit, row


def flatten(entries: Iterable[VisitorLedgerEntry]) -> List[Dict[str, Any]]:
    """
    One output row per visit, visitors in iteration order

    Every row of a visitor carries the visitor's final visit count.
    """
    return [row for entry in entries for _, row in entry_rows(entry)]
