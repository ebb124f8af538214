"""
Grouping of raw check-in rows into visitor ledger entries
"""
from typing import Dict, List

from checkin_etl.common.datetime_utils import parse_date, parse_time
from checkin_etl.common.exceptions import TransformError
from checkin_etl.common.models import (
    ACCOUNT_NUMBER,
    CHECK_IN_DATE,
    CHECK_IN_TIME,
    FIRST_NAME,
    ID_NUMBER,
    LAST_NAME,
    PROGRAM,
    Record,
    VisitRecord,
    VisitorLedgerEntry,
    visitor_key,
)
from checkin_etl.transformers.visits.quota_resolver import QuotaResolver


def parse_visit(record: Record) -> VisitRecord:
    """
    Read the check-in date and time of a raw row

    Raises:
        TransformError: If either value is missing or malformed
    """
    data = record.data
    try:
        return VisitRecord(
            date=parse_date(data.get(CHECK_IN_DATE, "")),
            time=parse_time(data.get(CHECK_IN_TIME, "")),
        )
    except ValueError as e:
        raise TransformError(f"{record.metadata.record_id} of {record.metadata.source_id}: {e}")


def group_visitors(records: List[Record], resolver: QuotaResolver) -> Dict[str, VisitorLedgerEntry]:
    """
    Build one ledger entry per visitor, in first-seen order

    Identity fields come from the visitor's first row. The quota is
    resolved once, when the visitor is first seen.
    """
    entries: Dict[str, VisitorLedgerEntry] = {}

    for record in records:
        data = record.data
        key = visitor_key(data.get(FIRST_NAME, ""), data.get(LAST_NAME, ""))
        visit = parse_visit(record)

        entry = entries.get(key)
        if entry is None:
            entry = VisitorLedgerEntry(
                account_number=data.get(ACCOUNT_NUMBER, ""),
                id_number=data.get(ID_NUMBER, ""),
                first_name=data.get(FIRST_NAME, ""),
                last_name=data.get(LAST_NAME, ""),
                program=data.get(PROGRAM, ""),
                quota=resolver.resolve(key),
            )
            entries[key] = entry

        entry.visits.append(visit)

    return entries
