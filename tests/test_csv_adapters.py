
import pytest

from checkin_etl.adapters.destinations.csv_loader import CSVLoader
from checkin_etl.adapters.sources.csv_source import CSVSource
from checkin_etl.common.exceptions import ConnectionError, ReadError
from checkin_etl.common.models import OUTPUT_SCHEMA, Record, RecordMetadata

from conftest import checkin_row, read_rows, write_checkins


def _record(data):
    return Record(data=data, metadata=RecordMetadata(source_type="test", source_id="t"))


def test_source_reads_strings_and_keeps_extra_columns(tmp_path):
    columns = ["Notes", "Account Number", "ID Number", "First Name", "Last Name",
               "Program", "Check-In Date", "Check-In Time"]
    path = write_checkins(
        tmp_path / "in.csv",
        [checkin_row(Notes="walk-in"), checkin_row(first="Sam", Notes="")],
        columns=columns,
    )

    with CSVSource(str(path)) as source:
        records = list(source.read())
        schema = source.get_schema()

    assert len(records) == 2
    assert records[0].data["Account Number"] == "000123"
    assert records[0].data["Notes"] == "walk-in"
    assert records[1].data["Notes"] == ""
    assert records[1].metadata.record_id == "row_1"
    assert schema.column_names == columns


def test_source_requires_checkin_columns(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("First Name,Last Name\nJane,Doe\n")
    with pytest.raises(ReadError, match="Check-In Date"):
        CSVSource(str(path)).connect()


def test_source_missing_file(tmp_path):
    with pytest.raises(ConnectionError):
        CSVSource(str(tmp_path / "missing.csv")).connect()


def test_source_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(ReadError):
        CSVSource(str(path)).connect()


def test_source_read_before_connect(tmp_path):
    source = CSVSource(str(tmp_path / "x.csv"))
    with pytest.raises(ReadError):
        list(source.read())


def _output_row(**overrides):
    row = checkin_row(at="9:00am")
    row["Total Visits"] = 1
    row.update(overrides)
    return row


def test_loader_commit_writes_schema_order(tmp_path):
    out = tmp_path / "nested" / "out.csv"
    loader = CSVLoader(str(out), batch_size=1)

    with loader:
        loader.create_schema(OUTPUT_SCHEMA)
        loader.begin_transaction()
        # keys deliberately out of order
        data = dict(reversed(list(_output_row().items())))
        assert loader.write(iter([_record(data), _record(_output_row(**{"First Name": "Sam"}))])) == 2
        assert not out.exists()
        loader.commit()

    rows = read_rows(out)
    assert list(rows[0]) == OUTPUT_SCHEMA.column_names
    assert [r["First Name"] for r in rows] == ["Jane", "Sam"]
    assert rows[0]["Account Number"] == "000123"
    assert list(tmp_path.joinpath("nested").glob("*.tmp")) == []


def test_loader_rollback_leaves_no_file(tmp_path):
    out = tmp_path / "out.csv"
    loader = CSVLoader(str(out))

    with loader:
        loader.create_schema(OUTPUT_SCHEMA)
        loader.begin_transaction()
        loader.write(iter([_record(_output_row())]))
        loader.rollback()

    assert not out.exists()
    assert list(tmp_path.glob("*.tmp")) == []


def test_loader_writes_header_for_empty_output(tmp_path):
    out = tmp_path / "out.csv"
    loader = CSVLoader(str(out))

    with loader:
        loader.create_schema(OUTPUT_SCHEMA)
        loader.begin_transaction()
        assert loader.write(iter([])) == 0
        loader.commit()

    assert out.read_text().strip() == ",".join(OUTPUT_SCHEMA.column_names)


def test_loader_overwrites_previous_output(tmp_path):
    out = tmp_path / "out.csv"
    out.write_text("stale\n")

    with CSVLoader(str(out)) as loader:
        loader.create_schema(OUTPUT_SCHEMA)
        loader.begin_transaction()
        loader.write(iter([_record(_output_row())]))
        loader.commit()

    assert len(read_rows(out)) == 1
