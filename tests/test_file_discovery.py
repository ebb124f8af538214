import re
from datetime import date
from pathlib import Path

import pytest

from checkin_etl.adapters.sources.file_discovery import (
    discover_input_files,
    output_path_for,
    parse_file_date,
)
from checkin_etl.common.exceptions import ConfigurationError


def _touch(folder: Path, *names):
    folder.mkdir(parents=True, exist_ok=True)
    for name in names:
        (folder / name).write_text("")


def test_matching_files_get_their_month(tmp_path):
    _touch(tmp_path, "Check-Ins March 2024.csv", "Check-Ins February 2024.csv", "notes.txt")

    files = discover_input_files(
        str(tmp_path), r"^Check-Ins (?P<date>\w+ \d{4})\.csv$", "%B %Y"
    )

    assert [f.path.name for f in files] == ["Check-Ins February 2024.csv", "Check-Ins March 2024.csv"]
    assert files[0].window == (date(2024, 2, 1), date(2024, 2, 29))
    assert files[1].window == (date(2024, 3, 1), date(2024, 3, 31))
    assert files[1].month_label == "March 2024"


def test_first_group_used_without_named_group():
    pattern = re.compile(r"^visits_(\d{4}-\d{2})\.csv$")
    assert parse_file_date("visits_2023-11.csv", pattern, "%Y-%m") == date(2023, 11, 1)


def test_whole_match_used_without_groups():
    pattern = re.compile(r"\d{4}-\d{2}-\d{2}")
    assert parse_file_date("log 2024-07-19.csv", pattern, "%Y-%m-%d") == date(2024, 7, 19)


def test_bad_date_in_name(tmp_path):
    _touch(tmp_path, "2024-13 visits.csv")
    with pytest.raises(ConfigurationError, match="Could not parse date"):
        discover_input_files(str(tmp_path), r"^(?P<date>\d{4}-\d{2}).*\.csv$", "%Y-%m")


def test_no_matching_files(tmp_path):
    _touch(tmp_path, "readme.md")
    with pytest.raises(ConfigurationError, match="No input files"):
        discover_input_files(str(tmp_path), r"\.csv$", "%Y")


def test_missing_folder(tmp_path):
    with pytest.raises(ConfigurationError, match="Input folder not found"):
        discover_input_files(str(tmp_path / "nope"), r"\.csv$", "%Y")


def test_invalid_regex(tmp_path):
    _touch(tmp_path, "a.csv")
    with pytest.raises(ConfigurationError, match="Invalid filename_format_regex"):
        discover_input_files(str(tmp_path), r"(unclosed", "%Y")


def test_output_path_appends_suffix():
    assert output_path_for(Path("in/2024-03 visits.csv"), "out", "_processed") == Path(
        "out/2024-03 visits_processed.csv"
    )
