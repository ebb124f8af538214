"""
Input file discovery

Finds monthly check-in files whose names match the configured pattern and
works out the calendar month each one covers.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import List, Tuple

from checkin_etl.common.datetime_utils import month_window
from checkin_etl.common.exceptions import ConfigurationError
from checkin_etl.common.logging import get_logger


logger = get_logger("FileDiscovery")


@dataclass(frozen=True)
class InputFile:
    """An input file and the month window its check-ins belong to"""
    path: Path
    window: Tuple[date, date]

    @property
    def month_label(self) -> str:
        return self.window[0].strftime("%B %Y")


def parse_file_date(file_name: str, pattern: re.Pattern, date_format: str) -> date:
    """
    Extract the date embedded in a file name

    The date text is the named group ``date`` when the pattern has one,
    else its first group, else the whole match.

    Raises:
        ConfigurationError: If the name doesn't match or the date doesn't parse
    """
    match = pattern.search(file_name)
    if not match:
        raise ConfigurationError(f"File name does not match pattern: {file_name}")

    if 'date' in pattern.groupindex:
        date_text = match.group('date')
    elif pattern.groups:
        date_text = match.group(1)
    else:
        date_text = match.group(0)

    try:
        return datetime.strptime(date_text, date_format).date()
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Could not parse date '{date_text}' in {file_name} with format '{date_format}': {e}"
        )


def output_path_for(input_path: Path, output_folder: str, suffix: str) -> Path:
    """Output file path: input stem plus suffix, in the output folder"""
    return Path(output_folder) / f"{input_path.stem}{suffix}{input_path.suffix or '.csv'}"


def discover_input_files(
    input_folder: str,
    filename_regex: str,
    date_format: str
) -> List[InputFile]:
    """
    List input files matching the filename pattern, sorted by name

    Args:
        input_folder: Folder to scan (not recursive)
        filename_regex: Pattern a file name must match
        date_format: strptime format of the date text in the name

    Returns:
        Matching files with their month windows

    Raises:
        ConfigurationError: If the folder is missing, the pattern is invalid,
            nothing matches, or a matching name has a bad date
    """
    folder = Path(input_folder)
    if not folder.is_dir():
        raise ConfigurationError(f"Input folder not found: {folder}")

    try:
        pattern = re.compile(filename_regex)
    except re.error as e:
        raise ConfigurationError(f"Invalid filename_format_regex '{filename_regex}': {e}")

    files = []
    for path in sorted(folder.iterdir()):
        if not path.is_file() or not pattern.search(path.name):
            logger.debug(f"Skipping {path.name}")
            continue
        file_date = parse_file_date(path.name, pattern, date_format)
        files.append(InputFile(path=path, window=month_window(file_date)))

    if not files:
        raise ConfigurationError(
            f"No input files in {folder} match pattern '{filename_regex}'"
        )

    logger.info(f"Found {len(files)} input file(s) in {folder}")
    return files
