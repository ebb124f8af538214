"""
Source adapters for extracting check-in data.
"""
from checkin_etl.adapters.sources.csv_source import CSVSource
from checkin_etl.adapters.sources.file_discovery import InputFile, discover_input_files

__all__ = [
    'CSVSource',
    'InputFile',
    'discover_input_files',
]
