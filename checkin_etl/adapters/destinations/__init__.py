"""Destination adapters for loading data"""

from checkin_etl.adapters.destinations.csv_loader import CSVLoader

__all__ = [
    'CSVLoader',
]
