"""
CSV source adapter for reading check-in files
"""
import hashlib
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

import pandas as pd

from checkin_etl.adapters.base import SourceAdapter
from checkin_etl.common.models import INPUT_COLUMNS, Field, FieldType, Record, RecordMetadata, Schema
from checkin_etl.common.exceptions import ConnectionError, ReadError


class CSVSource(SourceAdapter):
    """Source adapter for check-in CSV files"""

    def __init__(
        self,
        file_path: str,
        delimiter: str = ",",
        encoding: str = "utf-8",
        required_columns: Optional[List[str]] = None,
        **kwargs
    ):
        """
        Initialize CSV source

        Every cell is read as a string so identifiers keep leading zeros
        and blank cells stay blank instead of turning into NaN.

        Args:
            file_path: Path to CSV file
            delimiter: CSV delimiter (default: ',')
            encoding: File encoding (default: 'utf-8')
            required_columns: Header names that must be present
                (default: the check-in input columns)
            **kwargs: Additional pandas read_csv parameters
        """
        config = {
            'file_path': file_path,
            'delimiter': delimiter,
            'encoding': encoding,
            **kwargs
        }
        super().__init__(config)

        self.file_path = Path(file_path)
        self.delimiter = delimiter
        self.encoding = encoding
        self.required_columns = list(required_columns) if required_columns is not None else list(INPUT_COLUMNS)
        self.pandas_kwargs = kwargs

        self._columns: Optional[List[str]] = None
        self._file_hash: Optional[str] = None

    def connect(self) -> None:
        """Validate the file exists and carries the required header"""
        if not self.file_path.exists():
            raise ConnectionError(f"CSV file not found: {self.file_path}")

        if not self.file_path.is_file():
            raise ConnectionError(f"Path is not a file: {self.file_path}")

        self._columns = self._read_header()
        missing = [c for c in self.required_columns if c not in self._columns]
        if missing:
            raise ReadError(
                f"{self.file_path.name}: missing required columns: {', '.join(missing)}"
            )

        self._connected = True
        self.logger.info(f"Connected to CSV file: {self.file_path}")

        self._file_hash = self._calculate_file_hash()

    def _read_header(self) -> List[str]:
        try:
            header = pd.read_csv(
                self.file_path,
                delimiter=self.delimiter,
                encoding=self.encoding,
                nrows=0,
                **self.pandas_kwargs
            )
        except pd.errors.EmptyDataError:
            raise ReadError(f"CSV file is empty: {self.file_path}")
        except Exception as e:
            raise ReadError(f"Error reading CSV header: {e}")
        return [str(c).strip() for c in header.columns]

    def _calculate_file_hash(self) -> str:
        """Calculate SHA256 hash of file for logging and lineage"""
        sha256 = hashlib.sha256()
        with open(self.file_path, 'rb') as f:
            for chunk in iter(lambda: f.read(8192), b''):
                sha256.update(chunk)
        return sha256.hexdigest()

    def read(self, batch_size: int = 100) -> Iterator[Record]:
        """
        Read records from CSV file

        Args:
            batch_size: Number of rows to read at once

        Yields:
            Record: One record per CSV row
        """
        if not self._connected:
            raise ReadError("Not connected. Call connect() first.")

        try:
            chunk_iter = pd.read_csv(
                self.file_path,
                delimiter=self.delimiter,
                encoding=self.encoding,
                dtype=str,
                keep_default_na=False,
                chunksize=batch_size,
                **self.pandas_kwargs
            )

            row_num = 0
            for chunk in chunk_iter:
                chunk.columns = [str(c).strip() for c in chunk.columns]
                for row in chunk.to_dict(orient="records"):
                    metadata = RecordMetadata(
                        source_type="csv",
                        source_id=str(self.file_path),
                        record_id=f"row_{row_num}",
                        stage="extract",
                        custom={'file_hash': self._file_hash},
                    )

                    yield Record(
                        data={k: (v.strip() if isinstance(v, str) else "") for k, v in row.items()},
                        metadata=metadata,
                        extracted_at=datetime.now()
                    )
                    row_num += 1

            self.logger.info(f"Read {row_num} records from {self.file_path.name}")

        except ReadError:
            raise
        except Exception as e:
            raise ReadError(f"Error reading CSV file: {e}")

    def get_schema(self) -> Schema:
        """
        Schema of the file: every column is a string

        Returns:
            Schema: Column names in file order
        """
        if not self._connected:
            self.connect()

        fields = [Field(name=c, type=FieldType.STRING) for c in self._columns]
        return Schema(
            name=self.file_path.stem,
            fields=fields,
            created_at=datetime.now(),
        )

    def close(self) -> None:
        """Close and cleanup"""
        self._columns = None
        self._connected = False
        self.logger.info("CSV source closed")
