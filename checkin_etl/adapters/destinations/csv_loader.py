"""
CSV destination adapter for writing reconciled check-ins
"""
import pandas as pd
from pathlib import Path
from typing import Dict, Iterator, List, Optional
import tempfile
import shutil

from checkin_etl.adapters.base import DestinationAdapter
from checkin_etl.common.models import Record, Schema
from checkin_etl.common.exceptions import ConnectionError, SchemaError, WriteError


class CSVLoader(DestinationAdapter):
    """Destination adapter for CSV files"""

    def __init__(
        self,
        file_path: str,
        delimiter: str = ",",
        encoding: str = "utf-8",
        batch_size: int = 1000,
        **kwargs
    ):
        """
        Initialize CSV loader

        Args:
            file_path: Path to output CSV file
            delimiter: CSV delimiter (default: ',')
            encoding: File encoding (default: 'utf-8')
            batch_size: Rows buffered before each flush
            **kwargs: Additional pandas to_csv parameters
        """
        config = {
            'file_path': file_path,
            'delimiter': delimiter,
            'encoding': encoding,
            'batch_size': batch_size,
            **kwargs
        }
        super().__init__(config)

        self.file_path = Path(file_path)
        self.delimiter = delimiter
        self.encoding = encoding
        self.pandas_kwargs = kwargs

        self._batch: List[Dict] = []
        self._temp_file: Optional[Path] = None
        self._schema: Optional[Schema] = None
        self._header_written = False

    def connect(self) -> None:
        """Establish connection (validate/create output directory)"""
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)

            if self.file_path.exists() and not self.file_path.is_file():
                raise ConnectionError(f"Path exists but is not a file: {self.file_path}")
            self.logger.info(f"Will write CSV to: {self.file_path}")

            # Create temporary file for transaction support
            self._temp_file = Path(tempfile.mktemp(
                suffix='.csv.tmp',
                dir=str(self.file_path.parent)
            ))

            self._connected = True
            self.logger.info("CSV loader connected")

        except ConnectionError:
            raise
        except Exception as e:
            raise ConnectionError(f"Failed to connect CSV loader: {e}")

    def create_schema(self, schema: Schema) -> None:
        """
        Store schema for CSV header generation

        Args:
            schema: Schema definition

        Raises:
            SchemaError: If not connected
        """
        if not self._connected:
            raise SchemaError("Not connected. Call connect() first.")

        self._schema = schema
        self.logger.info(f"Schema set with {len(schema.fields)} columns")

    def write(self, records: Iterator[Record]) -> int:
        """
        Write records to CSV file

        Args:
            records: Iterator of records to write

        Returns:
            int: Number of records written

        Raises:
            WriteError: If writing fails
        """
        if not self._connected:
            raise WriteError("Not connected. Call connect() first.")

        count = 0
        batch_size = self.config.get('batch_size', 1000)

        try:
            for record in records:
                self._batch.append(record.data)
                count += 1

                if len(self._batch) >= batch_size:
                    self._flush_batch()

            if self._batch:
                self._flush_batch()

            self.logger.info(f"Wrote {count} records to CSV batch")
            return count

        except WriteError:
            raise
        except Exception as e:
            raise WriteError(f"Failed to write records: {e}")

    def _columns(self, df: pd.DataFrame) -> List[str]:
        """Schema columns first, then any extra columns in arrival order"""
        if not self._schema:
            return list(df.columns)
        schema_columns = self._schema.column_names
        extra_columns = [c for c in df.columns if c not in schema_columns]
        return schema_columns + extra_columns

    def _flush_batch(self) -> None:
        """Flush current batch to CSV file"""
        if not self._batch:
            return

        try:
            df = pd.DataFrame(self._batch)
            df = df.reindex(columns=self._columns(df))
            self._write_frame(df)
            self._batch = []
            self.logger.debug(f"Flushed batch of {len(df)} records")

        except Exception as e:
            raise WriteError(f"Failed to flush batch: {e}")

    def _write_frame(self, df: pd.DataFrame) -> None:
        # During a transaction rows go to the temp file
        output_file = self._temp_file if self._transaction_active else self.file_path
        write_header = not self._header_written
        file_mode = 'a' if self._header_written else 'w'

        df.to_csv(
            output_file,
            sep=self.delimiter,
            encoding=self.encoding,
            mode=file_mode,
            header=write_header,
            index=False,
            **self.pandas_kwargs
        )
        self._header_written = True

    def begin_transaction(self) -> None:
        """Begin transaction"""
        super().begin_transaction()
        self._header_written = False  # Reset for transaction

    def commit(self) -> None:
        """Commit transaction - finalize the file"""
        if self._transaction_active:
            try:
                if self._batch:
                    self._flush_batch()

                # A file with no rows still gets its header
                if not self._header_written and self._schema:
                    self._write_frame(pd.DataFrame(columns=self._schema.column_names))

                if self._temp_file and self._temp_file.exists():
                    shutil.move(str(self._temp_file), str(self.file_path))
                    self.logger.info(f"Transaction committed, CSV written to {self.file_path}")

            except Exception as e:
                self.logger.error(f"Error during commit: {e}")
                self.rollback()
                raise WriteError(f"Failed to commit: {e}")

        super().commit()

    def rollback(self) -> None:
        """Rollback transaction - discard temp file"""
        if self._transaction_active:
            if self._temp_file and self._temp_file.exists():
                try:
                    self._temp_file.unlink()
                    self.logger.debug("Temp file deleted (rollback)")
                except OSError as e:
                    self.logger.warning(f"Failed to delete temp file: {e}")

            self._batch = []
            self._header_written = False

        super().rollback()

    def close(self) -> None:
        """Close and cleanup"""
        # If not in transaction, flush any remaining batch
        if not self._transaction_active and self._batch:
            self._flush_batch()

        if self._temp_file and self._temp_file.exists():
            try:
                self._temp_file.unlink()
            except OSError as e:
                self.logger.warning(f"Failed to cleanup temp file: {e}")

        self._connected = False
        self.logger.info("CSV loader closed")
