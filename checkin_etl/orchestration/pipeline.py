"""
Pipeline orchestrator for the check-in reconciler

Runs one extract -> transform -> load pass over a single input file.
"""
import time
from datetime import datetime
from typing import List, Optional

from checkin_etl.adapters.base import SourceAdapter, DestinationAdapter
from checkin_etl.transformers.base_transformer import Transformer
from checkin_etl.common.models import PipelineResult, PipelineError, Schema
from checkin_etl.common.exceptions import PipelineError as PipelineException
from checkin_etl.common.exceptions import RetriesExhaustedError
from checkin_etl.common.logging import get_logger
from checkin_etl.orchestration.pipeline_core import (
    apply_transformers,
    resolve_schema,
    load_to_destinations
)


class Pipeline:
    """
    Pipeline orchestrator that connects Extract, Transform, and Load stages

    Example:
        pipeline = (Pipeline("2024-03")
            .extract(CSVSource("input/2024-03 checkins.csv"))
            .transform(VisitQuotaTransformer(policy, resolver))
            .load(CSVLoader("output/2024-03 checkins_processed.csv"))
            .run())
    """

    def __init__(self, pipeline_id: Optional[str] = None):
        """
        Initialize pipeline

        Args:
            pipeline_id: Optional pipeline identifier
        """
        self.pipeline_id = pipeline_id or f"pipeline_{int(time.time())}"
        self.logger = get_logger("Pipeline")

        self._source: Optional[SourceAdapter] = None
        self._transformers: List[Transformer] = []
        self._destinations: List[DestinationAdapter] = []
        self._schema: Optional[Schema] = None

        self.result: Optional[PipelineResult] = None

    def extract(self, source: SourceAdapter) -> 'Pipeline':
        """
        Set the data source

        Args:
            source: Source adapter

        Returns:
            self for chaining
        """
        self._source = source
        self.logger.debug(f"Source set: {source.__class__.__name__}")
        return self

    def transform(self, transformer: Transformer) -> 'Pipeline':
        """
        Add a transformer to the pipeline

        Args:
            transformer: Transformer to add

        Returns:
            self for chaining
        """
        self._transformers.append(transformer)
        self.logger.debug(f"Transformer added: {transformer.__class__.__name__}")
        return self

    def load(self, destination: DestinationAdapter) -> 'Pipeline':
        """
        Add a destination to the pipeline (supports multiple destinations)

        Args:
            destination: Destination adapter

        Returns:
            self for chaining
        """
        self._destinations.append(destination)
        self.logger.debug(f"Destination added: {destination.__class__.__name__}")
        return self

    def run(self) -> 'Pipeline':
        """
        Execute the pipeline

        Returns:
            self with result populated

        Raises:
            RetriesExhaustedError: Passed through unwrapped; nothing is loaded
            PipelineException: If any other stage fails
        """
        if not self._source:
            raise PipelineException("No source adapter set. Call extract() first.")

        if not self._destinations:
            raise PipelineException("No destination adapter set. Call load() first.")

        self.logger.info(f"Starting pipeline execution: {self.pipeline_id}")

        result = PipelineResult(
            success=False,
            start_time=datetime.now()
        )
        stage = "extract"

        try:
            # Stage 1: Extract
            extract_start = time.time()

            with self._source as source:
                self._schema = source.get_schema()
                records = list(source.read())
                for record in records:
                    record.metadata.pipeline_id = self.pipeline_id
                result.records_extracted = len(records)

                self.logger.info(f"Extracted {result.records_extracted} records")

            result.extract_duration = time.time() - extract_start

            # Stage 2: Transform
            stage = "transform"
            transform_start = time.time()
            self.logger.info(f"Transform - {len(self._transformers)} transformer(s)")

            records = apply_transformers(records, self._transformers, self.logger)
            result.records_transformed = len(records)
            result.transform_duration = time.time() - transform_start

            # Stage 3: Load
            stage = "load"
            load_start = time.time()
            load_schema = resolve_schema(records, self._schema, self._transformers)

            result.records_loaded = load_to_destinations(
                records, load_schema, self._destinations, self.logger
            )
            result.load_duration = time.time() - load_start

            result.success = True
            result.end_time = datetime.now()
            result.duration_seconds = (result.end_time - result.start_time).total_seconds()

            self.logger.info(
                f"Summary: {result.records_extracted} extracted, "
                f"{result.records_transformed} transformed, "
                f"{result.records_loaded} loaded in {result.duration_seconds:.2f}s"
            )

        except RetriesExhaustedError as e:
            self._record_failure(result, stage, e)
            self.logger.error(f"Pipeline aborted: {e}")
            raise

        except Exception as e:
            self._record_failure(result, stage, e)
            self.logger.error(f"Pipeline failed: {e}")
            raise PipelineException(f"Pipeline execution failed: {e}") from e

        finally:
            self.result = result

        return self

    def _record_failure(self, result: PipelineResult, stage: str, error: Exception) -> None:
        result.success = False
        result.end_time = datetime.now()
        result.duration_seconds = (result.end_time - result.start_time).total_seconds()
        result.errors.append(PipelineError(
            stage=stage,
            error_type=type(error).__name__,
            message=str(error),
            timestamp=datetime.now(),
            retryable=False
        ))

    def get_stats(self) -> dict:
        """
        Get pipeline statistics

        Returns:
            dict: Pipeline statistics
        """
        if not self.result:
            return {}

        stats = {
            'pipeline_id': self.pipeline_id,
            'success': self.result.success,
            'records_extracted': self.result.records_extracted,
            'records_transformed': self.result.records_transformed,
            'records_loaded': self.result.records_loaded,
            'duration_seconds': self.result.duration_seconds,
            'extract_duration': self.result.extract_duration,
            'transform_duration': self.result.transform_duration,
            'load_duration': self.result.load_duration,
        }

        for i, transformer in enumerate(self._transformers):
            stats[f'transformer_{i}'] = transformer.get_stats()

        return stats
