"""
Base transformer interface
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from checkin_etl.common.models import Record, Schema
from checkin_etl.common.logging import get_logger


@dataclass
class TransformerStats:
    """Statistics for transformer execution"""
    records_processed: int = 0
    records_modified: int = 0


class Transformer(ABC):
    """Abstract base class for transformers that work on a whole file's records"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize transformer

        Args:
            config: Transformer-specific configuration
        """
        self.config = config or {}
        self.stats = TransformerStats()
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def transform_batch(self, records: List[Record]) -> List[Record]:
        """
        Transform a batch of records

        Args:
            records: Input records

        Returns:
            List[Record]: Transformed records

        Raises:
            TransformError: If transformation fails
        """
        pass

    def get_output_schema(self) -> Optional[Schema]:
        """
        Schema of the records this transformer emits

        Returns:
            Optional[Schema]: Output schema, or None if rows keep the input shape
        """
        return None

    def get_stats(self) -> Dict[str, Any]:
        """
        Get transformation statistics

        Returns:
            Dict: Statistics (records processed, modified)
        """
        return {
            'records_processed': self.stats.records_processed,
            'records_modified': self.stats.records_modified,
        }
