"""
Pipeline orchestration module

Provides the per-file Pipeline and the multi-file batch runner.
"""
from checkin_etl.orchestration.pipeline import Pipeline
from checkin_etl.orchestration.pipeline_core import (
    apply_transformers,
    resolve_schema,
    load_to_destinations
)
from checkin_etl.orchestration.batch import BatchResult, BatchRunner

__all__ = [
    'BatchResult',
    'BatchRunner',
    'Pipeline',
    'apply_transformers',
    'resolve_schema',
    'load_to_destinations'
]
