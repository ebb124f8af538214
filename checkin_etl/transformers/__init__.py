"""
Transformers for check-in processing.
"""
from checkin_etl.transformers.base_transformer import Transformer, TransformerStats

__all__ = [
    'Transformer',
    'TransformerStats',
]
