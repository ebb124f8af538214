"""
Shared pipeline core functions

These functions are used by Pipeline to keep stage logic in one place.
"""
from typing import List, Optional

from checkin_etl.adapters.base import DestinationAdapter
from checkin_etl.transformers.base_transformer import Transformer
from checkin_etl.common.models import Record, Schema
from checkin_etl.common.logging import get_logger


def apply_transformers(
    records: List[Record],
    transformers: List[Transformer],
    logger=None
) -> List[Record]:
    """
    Apply transformers in order

    Args:
        records: List of records to transform
        transformers: List of transformers to apply in order
        logger: Optional logger for debug output

    Returns:
        Transformed records
    """
    if logger is None:
        logger = get_logger("PipelineCore")

    if not transformers:
        logger.info("No transformers to apply")
        return records

    for transformer in transformers:
        transformer_name = transformer.__class__.__name__
        logger.info(f"Applying transformer: {transformer_name}")

        records = transformer.transform_batch(records)

        logger.info(f"After {transformer_name}: {len(records)} records remain")

    return records


def resolve_schema(
    records: List[Record],
    source_schema: Schema,
    transformers: Optional[List[Transformer]] = None
) -> Schema:
    """
    Determine which schema to use for loading

    The last transformer that declares an output schema wins, so an empty
    batch still loads with the transformed shape. Otherwise use the schema
    carried by the transformed records, then the source schema.

    Args:
        records: Transformed records (may contain updated schema)
        source_schema: Original schema from source
        transformers: Transformers applied to the records

    Returns:
        Schema to use for loading
    """
    for transformer in reversed(transformers or []):
        schema = transformer.get_output_schema()
        if schema is not None:
            return schema

    if records and records[0].schema:
        return records[0].schema

    return source_schema


def load_to_destinations(
    records: List[Record],
    schema: Schema,
    destinations: List[DestinationAdapter],
    logger=None
) -> int:
    """
    Load records to one or more destinations with transaction support

    Args:
        records: Records to load
        schema: Schema for the data
        destinations: List of destination adapters
        logger: Optional logger for debug output

    Returns:
        Number of records loaded (from first destination)
    """
    if logger is None:
        logger = get_logger("PipelineCore")

    if not destinations:
        logger.warning("No destinations configured")
        return 0

    total_written = 0

    for i, destination in enumerate(destinations):
        dest_name = destination.__class__.__name__
        logger.info(f"Loading to destination {i+1}/{len(destinations)}: {dest_name}")

        with destination:
            destination.create_schema(schema)

            destination.begin_transaction()
            try:
                written = destination.write(iter(records))
                destination.commit()

                if i == 0:
                    total_written = written

                logger.info(f"Loaded {written} records to {dest_name}")

            except Exception as e:
                destination.rollback()
                logger.error(f"Failed to load to {dest_name}: {e}")
                raise

    return total_written
