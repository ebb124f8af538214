"""
Single file check-in pipeline example

This example runs one monthly file through the reconciler without a
settings file:
- Extract: Read check-ins from CSV
- Transform: Top visitors up to their visit quota
- Load: Write the sorted, normalized CSV
"""
import random
import sys
from datetime import date, time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from checkin_etl.adapters.destinations.csv_loader import CSVLoader
from checkin_etl.adapters.sources.csv_source import CSVSource
from checkin_etl.adapters.sources.file_discovery import InputFile
from checkin_etl.common.datetime_utils import month_window, parse_weekdays
from checkin_etl.common.logging import setup_logging
from checkin_etl.common.models import GenerationPolicy, Quota
from checkin_etl.orchestration.pipeline import Pipeline
from checkin_etl.transformers.visits.quota_resolver import QuotaResolver
from checkin_etl.transformers.visits.quota_transformer import VisitQuotaTransformer


def main():
    """Run the single file pipeline"""

    logger = setup_logging(level="INFO")

    csv_file = Path(__file__).parent.parent / "data" / "2024-03 checkins.csv"
    output_csv = Path(__file__).parent.parent / "output" / "2024-03 checkins_processed.csv"

    if not csv_file.exists():
        logger.error(f"Sample CSV not found: {csv_file}")
        logger.info("Generate one with: python scripts/generate_sample_checkins.py")
        return 1

    input_file = InputFile(path=csv_file, window=month_window(date(2024, 3, 1)))

    policy = GenerationPolicy(
        valid_window=input_file.window,
        time_window=(time(9, 0), time(17, 0)),
        allowed_weekdays=parse_weekdays(["Monday", "Wednesday", "Friday"]),
        can_repeat_days=False,
        max_retries=1000,
    )
    resolver = QuotaResolver(
        entries={"Jane Doe": Quota(3, 5)},
        default_quota=Quota(2, 3),
    )

    pipeline = (Pipeline(input_file.path.stem)
        .extract(CSVSource(str(input_file.path)))
        .transform(VisitQuotaTransformer(policy, resolver, random.Random(42)))
        .load(CSVLoader(str(output_csv)))
        .run())

    stats = pipeline.get_stats()
    t_stats = stats['transformer_0']
    logger.info(f"Check-ins read: {stats['records_extracted']}")
    logger.info(f"Check-ins written: {stats['records_loaded']}")
    logger.info(f"Visitors: {t_stats['visitors']}")
    logger.info(f"  - Topped up: {t_stats['records_modified']} ({t_stats['visits_added']} visits)")
    logger.info(f"  - Above maximum: {t_stats['visitors_over_max']}")
    logger.info(f"Output: {output_csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
