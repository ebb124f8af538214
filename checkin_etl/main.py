"""
Command-line entry point

USAGE:
  checkin-etl --config settings.yaml
  checkin-etl --config settings.yaml --seed 42 --log-level DEBUG
"""
import argparse
import random
import sys
from typing import List, Optional

from checkin_etl.common.config import DEFAULT_SETTINGS_FILE, Config, load_settings
from checkin_etl.common.exceptions import CheckInError, RetriesExhaustedError
from checkin_etl.common.logging import setup_logging
from checkin_etl.orchestration.batch import BatchRunner


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_RETRIES_EXHAUSTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checkin-etl",
        description="Top up monthly visitor check-in files to each visitor's visit quota",
    )
    parser.add_argument(
        "--config", default=DEFAULT_SETTINGS_FILE,
        help=f"YAML settings file (default: {DEFAULT_SETTINGS_FILE})"
    )
    parser.add_argument(
        "--env-file", default=None,
        help="Optional .env file with setting overrides"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for reproducible synthetic check-ins"
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: INFO)"
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Also write the log to this file"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        settings = load_settings(Config(args.config, args.env_file))
        runner = BatchRunner(settings, rng=random.Random(args.seed))
        result = runner.run()

    except RetriesExhaustedError as e:
        logger.error(f"{e}. Stopping; loosen valid_days/can_repeat_days or raise max_retries.")
        return EXIT_RETRIES_EXHAUSTED

    except CheckInError as e:
        logger.error(str(e))
        return EXIT_ERROR

    for outcome in result.files:
        logger.info(f"  {outcome.input_path.name} -> {outcome.output_path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
