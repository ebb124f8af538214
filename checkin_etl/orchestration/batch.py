"""
Batch runner: one pipeline per monthly input file
"""
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from checkin_etl.adapters.destinations.csv_loader import CSVLoader
from checkin_etl.adapters.sources.csv_source import CSVSource
from checkin_etl.adapters.sources.file_discovery import InputFile, discover_input_files, output_path_for
from checkin_etl.common.config import Settings
from checkin_etl.common.logging import get_logger
from checkin_etl.orchestration.pipeline import Pipeline
from checkin_etl.transformers.visits.quota_resolver import QuotaResolver
from checkin_etl.transformers.visits.quota_transformer import VisitQuotaTransformer


@dataclass
class FileOutcome:
    """What happened to one input file"""
    input_path: Path
    output_path: Path
    stats: Dict[str, Any]


@dataclass
class BatchResult:
    """Outcome of a run over all discovered files"""
    files: List[FileOutcome] = field(default_factory=list)

    @property
    def rows_written(self) -> int:
        return sum(f.stats.get('records_loaded', 0) for f in self.files)


class BatchRunner:
    """
    Processes every matching input file, strictly one at a time

    Each file gets its own transformer, and therefore its own retry budget
    and visitor ledger. Any error stops the run: files already written are
    kept, the file in progress leaves no output, later files are not read.
    """

    def __init__(
        self,
        settings: Settings,
        rng: Optional[random.Random] = None,
        prompt: Callable[[str], str] = input
    ):
        """
        Args:
            settings: Validated run settings
            rng: Random source for all files; seed it for reproducible output
            prompt: Function used to ask for missing visitor quotas
        """
        self.settings = settings
        self.rng = rng or random.Random()
        self.resolver = QuotaResolver(
            entries=settings.entries_per_visitor,
            default_quota=settings.default_quota,
            ask_for_missing=settings.ask_for_missing_entries,
            prompt=prompt,
        )
        self.logger = get_logger("BatchRunner")

    def discover(self) -> List[InputFile]:
        return discover_input_files(
            self.settings.input_folder,
            self.settings.filename_format_regex,
            self.settings.date_format,
        )

    def run(self) -> BatchResult:
        """
        Run the pipeline over all input files

        Raises:
            ConfigurationError: If no input files are found or a name has a bad date
            RetriesExhaustedError: If synthetic generation fails for any file
            PipelineError: If a file cannot be read, transformed or written
        """
        files = self.discover()
        result = BatchResult()

        for index, input_file in enumerate(files, start=1):
            self.logger.info(
                f"[{index}/{len(files)}] Processing {input_file.path.name} "
                f"({input_file.month_label})"
            )
            result.files.append(self.process_file(input_file))

        self.logger.info(
            f"Processed {len(result.files)} file(s), {result.rows_written} row(s) written"
        )
        return result

    def process_file(self, input_file: InputFile) -> FileOutcome:
        output_path = output_path_for(
            input_file.path,
            self.settings.output_folder,
            self.settings.output_filename_suffix,
        )
        policy = self.settings.policy.for_window(*input_file.window)

        pipeline = (Pipeline(pipeline_id=input_file.path.stem)
            .extract(CSVSource(str(input_file.path)))
            .transform(VisitQuotaTransformer(policy, self.resolver, self.rng))
            .load(CSVLoader(str(output_path)))
            .run())

        return FileOutcome(
            input_path=input_file.path,
            output_path=output_path,
            stats=pipeline.get_stats(),
        )
