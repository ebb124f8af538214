"""
Visit quota transformer

Groups a file's check-in rows by visitor, tops up visitors below their
minimum with synthetic check-ins and emits one sorted output row per visit.
"""
import random
from datetime import datetime
from typing import Any, Dict, List, Optional

from checkin_etl.common.models import OUTPUT_SCHEMA, GenerationPolicy, Record, RecordMetadata, Schema
from checkin_etl.transformers.base_transformer import Transformer
from checkin_etl.transformers.visits.flatten import entry_rows
from checkin_etl.transformers.visits.generator import RetryBudget, SyntheticVisitGenerator
from checkin_etl.transformers.visits.grouper import group_visitors
from checkin_etl.transformers.visits.quota_resolver import QuotaResolver
from checkin_etl.transformers.visits.reconciler import QuotaReconciler


class VisitQuotaTransformer(Transformer):
    """Transformer that reconciles every visitor of a file against its quota"""

    def __init__(
        self,
        policy: GenerationPolicy,
        resolver: QuotaResolver,
        rng: Optional[random.Random] = None,
        **kwargs
    ):
        """
        Initialize visit quota transformer

        Args:
            policy: Generation constraints, bound to the file's month window
            resolver: Quota lookup for visitor names
            rng: Random source shared by target-count and visit sampling
            **kwargs: Additional configuration
        """
        super().__init__({
            'valid_window': policy.valid_window,
            'max_retries': policy.max_retries,
            **kwargs
        })

        self.policy = policy
        self.resolver = resolver
        self.rng = rng or random.Random()
        self.reconciler = QuotaReconciler(SyntheticVisitGenerator(policy, self.rng), self.rng)

        self.visitors = 0
        self.visits_added = 0
        self.visitors_over_max = 0
        self.last_budget: Optional[RetryBudget] = None

    def transform_batch(self, records: List[Record]) -> List[Record]:
        """
        Reconcile all visitors found in a file's records

        The retry budget is created here, so it is shared by every visitor
        of the batch and starts from zero for each file.

        Args:
            records: Raw check-in rows of one file

        Returns:
            List[Record]: Output rows, grouped by visitor and sorted by date/time

        Raises:
            TransformError: If a row has an unreadable date or time
            RetriesExhaustedError: If synthetic generation runs out of retries
        """
        if not records:
            return []

        entries = group_visitors(records, self.resolver)
        budget = RetryBudget(self.policy.max_retries)
        self.last_budget = budget

        for entry in entries.values():
            added = self.reconciler.reconcile(entry, budget)
            self.visits_added += added
            if added:
                self.stats.records_modified += 1
            elif entry.final_count > entry.quota.max:
                self.visitors_over_max += 1
        self.visitors += len(entries)

        source_id = records[0].metadata.source_id
        pipeline_id = records[0].metadata.pipeline_id
        now = datetime.now()

        result = []
        for entry in entries.values():
            for visit, row in entry_rows(entry):
                result.append(Record(
                    data=row,
                    metadata=RecordMetadata(
                        source_type="reconciler",
                        source_id=source_id,
                        record_id=f"{entry.key}/{len(result)}",
                        pipeline_id=pipeline_id,
                        stage="transform",
                        synthetic=visit.synthetic,
                    ),
                    schema=OUTPUT_SCHEMA,
                    transformed_at=now,
                ))

        self.stats.records_processed += len(records)
        self.logger.info(
            f"Reconciled {len(entries)} visitor(s): {len(records)} check-ins in, "
            f"{len(result)} out ({len(result) - len(records)} synthesized, "
            f"{budget.attempts} rejected candidate(s))"
        )
        return result

    def get_output_schema(self) -> Schema:
        return OUTPUT_SCHEMA

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats.update({
            'visitors': self.visitors,
            'visits_added': self.visits_added,
            'visitors_over_max': self.visitors_over_max,
        })
        return stats
