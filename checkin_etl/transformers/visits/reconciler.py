"""
Visit quota reconciliation
"""
import random
from typing import Optional

from checkin_etl.common.logging import get_logger
from checkin_etl.common.models import VisitorLedgerEntry
from checkin_etl.transformers.visits.generator import RetryBudget, SyntheticVisitGenerator


class QuotaReconciler:
    """Brings a visitor's visit count into its [min, max] quota"""

    def __init__(self, generator: SyntheticVisitGenerator, rng: Optional[random.Random] = None):
        self.generator = generator
        self.rng = rng or generator.rng
        self.logger = get_logger(self.__class__.__name__)

    def reconcile(self, entry: VisitorLedgerEntry, budget: RetryBudget) -> int:
        """
        Top up or check a visitor's visits against its quota

        Below the minimum, a target count is drawn uniformly from
        [min, max] and synthetic visits are appended until it is reached.
        Above the maximum, the visits are left alone and the overflow is
        only logged.

        Args:
            entry: Ledger entry, modified in place
            budget: Retry budget of the current file run

        Returns:
            int: Number of synthetic visits added

        Raises:
            RetriesExhaustedError: Propagated from the generator
        """
        quota = entry.quota
        current = len(entry.visits)

        if current < quota.min:
            target = self.rng.randint(quota.min, quota.max)
            to_add = target - current
            self.logger.warning(
                f"{entry.key} has {current} visit(s), below minimum {quota.min} "
                f"(max {quota.max}); adding {to_add}"
            )
            for _ in range(to_add):
                entry.visits.append(self.generator.generate(entry.visits, budget, entry.key))
            return to_add

        if current > quota.max:
            self.logger.info(
                f"{entry.key} has {current} visit(s), above maximum {quota.max}; leaving as is"
            )

        return 0
