"""
Synthetic check-in generation by bounded rejection sampling
"""
import random
from datetime import datetime, timedelta
from typing import Iterable, Optional

from checkin_etl.common.exceptions import RetriesExhaustedError
from checkin_etl.common.logging import get_logger
from checkin_etl.common.models import GenerationPolicy, VisitRecord


class RetryBudget:
    """
    Rejected-candidate counter shared by every visitor in one file run

    A fresh budget is created for each input file. Each rejected candidate
    date consumes one attempt; the attempt that reaches the limit raises
    RetriesExhaustedError.
    """

    def __init__(self, max_retries: int):
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_retries}")
        self.max_retries = max_retries
        self.attempts = 0

    @property
    def remaining(self) -> int:
        return self.max_retries - self.attempts

    def consume(self, visitor: str = "") -> None:
        self.attempts += 1
        if self.attempts >= self.max_retries:
            raise RetriesExhaustedError(self.max_retries, visitor)


class SyntheticVisitGenerator:
    """Produces one valid synthetic check-in at a time for a visitor"""

    def __init__(self, policy: GenerationPolicy, rng: Optional[random.Random] = None):
        """
        Args:
            policy: Date window, weekday, repeat-day and time constraints
            rng: Random source; pass a seeded instance for reproducible output
        """
        self.policy = policy
        self.rng = rng or random.Random()
        self.logger = get_logger(self.__class__.__name__)

        start, end = policy.valid_window
        self._window_days = (end - start).days
        min_time, max_time = policy.time_window
        self._time_span_seconds = _seconds(max_time) - _seconds(min_time)

    def generate(
        self,
        existing_visits: Iterable[VisitRecord],
        budget: RetryBudget,
        visitor: str = ""
    ) -> VisitRecord:
        """
        Draw one check-in satisfying every constraint of the policy

        Args:
            existing_visits: The visitor's visits so far, including any
                synthesized earlier in the same pass
            budget: Retry budget of the current file run
            visitor: Visitor name, used in the failure message

        Returns:
            VisitRecord: A synthetic check-in

        Raises:
            RetriesExhaustedError: When the file's retry budget runs out
        """
        taken_dates = None
        if not self.policy.can_repeat_days:
            taken_dates = {v.date for v in existing_visits}

        while True:
            candidate = self._random_date()

            if self.policy.allowed_weekdays and candidate.weekday() not in self.policy.allowed_weekdays:
                budget.consume(visitor)
                continue

            if taken_dates is not None and candidate in taken_dates:
                budget.consume(visitor)
                continue

            visit = VisitRecord(date=candidate, time=self._random_time(), synthetic=True)
            self.logger.debug(
                f"Generated {visit.date} {visit.time} for {visitor or 'visitor'} "
                f"({budget.remaining} retries left)"
            )
            return visit

    def _random_date(self):
        start = self.policy.valid_window[0]
        return start + timedelta(days=self.rng.randint(0, self._window_days))

    def _random_time(self):
        # Uniform over the window in seconds, floored to whole minutes
        offset = self.rng.uniform(0, self._time_span_seconds)
        base = datetime.combine(self.policy.valid_window[0], self.policy.time_window[0])
        moment = base + timedelta(minutes=int(offset // 60))
        return moment.time()


def _seconds(value) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second
