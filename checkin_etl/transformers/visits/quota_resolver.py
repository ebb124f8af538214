"""
Per-visitor quota lookup
"""
from typing import Callable, Dict, Optional

from checkin_etl.common.logging import get_logger
from checkin_etl.common.models import Quota


class QuotaResolver:
    """
    Resolves the [min, max] visit quota for a visitor name

    Lookup order: explicit per-visitor entries, then (if enabled) an
    interactive prompt, then the defaults for unknown visitors. Prompted
    answers are remembered for the rest of the run so the operator is
    asked once per visitor.
    """

    def __init__(
        self,
        entries: Optional[Dict[str, Quota]] = None,
        default_quota: Quota = Quota(1, 1),
        ask_for_missing: bool = False,
        prompt: Callable[[str], str] = input
    ):
        """
        Args:
            entries: Visitor name -> quota from the settings file
            default_quota: Quota for visitors without an entry
            ask_for_missing: Prompt the operator for visitors without an entry
            prompt: Function used to ask a question (``input`` by default)
        """
        self.entries = dict(entries or {})
        self.default_quota = default_quota
        self.ask_for_missing = ask_for_missing
        self.prompt = prompt
        self.logger = get_logger(self.__class__.__name__)
        self._answered: Dict[str, Quota] = {}

    def resolve(self, visitor: str) -> Quota:
        if visitor in self.entries:
            return self.entries[visitor]
        if visitor in self._answered:
            return self._answered[visitor]
        if not self.ask_for_missing:
            return self.default_quota

        quota = self._ask(visitor)
        self._answered[visitor] = quota
        return quota

    def _ask(self, visitor: str) -> Quota:
        default = self.default_quota
        min_value = self._ask_number(
            f"Minimum visits for {visitor} [{default.min}]: ", default.min
        )
        max_value = self._ask_number(
            f"Maximum visits for {visitor} [{max(default.max, min_value)}]: ",
            max(default.max, min_value)
        )

        try:
            return Quota(min_value, max_value)
        except ValueError as e:
            self.logger.warning(f"{e}; using defaults for {visitor}")
            return default

    def _ask_number(self, question: str, default: int) -> int:
        answer = self.prompt(question).strip()
        if not answer:
            return default
        try:
            value = int(answer)
        except ValueError:
            self.logger.warning(f"'{answer}' is not a whole number, using {default}")
            return default
        if value < 0:
            self.logger.warning(f"Negative visit count {value}, using {default}")
            return default
        return value
