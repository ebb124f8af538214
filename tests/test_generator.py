import random
from datetime import date, time

import pytest

from checkin_etl.common.exceptions import RetriesExhaustedError
from checkin_etl.transformers.visits.generator import RetryBudget, SyntheticVisitGenerator

from conftest import MARCH_2024, make_policy, visit


def test_generated_visits_stay_inside_month_and_time_window(policy, rng):
    generator = SyntheticVisitGenerator(make_policy(can_repeat_days=True), rng)
    budget = RetryBudget(10)

    for _ in range(300):
        v = generator.generate([], budget)
        assert MARCH_2024[0] <= v.date <= MARCH_2024[1]
        assert time(9, 0) <= v.time <= time(17, 0)
        assert v.time.second == 0 and v.time.microsecond == 0
        assert v.synthetic

    assert budget.attempts == 0


def test_window_endpoints_are_reachable(rng):
    generator = SyntheticVisitGenerator(make_policy(can_repeat_days=True), rng)
    budget = RetryBudget(10)
    dates = {generator.generate([], budget).date for _ in range(2000)}
    assert date(2024, 3, 1) in dates
    assert date(2024, 3, 31) in dates


def test_generated_dates_fall_on_allowed_weekdays(rng):
    # Monday=0, Wednesday=2
    generator = SyntheticVisitGenerator(
        make_policy(allowed_weekdays=frozenset({0, 2}), can_repeat_days=True), rng
    )
    budget = RetryBudget(100000)
    for _ in range(200):
        assert generator.generate([], budget).date.weekday() in {0, 2}


def test_no_repeat_days_avoids_existing_dates(rng):
    generator = SyntheticVisitGenerator(make_policy(), rng)
    existing = [visit(day) for day in range(1, 31)]  # only March 31 left
    v = generator.generate(existing, RetryBudget(100000))
    assert v.date == date(2024, 3, 31)


def test_repeat_days_allowed_when_configured(rng):
    generator = SyntheticVisitGenerator(make_policy(can_repeat_days=True), rng)
    existing = [visit(day) for day in range(1, 32)]
    budget = RetryBudget(5)
    v = generator.generate(existing, budget)
    assert v.date in {e.date for e in existing}
    assert budget.attempts == 0


def test_impossible_weekday_exhausts_budget():
    # A single Tuesday window with only Mondays allowed can never succeed
    policy = make_policy(
        valid_window=(date(2024, 3, 5), date(2024, 3, 5)),
        allowed_weekdays=frozenset({0}),
    )
    generator = SyntheticVisitGenerator(policy, random.Random(0))
    budget = RetryBudget(25)

    with pytest.raises(RetriesExhaustedError) as exc_info:
        generator.generate([], budget, "Jane Doe")

    assert budget.attempts == 25
    assert "Jane Doe" in str(exc_info.value)


class ScriptedRandom:
    """Returns pre-set day offsets from randint and 0 from uniform"""

    def __init__(self, offsets):
        self.offsets = list(offsets)

    def randint(self, a, b):
        value = self.offsets.pop(0)
        assert a <= value <= b
        return value

    def uniform(self, a, b):
        return a


def test_budget_is_shared_between_calls():
    # March 4 2024 is a Monday, March 5 a Tuesday
    policy = make_policy(valid_window=(date(2024, 3, 4), date(2024, 3, 5)), allowed_weekdays=frozenset({0}))
    generator = SyntheticVisitGenerator(policy, ScriptedRandom([1, 1, 0, 1, 0]))
    budget = RetryBudget(1000)

    first = generator.generate([], budget)
    assert budget.attempts == 2
    second = generator.generate([], budget)
    assert budget.attempts == 3

    assert first.date == second.date == date(2024, 3, 4)
    assert first.time == time(9, 0)


def test_full_month_without_repeats_runs_out():
    generator = SyntheticVisitGenerator(make_policy(max_retries=50), random.Random(0))
    existing = [visit(day) for day in range(1, 32)]
    with pytest.raises(RetriesExhaustedError):
        generator.generate(existing, RetryBudget(50))


def test_same_seed_same_visits():
    a = SyntheticVisitGenerator(make_policy(), random.Random(42))
    b = SyntheticVisitGenerator(make_policy(), random.Random(42))
    budget_a, budget_b = RetryBudget(1000), RetryBudget(1000)
    assert [a.generate([], budget_a) for _ in range(10)] == [b.generate([], budget_b) for _ in range(10)]


def test_retry_budget_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        RetryBudget(0)


def test_retry_budget_counts_down():
    budget = RetryBudget(3)
    budget.consume()
    assert budget.remaining == 2
    budget.consume()
    with pytest.raises(RetriesExhaustedError):
        budget.consume()
