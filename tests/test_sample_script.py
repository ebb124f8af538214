import random
import runpy
from pathlib import Path

from faker import Faker

from checkin_etl.common.models import IDENTITY_COLUMNS

SCRIPT = Path(__file__).parent.parent / "scripts" / "generate_sample_checkins.py"


def _script():
    return runpy.run_path(str(SCRIPT))


def test_visitors_are_distinct_and_seeded():
    generate_visitors = _script()["generate_visitors"]

    def run():
        random.seed(7)
        Faker.seed(7)
        return generate_visitors(Faker(), 30)

    visitors = run()
    assert len({(v["First Name"], v["Last Name"]) for v in visitors}) == 30
    assert len({v["Account Number"] for v in visitors}) == 30
    assert all(list(v) == IDENTITY_COLUMNS for v in visitors)
    assert all(len(v["Account Number"]) == 6 for v in visitors)
    assert run() == visitors


def test_checkins_stay_in_month():
    script = _script()
    random.seed(1)
    Faker.seed(1)
    visitors = script["generate_visitors"](Faker(), 20)
    rows = script["generate_checkins"](visitors, 2024, 2)

    assert rows
    assert all(r["Check-In Date"].startswith("2024-02-") for r in rows)
    assert all(r["Check-In Time"][-2:] in ("AM", "PM") for r in rows)
