#!/usr/bin/env python3
"""
Sample Check-In File Generator

Writes a month of visitor check-ins in the input format the reconciler
reads, with some visitors short of a typical quota and some above it.

Usage:
    python generate_sample_checkins.py [--month 2024-03] [--output-dir PATH] [--seed SEED]
"""

import argparse
import calendar
import csv
import random
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List

from faker import Faker

OUTPUT_DIR = Path(__file__).parent.parent / "data"

PROGRAMS = ["Food Pantry", "Senior Lunch", "Youth Club", "Job Center"]

COLUMNS = [
    "Account Number", "ID Number", "First Name", "Last Name", "Program",
    "Check-In Date", "Check-In Time",
]


def generate_visitors(fake: Faker, count: int) -> List[Dict[str, str]]:
    """Distinct visitors with account and ID numbers"""
    visitors = []
    seen = set()
    while len(visitors) < count:
        first, last = fake.first_name(), fake.last_name()
        # Visitors are keyed by first and last name
        if (first, last) in seen:
            continue
        seen.add((first, last))
        visitors.append({
            "Account Number": fake.unique.numerify("######"),
            "ID Number": fake.unique.bothify("ID-####"),
            "First Name": first,
            "Last Name": last,
            "Program": random.choice(PROGRAMS),
        })
    return visitors


def generate_checkins(visitors: List[Dict[str, str]], year: int, month: int) -> List[Dict[str, str]]:
    """Zero to eight check-ins per visitor; visitors with none are dropped"""
    days = calendar.monthrange(year, month)[1]
    rows = []
    for visitor in visitors:
        for day in random.sample(range(1, days + 1), random.randint(0, 8)):
            hour = random.randint(8, 18)
            minute = random.choice([0, 5, 10, 15, 20, 30, 45])
            when = datetime(year, month, day, hour, minute)
            rows.append({
                **visitor,
                "Check-In Date": date(year, month, day).isoformat(),
                "Check-In Time": when.strftime("%I:%M%p").lstrip("0"),
            })
    random.shuffle(rows)
    return rows


def write_csv(data: List[Dict], filepath: Path):
    """Write data to CSV file"""
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=COLUMNS)
        writer.writeheader()
        writer.writerows(data)

    print(f"Created: {filepath} ({len(data)} records)")


def main():
    parser = argparse.ArgumentParser(description="Generate a sample monthly check-in file")
    parser.add_argument("--month", type=str, default="2024-03",
                        help="Month to generate, as YYYY-MM")
    parser.add_argument("--visitors", type=int, default=25,
                        help="Number of distinct visitors")
    parser.add_argument("--output-dir", type=str, default=str(OUTPUT_DIR),
                        help="Output directory for the CSV file")
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed for reproducibility")
    args = parser.parse_args()

    random.seed(args.seed)
    Faker.seed(args.seed)
    fake = Faker()
    month = datetime.strptime(args.month, "%Y-%m")

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    visitors = generate_visitors(fake, args.visitors)
    rows = generate_checkins(visitors, month.year, month.month)
    write_csv(rows, output_dir / f"{args.month} checkins.csv")


if __name__ == "__main__":
    main()
