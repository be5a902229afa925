"""
Tests for demo data generation.
"""

import random
from datetime import date

from src.demo_data import generate_demo_records


class TestGenerateDemoRecords:
    """Tests for generate_demo_records."""

    def test_one_record_per_day(self):
        records = generate_demo_records(today=date(2024, 6, 1), years=1, rng=random.Random(0))
        assert records[0].date == date(2023, 6, 1)
        assert records[-1].date == date(2024, 6, 1)
        assert len(records) == 367

    def test_dates_are_consecutive(self):
        records = generate_demo_records(today=date(2024, 3, 1), years=1, rng=random.Random(0))
        ordinals = [record.date.toordinal() for record in records]
        assert ordinals == list(range(ordinals[0], ordinals[0] + len(ordinals)))

    def test_totals_non_negative(self):
        records = generate_demo_records(today=date(2024, 1, 1), years=2, rng=random.Random(4))
        assert all(record.total >= 0 for record in records)
        assert any(record.total > 0 for record in records)

    def test_seeded_rng_is_repeatable(self):
        first = generate_demo_records(today=date(2024, 1, 1), years=1, rng=random.Random(9))
        second = generate_demo_records(today=date(2024, 1, 1), years=1, rng=random.Random(9))
        assert first == second

    def test_defaults_end_today(self):
        records = generate_demo_records(years=1, rng=random.Random(0))
        assert records[-1].date == date.today()
