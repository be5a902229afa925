"""
Tests for value types and record validation.
"""

from datetime import date, datetime

import pytest

from src.models import (
    ActivityRecord,
    ActivityRecordError,
    GridCell,
    HeatmapConfig,
    YearWindow,
    parse_activity_records,
    to_date,
)


class TestToDate:
    """Tests for to_date."""

    def test_date_passthrough(self):
        assert to_date(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_datetime_truncated(self):
        assert to_date(datetime(2024, 3, 1, 23, 59)) == date(2024, 3, 1)

    def test_iso_string(self):
        assert to_date("2024-03-01") == date(2024, 3, 1)

    def test_iso_timestamp(self):
        assert to_date("2024-03-01T10:00:00") == date(2024, 3, 1)

    @pytest.mark.parametrize("bad", ["", "not a date", None, 20240301])
    def test_invalid(self, bad):
        with pytest.raises(ActivityRecordError):
            to_date(bad)


class TestParseActivityRecords:
    """Tests for parse_activity_records."""

    def test_mappings(self):
        records = parse_activity_records(
            [{"date": "2024-01-02", "total": 3}, {"date": date(2024, 1, 1), "total": 1.5}]
        )
        assert records == [
            ActivityRecord(date=date(2024, 1, 2), total=3),
            ActivityRecord(date=date(2024, 1, 1), total=1.5),
        ]

    def test_records_pass_through(self):
        record = ActivityRecord(date=date(2024, 1, 1), total=2)
        assert parse_activity_records([record]) == [record]

    def test_extra_keys_ignored(self):
        records = parse_activity_records([{"date": "2024-01-01", "total": 1, "details": []}])
        assert records[0].total == 1

    def test_empty(self):
        assert parse_activity_records([]) == []

    def test_missing_date(self):
        with pytest.raises(ActivityRecordError, match="missing 'date'"):
            parse_activity_records([{"total": 1}])

    def test_missing_total(self):
        with pytest.raises(ActivityRecordError, match="missing 'total'"):
            parse_activity_records([{"date": "2024-01-01"}])

    @pytest.mark.parametrize("total", ["3", None, True])
    def test_non_numeric_total(self, total):
        with pytest.raises(ActivityRecordError, match="non-numeric"):
            parse_activity_records([{"date": "2024-01-01", "total": total}])

    def test_not_a_mapping(self):
        with pytest.raises(ActivityRecordError):
            parse_activity_records([("2024-01-01", 1)])

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_activity_records([{"date": "nope", "total": 1}])


class TestYearWindow:
    """Tests for YearWindow."""

    def test_contains_is_inclusive(self):
        window = YearWindow(start=date(2024, 1, 1), end=date(2024, 12, 31))
        assert window.contains(date(2024, 1, 1))
        assert window.contains(date(2024, 12, 31))
        assert not window.contains(date(2025, 1, 1))

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError):
            YearWindow(start=date(2024, 2, 1), end=date(2024, 1, 1))


class TestHeatmapConfig:
    """Tests for HeatmapConfig defaults."""

    def test_defaults(self):
        config = HeatmapConfig()
        assert config.color == "#7bc96f"
        assert config.fill_color == "#ebedf0"
        assert config.locale == "zh-cn"
        assert config.is_fill is False
        assert config.week_start == 0


class TestGridCell:
    """Tests for GridCell."""

    def test_key_is_iso_date(self):
        cell = GridCell(
            record=ActivityRecord(date=date(2024, 3, 1), total=1),
            column=8,
            row=5,
            size=10,
            color="#7bc96f",
            x=0,
            y=0,
        )
        assert cell.key == "2024-03-01"
