"""
Value types for the heatmap engine.

Records come in from the host as loose mappings and are validated once at the
boundary by parse_activity_records(); everything past that point works on the
frozen dataclasses defined here.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

import pendulum


DEFAULT_COLOR = "#7bc96f"
DEFAULT_FILL_COLOR = "#ebedf0"
DEFAULT_LOCALE = "zh-cn"


class ActivityRecordError(ValueError):
    """Raised when an input record is missing a field or has a bad value."""

    pass


@dataclass(frozen=True)
class ActivityRecord:
    """One day's activity total supplied by the host."""

    date: date
    total: float


@dataclass(frozen=True)
class YearWindow:
    """Start/end bounds (inclusive) of the displayed calendar year."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Window start {self.start} is after end {self.end}")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class HeatmapConfig:
    """Per-render display configuration."""

    color: str = DEFAULT_COLOR
    fill_color: str = DEFAULT_FILL_COLOR
    locale: str = DEFAULT_LOCALE
    is_fill: bool = False
    week_start: int = 0  # 0 = Sunday, 1 = Monday, ...


@dataclass(frozen=True)
class GridCell:
    """A laid-out day square. Rebuilt on every redraw."""

    record: ActivityRecord
    column: int
    row: int
    size: float
    color: str
    x: float
    y: float

    @property
    def key(self) -> str:
        return self.record.date.isoformat()


class HighlightKind(str, Enum):
    NONE = "none"
    CELL = "cell"
    MONTH = "month"
    WEEKDAY = "weekday"


@dataclass(frozen=True)
class HighlightState:
    """Which cell/month/weekday is hovered and whether a transition is running."""

    active_kind: HighlightKind = HighlightKind.NONE
    active_key: Any = None
    transition_in_flight: bool = False


def to_date(value: Any) -> date:
    """
    Coerce a date-like value to a pendulum Date.

    Args:
        value: datetime.date, datetime.datetime or an ISO-8601 string

    Returns:
        pendulum.Date for the same calendar day

    Raises:
        ActivityRecordError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, str) and value:
        try:
            parsed = pendulum.parse(value)
        except ValueError as e:
            raise ActivityRecordError(f"Invalid date: {value!r}") from e
        # Bare times and durations parse too but carry no calendar day
        if not hasattr(parsed, "year"):
            raise ActivityRecordError(f"Invalid date: {value!r}")
        return pendulum.date(parsed.year, parsed.month, parsed.day)
    raise ActivityRecordError(f"Invalid date: {value!r}")


def parse_activity_records(raw_records: list) -> list[ActivityRecord]:
    """
    Validate host-supplied records into ActivityRecord values.

    Args:
        raw_records: List of mappings with 'date' and 'total' keys, or
            ActivityRecord instances (passed through unchanged)

    Returns:
        List of ActivityRecord in input order

    Raises:
        ActivityRecordError: If a record is missing a field or has a bad value
    """
    records = []

    for index, raw in enumerate(raw_records):
        if isinstance(raw, ActivityRecord):
            records.append(raw)
            continue

        if not isinstance(raw, dict):
            raise ActivityRecordError(f"Record {index} is not a mapping: {raw!r}")

        if "date" not in raw:
            raise ActivityRecordError(f"Record {index} is missing 'date'")
        if "total" not in raw:
            raise ActivityRecordError(f"Record {index} is missing 'total'")

        total = raw["total"]
        # bool is an int subclass but never a meaningful total
        if isinstance(total, bool) or not isinstance(total, (int, float)):
            raise ActivityRecordError(f"Record {index} has non-numeric total: {total!r}")

        records.append(ActivityRecord(date=to_date(raw["date"]), total=total))

    return records
