"""
Map calendar dates to heatmap grid coordinates.

Columns are week indexes counted from the week boundary at or before the
window start; rows are day-of-week indexes under the same week-start
convention.
"""

from datetime import date

from src import calendar_utils
from src.models import YearWindow


def year_window(anchor: date) -> YearWindow:
    """
    Build the calendar-year window containing `anchor`.

    Args:
        anchor: Any date inside the year to display

    Returns:
        YearWindow from Jan 1 to Dec 31 of the anchor's year
    """
    return YearWindow(
        start=calendar_utils.start_of_year(anchor),
        end=calendar_utils.end_of_year(anchor),
    )


def week_aligned_start(day: date, week_start: int = 0) -> date:
    """Most recent week boundary at or before `day`."""
    return calendar_utils.start_of_week(day, week_start)


def week_column_count(window: YearWindow, week_start: int = 0) -> int:
    """
    Number of week-columns needed to give every day in `window` a column.

    A calendar year needs 53 columns, except a leap year whose first day
    falls on the last weekday of the week, which spills into a 54th. This
    departs from the usual 52/53-week range on purpose: capping at 53
    would leave Dec 31 of those years (e.g. 2000, 2028) off the grid.

    Args:
        window: The displayed year window
        week_start: Weekday that opens a week (0 = Sunday)

    Returns:
        Column count (>= 1)
    """
    aligned = week_aligned_start(window.start, week_start)
    return calendar_utils.days_between(aligned, window.end) // 7 + 1


def cell_column(day: date, window: YearWindow, week_start: int = 0) -> int:
    """
    Week-column of `day`. Callers filter by window membership first;
    dates before the aligned window start would give negative columns.
    """
    aligned = week_aligned_start(window.start, week_start)
    return calendar_utils.days_between(aligned, day) // 7


def cell_row(day: date, week_start: int = 0) -> int:
    """Weekday row of `day`, in [0, 6]."""
    return calendar_utils.day_of_week(day, week_start)


def month_boundaries(window: YearWindow) -> list[date]:
    """
    First-of-month dates for every month overlapping `window`.

    Args:
        window: The displayed year window

    Returns:
        Ordered list of first-of-month dates
    """
    boundaries = []
    current = calendar_utils.start_of_month(window.start)
    last = calendar_utils.start_of_month(window.end)
    while True:
        boundaries.append(current)
        # Stop before stepping past the last month; Dec 9999 has no successor
        if current >= last:
            return boundaries
        current = current.add(months=1)


def window_days(window: YearWindow) -> list[date]:
    """Every date in `window`, oldest first."""
    total_days = calendar_utils.days_between(window.start, window.end) + 1
    return [calendar_utils.add_days(window.start, i) for i in range(total_days)]
