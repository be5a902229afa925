"""
CLI display functions for heatmap-daily.
"""

import math

from src import calendar_utils
from src.render_coordinator import RenderResult

LEVEL_CHARS = ["·", "░", "▒", "▓", "█"]


def intensity_level(total: float, max_total: float) -> int:
    """
    Bucket a total into a 0-4 shade level relative to the window maximum.

    Args:
        total: The day's activity total
        max_total: Largest total in the window

    Returns:
        0 for no activity, 1-4 for increasing intensity
    """
    if total <= 0 or max_total <= 0:
        return 0
    return min(max(math.ceil(4 * total / max_total), 1), 4)


def display_window(result: RenderResult) -> None:
    """
    Print a summary of the drawn year.

    Args:
        result: RenderResult from RenderCoordinator.redraw()
    """
    active_days = sum(1 for cell in result.cells if cell.record.total > 0)
    total = sum(cell.record.total for cell in result.cells if cell.record.total > 0)

    day_word = "day" if active_days == 1 else "days"
    print(f"📅 {result.window.start.isoformat()} → {result.window.end.isoformat()}")
    print(f"   Active: {active_days} {day_word}")
    print(f"   Total:  {_format_number(total)}")
    print(f"   Peak:   {_format_number(result.max_total)}")
    print()


def display_calendar(result: RenderResult, locale: str = "en", week_start: int = 0) -> None:
    """
    Print the heatmap as a text grid, one row per weekday.

    Args:
        result: RenderResult from RenderCoordinator.redraw()
        locale: Locale for the weekday labels
        week_start: Weekday of the first row (0 = Sunday)
    """
    columns = max((cell.column for cell in result.cells), default=-1) + 1
    grid = [[" "] * columns for _ in range(7)]

    for cell in result.cells:
        grid[cell.row][cell.column] = LEVEL_CHARS[intensity_level(cell.record.total, result.max_total)]

    first_week = calendar_utils.start_of_week(result.window.start, week_start)

    print("Activity:")
    for row in range(7):
        label = calendar_utils.weekday_label(calendar_utils.add_days(first_week, row), locale)
        print(f"  {label} {''.join(grid[row]).rstrip()}")

    legend = " ".join(LEVEL_CHARS)
    print(f"  less {legend} more")
    print()


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.2f}"
