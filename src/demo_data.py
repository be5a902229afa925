"""
Random demo activity for trying the heatmap without real data.

Each day gets up to 14 timed "details" whose values (in seconds) grow with
the day's distance from the start of the range, so recent years look busier.
"""

import math
import random
from datetime import date

from src import calendar_utils
from src.models import ActivityRecord

MAX_DETAILS_PER_DAY = 15


def _detail_values(day_index: int, rng: random.Random) -> list[float]:
    count = math.floor(rng.random() * MAX_DETAILS_PER_DAY)
    values = []
    for i in range(count):
        base = 3600 * ((count - i) / 5)
        bonus = math.floor(rng.random() * 3600) * round(rng.random() * (day_index / 365))
        values.append(base + bonus)
    return values


def generate_demo_records(
    today: date | None = None,
    years: int = 10,
    rng: random.Random | None = None,
) -> list[ActivityRecord]:
    """
    Generate one record per day for the last `years` years.

    Args:
        today: Last day of the range (defaults to today)
        years: How many years back to start
        rng: Random source (seed it for repeatable data)

    Returns:
        List of ActivityRecord, oldest first, ending on `today`
    """
    if today is None:
        today = calendar_utils.today()
    if rng is None:
        rng = random.Random()

    end = calendar_utils.as_pendulum(today)
    start = end.subtract(years=years)
    total_days = calendar_utils.days_between(start, end)

    records = []
    for index in range(total_days + 1):
        day = start.add(days=index)
        records.append(ActivityRecord(date=day, total=sum(_detail_values(index, rng))))

    return records
