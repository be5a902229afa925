"""
Calendar helpers backed by pendulum.

Day-of-week indexing, start/end of week/month/year, day differences and
locale-aware date strings. The week start is a fixed weekday index
(0 = Sunday) so grid rows never depend on the display locale.
"""

import logging
from datetime import date
from functools import lru_cache

import pendulum
from pendulum.locales.locale import Locale

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"
TOOLTIP_DATE_FORMAT = "dddd, MMM Do YYYY"


def as_pendulum(day: date) -> pendulum.Date:
    """Return `day` as a pendulum Date (no-op for pendulum dates)."""
    if isinstance(day, pendulum.Date):
        return day
    return pendulum.date(day.year, day.month, day.day)


def today() -> pendulum.Date:
    """Today's date on the local clock."""
    return pendulum.today().date()


def day_of_week(day: date, week_start: int = 0) -> int:
    """
    Index of `day` within its week.

    Args:
        day: The date
        week_start: Weekday that opens a week (0 = Sunday ... 6 = Saturday)

    Returns:
        Integer in [0, 6]
    """
    # isoweekday is Monday=1..Sunday=7; shift so Sunday=0
    return (day.isoweekday() % 7 - week_start) % 7


def start_of_week(day: date, week_start: int = 0) -> pendulum.Date:
    return as_pendulum(day).subtract(days=day_of_week(day, week_start))


def end_of_week(day: date, week_start: int = 0) -> pendulum.Date:
    return start_of_week(day, week_start).add(days=6)


def start_of_month(day: date) -> pendulum.Date:
    return as_pendulum(day).start_of("month")


def end_of_month(day: date) -> pendulum.Date:
    return as_pendulum(day).end_of("month")


def start_of_year(day: date) -> pendulum.Date:
    return as_pendulum(day).start_of("year")


def end_of_year(day: date) -> pendulum.Date:
    return as_pendulum(day).end_of("year")


def add_days(day: date, days: int) -> pendulum.Date:
    return as_pendulum(day).add(days=days)


def days_between(start: date, end: date) -> int:
    """Signed number of days from `start` to `end`."""
    return end.toordinal() - start.toordinal()


@lru_cache(maxsize=None)
def resolve_locale(locale: str) -> str:
    """
    Map a host locale tag like 'zh-cn' or 'en_US' to a pendulum locale.

    Unknown languages fall back to English.
    """
    language = locale.replace("_", "-").split("-")[0].lower()
    try:
        Locale.load(language)
    except ValueError:
        logger.warning("Unknown locale %r, falling back to %r", locale, FALLBACK_LOCALE)
        return FALLBACK_LOCALE
    return language


def format_date(day: date, fmt: str = TOOLTIP_DATE_FORMAT, locale: str = FALLBACK_LOCALE) -> str:
    """Format `day` with a pendulum token string in the given locale."""
    return as_pendulum(day).format(fmt, locale=resolve_locale(locale))


def month_label(day: date, locale: str) -> str:
    """Short month name, e.g. 'Mar' or '3月'."""
    return format_date(day, "MMM", locale)


def weekday_label(day: date, locale: str) -> str:
    """
    Single-character weekday label.

    Chinese weekday names share a common prefix ('星期'), so the distinguishing
    last character is used; other languages use the first letter.
    """
    name = format_date(day, "dddd", locale)
    if resolve_locale(locale) == "zh":
        return name[-1]
    return name[0]
