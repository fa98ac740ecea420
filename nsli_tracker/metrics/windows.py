"""
Date Window Calculators

Each calculator takes a reference date (today by default) and returns an
inclusive DateWindow at day granularity: start at 00:00:00.000, end at
23:59:59.999 local time.

Two families:
- Calendar-bounded (fiscal YTD, MTD): the period's natural boundary,
  regardless of where the reference date falls inside it
- Trailing (rolling 30, WTD): end yesterday, the current day being
  still in progress
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.entities import DateWindow, WindowName

FISCAL_YEAR_START_MONTH = 11  # November
ROLLING_WINDOW_DAYS = 30

END_OF_DAY = time(23, 59, 59, 999000)


def _reference(today: Optional[date]) -> date:
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def _start_of(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _end_of(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def fiscal_year_range(today: date = None) -> DateWindow:
    """Nov 1 through Oct 31 of the fiscal year containing ``today``."""
    today = _reference(today)
    if today.month >= FISCAL_YEAR_START_MONTH:
        start_year = today.year
    else:
        start_year = today.year - 1

    start = date(start_year, FISCAL_YEAR_START_MONTH, 1)
    end = date(start_year + 1, FISCAL_YEAR_START_MONTH, 1) - timedelta(days=1)
    return DateWindow(start=_start_of(start), end=_end_of(end))


def month_to_date_range(today: date = None) -> DateWindow:
    """First through last day of the reference month."""
    today = _reference(today)
    start = today.replace(day=1)
    if today.month == 12:
        next_month = date(today.year + 1, 1, 1)
    else:
        next_month = date(today.year, today.month + 1, 1)
    return DateWindow(start=_start_of(start), end=_end_of(next_month - timedelta(days=1)))


def rolling_30_range(today: date = None) -> DateWindow:
    """The 30 days ending yesterday."""
    today = _reference(today)
    end = today - timedelta(days=1)
    start = end - timedelta(days=ROLLING_WINDOW_DAYS - 1)
    return DateWindow(start=_start_of(start), end=_end_of(end))


def week_to_date_range(today: date = None) -> DateWindow:
    """
    Monday of the reference week through yesterday.

    On a Monday the end falls before the start, so the window is empty.
    """
    today = _reference(today)
    # isoweekday: Monday=1 .. Sunday=7
    start = today - timedelta(days=today.isoweekday() - 1)
    end = today - timedelta(days=1)
    return DateWindow(start=_start_of(start), end=_end_of(end))


WINDOW_CALCULATORS = {
    WindowName.YTD: fiscal_year_range,
    WindowName.MTD: month_to_date_range,
    WindowName.ROLLING: rolling_30_range,
    WindowName.WTD: week_to_date_range,
}


def compute_windows(today: date = None) -> dict[WindowName, DateWindow]:
    """Compute all four windows independently from the same reference date."""
    today = _reference(today)
    return {name: calculator(today) for name, calculator in WINDOW_CALCULATORS.items()}
