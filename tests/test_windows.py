"""
Tests for the date window calculators.

Covers the worked examples for each window plus properties checked over
every day of a multi-year range.
"""

from datetime import date, datetime, timedelta

import pytest

from nsli_tracker.core.entities import WindowName
from nsli_tracker.metrics.windows import (
    compute_windows,
    fiscal_year_range,
    month_to_date_range,
    rolling_30_range,
    week_to_date_range,
)


def end_of(y, m, d):
    return datetime(y, m, d, 23, 59, 59, 999000)


def every_day(start: date, days: int):
    for offset in range(days):
        yield start + timedelta(days=offset)


# ===================================================================
# Fiscal year
# ===================================================================

class TestFiscalYear:

    def test_december_starts_current_year(self):
        window = fiscal_year_range(date(2024, 12, 1))
        assert window.start == datetime(2024, 11, 1)
        assert window.end == end_of(2025, 10, 31)

    def test_june_starts_previous_year(self):
        window = fiscal_year_range(date(2024, 6, 1))
        assert window.start == datetime(2023, 11, 1)
        assert window.end == end_of(2024, 10, 31)

    @pytest.mark.parametrize("reference, start_year", [
        (date(2024, 10, 31), 2023),
        (date(2024, 11, 1), 2024),
        (date(2025, 1, 1), 2024),
    ])
    def test_boundaries(self, reference, start_year):
        assert fiscal_year_range(reference).start == datetime(start_year, 11, 1)

    def test_end_not_truncated_at_today(self):
        window = fiscal_year_range(date(2024, 6, 15))
        assert window.contains(date(2024, 9, 30))
        assert window.contains(date(2024, 10, 31))
        assert not window.contains(date(2024, 11, 1))


# ===================================================================
# Month to date
# ===================================================================

class TestMonthToDate:

    def test_full_month(self):
        window = month_to_date_range(date(2024, 6, 15))
        assert window.start == datetime(2024, 6, 1)
        assert window.end == end_of(2024, 6, 30)

    def test_leap_february(self):
        assert month_to_date_range(date(2024, 2, 10)).end == end_of(2024, 2, 29)

    def test_december_rolls_year(self):
        assert month_to_date_range(date(2024, 12, 31)).end == end_of(2024, 12, 31)

    def test_future_days_in_month_included(self):
        assert month_to_date_range(date(2024, 6, 15)).contains(date(2024, 6, 30))


# ===================================================================
# Rolling 30
# ===================================================================

class TestRolling30:

    def test_example(self):
        window = rolling_30_range(date(2024, 6, 15))
        assert window.start == datetime(2024, 5, 16)
        assert window.end == end_of(2024, 6, 14)

    def test_spans_thirty_days_excluding_today(self):
        for today in every_day(date(2023, 1, 1), 800):
            window = rolling_30_range(today)
            assert (window.end.date() - window.start.date()).days + 1 == 30
            assert not window.contains(today)
            assert window.contains(today - timedelta(days=1))
            assert window.contains(today - timedelta(days=30))
            assert not window.contains(today - timedelta(days=31))


# ===================================================================
# Week to date
# ===================================================================

class TestWeekToDate:

    def test_saturday_example(self):
        window = week_to_date_range(date(2024, 6, 15))
        assert window.start == datetime(2024, 6, 10)
        assert window.end == end_of(2024, 6, 14)

    def test_sunday_goes_back_to_monday(self):
        window = week_to_date_range(date(2024, 6, 16))
        assert window.start == datetime(2024, 6, 10)
        assert window.end == end_of(2024, 6, 15)

    def test_monday_window_is_empty(self):
        window = week_to_date_range(date(2024, 6, 10))
        assert window.is_empty
        assert not window.contains(date(2024, 6, 9))
        assert not window.contains(date(2024, 6, 10))

    def test_start_monday_end_yesterday(self):
        for today in every_day(date(2024, 1, 1), 400):
            window = week_to_date_range(today)
            assert window.start.weekday() == 0
            assert window.end.date() == today - timedelta(days=1)
            assert not window.contains(today)


# ===================================================================
# All windows
# ===================================================================

class TestComputeWindows:

    def test_all_four_present(self):
        windows = compute_windows(date(2024, 6, 15))
        assert set(windows) == set(WindowName)

    def test_start_before_end(self):
        for today in every_day(date(2023, 1, 1), 800):
            windows = compute_windows(today)
            for name in (WindowName.YTD, WindowName.MTD, WindowName.ROLLING):
                assert windows[name].start <= windows[name].end
            if today.weekday() != 0:
                assert windows[WindowName.WTD].start <= windows[WindowName.WTD].end

    def test_start_and_end_times(self):
        for window in compute_windows(date(2024, 3, 10)).values():
            assert window.start.time() == datetime.min.time()
            assert window.end.microsecond == 999000
            assert (window.end.hour, window.end.minute, window.end.second) == (23, 59, 59)

    def test_accepts_datetime_reference(self):
        assert compute_windows(datetime(2024, 6, 15, 18, 30)) == compute_windows(date(2024, 6, 15))

    def test_defaults_to_today(self):
        assert compute_windows() == compute_windows(date.today())

    def test_week_nested_in_month_nested_in_year(self):
        windows = compute_windows(date(2024, 6, 15))
        wtd, mtd, ytd = windows[WindowName.WTD], windows[WindowName.MTD], windows[WindowName.YTD]
        assert mtd.start <= wtd.start and wtd.end <= mtd.end
        assert ytd.start <= mtd.start and mtd.end <= ytd.end
