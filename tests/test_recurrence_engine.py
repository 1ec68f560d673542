"""Tests for recurrence date generation (deterministic behavior).

January 1st 2024 is a Monday; February 2024 has 29 days and four Mondays.
"""

import pytest
from datetime import date, datetime

from recurshift.models.recurrence import (
    ManualPattern,
    MonthlyByWeekdayPattern,
    MonthlySpecificDaysPattern,
    RecurrenceConfig,
    WeeklyPattern,
)
from recurshift.recurrence.calendar_dates import day_of_week
from recurshift.recurrence.engine import calculate_dates, has_weekday_in_month


def _config(pattern, start, end, exceptions=None):
    return RecurrenceConfig(pattern=pattern, start_date=start, end_date=end, exceptions=exceptions or [])


class TestWeekly:
    def test_mon_wed_fri_first_two_weeks(self):
        config = _config(WeeklyPattern(days_of_week=[1, 3, 5]), date(2024, 1, 1), date(2024, 1, 14))

        assert calculate_dates(config) == [
            date(2024, 1, 1),
            date(2024, 1, 3),
            date(2024, 1, 5),
            date(2024, 1, 8),
            date(2024, 1, 10),
            date(2024, 1, 12),
        ]

    def test_every_result_is_on_a_selected_weekday(self):
        days = [0, 2, 6]
        config = _config(WeeklyPattern(days_of_week=days), date(2024, 1, 1), date(2024, 6, 30))

        result = calculate_dates(config)
        assert result
        assert all(day_of_week(d) in days for d in result)

    def test_empty_days_yield_nothing(self):
        config = _config(WeeklyPattern(days_of_week=[]), date(2024, 1, 1), date(2024, 1, 31))
        assert calculate_dates(config) == []

    def test_out_of_range_days_are_ignored(self):
        config = _config(WeeklyPattern(days_of_week=[1, 9, -1]), date(2024, 1, 1), date(2024, 1, 14))
        assert calculate_dates(config) == [date(2024, 1, 1), date(2024, 1, 8)]

    def test_single_day_window(self):
        config = _config(WeeklyPattern(days_of_week=[3]), date(2024, 1, 3), date(2024, 1, 3))
        assert calculate_dates(config) == [date(2024, 1, 3)]


class TestMonthlyByWeekday:
    def test_first_and_third_monday(self):
        pattern = MonthlyByWeekdayPattern(week_numbers=[1, 3], day_of_week=1)
        config = _config(pattern, date(2024, 1, 1), date(2024, 3, 31))

        assert calculate_dates(config) == [
            date(2024, 1, 1),
            date(2024, 1, 15),
            date(2024, 2, 5),
            date(2024, 2, 19),
            date(2024, 3, 4),
            date(2024, 3, 18),
        ]

    def test_week_five_clamps_to_last_occurrence(self):
        """February 2024 has four Mondays; "5th" means the last one."""
        pattern = MonthlyByWeekdayPattern(week_numbers=[5], day_of_week=1)
        config = _config(pattern, date(2024, 2, 1), date(2024, 2, 29))

        assert calculate_dates(config) == [date(2024, 2, 26)]

    def test_week_five_uses_fifth_when_month_has_five(self):
        pattern = MonthlyByWeekdayPattern(week_numbers=[5], day_of_week=1)
        config = _config(pattern, date(2024, 1, 1), date(2024, 2, 29))

        assert calculate_dates(config) == [date(2024, 1, 29), date(2024, 2, 26)]

    def test_week_four_and_five_collapse_to_one_date_in_short_month(self):
        pattern = MonthlyByWeekdayPattern(week_numbers=[4, 5], day_of_week=1)
        config = _config(pattern, date(2024, 2, 1), date(2024, 2, 29))

        assert calculate_dates(config) == [date(2024, 2, 26)]

    def test_window_clips_partial_months(self):
        pattern = MonthlyByWeekdayPattern(week_numbers=[1], day_of_week=1)
        config = _config(pattern, date(2024, 1, 10), date(2024, 2, 10))

        assert calculate_dates(config) == [date(2024, 2, 5)]

    def test_start_weekday_does_not_matter(self):
        pattern = MonthlyByWeekdayPattern(week_numbers=[2], day_of_week=4)
        from_monday = calculate_dates(_config(pattern, date(2024, 1, 1), date(2024, 3, 31)))
        from_sunday = calculate_dates(_config(pattern, date(2023, 12, 31), date(2024, 3, 31)))

        assert from_monday == from_sunday == [date(2024, 1, 11), date(2024, 2, 8), date(2024, 3, 14)]

    def test_empty_week_numbers_yield_nothing(self):
        pattern = MonthlyByWeekdayPattern(week_numbers=[], day_of_week=1)
        assert calculate_dates(_config(pattern, date(2024, 1, 1), date(2024, 3, 31))) == []

    def test_invalid_day_of_week_yields_nothing(self):
        pattern = MonthlyByWeekdayPattern(week_numbers=[1], day_of_week=7)
        assert calculate_dates(_config(pattern, date(2024, 1, 1), date(2024, 3, 31))) == []


class TestMonthlySpecificDays:
    def test_fifteenth_of_each_month(self):
        config = _config(MonthlySpecificDaysPattern(days=[15]), date(2024, 1, 1), date(2024, 3, 31))
        assert calculate_dates(config) == [date(2024, 1, 15), date(2024, 2, 15), date(2024, 3, 15)]

    def test_day_31_skips_short_months_without_rollover(self):
        config = _config(MonthlySpecificDaysPattern(days=[31]), date(2024, 1, 1), date(2024, 4, 30))

        result = calculate_dates(config)
        assert result == [date(2024, 1, 31), date(2024, 3, 31)]
        assert date(2024, 3, 1) not in result
        assert date(2024, 3, 2) not in result

    def test_leap_day(self):
        config = _config(MonthlySpecificDaysPattern(days=[29]), date(2023, 2, 1), date(2024, 2, 29))

        result = calculate_dates(config)
        assert date(2024, 2, 29) in result
        assert all(not (d.year == 2023 and d.month == 2) for d in result)

    def test_multiple_days_are_sorted(self):
        config = _config(MonthlySpecificDaysPattern(days=[25, 5, 15]), date(2024, 1, 1), date(2024, 1, 31))
        assert calculate_dates(config) == [date(2024, 1, 5), date(2024, 1, 15), date(2024, 1, 25)]

    def test_empty_days_yield_nothing(self):
        config = _config(MonthlySpecificDaysPattern(days=[]), date(2024, 1, 1), date(2024, 3, 31))
        assert calculate_dates(config) == []


class TestManual:
    def test_invalid_entries_are_dropped(self):
        pattern = ManualPattern(dates=["2024-01-10", "bogus", "2024-01-05", "2024-01-10", "2024-02-30"])
        config = _config(pattern, date(2024, 1, 1), date(2024, 1, 31))

        assert calculate_dates(config) == [date(2024, 1, 5), date(2024, 1, 10)]

    def test_dates_outside_window_are_clipped(self):
        pattern = ManualPattern(dates=[date(2023, 12, 31), date(2024, 1, 2), "2024-01-07T15:30:00Z"])
        config = _config(pattern, date(2024, 1, 1), date(2024, 1, 31))

        assert calculate_dates(config) == [date(2024, 1, 2), date(2024, 1, 7)]

    def test_numbers_are_not_read_as_timestamps(self):
        pattern = ManualPattern(dates=[42, 20240115, "2024-01-05"])
        assert pattern.dates[:2] == [42, 20240115]

        config = _config(pattern, date(1970, 1, 1), date(2024, 1, 31))
        assert calculate_dates(config) == [date(2024, 1, 5)]


class TestSharedPostProcessing:
    @pytest.mark.parametrize(
        "pattern",
        [
            WeeklyPattern(days_of_week=[1]),
            MonthlyByWeekdayPattern(week_numbers=[3], day_of_week=1),
            MonthlySpecificDaysPattern(days=[15]),
            ManualPattern(dates=["2024-01-15", "2024-01-22"]),
        ],
    )
    def test_exceptions_apply_to_every_pattern_kind(self, pattern):
        config = _config(pattern, date(2024, 1, 1), date(2024, 1, 31), exceptions=["2024-01-15"])

        result = calculate_dates(config)
        assert date(2024, 1, 15) not in result

    def test_exceptions_accept_dates_and_ignore_garbage(self):
        config = _config(
            WeeklyPattern(days_of_week=[1]),
            date(2024, 1, 1),
            date(2024, 1, 31),
            exceptions=[date(2024, 1, 8), datetime(2024, 1, 22, 10, 0), "nope"],
        )
        assert calculate_dates(config) == [date(2024, 1, 1), date(2024, 1, 15), date(2024, 1, 29)]

    def test_numeric_exception_does_not_exclude_the_epoch(self):
        # 1970-01-01 was a Thursday.
        config = _config(WeeklyPattern(days_of_week=[4]), date(1970, 1, 1), date(1970, 1, 8), exceptions=[0])
        assert calculate_dates(config) == [date(1970, 1, 1), date(1970, 1, 8)]

    def test_results_sorted_unique_and_inside_window(self):
        start, end = date(2024, 1, 10), date(2024, 5, 20)
        config = _config(MonthlyByWeekdayPattern(week_numbers=[1, 2, 3, 4, 5], day_of_week=5), start, end)

        result = calculate_dates(config)
        assert result == sorted(set(result))
        assert all(start <= d <= end for d in result)

    def test_idempotent(self):
        config = _config(MonthlySpecificDaysPattern(days=[1, 31]), date(2024, 1, 1), date(2024, 12, 31))
        assert calculate_dates(config) == calculate_dates(config)

    def test_datetime_bounds_are_normalized(self):
        config = _config(WeeklyPattern(days_of_week=[1]), datetime(2024, 1, 1, 18, 0), datetime(2024, 1, 8, 6, 0))
        assert calculate_dates(config) == [date(2024, 1, 1), date(2024, 1, 8)]


class TestUnusableConfig:
    @pytest.mark.parametrize(
        "pattern",
        [
            WeeklyPattern(days_of_week=[0, 1, 2, 3, 4, 5, 6]),
            MonthlySpecificDaysPattern(days=[1, 5]),
            ManualPattern(dates=["2024-03-05"]),
        ],
    )
    def test_start_after_end_returns_empty(self, pattern):
        config = _config(pattern, date(2024, 3, 10), date(2024, 3, 1))
        assert calculate_dates(config) == []

    def test_unparsable_bounds_return_empty(self):
        config = _config(WeeklyPattern(days_of_week=[1]), "not-a-date", "2024-01-31")
        assert calculate_dates(config) == []

    def test_numeric_bounds_return_empty(self):
        config = _config(WeeklyPattern(days_of_week=[4]), 0, 604800)
        assert calculate_dates(config) == []

    def test_string_bounds_are_accepted(self):
        config = _config(WeeklyPattern(days_of_week=[1]), "2024-01-01", "2024-01-08")
        assert calculate_dates(config) == [date(2024, 1, 1), date(2024, 1, 8)]


class TestHasWeekdayInMonth:
    def test_ordinals(self):
        assert has_weekday_in_month(2024, 2, 1, 4) is True
        assert has_weekday_in_month(2024, 2, 1, 5) is True  # last Monday
        assert has_weekday_in_month(2024, 2, 4, 5) is True  # Feb 29th is the 5th Thursday

    def test_invalid_input_is_false(self):
        assert has_weekday_in_month(2024, 2, 1, 0) is False
        assert has_weekday_in_month(2024, 2, 1, 6) is False
        assert has_weekday_in_month(2024, 13, 1, 1) is False
        assert has_weekday_in_month(2024, 2, 7, 1) is False
