"""Tests for the default date window."""
import pytest
from datetime import date
from unittest.mock import patch

from moneycoach.coach.dates import (
    default_date_range,
    one_year_before,
    resolve_date_range,
)


class TestDefaultDateRange:
    """Tests for the trailing 12-month window."""

    def test_window_ends_today(self):
        result = default_date_range(today=date(2025, 3, 15))

        assert result.end == date(2025, 3, 15)
        assert result.start == date(2024, 3, 15)

    def test_uses_calendar_year_not_365_days(self):
        """A window crossing 29 Feb still starts on the same month/day."""
        result = default_date_range(today=date(2024, 3, 1))

        # 365 days before 2024-03-01 would be 2023-03-02
        assert result.start == date(2023, 3, 1)

    def test_leap_day_rolls_over_to_march_first(self):
        result = default_date_range(today=date(2024, 2, 29))

        assert result.start == date(2023, 3, 1)
        assert result.end == date(2024, 2, 29)

    @pytest.mark.parametrize("today", [
        date(2025, 1, 1),
        date(2025, 12, 31),
        date(2028, 2, 28),
    ])
    def test_start_year_is_previous_year(self, today):
        result = default_date_range(today=today)

        assert result.start.year == today.year - 1
        assert (result.start.month, result.start.day) == (today.month, today.day)

    def test_repeated_calls_agree(self):
        with patch("moneycoach.coach.dates.utc_today", return_value=date(2025, 6, 30)):
            first = default_date_range()
            second = default_date_range()

        assert first == second
        assert first.end == date(2025, 6, 30)

    def test_one_year_before_regular_day(self):
        assert one_year_before(date(2025, 10, 18)) == date(2024, 10, 18)


class TestResolveDateRange:
    """Tests for filling in missing bounds."""

    def test_explicit_bounds_are_kept(self):
        result = resolve_date_range(date(2024, 1, 1), date(2024, 12, 31), today=date(2025, 5, 5))

        assert result.start == date(2024, 1, 1)
        assert result.end == date(2024, 12, 31)

    def test_missing_bounds_use_default_window(self):
        result = resolve_date_range(today=date(2025, 5, 5))

        assert result.start == date(2024, 5, 5)
        assert result.end == date(2025, 5, 5)

    def test_only_start_given(self):
        result = resolve_date_range(start_date=date(2025, 1, 1), today=date(2025, 5, 5))

        assert result.start == date(2025, 1, 1)
        assert result.end == date(2025, 5, 5)

    def test_only_end_given(self):
        result = resolve_date_range(end_date=date(2025, 4, 30), today=date(2025, 5, 5))

        assert result.start == date(2024, 5, 5)
        assert result.end == date(2025, 4, 30)
