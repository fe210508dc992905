"""
Unit tests for week date helpers.
"""

from datetime import date, datetime

import pytest

from meal_planner.services.weeks import (
    current_monday,
    format_week_start,
    monday_of_week,
)


class TestMondayOfWeek:

    @pytest.mark.unit
    @pytest.mark.parametrize("day,expected", [
        (date(2024, 12, 16), date(2024, 12, 16)),  # Monday
        (date(2024, 12, 18), date(2024, 12, 16)),  # Wednesday
        (date(2024, 12, 21), date(2024, 12, 16)),  # Saturday
        (date(2024, 12, 22), date(2024, 12, 16)),  # Sunday
        (date(2025, 1, 1), date(2024, 12, 30)),    # across the year boundary
    ])
    def test_monday_of_week(self, day, expected):
        assert monday_of_week(day) == expected

    @pytest.mark.unit
    def test_accepts_datetime(self):
        assert monday_of_week(datetime(2024, 12, 19, 18, 30)) == date(2024, 12, 16)

    @pytest.mark.unit
    def test_current_monday(self):
        assert current_monday(date(2024, 12, 20)) == date(2024, 12, 16)
        assert current_monday().weekday() == 0


class TestWeekKeys:

    @pytest.mark.unit
    def test_format_week_start(self):
        assert format_week_start(date(2024, 12, 16)) == "2024-12-16"
        assert format_week_start(datetime(2024, 12, 16, 9, 0)) == "2024-12-16"
