"""Tests for baby development and pregnancy-stage helpers."""

from __future__ import annotations

from datetime import date

import pytest

from neomama.development import (
    MILESTONE_WEEKS,
    calendar_grid,
    days_until,
    get_week_data,
    next_milestone_week,
    pregnancy_progress,
    previous_milestone_week,
    step_week,
    week_from_due_date,
)


class TestWeekLookup:
    @pytest.mark.parametrize(
        ("week", "expected"),
        [(1, 4), (4, 4), (7, 4), (8, 8), (23, 20), (39, 36), (40, 40), (42, 40)],
    )
    def test_nearest_at_or_below(self, week: int, expected: int) -> None:
        assert get_week_data(week).week == expected

    def test_table_shape(self) -> None:
        assert MILESTONE_WEEKS == list(range(4, 41, 4))
        assert get_week_data(20).baby_size == "banana"


class TestMilestoneStepping:
    def test_next(self) -> None:
        assert next_milestone_week(4) == 8
        assert next_milestone_week(22) == 28
        assert next_milestone_week(40) == 40

    def test_previous(self) -> None:
        assert previous_milestone_week(8) == 4
        assert previous_milestone_week(22) == 20
        assert previous_milestone_week(4) == 4

    def test_step_week_clamped(self) -> None:
        assert step_week(1, "prev") == 1
        assert step_week(40, "next") == 40
        assert step_week(20, "next") == 21
        assert step_week(20, "prev") == 19
        assert step_week(20, "sideways") == 20


class TestProgress:
    def test_percent(self) -> None:
        assert pregnancy_progress(20) == 50
        assert pregnancy_progress(40) == 100

    def test_days_until(self) -> None:
        today = date(2025, 1, 1)
        assert days_until(date(2025, 1, 11), today) == 10
        assert days_until(date(2024, 12, 1), today) == 0

    def test_week_from_due_date(self) -> None:
        today = date(2025, 1, 1)
        assert week_from_due_date(date(2025, 1, 1), today) == 40
        assert week_from_due_date(date(2025, 3, 12), today) == 30
        assert week_from_due_date(date(2026, 6, 1), today) == 1


class TestCalendarGrid:
    def test_monday_first_padding(self) -> None:
        # 1 Feb 2025 is a Saturday
        grid = calendar_grid(2025, 2)
        assert grid[0] == [None, None, None, None, None, 1, 2]
        assert grid[-1] == [24, 25, 26, 27, 28, None, None]
        days = [d for week in grid for d in week if d is not None]
        assert days == list(range(1, 29))
        assert all(len(week) == 7 for week in grid)
