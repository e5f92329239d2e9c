"""Tests for tracker/stats.py: streaks, windows, completion rate and calendar."""

from datetime import date, timedelta

import pytest

from tracker.stats import (
    completion_rate,
    compute_stats,
    current_streak,
    longest_streak,
    month_calendar,
    monthly_count,
    week_bounds,
    weekly_count,
)


def _run(start: str, n: int) -> list[str]:
    first = date.fromisoformat(start)
    return [(first + timedelta(days=i)).isoformat() for i in range(n)]


def test_gap_before_today():
    history = ["2024-01-01", "2024-01-02", "2024-01-04"]
    assert current_streak(history, "2024-01-04") == 1
    assert longest_streak(history) == 2


def test_current_streak_zero_when_today_missing():
    assert current_streak(["2024-01-02", "2024-01-03"], "2024-01-04") == 0
    assert current_streak([], "2024-01-04") == 0


def test_extending_run_adds_one():
    history = _run("2024-01-01", 3)
    assert current_streak(history, "2024-01-03") == 3
    assert current_streak(history + ["2024-01-04"], "2024-01-04") == 4


def test_streak_across_month_and_year():
    history = ["2023-12-30", "2023-12-31", "2024-01-01"]
    assert current_streak(history, "2024-01-01") == 3
    assert longest_streak(history) == 3


def test_longest_streak_counts_final_run_and_ignores_order():
    history = ["2024-01-10", "2024-01-01", "2024-01-11", "2024-01-12", "2024-01-02"]
    assert longest_streak(history) == 3


def test_longest_streak_empty_and_single():
    assert longest_streak([]) == 0
    assert longest_streak(["2024-01-01"]) == 1


def test_longest_at_least_current():
    history = _run("2024-01-01", 5) + _run("2024-02-01", 2)
    assert longest_streak(history) >= current_streak(history, "2024-02-02")
    assert longest_streak(history) == 5


def test_invalid_entries_ignored():
    assert longest_streak(["2024-01-01", "bogus", "2024-01-02"]) == 2


def test_week_bounds_sunday_start():
    assert week_bounds(date(2024, 1, 4)) == (date(2023, 12, 31), date(2024, 1, 6))
    assert week_bounds(date(2023, 12, 31)) == (date(2023, 12, 31), date(2024, 1, 6))
    assert week_bounds(date(2024, 1, 6)) == (date(2023, 12, 31), date(2024, 1, 6))


def test_weekly_count():
    history = ["2023-12-30", "2023-12-31", "2024-01-01", "2024-01-06", "2024-01-07"]
    assert weekly_count(history, date(2024, 1, 4)) == 3


def test_monthly_count():
    history = ["2023-12-31", "2024-01-01", "2024-01-31", "2024-02-01"]
    assert monthly_count(history, date(2024, 1, 15)) == 2


def test_completion_rate_empty():
    assert completion_rate([], "2024-01-04") == 0


def test_completion_rate_full():
    assert completion_rate(_run("2024-01-01", 10), "2024-01-10") == 100


def test_completion_rate_rounds_half_up():
    # 1 of 8 days = 12.5%
    assert completion_rate(["2024-01-01"], "2024-01-08") == 13
    assert completion_rate(["2024-01-01", "2024-01-02", "2024-01-04"], "2024-01-04") == 75


def test_completion_rate_future_only_history():
    assert completion_rate(["2024-02-01"], "2024-01-04") == 0


def test_compute_stats():
    history = ["2024-01-01", "2024-01-02", "2024-01-04"]
    stats = compute_stats(history, "2024-01-04")
    assert stats.total_days == 3
    assert stats.current_streak == 1
    assert stats.longest_streak == 2
    assert stats.weekly_count == 3
    assert stats.monthly_count == 3
    assert stats.completion_rate == 75


def test_compute_stats_calendar_reference():
    stats = compute_stats(["2024-01-06"], "2024-01-06", calendar_today=date(2024, 1, 7))
    assert stats.weekly_count == 0
    assert stats.monthly_count == 1


def test_month_calendar_shape():
    weeks = month_calendar(["2024-01-02"], 2024, 1, "2024-01-04")
    assert len(weeks) == 5
    assert all(len(w) == 7 for w in weeks)
    assert weeks[0][0].date == "2023-12-31"
    assert weeks[0][0].in_month is False
    assert weeks[0][2].date == "2024-01-02"
    assert weeks[0][2].done is True
    assert weeks[0][4].is_today is True
    assert weeks[0][5].is_future is True
    assert weeks[-1][-1].date == "2024-02-03"


def test_month_calendar_invalid_month():
    with pytest.raises(ValueError):
        month_calendar([], 2024, 13, "2024-01-04")
