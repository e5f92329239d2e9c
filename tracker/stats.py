"""Streak and completion statistics derived from a reconciled history.

All functions are pure. History entries that are not valid date keys are
ignored.
"""

from __future__ import annotations

import calendar
import math
from datetime import date, timedelta

from tracker.errors import InvalidDateKeyError
from tracker.models import CalendarDay, TrackerStats, parse_date_key


def _dates(history: list[str]) -> set[date]:
    out = set()
    for key in history:
        try:
            out.add(parse_date_key(key))
        except InvalidDateKeyError:
            pass
    return out


def current_streak(history: list[str], today: str) -> int:
    """Consecutive completed days ending at today; 0 if today is not done."""
    done = _dates(history)
    current = parse_date_key(today)
    streak = 0
    while current in done:
        streak += 1
        current -= timedelta(days=1)
    return streak


def longest_streak(history: list[str]) -> int:
    ordered = sorted(_dates(history))
    if not ordered:
        return 0
    best = run = 1
    for prev, cur in zip(ordered, ordered[1:]):
        if (cur - prev).days == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
    return best


def week_bounds(reference: date) -> tuple[date, date]:
    """Sunday-start calendar week containing *reference*."""
    start = reference - timedelta(days=(reference.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def weekly_count(history: list[str], reference: date) -> int:
    """Completed days in the calendar week of *reference*.

    The week is a plain calendar week; the app-day reset hour does not apply.
    """
    start, end = week_bounds(reference)
    return sum(1 for d in _dates(history) if start <= d <= end)


def monthly_count(history: list[str], reference: date) -> int:
    return sum(
        1 for d in _dates(history)
        if d.year == reference.year and d.month == reference.month
    )


def completion_rate(history: list[str], today: str) -> int:
    """Percent of days since the first entry that were completed, rounded half up."""
    done = _dates(history)
    if not done:
        return 0
    total_days = (parse_date_key(today) - min(done)).days + 1
    if total_days < 1:
        return 0
    return math.floor(len(done) / total_days * 100 + 0.5)


def compute_stats(
    history: list[str],
    today: str,
    calendar_today: date | None = None,
) -> TrackerStats:
    """All aggregates at once.

    *calendar_today* is the plain calendar date used for the weekly and
    monthly windows; it defaults to the app date of *today*.
    """
    if calendar_today is None:
        calendar_today = parse_date_key(today)
    return TrackerStats(
        total_days=len(_dates(history)),
        current_streak=current_streak(history, today),
        longest_streak=longest_streak(history),
        weekly_count=weekly_count(history, calendar_today),
        monthly_count=monthly_count(history, calendar_today),
        completion_rate=completion_rate(history, today),
    )


def month_calendar(
    history: list[str],
    year: int,
    month: int,
    today: str,
) -> list[list[CalendarDay]]:
    """Sunday-first weeks covering *month*, padded with neighbouring days."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    done = _dates(history)
    today_date = parse_date_key(today)
    weeks = []
    for week in calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month):
        weeks.append([
            CalendarDay(
                date=d.isoformat(),
                done=d in done,
                is_today=d == today_date,
                is_future=d > today_date,
                in_month=d.month == month,
            )
            for d in week
        ])
    return weeks
