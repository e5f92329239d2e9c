"""Day-state operations: read today's status, mark it, and derive statistics.

Reads load the record and build a reconciled view without writing.
Writes replace the whole record in one save.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from tracker.clock import date_key, resolve_now
from tracker.errors import StorageWriteError
from tracker.models import CalendarDay, DayView, TrackerRecord, TrackerStats
from tracker.reconcile import view
from tracker.stats import compute_stats, month_calendar
from tracker.store import apply_retention, load_record, write_record
from tracker.workspace import load_profile

logger = logging.getLogger(__name__)


def _now_and_today(root: Path | None, now: datetime | None) -> tuple[datetime, str]:
    profile = load_profile(root)
    local = resolve_now(root, now, profile)
    return local, date_key(local, profile.reset_hour)


def get_day_view(root: Path | None = None, now: datetime | None = None) -> DayView:
    _, today = _now_and_today(root, now)
    return view(load_record(root), today)


def get_current_drank(root: Path | None = None, now: datetime | None = None) -> bool:
    return get_day_view(root, now).drank


def get_history(root: Path | None = None, now: datetime | None = None) -> list[str]:
    return get_day_view(root, now).history


def set_drank(
    drank: bool,
    root: Path | None = None,
    now: datetime | None = None,
    today: str | None = None,
) -> TrackerRecord:
    """Mark *today* done or not done and persist the whole record.

    Marking done twice keeps one history entry but refreshes the timestamp.
    Returns the record after retention, as written to disk. If the save
    fails the change is abandoned and the on-disk record is left as it was.
    """
    local, current = _now_and_today(root, now)
    if today is None:
        today = current

    record = load_record(root)
    history = list(record.history)
    timestamps = dict(record.completion_timestamps)
    if drank:
        if today not in history:
            history.append(today)
        timestamps[today] = local.strftime("%X")
    else:
        if today in history:
            history.remove(today)
        timestamps.pop(today, None)

    updated = TrackerRecord(
        last_date_key=today,
        last_flag=drank,
        history=history,
        completion_timestamps=timestamps,
    )
    try:
        written = write_record(updated, root)
    except StorageWriteError as e:
        logger.error("%s; change not saved", e.message)
        return apply_retention(updated)
    logger.info("Marked %s as %s", today, "done" if drank else "not done")
    return written


def toggle_drank(root: Path | None = None, now: datetime | None = None) -> bool:
    """Flip today's effective flag and return the new value."""
    local, today = _now_and_today(root, now)
    following = not view(load_record(root), today).drank
    set_drank(following, root=root, now=local, today=today)
    return following


def get_stats(root: Path | None = None, now: datetime | None = None) -> TrackerStats:
    local, today = _now_and_today(root, now)
    history = view(load_record(root), today).history
    return compute_stats(history, today, calendar_today=local.date())


def get_calendar(
    year: int | None = None,
    month: int | None = None,
    root: Path | None = None,
    now: datetime | None = None,
) -> list[list[CalendarDay]]:
    """Month grid for the calendar view; defaults to the month of today's app day."""
    _, today = _now_and_today(root, now)
    if year is None:
        year = int(today[:4])
    if month is None:
        month = int(today[5:7])
    history = view(load_record(root), today).history
    return month_calendar(history, year, month, today)
