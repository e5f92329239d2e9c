"""App-day clock.

An app day runs from the reset hour (02:00 by default) to just before the
reset hour on the next calendar day. Timestamps before the reset hour belong
to the previous calendar date.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path

from tracker.models import DEFAULT_RESET_HOUR, Profile, parse_date_key
from tracker.workspace import get_user_timezone, load_profile


def app_date(now: datetime, reset_hour: int = DEFAULT_RESET_HOUR) -> date:
    """App date for a timestamp, read in the timestamp's own wall-clock time."""
    if now.hour < reset_hour:
        return now.date() - timedelta(days=1)
    return now.date()


def date_key(now: datetime, reset_hour: int = DEFAULT_RESET_HOUR) -> str:
    return app_date(now, reset_hour).isoformat()


def resolve_now(
    root: Path | None = None,
    now: datetime | None = None,
    profile: Profile | None = None,
) -> datetime:
    """Current time in the user's timezone; aware *now* is converted, naive is kept."""
    tz = get_user_timezone(root, profile)
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is not None:
        return now.astimezone(tz)
    return now


def today_key(root: Path | None = None, now: datetime | None = None) -> str:
    """Today's app date key using the profile's timezone and reset hour."""
    profile = load_profile(root)
    return date_key(resolve_now(root, now, profile), profile.reset_hour)


def previous_key(key: str) -> str:
    return (parse_date_key(key) - timedelta(days=1)).isoformat()


def next_key(key: str) -> str:
    return (parse_date_key(key) + timedelta(days=1)).isoformat()
