"""Typed dataclasses for the protein tracker data model.

All persisted models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing or malformed keys use defaults.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from tracker.errors import InvalidDateKeyError


# ── Primitives ────────────────────────────────────────────────

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEFAULT_RESET_HOUR = 2
LANGUAGES = ("en", "fr")
THEMES = ("dark", "light")


def parse_date_key(value: Any) -> date:
    """Parse a 'YYYY-MM-DD' date key. Raises InvalidDateKeyError."""
    if not isinstance(value, str) or not DATE_KEY_RE.match(value):
        raise InvalidDateKeyError(value)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDateKeyError(value) from None


def is_date_key(value: Any) -> bool:
    try:
        parse_date_key(value)
    except InvalidDateKeyError:
        return False
    return True


def _dedupe_keys(values: Any) -> list[str]:
    """Valid date keys in first-seen order, duplicates dropped."""
    if not isinstance(values, list):
        return []
    seen: set[str] = set()
    out = []
    for v in values:
        if is_date_key(v) and v not in seen:
            seen.add(v)
            out.append(v)
    return out


# ── Profile ───────────────────────────────────────────────────


@dataclass
class Profile:
    timezone: str = "UTC"
    reset_hour: int = DEFAULT_RESET_HOUR
    language: str = "en"
    theme: str = "dark"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Profile:
        if not d or not isinstance(d, dict):
            return cls()
        try:
            reset_hour = int(d.get("reset_hour", DEFAULT_RESET_HOUR))
        except (TypeError, ValueError):
            reset_hour = DEFAULT_RESET_HOUR
        if not 0 <= reset_hour <= 23:
            reset_hour = DEFAULT_RESET_HOUR
        language = str(d.get("language", "en")).strip().lower()
        theme = str(d.get("theme", "dark")).strip().lower()
        return cls(
            timezone=str(d.get("timezone", "UTC") or "UTC"),
            reset_hour=reset_hour,
            language=language if language in LANGUAGES else "en",
            theme=theme if theme in THEMES else "dark",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timezone": self.timezone,
            "reset_hour": self.reset_hour,
            "language": self.language,
            "theme": self.theme,
        }


# ── Record ────────────────────────────────────────────────────


@dataclass
class TrackerRecord:
    """The single persisted aggregate.

    history holds completed date keys in insertion order and is logically a
    set. completion_timestamps maps a date key to the wall-clock time of the
    last "drank" write for that day.
    """

    last_date_key: str | None = None
    last_flag: bool = False
    history: list[str] = field(default_factory=list)
    completion_timestamps: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TrackerRecord:
        if not d or not isinstance(d, dict):
            return cls()
        date_key = d.get("dateKey")
        timestamps: dict[str, str] = {}
        entries = d.get("drinkTimestamps")
        for entry in entries if isinstance(entries, list) else []:
            if isinstance(entry, dict) and is_date_key(entry.get("date")):
                timestamps[entry["date"]] = str(entry.get("time", ""))
        return cls(
            last_date_key=date_key if is_date_key(date_key) else None,
            last_flag=bool(d.get("drank", False)),
            history=_dedupe_keys(d.get("history")),
            completion_timestamps=timestamps,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "dateKey": self.last_date_key,
            "drank": self.last_flag,
            "history": list(self.history),
            "drinkTimestamps": [
                {"date": k, "time": v} for k, v in self.completion_timestamps.items()
            ],
        }

    def copy(self) -> TrackerRecord:
        return TrackerRecord(
            last_date_key=self.last_date_key,
            last_flag=self.last_flag,
            history=list(self.history),
            completion_timestamps=dict(self.completion_timestamps),
        )


@dataclass
class DayView:
    """Read-only, reconciled view of the record for one app day."""

    today: str = ""
    drank: bool = False
    history: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"today": self.today, "drank": self.drank, "history": list(self.history)}


# ── Statistics ────────────────────────────────────────────────


@dataclass
class TrackerStats:
    total_days: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    weekly_count: int = 0
    monthly_count: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalDays": self.total_days,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "weeklyCount": self.weekly_count,
            "monthlyCount": self.monthly_count,
            "completionRate": self.completion_rate,
        }


@dataclass
class CalendarDay:
    date: str = ""
    done: bool = False
    is_today: bool = False
    is_future: bool = False
    in_month: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "done": self.done,
            "isToday": self.is_today,
            "isFuture": self.is_future,
            "inMonth": self.in_month,
        }


# ── Export ────────────────────────────────────────────────────


@dataclass
class ExportSnapshot:
    exported_at: str = ""
    history: list[str] = field(default_factory=list)
    drink_timestamps: dict[str, str] = field(default_factory=dict)
    total_days: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "exportedAt": self.exported_at,
            "history": list(self.history),
            "drinkTimestamps": [
                {"date": k, "time": v} for k, v in self.drink_timestamps.items()
            ],
            "stats": {
                "totalDays": self.total_days,
                "currentStreak": self.current_streak,
                "longestStreak": self.longest_streak,
                "completionRate": self.completion_rate,
            },
        }
