"""Presentation preferences: language, theme and display texts.

Front ends hold a Session and pass it to the text helpers; the day-state
engine never reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from tracker.models import LANGUAGES, THEMES
from tracker.workspace import load_profile, save_profile


TEXTS: dict[str, dict[str, str]] = {
    "en": {
        "title": "Protein Drink Tracker",
        "button": "I drank my protein",
        "status_done": "Protein done for today.",
        "status_not_done": "Not yet today.",
        "current_streak": "Current streak",
        "longest_streak": "Longest streak",
        "this_week": "This week",
        "this_month": "This month",
        "total_days": "Total days",
        "completion_rate": "Completion rate",
        "last_drink": "Last drink at",
        "exported": "Exported to",
    },
    "fr": {
        "title": "Suivi de Protéines",
        "button": "J'ai bu ma protéine",
        "status_done": "Protéine prise aujourd'hui.",
        "status_not_done": "Pas encore aujourd'hui.",
        "current_streak": "Série actuelle",
        "longest_streak": "Meilleure série",
        "this_week": "Cette semaine",
        "this_month": "Ce mois-ci",
        "total_days": "Jours au total",
        "completion_rate": "Taux de réussite",
        "last_drink": "Dernière prise à",
        "exported": "Exporté vers",
    },
}


# Sunday first, matching the calendar grid.
WEEKDAYS: dict[str, tuple[str, ...]] = {
    "en": ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
    "fr": ("Dim", "Lun", "Mar", "Mer", "Jeu", "Ven", "Sam"),
}

MONTHS: dict[str, tuple[str, ...]] = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "fr": (
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ),
}


@dataclass(frozen=True)
class Session:
    language: str = "en"
    theme: str = "dark"


def text(session: Session, key: str) -> str:
    """Look up a display string, falling back to English, then to the key itself."""
    table = TEXTS.get(session.language, TEXTS["en"])
    return table.get(key, TEXTS["en"].get(key, key))


def status_text(session: Session, drank: bool) -> str:
    return text(session, "status_done" if drank else "status_not_done")


def weekday_headers(session: Session) -> tuple[str, ...]:
    return WEEKDAYS.get(session.language, WEEKDAYS["en"])


def month_title(session: Session, year: int, month: int) -> str:
    names = MONTHS.get(session.language, MONTHS["en"])
    return f"{names[month - 1]} {year}"


def load_session(root: Path | None = None) -> Session:
    profile = load_profile(root)
    return Session(language=profile.language, theme=profile.theme)


def save_session(session: Session, root: Path | None = None) -> None:
    """Store language and theme in the profile, keeping its other settings."""
    if session.language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {session.language!r}")
    if session.theme not in THEMES:
        raise ValueError(f"Unsupported theme: {session.theme!r}")
    profile = load_profile(root)
    profile.language = session.language
    profile.theme = session.theme
    save_profile(profile, root)


def _cycle(options: tuple[str, ...], current: str) -> str:
    try:
        return options[(options.index(current) + 1) % len(options)]
    except ValueError:
        return options[0]


def next_language(session: Session) -> Session:
    return replace(session, language=_cycle(LANGUAGES, session.language))


def next_theme(session: Session) -> Session:
    return replace(session, theme=_cycle(THEMES, session.theme))
