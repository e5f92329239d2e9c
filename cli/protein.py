#!/usr/bin/env python3
"""Protein tracker TUI: daily toggle, streaks and calendar powered by Textual."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Header, Label, Static

from tracker import (
    Session,
    configure_logging,
    get_calendar,
    get_day_view,
    get_stats,
    load_record,
    load_session,
    month_title,
    next_language,
    next_theme,
    parse_date_key,
    reconcile_and_persist,
    save_session,
    status_text,
    text,
    toggle_drank,
    weekday_headers,
    write_export,
)

REFRESH_SECONDS = 60
TEXTUAL_THEMES = {"dark": "textual-dark", "light": "textual-light"}


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
    align: center middle;
}

#today-card {
    width: 60;
    height: auto;
    border: round $primary;
    padding: 1 2;
}

#status-line {
    text-style: bold;
    margin: 1 0;
}

.drank #status-line {
    color: $success;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
}

#calendar-table {
    height: auto;
}
"""


# ── Rendering helpers ──────────────────────────────────────────


def render_stats(session: Session) -> str:
    stats = get_stats()
    rows = [
        ("current_streak", stats.current_streak),
        ("longest_streak", stats.longest_streak),
        ("this_week", stats.weekly_count),
        ("this_month", stats.monthly_count),
        ("total_days", stats.total_days),
        ("completion_rate", f"{stats.completion_rate}%"),
    ]
    return "\n".join(f"{text(session, label)}: {value}" for label, value in rows)


def calendar_cell(day_key: str, done: bool, in_month: bool, is_today: bool) -> str:
    if not in_month:
        return ""
    label = f"{parse_date_key(day_key).day:2d}"
    mark = "✓" if done else "·"
    return f">{label}{mark}" if is_today else f" {label}{mark}"


# ── Screens ────────────────────────────────────────────────────


class CalendarView(Vertical):
    """Current month with completed days marked."""

    def __init__(self, session: Session, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        yield Label("", classes="section-title", id="calendar-title")
        yield DataTable(id="calendar-table", show_cursor=False)

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#calendar-table", DataTable)
        table.add_columns(*weekday_headers(self.session))
        weeks = get_calendar()
        first = parse_date_key(next(d for d in weeks[0] if d.in_month).date)
        self.query_one("#calendar-title", Label).update(
            month_title(self.session, first.year, first.month)
        )
        for week in weeks:
            table.add_row(*(calendar_cell(d.date, d.done, d.in_month, d.is_today) for d in week))


# ── Main app ───────────────────────────────────────────────────


class ProteinTrackerApp(App):
    """Protein tracker: one toggle per app day."""

    TITLE = "Protein Tracker"
    CSS = CSS

    BINDINGS = [
        Binding("space", "toggle_drank", "Toggle"),
        Binding("s", "toggle_stats", "Stats"),
        Binding("c", "toggle_calendar", "Calendar"),
        Binding("l", "next_language", "Language"),
        Binding("t", "next_theme", "Theme"),
        Binding("x", "export", "Export"),
        Binding("q", "quit", "Quit"),
    ]

    drank: reactive[bool] = reactive(False, init=False)

    def __init__(self) -> None:
        super().__init__()
        self.session = load_session()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static(id="status-line"),
            Static(id="drank-at", classes="muted"),
            Static(id="stats-panel"),
            id="today-card",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.theme = TEXTUAL_THEMES.get(self.session.theme, "textual-dark")
        self.drank = reconcile_and_persist().drank
        self.query_one("#stats-panel").display = False
        self._refresh()
        # Picks up the app-day rollover while the TUI stays open.
        self.set_interval(REFRESH_SECONDS, self._refresh)

    def _refresh(self) -> None:
        day = get_day_view()
        self.drank = day.drank
        self.title = text(self.session, "title")
        self.sub_title = day.today
        self.query_one("#status-line", Static).update(status_text(self.session, day.drank))

        drank_at = load_record().completion_timestamps.get(day.today) if day.drank else None
        self.query_one("#drank-at", Static).update(
            f"{text(self.session, 'last_drink')} {drank_at}" if drank_at else ""
        )
        self.query_one("#stats-panel", Static).update(render_stats(self.session))

        calendars = self.query(CalendarView)
        if calendars:
            calendars.remove()
            self._mount_calendar()

    def watch_drank(self, drank: bool) -> None:
        self.query_one("#today-card").set_class(drank, "drank")

    def _mount_calendar(self) -> None:
        self.query_one("#today-card").mount(CalendarView(self.session))

    # ── Actions ────────────────────────────────────────────────

    def action_toggle_drank(self) -> None:
        self.drank = toggle_drank()
        self._refresh()

    def action_toggle_stats(self) -> None:
        panel = self.query_one("#stats-panel")
        panel.display = not panel.display

    def action_toggle_calendar(self) -> None:
        existing = self.query(CalendarView)
        if existing:
            existing.remove()
        else:
            self._mount_calendar()

    def action_next_language(self) -> None:
        self.session = next_language(self.session)
        save_session(self.session)
        self._refresh()

    def action_next_theme(self) -> None:
        self.session = next_theme(self.session)
        save_session(self.session)
        self.theme = TEXTUAL_THEMES[self.session.theme]

    def action_export(self) -> None:
        try:
            path = write_export()
        except OSError as e:
            self.notify(f"Error: {e}", title="Export Failed", severity="error")
            return
        self.notify(f"{text(self.session, 'exported')} {path}", title="Export")


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    configure_logging()
    ProteinTrackerApp().run()


if __name__ == "__main__":
    main()
