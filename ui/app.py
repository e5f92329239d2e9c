from __future__ import annotations

import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from tracker import (
    InvalidDateKeyError,
    Session,
    configure_logging,
    export_snapshot,
    get_calendar,
    get_day_view,
    get_stats,
    load_record,
    load_session,
    reconcile_and_persist,
    save_session,
    set_drank,
    status_text,
    text,
    toggle_drank,
    write_export,
)
from tracker.models import LANGUAGES, THEMES

configure_logging()

REFRESH_SECONDS = 60


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _status_payload() -> dict[str, Any]:
    day = get_day_view()
    session = load_session()
    timestamps = load_record().completion_timestamps
    return {
        "today": day.today,
        "drank": day.drank,
        "statusText": status_text(session, day.drank),
        "drankAt": timestamps.get(day.today) if day.drank else None,
    }


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="Protein Tracker", version="0.4.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("PROTEIN_USERNAME", "")
    expected_password = os.environ.get("PROTEIN_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Page ──────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(username: str = Depends(get_current_user)) -> HTMLResponse:
    # Opening the page starts a session: heal the stored record once.
    day = reconcile_and_persist()
    session = load_session()
    stats = get_stats()

    stat_rows = "".join(
        f'<div class="stat"><div class="muted small">{_escape(text(session, label))}</div><b>{value}</b></div>'
        for label, value in [
            ("current_streak", stats.current_streak),
            ("longest_streak", stats.longest_streak),
            ("this_week", stats.weekly_count),
            ("this_month", stats.monthly_count),
            ("total_days", stats.total_days),
            ("completion_rate", f"{stats.completion_rate}%"),
        ]
    )

    html = f"""<!doctype html>
<html lang="{session.language}">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{_escape(text(session, "title"))}</title>
  <style>
    body {{ font-family: system-ui, sans-serif; margin: 2rem; }}
    body.dark {{ background: #111; color: #eee; }}
    .muted {{ opacity: .7; }} .small {{ font-size: 13px; }}
    .stats {{ display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; margin-top: 16px; }}
  </style>
</head>
<body class="{session.theme}">
  <h1>{_escape(text(session, "title"))}</h1>
  <p id="status">{_escape(status_text(session, day.drank))}</p>
  <button id="toggle" aria-pressed="{'true' if day.drank else 'false'}">{_escape(text(session, "button"))}</button>
  <section class="stats">{stat_rows}</section>
  <script>
    const statusEl = document.getElementById('status');
    const btn = document.getElementById('toggle');
    function show(s) {{
      statusEl.textContent = s.statusText;
      btn.setAttribute('aria-pressed', s.drank ? 'true' : 'false');
    }}
    btn.addEventListener('click', async () => {{
      await fetch('/api/toggle', {{method: 'POST'}});
      location.reload();
    }});
    setInterval(async () => show(await (await fetch('/api/status')).json()), {REFRESH_SECONDS * 1000});
  </script>
</body>
</html>"""
    return HTMLResponse(html)


# ── Day state ─────────────────────────────────────────────────

@app.post("/api/reconcile")
def api_reconcile(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Session start: heal the stored record against today's app day."""
    return reconcile_and_persist().to_dict()


@app.get("/api/status")
def api_status(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _status_payload()


@app.post("/api/toggle")
def api_toggle(username: str = Depends(get_current_user)) -> dict[str, Any]:
    toggle_drank()
    return _status_payload()


@app.post("/api/drank")
def api_set_drank(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    drank = payload.get("drank")
    if not isinstance(drank, bool):
        raise HTTPException(status_code=400, detail="'drank' must be true or false")
    set_drank(drank)
    return _status_payload()


@app.get("/api/history")
def api_history(username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = get_day_view()
    return {"today": day.today, "count": len(day.history), "history": day.history}


@app.get("/api/stats")
def api_stats(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return get_stats().to_dict()


@app.get("/api/calendar")
def api_calendar(
    year: int | None = None,
    month: int | None = None,
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    try:
        weeks = get_calendar(year, month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidDateKeyError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    return {"weeks": [[d.to_dict() for d in week] for week in weeks]}


# ── Export ────────────────────────────────────────────────────

@app.get("/api/export")
def api_export(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return export_snapshot().to_dict()


@app.post("/api/export")
def api_write_export(username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        path = write_export()
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Export failed: {e}")
    return {"ok": True, "path": str(path)}


# ── Preferences ───────────────────────────────────────────────

@app.get("/api/preferences")
def api_get_preferences(username: str = Depends(get_current_user)) -> dict[str, Any]:
    session = load_session()
    return {"language": session.language, "theme": session.theme}


@app.post("/api/preferences")
def api_set_preferences(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    current = load_session()
    language = str(payload.get("language", current.language))
    theme = str(payload.get("theme", current.theme))
    if language not in LANGUAGES:
        raise HTTPException(status_code=400, detail=f"Unsupported language: {language}")
    if theme not in THEMES:
        raise HTTPException(status_code=400, detail=f"Unsupported theme: {theme}")
    save_session(Session(language=language, theme=theme))
    return {"ok": True, "language": language, "theme": theme}
