"""One-way export of the tracker history and its headline statistics."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from tracker.clock import date_key, resolve_now
from tracker.fileio import write_json_atomic
from tracker.models import ExportSnapshot, TrackerRecord
from tracker.reconcile import view
from tracker.stats import compute_stats
from tracker.store import load_record
from tracker.workspace import exports_dir, load_profile

logger = logging.getLogger(__name__)


def build_snapshot(record: TrackerRecord, today: str, exported_at: datetime) -> ExportSnapshot:
    """Snapshot of the reconciled history as of *today*."""
    history = view(record, today).history
    kept = set(history)
    stats = compute_stats(history, today, calendar_today=exported_at.date())
    return ExportSnapshot(
        exported_at=exported_at.isoformat(timespec="seconds"),
        history=history,
        drink_timestamps={
            k: v for k, v in record.completion_timestamps.items() if k in kept
        },
        total_days=stats.total_days,
        current_streak=stats.current_streak,
        longest_streak=stats.longest_streak,
        completion_rate=stats.completion_rate,
    )


def export_snapshot(root: Path | None = None, now: datetime | None = None) -> ExportSnapshot:
    profile = load_profile(root)
    local = resolve_now(root, now, profile)
    return build_snapshot(load_record(root), date_key(local, profile.reset_hour), local)


def write_export(root: Path | None = None, now: datetime | None = None) -> Path:
    """Write the snapshot to exports/protein-tracker-<date>.json and return its path."""
    snapshot = export_snapshot(root, now)
    path = exports_dir(root) / f"protein-tracker-{snapshot.exported_at[:10]}.json"
    write_json_atomic(path, snapshot.to_dict())
    logger.info("Exported %d days to %s", len(snapshot.history), path)
    return path
