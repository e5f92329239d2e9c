"""History reconciliation.

The stored (date key, flag) pair is a shortcut for "did it today"; history
is what statistics are computed from. Reconciliation keeps the two in step
for the current app day:

1. Stored date is not today: today's flag reads as False and history is
   left as is. The stale pair stays on disk until the user acts.
2. Stored date is today, flag True, today missing from history: today is
   appended.
3. Stored date is today, flag False: today is removed from history if present.

reconcile() and view() are pure. reconcile_and_persist() is the one place a
read writes back, and is meant to run once when a session starts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from tracker.clock import today_key
from tracker.models import DayView, TrackerRecord
from tracker.store import load_record, save_record

logger = logging.getLogger(__name__)


@dataclass
class Reconciliation:
    drank: bool
    history: list[str]
    record: TrackerRecord
    changed: bool


def reconcile(record: TrackerRecord, today: str) -> Reconciliation:
    if record.last_date_key != today:
        return Reconciliation(False, list(record.history), record, False)

    if record.last_flag:
        if today in record.history:
            return Reconciliation(True, list(record.history), record, False)
        healed = record.copy()
        healed.history.append(today)
        return Reconciliation(True, list(healed.history), healed, True)

    if today not in record.history:
        return Reconciliation(False, list(record.history), record, False)
    healed = record.copy()
    healed.history.remove(today)
    healed.completion_timestamps.pop(today, None)
    return Reconciliation(False, list(healed.history), healed, True)


def view(record: TrackerRecord, today: str) -> DayView:
    result = reconcile(record, today)
    return DayView(today=today, drank=result.drank, history=result.history)


def reconcile_and_persist(root: Path | None = None, now: datetime | None = None) -> DayView:
    """Load, reconcile against today's app day, and save only if anything changed."""
    today = today_key(root, now)
    result = reconcile(load_record(root), today)
    if result.changed:
        logger.info("Reconciled history for %s (drank=%s)", today, result.drank)
        save_record(result.record, root)
    return DayView(today=today, drank=result.drank, history=result.history)
