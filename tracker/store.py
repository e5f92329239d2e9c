"""Persisted tracker record.

The record lives in one JSON file and is always replaced as a whole.
Reads never fail: missing or corrupt data yields an empty record.
Writes are best effort: a failed save is logged and reported, never raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tracker.errors import StorageReadError, StorageWriteError
from tracker.fileio import read_json, write_json_atomic
from tracker.models import TrackerRecord
from tracker.workspace import state_path

logger = logging.getLogger(__name__)

MAX_HISTORY = 365


def read_record(root: Path | None = None) -> TrackerRecord:
    """Strict read. Raises StorageReadError if the stored data cannot be parsed."""
    path = state_path(root)
    try:
        data = read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StorageReadError(path, str(e)) from e
    if data is None:
        return TrackerRecord()
    if not isinstance(data, dict):
        raise StorageReadError(path, f"expected an object, got {type(data).__name__}")
    try:
        return TrackerRecord.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise StorageReadError(path, str(e)) from e


def load_record(root: Path | None = None) -> TrackerRecord:
    """Read the record, treating unreadable data the same as no data."""
    try:
        return read_record(root)
    except StorageReadError as e:
        logger.warning("%s; starting from an empty record", e.message)
        return TrackerRecord()


def apply_retention(record: TrackerRecord, limit: int = MAX_HISTORY) -> TrackerRecord:
    """Copy of *record* keeping the newest *limit* history keys.

    Timestamps for keys no longer in history are dropped.
    """
    trimmed = record.copy()
    if len(trimmed.history) > limit:
        trimmed.history = trimmed.history[-limit:]
    kept = set(trimmed.history)
    trimmed.completion_timestamps = {
        k: v for k, v in trimmed.completion_timestamps.items() if k in kept
    }
    return trimmed


def write_record(record: TrackerRecord, root: Path | None = None) -> TrackerRecord:
    """Strict write of the retained record. Raises StorageWriteError."""
    path = state_path(root)
    retained = apply_retention(record)
    try:
        write_json_atomic(path, retained.to_dict())
    except (OSError, TypeError, ValueError) as e:
        raise StorageWriteError(path, str(e)) from e
    return retained


def save_record(record: TrackerRecord, root: Path | None = None) -> bool:
    """Persist *record*. Returns False if the write failed; the old file stays."""
    try:
        write_record(record, root)
    except StorageWriteError as e:
        logger.error("%s; change not saved", e.message)
        return False
    return True
