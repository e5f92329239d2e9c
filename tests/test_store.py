"""Tests for tracker/store.py: persistence, retention and failure handling."""

import json
from datetime import date, timedelta

import pytest

from tracker.errors import StorageReadError
from tracker.models import TrackerRecord
from tracker.store import (
    MAX_HISTORY,
    apply_retention,
    load_record,
    read_record,
    save_record,
)


def _days(start: date, n: int) -> list[str]:
    return [(start + timedelta(days=i)).isoformat() for i in range(n)]


def test_load_missing_is_empty(workspace):
    assert load_record(workspace) == TrackerRecord()


def test_load_blank_file_is_empty(workspace, write_state):
    write_state("   \n")
    assert load_record(workspace) == TrackerRecord()


def test_corrupt_data_is_silently_empty(workspace, write_state):
    write_state("{not json")
    with pytest.raises(StorageReadError):
        read_record(workspace)
    assert load_record(workspace) == TrackerRecord()


def test_non_object_is_empty(workspace, write_state):
    write_state([1, 2, 3])
    assert load_record(workspace) == TrackerRecord()


def test_legacy_record_without_history(workspace, write_state):
    write_state({"dateKey": "2024-01-04", "drank": True})
    r = load_record(workspace)
    assert r.last_date_key == "2024-01-04"
    assert r.last_flag is True
    assert r.history == []


def test_save_and_load(workspace):
    record = TrackerRecord(
        last_date_key="2024-01-04",
        last_flag=True,
        history=["2024-01-03", "2024-01-04"],
        completion_timestamps={"2024-01-04": "10:00:00"},
    )
    assert save_record(record, workspace) is True
    assert load_record(workspace) == record

    data = json.loads((workspace / "data" / "state.json").read_text(encoding="utf-8"))
    assert data == {
        "dateKey": "2024-01-04",
        "drank": True,
        "history": ["2024-01-03", "2024-01-04"],
        "drinkTimestamps": [{"date": "2024-01-04", "time": "10:00:00"}],
    }


def test_save_creates_data_dir(tmp_path):
    assert save_record(TrackerRecord(last_date_key="2024-01-04"), tmp_path) is True
    assert (tmp_path / "data" / "state.json").exists()


def test_retention_evicts_oldest_first():
    history = _days(date(2023, 1, 1), MAX_HISTORY + 2)
    record = TrackerRecord(
        history=history,
        completion_timestamps={history[0]: "a", history[1]: "b", history[-1]: "c"},
    )
    kept = apply_retention(record)
    assert len(kept.history) == MAX_HISTORY
    assert kept.history == history[2:]
    assert kept.completion_timestamps == {history[-1]: "c"}
    # the input is left alone
    assert len(record.history) == MAX_HISTORY + 2


def test_save_truncates_history(workspace):
    history = _days(date(2023, 1, 1), MAX_HISTORY + 10)
    save_record(TrackerRecord(history=history), workspace)
    assert load_record(workspace).history == history[10:]


def test_save_failure_is_swallowed_and_keeps_old_file(workspace, monkeypatch):
    original = TrackerRecord(last_date_key="2024-01-03", last_flag=True, history=["2024-01-03"])
    save_record(original, workspace)

    def boom(path, data):
        raise OSError("No space left on device")

    monkeypatch.setattr("tracker.store.write_json_atomic", boom)
    changed = TrackerRecord(last_date_key="2024-01-04", last_flag=True, history=["2024-01-03", "2024-01-04"])
    assert save_record(changed, workspace) is False
    assert load_record(workspace) == original


def test_failed_write_leaves_no_temp_files(workspace):
    save_record(TrackerRecord(last_date_key="2024-01-03"), workspace)
    bad = TrackerRecord(
        last_date_key="2024-01-04",
        history=["2024-01-04"],
        completion_timestamps={"2024-01-04": object()},
    )
    assert save_record(bad, workspace) is False
    assert load_record(workspace).last_date_key == "2024-01-03"
    assert [p.name for p in (workspace / "data").iterdir() if p.name.startswith(".tmp_")] == []


@pytest.mark.parametrize("timestamps", [5, True, "08:00", {"date": "2024-01-04"}])
def test_malformed_timestamps_do_not_break_reads(workspace, write_state, timestamps):
    write_state({
        "dateKey": "2024-01-04",
        "drank": True,
        "history": ["2024-01-04"],
        "drinkTimestamps": timestamps,
    })
    r = load_record(workspace)
    assert r.history == ["2024-01-04"]
    assert r.completion_timestamps == {}


def test_record_conversion_error_is_a_read_error(workspace, write_state, monkeypatch):
    write_state({"dateKey": "2024-01-04", "drank": True})

    def broken(data):
        raise TypeError("unexpected shape")

    monkeypatch.setattr("tracker.store.TrackerRecord.from_dict", broken)
    with pytest.raises(StorageReadError):
        read_record(workspace)
    monkeypatch.undo()
    assert load_record(workspace).last_date_key == "2024-01-04"
