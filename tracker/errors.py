"""Error taxonomy for the tracker.

Every error carries a machine-readable ``code`` so the web front end can
branch on it without parsing English messages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class TrackerError(Exception):
    """Base class for tracker errors."""

    code: str = "TRACKER_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class StorageReadError(TrackerError):
    """Persisted record exists but cannot be parsed."""

    code = "STORAGE_READ_ERROR"

    def __init__(self, path: Path, reason: str):
        super().__init__(
            message=f"Cannot read tracker record at {path}: {reason}",
            details={"path": str(path), "reason": reason},
        )


class StorageWriteError(TrackerError):
    """Persisting the record failed (disk full, permissions, bad data)."""

    code = "STORAGE_WRITE_ERROR"

    def __init__(self, path: Path, reason: str):
        super().__init__(
            message=f"Cannot write tracker record to {path}: {reason}",
            details={"path": str(path), "reason": reason},
        )


class InvalidDateKeyError(TrackerError):
    code = "INVALID_DATE_KEY"

    def __init__(self, value: Any):
        super().__init__(
            message=f"Invalid date key: {value!r} (expected YYYY-MM-DD)",
            details={"value": str(value)},
        )
