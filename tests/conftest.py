"""Shared test fixtures for protein tracker tests."""

from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import yaml

UTC = ZoneInfo("UTC")


def at(year: int, month: int, day: int, hour: int = 10, minute: int = 0) -> datetime:
    """Aware UTC timestamp; the default workspace profile is UTC."""
    return datetime(year, month, day, hour, minute, tzinfo=UTC)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a UTC profile and no record yet."""
    root = tmp_path / "workspace"
    (root / "data").mkdir(parents=True)

    profile = {
        "timezone": "UTC",
        "reset_hour": 2,
        "language": "en",
        "theme": "dark",
    }
    (root / "data" / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    os.environ["PROTEIN_ROOT"] = str(root)
    yield root
    if "PROTEIN_ROOT" in os.environ:
        del os.environ["PROTEIN_ROOT"]


@pytest.fixture
def write_state(workspace: Path):
    """Write a raw state.json into the workspace."""

    def _write(data) -> Path:
        path = workspace / "data" / "state.json"
        text = data if isinstance(data, str) else json.dumps(data, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
