"""Workspace root, profile, timezone and path helpers."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from tracker.fileio import read_yaml, write_yaml_atomic
from tracker.models import Profile

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Get the workspace root directory (contains data/ and exports/)."""
    return Path(
        os.environ.get("PROTEIN_ROOT", str(Path.home() / "protein-tracker"))
    ).expanduser().resolve()


def configure_logging() -> None:
    """Basic logging setup for the front ends; level from PROTEIN_LOG_LEVEL."""
    level = os.environ.get("PROTEIN_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ── Path helpers ──────────────────────────────────────────────

def state_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "data" / "state.json"


def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "data" / "profile.yaml"


def exports_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "exports"


# ── Profile ───────────────────────────────────────────────────

def load_profile(root: Path | None = None) -> Profile:
    """Load profile.yaml; a missing or unreadable file yields defaults."""
    path = profile_path(root)
    try:
        return Profile.from_dict(read_yaml(path))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable profile %s: %s", path, e)
        return Profile()


def save_profile(profile: Profile, root: Path | None = None) -> None:
    write_yaml_atomic(profile_path(root), profile.to_dict())


def get_user_timezone(root: Path | None = None, profile: Profile | None = None) -> ZoneInfo:
    """Get user's timezone from the profile, defaulting to UTC."""
    if profile is None:
        profile = load_profile(root)
    try:
        return ZoneInfo(profile.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", profile.timezone)
        return ZoneInfo("UTC")


def now_local(root: Path | None = None) -> datetime:
    """Get current datetime in user's timezone."""
    return datetime.now(get_user_timezone(root))
