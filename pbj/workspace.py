"""Workspace root, profile, timezone and path helpers for PBJ Health."""

from __future__ import annotations

import os
import re
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pbj.fileio import read_yaml, write_yaml_atomic
from pbj.models import Profile

_USER_ID_RE = re.compile(r"^[A-Za-z0-9_.@-]+$")


def workspace_root() -> Path:
    """Get the workspace root directory (contains profile.yaml and summaries/)."""
    return Path(
        os.environ.get("PBJ_ROOT", str(Path.home() / "pbj"))
    ).expanduser().resolve()


def load_profile(root: Path | None = None) -> Profile:
    """Load profile.yaml, falling back to defaults when missing or malformed."""
    if root is None:
        root = workspace_root()
    return Profile.from_dict(read_yaml(profile_path(root)))


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from profile.yaml, defaulting to UTC."""
    try:
        return ZoneInfo(load_profile(root).timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in user's timezone."""
    return now_local(root).date().isoformat()


def now_local(root: Path | None = None) -> datetime:
    """Get current datetime in user's timezone."""
    return datetime.now(get_user_timezone(root))


def init_workspace(root: Path | None = None) -> Path:
    """Create the workspace layout and a default profile.yaml if absent."""
    if root is None:
        root = workspace_root()
    summaries_dir(root).mkdir(parents=True, exist_ok=True)
    pp = profile_path(root)
    if not pp.exists():
        write_yaml_atomic(pp, Profile().to_dict())
    return root


# ── Path helpers ──────────────────────────────────────────────

def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"


def summaries_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "summaries"


def summary_path(user_id: str, root: Path | None = None) -> Path:
    """Path of one user's daily summary file. Rejects ids that could escape the directory."""
    if not _USER_ID_RE.match(user_id or "") or user_id in {".", ".."}:
        raise ValueError(f"Invalid user id: {user_id!r}")
    return summaries_dir(root) / f"{user_id}.json"
