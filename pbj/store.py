"""Daily summary store: one row per user per date.

Rows live in ``summaries/<user_id>.json`` under the workspace root and are
rewritten atomically on every upsert.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from pathlib import Path
from typing import Any

from pbj.fileio import read_json, write_json_atomic
from pbj.models import (
    BOOL_SUMMARY_FIELDS,
    NUMERIC_SUMMARY_FIELDS,
    SUMMARY_FIELDS,
    DailyRecord,
    DailySummary,
)
from pbj.workspace import now_local, summary_path, workspace_root

logger = logging.getLogger(__name__)

VALID_STRESS_LEVELS = {"low", "medium", "high"}

_MISSING = object()


def _field(payload: dict[str, Any], attr: str) -> Any:
    """Value supplied for *attr* under its camelCase or snake_case key."""
    key = SUMMARY_FIELDS[attr]
    if key in payload:
        return payload[key]
    return payload.get(attr, _MISSING)


def _ratio(payload: dict[str, Any]) -> Any:
    if "calorieRatio" in payload:
        return payload["calorieRatio"]
    return payload.get("calorie_ratio", _MISSING)


# ── Validation ────────────────────────────────────────────────


def validate_summary(payload: dict[str, Any]) -> list[str]:
    """Validate a daily summary payload and return list of errors (empty if valid)."""
    errors = []
    day = payload.get("date", payload.get("summaryDate"))
    if not day:
        errors.append("Missing required field: date")
    else:
        try:
            date.fromisoformat(str(day))
        except ValueError:
            errors.append(f"Invalid date: {day}")

    for attr in SUMMARY_FIELDS:
        value = _field(payload, attr)
        if value is _MISSING or value is None:
            continue
        key = SUMMARY_FIELDS[attr]
        if attr in NUMERIC_SUMMARY_FIELDS:
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                errors.append(f"{key} must be numeric")
            elif value < 0:
                errors.append(f"{key} must be non-negative")
        elif attr in BOOL_SUMMARY_FIELDS:
            if not isinstance(value, bool):
                errors.append(f"{key} must be true or false")
        elif attr == "work_stress_level":
            if str(value).lower() not in VALID_STRESS_LEVELS:
                errors.append(f"Invalid {key}: {value}")
        elif not isinstance(value, str):
            errors.append(f"{key} must be a string")

    ratio = _ratio(payload)
    if ratio is not _MISSING and ratio is not None:
        if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not math.isfinite(ratio) or ratio < 0:
            errors.append("calorieRatio must be a non-negative number")

    return errors


# ── Load / save ───────────────────────────────────────────────


def load_rows(user_id: str, root: Path | None = None) -> dict[str, DailySummary]:
    """All rows for a user keyed by date."""
    data = read_json(summary_path(user_id, root))
    rows = {}
    for day, raw in (data.get("rows") or {}).items():
        if isinstance(raw, dict):
            row = DailySummary.from_dict(raw)
            row.summary_date = row.summary_date or day
            rows[day] = row
    return rows


def save_rows(user_id: str, rows: dict[str, DailySummary], root: Path | None = None) -> None:
    ordered = {day: rows[day].to_dict() for day in sorted(rows)}
    write_json_atomic(summary_path(user_id, root), {"userId": user_id, "rows": ordered})


# ── CRUD ──────────────────────────────────────────────────────


def upsert_summary(
    user_id: str,
    payload: dict[str, Any],
    root: Path | None = None,
) -> tuple[DailySummary | None, list[str]]:
    """Merge the supplied fields into the user's row for ``payload['date']``.

    Returns (row, errors). Fields not present in the payload keep their
    stored values. ``calorie_ratio`` is recomputed whenever calories and
    target are both set and nonzero.
    """
    if root is None:
        root = workspace_root()
    errors = validate_summary(payload)
    if errors:
        logger.info("rejected daily summary for %s: %s", user_id, "; ".join(errors))
        return None, errors

    day = date.fromisoformat(str(payload.get("date", payload.get("summaryDate")))).isoformat()
    rows = load_rows(user_id, root)
    row = rows.get(day) or DailySummary(summary_date=day)

    explicit_workout = False
    for attr in SUMMARY_FIELDS:
        value = _field(payload, attr)
        if value is _MISSING:
            continue
        if attr == "did_workout":
            row.did_workout = bool(value)
            explicit_workout = True
        elif attr == "work_stress_level" and value is not None:
            row.work_stress_level = str(value).lower()
        else:
            setattr(row, attr, value)

    if not explicit_workout and (row.workout_minutes or 0) > 0:
        row.did_workout = True

    if row.calories_total and row.calorie_target:
        row.calorie_ratio = row.calories_total / row.calorie_target
    elif _ratio(payload) is not _MISSING:
        row.calorie_ratio = _ratio(payload)

    row.updated_at = now_local(root).isoformat(timespec="seconds")
    rows[day] = row
    save_rows(user_id, rows, root)
    logger.info("saved daily summary %s for %s", day, user_id)
    return row, []


def get_summary(user_id: str, day: str, root: Path | None = None) -> DailySummary | None:
    return load_rows(user_id, root).get(day)


def fetch_recent_summaries(user_id: str, limit: int, root: Path | None = None) -> list[DailySummary]:
    """Most recent rows first, at most *limit*."""
    rows = load_rows(user_id, root)
    days = sorted(rows, reverse=True)[: max(0, limit)]
    return [rows[d] for d in days]


def fetch_daily_history(user_id: str, limit: int, root: Path | None = None) -> list[DailyRecord]:
    """Scoring history for the streak evaluator, most recent first."""
    return [row.to_record() for row in fetch_recent_summaries(user_id, limit, root)]


def fetch_range(user_id: str, start: str, end: str, root: Path | None = None) -> list[DailySummary]:
    """Rows with start <= date <= end, most recent first."""
    rows = load_rows(user_id, root)
    return [rows[d] for d in sorted(rows, reverse=True) if start <= d <= end]


def history_fetcher(root: Path | None = None):
    """Bind the store to a workspace as a ``(user_id, limit) -> records`` callable."""
    def fetch(user_id: str, limit: int) -> list[DailyRecord]:
        return fetch_daily_history(user_id, limit, root)
    return fetch
