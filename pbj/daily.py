"""Evaluate one day from raw meal, sleep and workout logs.

Produces the same pillar score and color as :func:`pbj.scoring.classify`,
plus the display chips used by the dashboard.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pbj.models import DailyEvaluation, DailyInputs
from pbj.scoring import SLEEP_MINUTES_MIN, score_pillars


def format_hm(minutes: int) -> str:
    """120 -> '2h00m'."""
    minutes = max(0, int(minutes))
    return f"{minutes // 60}h{minutes % 60:02d}m"


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def _parse_dt(value: Any, tz: ZoneInfo) -> datetime | None:
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def _minutes_between(start: datetime, end: datetime) -> float:
    return max(0.0, (end - start).total_seconds() / 60)


def _short_time(dt: datetime) -> str:
    """'9:05 AM' style clock time."""
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def _signed(n: int) -> str:
    if n == 0:
        return "0"
    return f"+{n}" if n > 0 else str(n)


def evaluate_day(inputs: DailyInputs) -> DailyEvaluation:
    tz = _zone(inputs.tz)

    # Calories
    total = 0.0
    for meal in inputs.meals:
        try:
            kcal = float(meal.get("calories") or 0)
        except (TypeError, ValueError):
            continue
        if math.isfinite(kcal):
            total += kcal
    kcal_intake = max(0, round(total))
    kcal_goal = inputs.kcal_goal
    kcal_delta = kcal_intake - kcal_goal
    kcal_status = "UN" if kcal_delta < 0 else "OV" if kcal_delta > 0 else "GOAL"
    kcal_ok = kcal_intake <= kcal_goal

    # Sleep: sessions that end on this day
    sleep_total = 0.0
    for session in inputs.sleep_sessions:
        start = _parse_dt(session.get("startAt"), tz)
        end = _parse_dt(session.get("endAt"), tz)
        if start and end:
            sleep_total += _minutes_between(start, end)
    sleep_min = round(sleep_total)
    sleep_ok = sleep_min >= SLEEP_MINUTES_MIN

    # Gym: timed workouts are clipped to the local day
    try:
        day = date.fromisoformat(inputs.date_iso)
        day_start = datetime.combine(day, time.min, tzinfo=tz)
        day_end = datetime.combine(day, time.max, tzinfo=tz)
    except ValueError:
        day_start = day_end = None

    gym_duration = 0
    first_start: datetime | None = None
    last_end: datetime | None = None
    for workout in inputs.workouts:
        try:
            mins = float(workout.get("durationMin") or 0)
        except (TypeError, ValueError):
            mins = 0.0
        if not math.isfinite(mins):
            mins = 0.0
        ws = _parse_dt(workout.get("startAt"), tz)
        we = _parse_dt(workout.get("endAt"), tz)
        if ws and we:
            cs = max(ws, day_start) if day_start else ws
            ce = min(we, day_end) if day_end else we
            mins = _minutes_between(cs, ce)
            first_start = ws if first_start is None else min(ws, first_start)
            last_end = we if last_end is None else max(we, last_end)
        gym_duration += round(max(0.0, mins))
    gym_ok = gym_duration > 0

    classification = score_pillars(kcal_ok, sleep_ok, gym_ok)

    gym_chip = "❌"
    if gym_ok:
        gym_chip = f"✅ {format_hm(gym_duration)}"
        if first_start and last_end:
            gym_chip += f" ({_short_time(first_start)}–{_short_time(last_end)})"

    return DailyEvaluation(
        date_iso=inputs.date_iso,
        sleep_min=sleep_min,
        sleep_ok=sleep_ok,
        kcal_intake=kcal_intake,
        kcal_goal=kcal_goal,
        kcal_delta=kcal_delta,
        kcal_status=kcal_status,
        kcal_ok=kcal_ok,
        gym_ok=gym_ok,
        gym_start_at=first_start.isoformat() if first_start else None,
        gym_end_at=last_end.isoformat() if last_end else None,
        gym_duration_min=gym_duration,
        score=classification.score,
        color=classification.color,
        calories_chip=f"{kcal_intake}/{kcal_goal} {kcal_status} {_signed(kcal_delta)}",
        sleep_chip=f"{format_hm(sleep_min)} {'✅' if sleep_ok else '❌'}",
        gym_chip=gym_chip,
    )
