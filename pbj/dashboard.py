"""Dashboard assembly shared by the web API and the TUI.

Pulls the user's bounded history from the store, computes the current
streak and builds today's coaching report and tips.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pbj.coach import coaching_tips
from pbj.models import (
    ActivitySummary,
    CalorieSummary,
    CoachingReport,
    DailySummary,
    DreamNote,
    SubstanceSummary,
    WorkSummary,
)
from pbj.report import render_report
from pbj.scoring import classify
from pbj.store import fetch_recent_summaries, get_summary
from pbj.streaks import color_streaks, compute_streak
from pbj.workspace import load_profile, today_str, workspace_root

RECENT_DAYS_SHOWN = 14


def _calorie_summary(row: DailySummary) -> CalorieSummary | None:
    if row.calories_total and row.calorie_target:
        intake = round(row.calories_total)
        goal = round(row.calorie_target)
        delta = intake - goal
        status = "under" if delta < 0 else "over" if delta > 0 else "goal"
        return CalorieSummary(intake=intake, goal=goal, status=status, delta=delta)
    if row.calorie_ratio is not None and row.calorie_ratio == row.calorie_ratio:
        ratio = row.calorie_ratio
        status = "under" if ratio < 1 else "over" if ratio > 1 else "goal"
        return CalorieSummary(status=status)
    return None


def build_coaching_report(row: DailySummary, breakdown: str = "Previous Day") -> CoachingReport:
    """Derive a coaching report from one stored day."""
    dream = None
    if row.dream_type or row.dream_desc:
        dream = DreamNote(type=row.dream_type, short=row.dream_desc)

    substances = None
    if row.drug_use_flag is not None:
        substances = SubstanceSummary(summary="logged use" if row.drug_use_flag else "nothing")

    return CoachingReport(
        breakdown=breakdown,
        streak_color=classify(row.to_record()).color,
        gym_min=round(row.workout_minutes) if row.workout_minutes is not None else None,
        sleep_minutes=row.sleep_hours * 60 if row.sleep_hours is not None else None,
        calories=_calorie_summary(row),
        mental=row.mental_rating,
        meditation_minutes=row.meditation_minutes,
        dream=dream,
        social=ActivitySummary(total_min=round(row.social_minutes)) if row.social_minutes is not None else None,
        hobbies=ActivitySummary(total_min=round(row.hobbies_minutes)) if row.hobbies_minutes is not None else None,
        work=WorkSummary(peak_stress=row.work_stress_level) if row.work_stress_level else None,
        substances=substances,
    )


def load_dashboard(user_id: str, root: Path | None = None) -> dict[str, Any]:
    """Streak, recent days, and today's report/tips for one user."""
    if root is None:
        root = workspace_root()
    profile = load_profile(root)
    today = today_str(root)

    rows = fetch_recent_summaries(user_id, profile.lookback_days, root)
    records = [r.to_record() for r in rows]
    streak = compute_streak(records)

    days = []
    for row, record in zip(rows[:RECENT_DAYS_SHOWN], records):
        c = classify(record)
        days.append({
            "date": row.summary_date,
            "color": c.color,
            "score": c.score,
            "calorieRatio": row.calorie_ratio,
            "sleepHours": row.sleep_hours,
            "didWorkout": row.did_workout,
        })

    today_row = get_summary(user_id, today, root) or DailySummary(summary_date=today)
    report = build_coaching_report(today_row, breakdown="Today's")
    tips = coaching_tips(report)

    runs = color_streaks([classify(r).color for r in records])

    return {
        "userId": user_id,
        "today": today,
        "streak": {
            **streak.to_dict(),
            "greenOnly": runs["green_only"],
            "nonRed": runs["non_red"],
        },
        "days": days,
        "tips": " ".join(tips),
        "tipList": tips,
        "report": render_report(report),
    }
