"""Range analytics for PBJ Health.

Summarizes stored daily rows over a lookback window (1, 7, 30 or 90 days)
into averages, insights and recommendations.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta
from pathlib import Path

from pbj.models import DailySummary, RangeSummary
from pbj.scoring import GREEN, classify
from pbj.store import fetch_range
from pbj.workspace import today_str, workspace_root

VALID_RANGES = (1, 7, 30, 90)


def _label(range_days: int) -> str:
    return "previous day" if range_days == 1 else f"last {range_days} days"


def summarize_range(summaries: Sequence[DailySummary], range_days: int) -> RangeSummary:
    """Compute averages, counts and advice for the given rows."""
    summary = RangeSummary(range_days=range_days, total_days=len(summaries))
    if not summaries:
        return summary

    n = len(summaries)
    summary.avg_sleep_hours = sum(s.sleep_hours or 0 for s in summaries) / n
    summary.avg_calories = sum(s.calories_total or 0 for s in summaries) / n
    summary.workout_days = sum(1 for s in summaries if s.did_workout)
    summary.green_days = sum(1 for s in summaries if classify(s.to_record()).color == GREEN)

    # Insights
    if summary.avg_sleep_hours < 6:
        summary.insights.append("Your sleep is below target. Aim for at least 6 hours per night.")
    elif summary.avg_sleep_hours >= 7:
        summary.insights.append("Great sleep! You're getting adequate rest.")

    rate = summary.workout_rate()
    if rate < 50:
        summary.insights.append(f"Only {rate:.0f}% workout completion. Let's aim higher!")
    elif rate >= 80:
        summary.insights.append(f"{rate:.0f}% workout completion - you're crushing it!")

    if summary.green_days == 0:
        summary.insights.append("No perfect days yet. Let's work on hitting all three targets!")
    else:
        noun = "day" if summary.green_days == 1 else "days"
        summary.insights.append(f"You had {summary.green_days} perfect {noun}. Keep it up!")

    # Recommendations
    if summary.avg_sleep_hours < 6:
        summary.recommendations.append("Set a consistent bedtime to improve sleep")
    if summary.workout_days < n * 0.7:
        summary.recommendations.append("Schedule workouts in advance to stay consistent")
    if summary.green_days < n * 0.5:
        summary.recommendations.append("Focus on small wins - aim for one perfect day this week")
    else:
        summary.recommendations.append("You're doing great! Keep the momentum going")

    return summary


def render_range_summary(summary: RangeSummary) -> str:
    if summary.total_days == 0:
        return (
            f"I don't have any data for the {_label(summary.range_days)}. "
            "Start logging your activities to get personalized insights!"
        )
    heading = "Yesterday's" if summary.range_days == 1 else f"{summary.range_days}-Day"
    lines = [
        f"{heading} Summary",
        "",
        f"Sleep: {summary.avg_sleep_hours:.1f} hours average",
        f"Nutrition: {round(summary.avg_calories)} calories average",
        f"Workouts: {summary.workout_days} out of {summary.total_days} days",
        f"Perfect Days: {summary.green_days} green streak days",
        "",
        "Insights:",
        *summary.insights,
        "",
        "Recommendations:",
        *[f"• {r}" for r in summary.recommendations],
    ]
    return "\n".join(lines)


def range_summary_for_user(user_id: str, range_days: int, root: Path | None = None) -> RangeSummary:
    """Load the user's rows for the window ending today and summarize them."""
    if root is None:
        root = workspace_root()
    end = date.fromisoformat(today_str(root))
    start = end - timedelta(days=range_days)
    rows = fetch_range(user_id, start.isoformat(), end.isoformat(), root)
    return summarize_range(rows, range_days)
