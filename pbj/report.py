"""Plain-text "Lyfe Report" rendering and section helpers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pbj.daily import format_hm
from pbj.models import CALORIE_STATUS_CODES, CoachingReport, WorkSummary, _opt_float

STRESS_LEVELS = ("high", "medium", "low")


def summarize_work(logs: Iterable[dict[str, Any]]) -> WorkSummary:
    """Total minutes and the highest stress level seen (logs default to low)."""
    total = 0
    seen: set[str] = set()
    for log in logs:
        try:
            total += int(log.get("durationMin") or 0)
        except (TypeError, ValueError, OverflowError):
            pass
        seen.add(str(log.get("stress") or "low").lower())
    peak = next((level for level in STRESS_LEVELS if level in seen), None)
    return WorkSummary(total_min=total, peak_stress=peak)


def top_activities(items: Iterable[dict[str, Any]], n: int = 3) -> list[str]:
    """Names of the *n* longest activities."""
    ranked = sorted(items, key=lambda x: _opt_float(x.get("durationMin")) or 0, reverse=True)
    return [str(x.get("name", "")) for x in ranked[:n]]


def render_report(report: CoachingReport) -> str:
    lines: list[str] = []

    lines.append(f"Here is {report.breakdown} Lyfe Report:")
    lines.append(f"Streak Status: {(report.streak_color or 'unknown').upper()}")
    lines.append(f"1. Gym Time: {format_hm(report.gym_min or 0)}")
    lines.append(f"2. Sleep: {format_hm(round(report.sleep_minutes or 0))}")

    c = report.calories
    if c:
        code = CALORIE_STATUS_CODES.get(c.status or "", "-")
        delta = f"+{c.delta}" if c.delta >= 0 else str(c.delta)
        lines.append(f"3. Calories {c.intake}/{c.goal} {code} {delta}")
    else:
        lines.append("3. Calories: not logged")

    lines.append(f"You listed your Mental Health as: {(report.mental or '-').upper()}.")
    med = round(report.meditation_minutes or 0)
    lines.append(f"Meditation: {format_hm(med) if med > 0 else 'None'}.")

    if report.dream:
        lines.append(f"Dream Analysis: {report.dream.type or '-'} - {report.dream.short or '-'}.")

    if report.social:
        lines.append(f"Social Presence: You spent, {format_hm(report.social.total_min)}, being social yesterday:")
        for i, a in enumerate(report.social.activities[:3], start=1):
            lines.append(f"{i}. {a}")

    if report.hobbies:
        lines.append(f"Hobbies: You spent, {format_hm(report.hobbies.total_min)}, doing hobbies.")
        for i, a in enumerate(report.hobbies.activities[:3], start=1):
            lines.append(f"{i}. {a}")

    w = report.work
    if w and w.total_min > 0:
        lines.append(
            f"Work: You worked for {round(w.total_min / 60)} hours and had a {w.peak_stress or '-'} stress day."
        )

    s = report.substances
    if s:
        line = f"Drug Use: You consumed; {s.summary or 'nothing'}, yesterday."
        if s.withdrawal:
            wd = s.withdrawal
            line += (
                f' You also listed your {wd.drug} withdrawal symptoms of "{wd.symptom}" as "{wd.strength}".'
            )
        lines.append(line)

    return "\n".join(lines)
