"""Coaching tips from an assembled daily or weekly report.

Each rule looks at one signal and adds at most one tip. Rules never exclude
each other and tips keep rule order.
"""

from __future__ import annotations

from pbj.models import CoachingReport
from pbj.scoring import COACH_SLEEP_MINUTES_TARGET, GREEN, RED, YELLOW

TIP_GREEN = "You kept the full streak. Awesome consistency!"
TIP_YELLOW = "Solid day: 2/3 pillars. Try a 10-min walk or lighter dinner to hit 3/3."
TIP_RED = "Tough day happens. Focus on sleep + one easy win (short workout or mindful meal)."
TIP_CALORIES_OVER = "Plan a protein-forward breakfast and pre-log dinner to avoid spillover."
TIP_SLEEP = "Aim lights-out 30-45 min earlier tonight."
TIP_RECOVERY = "Proud of your clean streak. Keep stacking days."
TIP_WITHDRAWAL = "Try sugar-free gum or a brief walk when cravings spike."
TIP_NIGHTMARE = "Reduce intense media before bed and try 5-min breathing."
TIP_MEDITATION = "Even 5 minutes of meditation can help with stress and focus."


def coaching_tips(report: CoachingReport) -> list[str]:
    tips: list[str] = []
    color = (report.streak_color or "").lower()

    if color == GREEN:
        tips.append(TIP_GREEN)
    if color == YELLOW:
        tips.append(TIP_YELLOW)
    if color == RED:
        tips.append(TIP_RED)

    if report.calorie_status == "over":
        tips.append(TIP_CALORIES_OVER)

    # absent sleep does not trigger
    if report.sleep_minutes is not None and report.sleep_minutes < COACH_SLEEP_MINUTES_TARGET:
        tips.append(TIP_SLEEP)

    if any(days > 0 for days in report.recovery_days.values()):
        tips.append(TIP_RECOVERY)

    if report.withdrawal_symptom_present:
        tips.append(TIP_WITHDRAWAL)

    if "nightmare" in (report.dream_type or "").lower():
        tips.append(TIP_NIGHTMARE)

    # absent meditation does trigger
    if not report.meditation_minutes:
        tips.append(TIP_MEDITATION)

    return tips


def generate_tips(report: CoachingReport) -> str:
    """All tips joined by single spaces."""
    return " ".join(coaching_tips(report))
