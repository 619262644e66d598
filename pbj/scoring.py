"""Daily score classification for PBJ Health.

Three independent pillars (calories, sleep, workout) each contribute at most
one point; the 0-3 score maps to a green/yellow/red color.
"""

from __future__ import annotations

from pbj.models import Classification, DailyRecord

GREEN = "green"
YELLOW = "yellow"
RED = "red"
COLORS = (GREEN, YELLOW, RED)

CALORIE_RATIO_LIMIT = 1.0
SLEEP_HOURS_MIN = 6
SLEEP_MINUTES_MIN = SLEEP_HOURS_MIN * 60
COACH_SLEEP_MINUTES_TARGET = 420


def calorie_pillar(calorie_ratio: float | None) -> bool:
    """At or under target. Absent and NaN ratios fail."""
    return calorie_ratio is not None and calorie_ratio <= CALORIE_RATIO_LIMIT


def sleep_pillar(sleep_hours: float | None) -> bool:
    return sleep_hours is not None and sleep_hours >= SLEEP_HOURS_MIN


def workout_pillar(did_workout: bool) -> bool:
    return bool(did_workout)


def color_for_score(score: int) -> str:
    if score >= 3:
        return GREEN
    if score == 2:
        return YELLOW
    return RED


def score_pillars(kcal_ok: bool, sleep_ok: bool, gym_ok: bool) -> Classification:
    score = int(bool(kcal_ok)) + int(bool(sleep_ok)) + int(bool(gym_ok))
    return Classification(score=score, color=color_for_score(score))


def classify(record: DailyRecord) -> Classification:
    """Score one day. Missing data is scored exactly like failing data."""
    return score_pillars(
        calorie_pillar(record.calorie_ratio),
        sleep_pillar(record.sleep_hours),
        workout_pillar(record.did_workout),
    )
