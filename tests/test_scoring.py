"""Tests for pbj/scoring.py."""

import itertools
import math

import pytest

from pbj.models import DailyRecord
from pbj.scoring import classify, color_for_score


def _record(kcal_ok: bool, sleep_ok: bool, gym_ok: bool) -> DailyRecord:
    return DailyRecord(
        calorie_ratio=0.95 if kcal_ok else 1.3,
        sleep_hours=7.5 if sleep_ok else 4,
        did_workout=gym_ok,
    )


@pytest.mark.parametrize("pillars", list(itertools.product([True, False], repeat=3)))
def test_classify_all_pillar_combinations(pillars):
    c = classify(_record(*pillars))
    score = sum(pillars)
    assert c.score == score
    assert c.color == {3: "green", 2: "yellow", 1: "red", 0: "red"}[score]


def test_color_for_score_is_total():
    assert [color_for_score(s) for s in range(4)] == ["red", "red", "yellow", "green"]


def test_thresholds_are_inclusive():
    c = classify(DailyRecord(calorie_ratio=1.0, sleep_hours=6, did_workout=True))
    assert c.score == 3
    assert c.color == "green"


def test_just_past_thresholds_fail():
    c = classify(DailyRecord(calorie_ratio=1.0001, sleep_hours=5.99, did_workout=True))
    assert c.score == 1
    assert c.color == "red"


def test_absent_fields_score_like_failures():
    absent = classify(DailyRecord(date="2026-02-11"))
    failing = classify(DailyRecord(calorie_ratio=2.0, sleep_hours=3, did_workout=False))
    assert absent == failing
    assert absent.score == 0
    assert absent.color == "red"


def test_nan_scores_zero_for_that_pillar():
    c = classify(DailyRecord(calorie_ratio=math.nan, sleep_hours=math.nan, did_workout=True))
    assert c.score == 1
    assert c.color == "red"

    c = classify(DailyRecord(calorie_ratio=math.nan, sleep_hours=8, did_workout=True))
    assert c.score == 2
    assert c.color == "yellow"


def test_classify_is_idempotent():
    r = DailyRecord(calorie_ratio=0.9, sleep_hours=5, did_workout=True)
    assert classify(r) == classify(r)
