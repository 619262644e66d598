"""Tests for pbj/daily.py: evaluating a day from raw logs."""

from pbj.daily import evaluate_day, format_hm
from pbj.models import DailyInputs


def _inputs(**kw) -> DailyInputs:
    base = {
        "tz": "America/New_York",
        "dateISO": "2026-02-11",
        "kcalGoal": 2200,
        "meals": [{"calories": 800}, {"calories": 700.4}, {"calories": 500}],
        "sleepSessionsEndingToday": [
            {"startAt": "2026-02-10T23:00:00-05:00", "endAt": "2026-02-11T06:30:00-05:00"},
        ],
        "workouts": [
            {"startAt": "2026-02-11T12:00:00Z", "endAt": "2026-02-11T13:00:00Z"},
            {"durationMin": 15},
        ],
    }
    base.update(kw)
    return DailyInputs.from_dict(base)


def test_format_hm():
    assert format_hm(0) == "0h00m"
    assert format_hm(75) == "1h15m"
    assert format_hm(600) == "10h00m"


def test_green_day():
    ev = evaluate_day(_inputs())
    assert ev.kcal_intake == 2000
    assert ev.kcal_delta == -200
    assert ev.kcal_status == "UN"
    assert ev.kcal_ok is True
    assert ev.sleep_min == 450
    assert ev.sleep_ok is True
    assert ev.gym_duration_min == 75
    assert ev.gym_ok is True
    assert (ev.score, ev.color) == (3, "green")
    assert ev.calories_chip == "2000/2200 UN -200"
    assert ev.sleep_chip == "7h30m ✅"
    assert ev.gym_chip == "✅ 1h15m (7:00 AM–8:00 AM)"


def test_over_target_and_short_sleep():
    ev = evaluate_day(_inputs(
        meals=[{"calories": 2300}],
        sleepSessionsEndingToday=[{"startAt": "2026-02-11T01:00:00-05:00", "endAt": "2026-02-11T06:00:00-05:00"}],
    ))
    assert ev.kcal_status == "OV"
    assert ev.kcal_ok is False
    assert ev.calories_chip == "2300/2200 OV +100"
    assert ev.sleep_chip == "5h00m ❌"
    assert (ev.score, ev.color) == (1, "red")


def test_exactly_on_goal():
    ev = evaluate_day(_inputs(meals=[{"calories": 2200}]))
    assert ev.kcal_status == "GOAL"
    assert ev.kcal_ok is True
    assert ev.calories_chip == "2200/2200 GOAL 0"


def test_no_workouts():
    ev = evaluate_day(_inputs(workouts=[]))
    assert ev.gym_ok is False
    assert ev.gym_chip == "❌"
    assert (ev.score, ev.color) == (2, "yellow")


def test_workout_clipped_to_local_day():
    ev = evaluate_day(_inputs(workouts=[
        {"startAt": "2026-02-10T23:30:00-05:00", "endAt": "2026-02-11T00:30:00-05:00"},
    ]))
    assert ev.gym_duration_min == 30
    assert ev.gym_chip.startswith("✅ 0h30m (11:30 PM")


def test_malformed_entries_are_ignored():
    ev = evaluate_day(_inputs(
        meals=[{"calories": "lots"}, {"calories": 100}, {}],
        sleepSessionsEndingToday=[{"startAt": "not a date", "endAt": "2026-02-11T06:00:00Z"}],
        workouts=[{"durationMin": "abc"}],
    ))
    assert ev.kcal_intake == 100
    assert ev.sleep_min == 0
    assert ev.gym_duration_min == 0


def test_to_dict_uses_camel_case():
    d = evaluate_day(_inputs()).to_dict()
    assert d["scoreSmall"] == 3
    assert d["color"] == "green"
    assert d["caloriesChip"] == "2000/2200 UN -200"


def test_non_finite_values_are_ignored():
    ev = evaluate_day(_inputs(
        meals=[{"calories": "nan"}, {"calories": "inf"}, {"calories": 900}],
        workouts=[{"durationMin": "NaN"}, {"durationMin": float("inf")}, {"durationMin": 20}],
    ))
    assert ev.kcal_intake == 900
    assert ev.calories_chip == "900/2200 UN -1300"
    assert ev.gym_duration_min == 20
    assert ev.gym_chip == "✅ 0h20m"
