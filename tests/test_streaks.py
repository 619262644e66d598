"""Tests for pbj/streaks.py and pbj/messages.py."""

from pbj.messages import format_message
from pbj.models import DailyRecord
from pbj.streaks import color_streaks, compute_streak, current_streak, current_streak_for_user

GREEN = DailyRecord(calorie_ratio=0.9, sleep_hours=7, did_workout=True)
YELLOW = DailyRecord(calorie_ratio=0.9, sleep_hours=7, did_workout=False)
RED = DailyRecord(calorie_ratio=1.2, sleep_hours=5, did_workout=False)


def test_empty_history():
    result = compute_streak([])
    assert result.count == 0
    assert result.color == "red"
    assert "lost our streak" in result.message


def test_first_day_red_short_circuits():
    result = compute_streak([RED, GREEN, GREEN, GREEN])
    assert (result.count, result.color) == (0, "red")


def test_stops_at_first_red():
    result = compute_streak([GREEN, GREEN, RED, GREEN])
    assert (result.count, result.color) == (2, "green")


def test_color_is_last_counted_day():
    assert compute_streak([GREEN, YELLOW, GREEN]).color == "green"
    # oldest counted day is yellow, so the result is not forced to green
    result = compute_streak([GREEN, GREEN, YELLOW, RED])
    assert (result.count, result.color) == (3, "yellow")
    assert result.message.startswith("STREAK LENGTH: 3 DAYS.")


def test_end_to_end_example():
    history = [
        DailyRecord(date="2026-02-11", calorie_ratio=0.9, sleep_hours=7, did_workout=True),
        DailyRecord(date="2026-02-10", calorie_ratio=1.2, sleep_hours=5, did_workout=False),
    ]
    result = compute_streak(history)
    assert (result.count, result.color) == (1, "green")
    assert result.message.startswith("GREEN STREAK LENGTH: 1 DAYS.")


def test_all_absent_day_breaks_streak():
    assert compute_streak([DailyRecord(), GREEN]).count == 0


def test_accepts_generators():
    result = compute_streak(r for r in [YELLOW, YELLOW])
    assert (result.count, result.color) == (2, "yellow")


def test_format_message_variants():
    assert format_message(4, "green").startswith("GREEN STREAK LENGTH: 4 DAYS. GOOD JOB!")
    assert format_message(2, "yellow").startswith("STREAK LENGTH: 2 DAYS. GOOD JOB KEEPING THE STREAK ALIVE!")
    assert format_message(5, "red") == 'RED STREAK LENGTH: 5 DAYS. You said "better." Time to mean it.'
    assert format_message(0, "red").startswith("RED STREAK LENGTH: 0 DAYS. AW MAN")


def test_current_streak_flags():
    assert current_streak([True, True, False, True]) == 2
    assert current_streak([]) == 0
    assert current_streak([False, True]) == 0


def test_color_streaks():
    runs = color_streaks(["green", "yellow", "green", "red", "green"])
    assert runs == {"green_only": 1, "non_red": 3}
    assert color_streaks([]) == {"green_only": 0, "non_red": 0}


def test_current_streak_for_user_uses_injected_fetcher():
    calls = []

    def fetch(user_id, limit):
        calls.append((user_id, limit))
        return [GREEN, YELLOW, RED]

    result = current_streak_for_user(fetch, "alice", limit=30)
    assert calls == [("alice", 30)]
    assert (result.count, result.color) == (2, "yellow")


def test_current_streak_for_user_no_rows():
    result = current_streak_for_user(lambda user_id, limit: [], "bob")
    assert (result.count, result.color) == (0, "red")
