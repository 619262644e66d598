"""Consecutive-day streak accumulation for PBJ Health.

Histories are ordered most-recent-first. A streak counts back from the most
recent day and ends at the first red day; older days are never examined.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from pbj.messages import format_message
from pbj.models import DailyRecord, StreakResult
from pbj.scoring import GREEN, RED, classify

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 60

HistoryFetcher = Callable[[str, int], Sequence[DailyRecord]]


def compute_streak(history: Iterable[DailyRecord]) -> StreakResult:
    """Count consecutive non-red days from the front of *history*.

    ``color`` is overwritten on every counted day, so it ends up as the color
    of the last day counted (the oldest one in the run).
    """
    count = 0
    color = RED
    for record in history:
        day_color = classify(record).color
        if day_color == RED:
            break
        count += 1
        color = day_color
    return StreakResult(count=count, color=color, message=format_message(count, color))


def current_streak(flags_desc: Iterable[bool]) -> int:
    """Leading run of true flags."""
    n = 0
    for flag in flags_desc:
        if not flag:
            break
        n += 1
    return n


def color_streaks(colors_desc: Sequence[str]) -> dict[str, int]:
    """Green-only and on-track (green or yellow) leading runs."""
    return {
        "green_only": current_streak(c == GREEN for c in colors_desc),
        "non_red": current_streak(c != RED for c in colors_desc),
    }


def current_streak_for_user(
    fetch_history: HistoryFetcher,
    user_id: str,
    limit: int = DEFAULT_LOOKBACK_DAYS,
) -> StreakResult:
    """Fetch a bounded most-recent-first history and compute the streak."""
    history = list(fetch_history(user_id, limit) or [])
    result = compute_streak(history)
    logger.debug("streak for %s: %d %s over %d days", user_id, result.count, result.color, len(history))
    return result
