"""User-facing streak messages."""

from __future__ import annotations

from pbj.scoring import GREEN, YELLOW


def format_message(count: int, color: str) -> str:
    """Render the streak banner for *count* days at *color*.

    Red has two forms: a nonzero count (a caller tracking the run that just
    broke) and the zero-count "lost the streak" message.
    """
    if color == GREEN:
        return (
            f"GREEN STREAK LENGTH: {count} DAYS. GOOD JOB! "
            "Congrats on another great day. Let's keep the streak going!"
        )
    if color == YELLOW:
        return (
            f"STREAK LENGTH: {count} DAYS. GOOD JOB KEEPING THE STREAK ALIVE! "
            "LET'S AIM FOR A GREAT DAY TOMORROW."
        )
    if count > 0:
        return f'RED STREAK LENGTH: {count} DAYS. You said "better." Time to mean it.'
    return "RED STREAK LENGTH: 0 DAYS. AW MAN, we lost our streak! Let's try to get it back tomorrow."
